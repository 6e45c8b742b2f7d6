from dataclasses import dataclass
import math
from typing import Iterator, Tuple


@dataclass(frozen=True, slots=True)
class PointFloat:
    x: float
    y: float
    def as_tuple(self) -> Tuple[float, float]: return (self.x, self.y)
    def __iter__(self) -> Iterator[float]: return iter((self.x, self.y))
    def __abs__(self) -> float: return math.hypot(self.x, self.y)

    @staticmethod
    def of(p) -> "PointFloat":
        """Accept a PointFloat or any (x, y) pair."""
        if isinstance(p, PointFloat):
            return p
        x, y = p
        return PointFloat(float(x), float(y))
