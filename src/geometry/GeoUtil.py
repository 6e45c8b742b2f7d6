import math
import sys
from dataclasses import dataclass
from typing import Any

import numpy as np

EPSILON = sys.float_info.epsilon


@dataclass(frozen=True)
class GeoUtil:
    @staticmethod
    def deg_to_rad(deg: float) -> float:
        return math.pi * deg / 180.0

    @staticmethod
    def round_digits(x: float, n: int) -> float:
        """Round half up at the n-th fractional digit. NaN and infinities pass through."""
        pow10 = 10.0 ** n
        return float(np.floor(x * pow10 + 0.5)) / pow10

    @staticmethod
    def format_number(x: float) -> str:
        """Default stream-style conversion: six significant digits, no trailing zeros."""
        return "%g" % x

    @staticmethod
    def is_vanishing(x: float) -> bool:
        return abs(x) <= EPSILON

    @staticmethod
    def safe_to_float(x: Any, default: float = 0.0) -> float:
        """Convert to float, falling back to default for None or unconvertible values."""
        if x is None:
            return default
        try:
            return float(x)
        except (TypeError, ValueError):
            return default
