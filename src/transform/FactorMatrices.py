import math

from geometry.GeoUtil import GeoUtil
from transform.Matrix import Matrix


class TranslationMatrix(Matrix):
    def __init__(self, tx: float, ty: float):
        super().__init__()
        self.set([1, 0, tx, 0, 1, ty])


class ScalingMatrix(Matrix):
    def __init__(self, sx: float, sy: float):
        super().__init__()
        self.set([sx, 0, 0, 0, sy])


class RotationMatrix(Matrix):
    """Anticlockwise rotation by deg degrees."""

    def __init__(self, deg: float):
        super().__init__()
        rad = GeoUtil.deg_to_rad(deg)
        c, s = math.cos(rad), math.sin(rad)
        self.set([c, -s, 0, s, c])
