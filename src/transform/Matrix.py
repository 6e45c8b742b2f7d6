from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, List, Optional, TextIO, Union

import numpy as np

from geometry.GeoUtil import GeoUtil
from geometry.PointFloat import PointFloat
from transform.TranslationCheck import TranslationCheck

if TYPE_CHECKING:
    from calc.Calculator import Calculator

_IDENTITY = np.eye(3, dtype=float)


class Matrix:
    """3x3 homogeneous matrix describing a 2D affine map.

    Points are column vectors [x, y, 1]^T. Row 2 stays (0, 0, 1) for everything
    built with the named operations; left_multiply/right_multiply do not check it.

    The named operations (translate, scale, rotate, xskew, yskew, flip) apply
    their factor after the transformation already held (M := F * M) and return
    self so calls can be chained.
    """

    def __init__(self, d: float = 1.0):
        self.m = np.diag([d, d, d]).astype(float)

    @staticmethod
    def from_values(v: Iterable[float]) -> "Matrix":
        """Row-major components; missing ones are taken from the identity matrix."""
        return Matrix().set(v)

    @staticmethod
    def from_commands(commands: Union[str, TextIO], calc: Optional["Calculator"] = None) -> "Matrix":
        return Matrix().parse(commands, calc)

    def set(self, v: Iterable[float]) -> "Matrix":
        vals = np.asarray(v if isinstance(v, np.ndarray) else list(v), dtype=float).ravel()[:9]
        for i in range(9):
            self.m[i // 3, i % 3] = vals[i] if i < len(vals) else (0.0 if i % 4 else 1.0)
        return self

    def copy(self) -> "Matrix":
        ret = Matrix()
        ret.m = self.m.copy()
        return ret

    @property
    def values(self) -> List[List[float]]:
        return self.m.tolist()

    def parse(self, commands: Union[str, TextIO], calc: Optional["Calculator"] = None) -> "Matrix":
        """Reset to identity and compose the given transformation commands."""
        from transform.TransformParser import TransformParser
        return TransformParser.parse(self, commands, calc)

    # -----------------------------
    # Composition
    # -----------------------------

    def translate(self, tx: float, ty: float) -> "Matrix":
        if tx != 0 or ty != 0:
            from transform.FactorMatrices import TranslationMatrix
            self.left_multiply(TranslationMatrix(tx, ty))
        return self

    def scale(self, sx: float, sy: float) -> "Matrix":
        if sx != 1 or sy != 1:
            from transform.FactorMatrices import ScalingMatrix
            self.left_multiply(ScalingMatrix(sx, sy))
        return self

    def rotate(self, deg: float) -> "Matrix":
        """Anticlockwise rotation by deg degrees about the origin."""
        from transform.FactorMatrices import RotationMatrix
        return self.left_multiply(RotationMatrix(deg))

    def xskew(self, deg: float) -> "Matrix":
        t = math.tan(GeoUtil.deg_to_rad(deg))
        if t != 0:
            self.left_multiply(Matrix.from_values([1, t]))
        return self

    def yskew(self, deg: float) -> "Matrix":
        t = math.tan(GeoUtil.deg_to_rad(deg))
        if t != 0:
            self.left_multiply(Matrix.from_values([1, 0, 0, t]))
        return self

    def flip(self, haxis: bool, a: float) -> "Matrix":
        """Mirror at the horizontal (haxis) or vertical line through a."""
        s = -1 if haxis else 1
        return self.left_multiply(Matrix.from_values([
            -s, 0, 0 if haxis else 2 * a,
            0, s, 2 * a if haxis else 0,
            0, 0, 1]))

    def transpose(self) -> "Matrix":
        self.m = self.m.T.copy()
        return self

    def left_multiply(self, tm: "Matrix") -> "Matrix":
        """M := tm * M"""
        self.m = tm.m @ self.m
        return self

    def right_multiply(self, tm: "Matrix") -> "Matrix":
        """M := M * tm"""
        self.m = self.m @ tm.m
        return self

    def __matmul__(self, other: "Matrix") -> "Matrix":
        ret = Matrix()
        ret.m = self.m @ other.m
        return ret

    # -----------------------------
    # Application and introspection
    # -----------------------------

    def apply(self, p) -> PointFloat:
        p = PointFloat.of(p)
        res = self.m[:2] @ np.array([p.x, p.y, 1.0], dtype=float)
        return PointFloat(float(res[0]), float(res[1]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return bool(np.array_equal(self.m[:2], other.m[:2]))

    def is_identity(self) -> bool:
        return bool(np.array_equal(self.m[:2], _IDENTITY[:2]))

    def is_translation(self) -> TranslationCheck:
        tx, ty = float(self.m[0, 2]), float(self.m[1, 2])
        plain = bool(np.array_equal(self.m[:, :2], _IDENTITY[:, :2]) and self.m[2, 2] == 1)
        return TranslationCheck(plain, tx, ty)

    # -----------------------------
    # Serialization
    # -----------------------------

    def to_svg(self) -> str:
        """((a,b,c),(d,e,f),(0,0,1)) => matrix(a d b e c f)"""
        parts = [GeoUtil.format_number(GeoUtil.round_digits(float(self.m[j, i]), 3))
                 for i in range(3) for j in range(2)]
        return "matrix(%s)" % " ".join(parts)

    def to_debug_string(self) -> str:
        rows = [",".join(GeoUtil.format_number(float(v)) for v in row) for row in self.m]
        return "(" + ",".join("(%s)" % r for r in rows) + ")"

    def __str__(self) -> str:
        return self.to_debug_string()

    def __repr__(self) -> str:
        return "Matrix%s" % self.to_debug_string()
