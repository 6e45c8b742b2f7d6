import logging
import math
from typing import Optional, TextIO, Union

from calc.Calculator import Calculator
from calc.CalculatorError import CalculatorError
from geometry.GeoUtil import GeoUtil
from transform.CommandScanner import CommandScanner
from transform.Matrix import Matrix
from transform.TransformSyntaxError import TransformSyntaxError

log = logging.getLogger(__name__)


class TransformParser:
    """Transformation command language -> Matrix.

    Commands (arguments in brackets are optional, later ones need the earlier):

        T tx [ty]            translate, ty defaults to 0
        S sx [sy]            scale, sy defaults to sx
        R a [cx [cy]]        rotate by a degrees about (cx, cy),
                             default pivot (ux+w/2, uy+h/2)
        FH a / FV a          mirror at horizontal / vertical axis a
        KX a / KY a          skew by a degrees
        M v0 [v1 ... v5]     compose ((v0 v1 v2) (v3 v4 v5) (0 0 1))

    Parameters are arithmetic expressions evaluated by the calculator. They are
    separated by commas, or by blanks when the next one starts with a digit,
    letter, "." or "(". A sign after blanks continues the current expression:
    "T 10 -20" is translate(-10, 0), write "T 10,-20" for a negative ty.
    """

    @staticmethod
    def parse(matrix: Matrix, commands: Union[str, TextIO], calc: Optional[Calculator] = None) -> Matrix:
        """Reset matrix to identity and compose the commands into it.

        On error the matrix keeps whatever was composed before the failing
        command; callers should discard it.
        """
        text = commands if isinstance(commands, str) else commands.read()
        calc = calc if calc is not None else Calculator()
        matrix.set([])
        scanner = CommandScanner(text)
        try:
            while True:
                scanner.skip_space()
                if scanner.at_end():
                    break
                TransformParser._command(matrix, scanner, calc)
        except CalculatorError as e:
            raise TransformSyntaxError(str(e)) from e
        return matrix

    @staticmethod
    def _command(matrix: Matrix, scanner: CommandScanner, calc: Calculator) -> None:
        cmd = scanner.get()
        if cmd == "T":
            tx = scanner.argument(calc, 0, False, False)
            ty = scanner.argument(calc, 0, True, True)
            log.debug("translate(%g, %g)", tx, ty)
            matrix.translate(tx, ty)
        elif cmd == "S":
            sx = scanner.argument(calc, 1, False, False)
            sy = scanner.argument(calc, sx, True, True)
            log.debug("scale(%g, %g)", sx, sy)
            matrix.scale(sx, sy)
        elif cmd == "R":
            a = scanner.argument(calc, 0, False, False)
            x = scanner.argument(calc, lambda: calc.lookup("ux") + calc.lookup("w") / 2, True, True)
            y = scanner.argument(calc, lambda: calc.lookup("uy") + calc.lookup("h") / 2, True, True)
            log.debug("rotate(%g) about (%g, %g)", a, x, y)
            matrix.translate(-x, -y)
            matrix.rotate(a)
            matrix.translate(x, y)
        elif cmd == "F":
            c = scanner.get()
            if c not in ("H", "V"):
                raise TransformSyntaxError("'H' or 'V' expected")
            a = scanner.argument(calc, 0, False, False)
            log.debug("flip%s(%g)", c, a)
            matrix.flip(c == "H", a)
        elif cmd == "K":
            c = scanner.get()
            if c not in ("X", "Y"):
                raise TransformSyntaxError("transformation command 'K' must be followed by 'X' or 'Y'")
            a = scanner.argument(calc, 0, False, False)
            if GeoUtil.is_vanishing(math.cos(GeoUtil.deg_to_rad(a))):
                raise TransformSyntaxError("illegal skewing angle: %s degrees" % GeoUtil.format_number(a))
            log.debug("%sskew(%g)", c.lower(), a)
            if c == "X":
                matrix.xskew(a)
            else:
                matrix.yskew(a)
        elif cmd == "M":
            v = [scanner.argument(calc, 0 if i % 4 else 1, i != 0, i != 0) for i in range(6)]
            # third row (0, 0, 1)
            v += [0, 0, 1]
            log.debug("matrix(%s)", ", ".join("%g" % x for x in v[:6]))
            matrix.left_multiply(Matrix.from_values(v))
        else:
            raise TransformSyntaxError("transformation command expected (found '%s' instead)" % cmd)


def parse_transform(commands: Union[str, TextIO], calc: Optional[Calculator] = None) -> Matrix:
    """Build a new matrix from a transformation command string."""
    return TransformParser.parse(Matrix(), commands, calc)
