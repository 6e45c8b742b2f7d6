import io
import os
import sys

import pytest

# Make src importable
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from calc.Calculator import Calculator
from calc.CalculatorError import CalculatorError
from geometry.PointFloat import PointFloat
from transform.CommandScanner import CommandScanner
from transform.FactorMatrices import RotationMatrix, ScalingMatrix, TranslationMatrix
from transform.Matrix import Matrix
from transform.TransformParser import parse_transform
from transform.TransformSyntaxError import TransformSyntaxError


@pytest.fixture
def calc():
    return Calculator({"ux": 0, "uy": 0, "w": 10, "h": 10})


def approx_point(p, x, y, tol=1e-12):
    return p.as_tuple() == pytest.approx((x, y), abs=tol)


@pytest.mark.parametrize("cmds", ["T 10 20", "T 10,20", "T10,20", "  T 10 , 20  ", "T 5*2 40/2"])
def test_translate(cmds):
    assert parse_transform(cmds) == TranslationMatrix(10, 20)


def test_translate_ty_defaults_to_zero():
    assert parse_transform("T 10") == TranslationMatrix(10, 0)


def test_scale_sy_defaults_to_sx():
    assert parse_transform("S 2") == ScalingMatrix(2, 2)
    assert parse_transform("S 2, 3") == ScalingMatrix(2, 3)


def test_rotate_about_origin_has_no_translation():
    m = parse_transform("R 90 0 0")
    assert m == RotationMatrix(90)
    assert m.m[0, 2] == 0 and m.m[1, 2] == 0


def test_rotate_default_pivot_is_box_center(calc):
    m = parse_transform("R 90", calc)
    assert approx_point(m.apply((5, 5)), 5, 5)
    assert approx_point(m.apply((10, 5)), 5, 10)


def test_rotate_explicit_pivot():
    m = parse_transform("R 180,1,1")
    assert approx_point(m.apply((2, 1)), 0, 1)


def test_rotate_default_pivot_needs_variables():
    with pytest.raises(TransformSyntaxError, match="undefined variable 'ux'"):
        parse_transform("R 90")


def test_flip():
    assert parse_transform("FH 10") == Matrix().flip(True, 10)
    assert parse_transform("FV 3") == Matrix().flip(False, 3)


@pytest.mark.parametrize("cmds", ["FX 1", "F 1", "F"])
def test_flip_needs_axis_letter(cmds):
    with pytest.raises(TransformSyntaxError, match="'H' or 'V' expected"):
        parse_transform(cmds)


def test_skew():
    assert parse_transform("KX 45") == Matrix().xskew(45)
    assert parse_transform("KY -30") == Matrix().yskew(-30)


@pytest.mark.parametrize("cmds", ["KX 90", "KY -90", "KX 270"])
def test_skew_rejects_right_angles(cmds):
    with pytest.raises(TransformSyntaxError, match="illegal skewing angle"):
        parse_transform(cmds)


def test_skew_error_names_angle():
    with pytest.raises(TransformSyntaxError) as e:
        parse_transform("KX 90")
    assert str(e.value) == "illegal skewing angle: 90 degrees"


def test_skew_needs_axis_letter():
    with pytest.raises(TransformSyntaxError, match="must be followed by 'X' or 'Y'"):
        parse_transform("KZ 10")


def test_matrix_command():
    assert parse_transform("M 1 2 3 4 5 6") == Matrix.from_values([1, 2, 3, 4, 5, 6])
    assert parse_transform("M 1,2,3,4,5,6") == Matrix.from_values([1, 2, 3, 4, 5, 6])
    assert parse_transform("M 2") == ScalingMatrix(2, 1)
    assert parse_transform("M 1,0,5") == TranslationMatrix(5, 0)


def test_unknown_command_names_character():
    with pytest.raises(TransformSyntaxError) as e:
        parse_transform("Z")
    assert str(e.value) == "transformation command expected (found 'Z' instead)"


def test_commands_are_case_sensitive():
    with pytest.raises(TransformSyntaxError, match="found 't'"):
        parse_transform("t 10")


def test_extra_parameter_is_not_a_command():
    with pytest.raises(TransformSyntaxError, match="found '3'"):
        parse_transform("T 1 2 3")


@pytest.mark.parametrize("cmds", ["T", "T 10,", "S ,", "M 1,"])
def test_missing_parameter(cmds):
    with pytest.raises(TransformSyntaxError, match="parameter expected"):
        parse_transform(cmds)


def test_expression_parameters(calc):
    assert parse_transform("T 2*w, h/2", calc) == TranslationMatrix(20, 5)
    assert parse_transform("T 10 + 5") == TranslationMatrix(15, 0)
    # a signed number after blanks continues the expression
    assert parse_transform("T 10 -5") == TranslationMatrix(5, 0)


def test_calculator_errors_become_syntax_errors():
    with pytest.raises(TransformSyntaxError, match="division by zero") as e:
        parse_transform("T 1/0")
    assert isinstance(e.value.__cause__, CalculatorError)


def test_commands_compose_in_order():
    m = parse_transform("T 10 0 S 2")
    assert m.apply((1, 0)) == PointFloat(22, 0)


def test_empty_input_is_identity():
    assert parse_transform("").is_identity()
    assert parse_transform(" \t\n").is_identity()


def test_stream_input():
    assert parse_transform(io.StringIO("S 3")) == ScalingMatrix(3, 3)


def test_parse_resets_receiver():
    m = Matrix().scale(5, 5)
    assert m.parse("T 1 2") is m
    assert m == TranslationMatrix(1, 2)


def test_failed_parse_leaves_partial_matrix():
    m = Matrix().scale(3, 3)
    with pytest.raises(TransformSyntaxError):
        m.parse("T 1 2 Z")
    assert m == TranslationMatrix(1, 2)


def test_from_commands(calc):
    assert Matrix.from_commands("S w/5", calc) == ScalingMatrix(2, 2)


def test_negative_second_parameter_needs_comma():
    assert parse_transform("T 10,-20") == TranslationMatrix(10, -20)
    assert parse_transform("T 10 -20") == TranslationMatrix(-10, 0)


def test_long_blank_runs_inside_parameter():
    blanks = " " * 100000
    assert parse_transform("T 1 +" + blanks + "2" + blanks + "4") == TranslationMatrix(3, 4)


def test_scanner_stops_between_operands():
    scanner = CommandScanner("10   20 + 1")
    calc = Calculator()
    assert scanner.argument(calc, 0, False, False) == 10
    assert scanner.text[scanner.pos:] == "   20 + 1"
    assert scanner.argument(calc, 0, True, True) == 21
    assert scanner.at_end()
