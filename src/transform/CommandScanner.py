import string
from typing import Callable, Union

from calc.Calculator import Calculator
from transform.TransformSyntaxError import TransformSyntaxError

Default = Union[float, Callable[[], float]]

OPERAND_END = set(string.ascii_letters + string.digits + "._)")
OPERAND_START = set(string.ascii_letters + string.digits + "._(")


class CommandScanner:
    """Character-level reader over a transformation command string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Next character, or '' at the end of the input."""
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def get(self) -> str:
        c = self.peek()
        if c:
            self.pos += 1
        return c

    def skip_space(self) -> None:
        while self.peek().isspace():
            self.pos += 1

    def argument(self, calc: Calculator, default: Default, optional: bool, leading_comma: bool) -> float:
        """Read and evaluate one command parameter.

        default is returned (called first if it is callable) when an optional
        parameter is left out. A comma in front of the parameter is consumed and
        makes it mandatory; leading_comma requires one for mandatory parameters.
        """
        self.skip_space()
        if not optional and leading_comma and self.peek() != ",":
            raise TransformSyntaxError("',' expected")
        if self.peek() == ",":
            self.pos += 1
            optional = False
        start = self.pos
        last = ""
        while not self.at_end():
            c = self.peek()
            if c in string.ascii_uppercase or c == ",":
                break
            if c.isspace():
                # blanks between two complete operands end the parameter: "10 20"
                end = self._blank_run_end()
                if last in OPERAND_END and self.text[end:end + 1] in OPERAND_START:
                    break
                self.pos = end
                continue
            last = c
            self.pos += 1
        expr = self.text[start:self.pos]
        if not expr.strip():
            if optional:
                return default() if callable(default) else default
            raise TransformSyntaxError("parameter expected")
        return calc.evaluate(expr)

    def _blank_run_end(self) -> int:
        end = self.pos
        while end < len(self.text) and self.text[end].isspace():
            end += 1
        return end
