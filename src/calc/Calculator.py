import logging
import math
import re
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from calc.CalculatorError import CalculatorError

log = logging.getLogger(__name__)

PATTERN_NUMBER = r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?"
PATTERN_NAME = r"[A-Za-z_][A-Za-z0-9_]*"
REGEX_TOKEN = re.compile(r"\s*(?:(%s)|(%s)|(.))" % (PATTERN_NUMBER, PATTERN_NAME), re.S)

# token kinds
NUMBER = "number"
NAME = "name"
OP = "op"
END = "end"

Token = Tuple[str, object]


def _tokenize(expr: str) -> List[Token]:
    tokens: List[Token] = []
    for number, name, other in REGEX_TOKEN.findall(expr):
        if number:
            tokens.append((NUMBER, float(number)))
        elif name:
            tokens.append((NAME, name))
        elif other.isspace() or not other:
            continue
        elif other in "+-*/%()":
            tokens.append((OP, other))
        else:
            raise CalculatorError(f"unexpected character '{other}'")
    tokens.append((END, None))
    return tokens


class _ExprParser:
    """Recursive descent over the tokens of one expression.

    Grammar::

        expr   := term (('+' | '-') term)*
        term   := factor (('*' | '/' | '%') factor)*
        factor := ('+' | '-') factor | NUMBER | NAME | '(' expr ')'
    """

    def __init__(self, tokens: List[Token], lookup: Callable[[str], float]):
        self.tokens = tokens
        self.pos = 0
        self.lookup = lookup

    def parse(self) -> float:
        value = self._expr()
        if self._peek()[0] != END:
            raise CalculatorError("expression syntax error")
        return value

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _next(self) -> Token:
        tok = self.tokens[self.pos]
        if tok[0] != END:
            self.pos += 1
        return tok

    def _expr(self) -> float:
        value = self._term()
        while self._peek() in ((OP, "+"), (OP, "-")):
            _, op = self._next()
            rhs = self._term()
            value = value + rhs if op == "+" else value - rhs
        return value

    def _term(self) -> float:
        value = self._factor()
        while self._peek() in ((OP, "*"), (OP, "/"), (OP, "%")):
            _, op = self._next()
            rhs = self._factor()
            if op == "*":
                value *= rhs
                continue
            if rhs == 0:
                raise CalculatorError("division by zero")
            value = value / rhs if op == "/" else math.fmod(value, rhs)
        return value

    def _factor(self) -> float:
        kind, val = self._next()
        if kind == NUMBER:
            return val
        if kind == NAME:
            return self.lookup(val)
        if (kind, val) == (OP, "-"):
            return -self._factor()
        if (kind, val) == (OP, "+"):
            return self._factor()
        if (kind, val) == (OP, "("):
            value = self._expr()
            if self._next() != (OP, ")"):
                raise CalculatorError("')' expected")
            return value
        if kind == END:
            raise CalculatorError("unexpected end of expression")
        raise CalculatorError("expression syntax error")


class Calculator:
    """Evaluates arithmetic expressions (+ - * / %, parentheses) over named variables.

    Only the variable table lives on the calculator; each evaluate() call
    scans with its own parser, so one calculator can serve several threads.
    """

    def __init__(self, variables: Optional[Mapping[str, float]] = None):
        self.variables: Dict[str, float] = {}
        if variables:
            for name, value in variables.items():
                self.set_variable(name, value)

    def set_variable(self, name: str, value: float) -> None:
        if not re.fullmatch(PATTERN_NAME, name):
            raise CalculatorError(f"invalid variable name '{name}'")
        self.variables[name] = float(value)

    def lookup(self, name: str) -> float:
        try:
            return self.variables[name]
        except KeyError:
            raise CalculatorError(f"undefined variable '{name}'") from None

    def evaluate(self, expr: str) -> float:
        value = _ExprParser(_tokenize(expr), self.lookup).parse()
        log.debug("evaluated %r -> %g", expr, value)
        return value
