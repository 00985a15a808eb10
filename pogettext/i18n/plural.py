"""Plural-Forms formula compiler and evaluator.

Parses the C-like expression found in a ``Plural-Forms`` header
(``plural=(n != 1)``) into a small expression tree once, at catalog load
time, and evaluates it against an integer ``n`` at lookup time.

Supported grammar, lowest precedence first::

    ternary        := logical_or ( "?" ternary ":" ternary )?
    logical_or     := logical_and ( "||" logical_and )*
    logical_and    := equality ( "&&" equality )*
    equality       := relational ( ( "==" | "!=" ) relational )*
    relational     := additive ( ( "<" | "<=" | ">" | ">=" ) additive )*
    additive       := multiplicative ( ( "+" | "-" ) multiplicative )*
    multiplicative := unary ( ( "*" | "/" | "%" ) unary )*
    unary          := ( "!" | "-" | "+" ) unary | primary
    primary        := INTEGER | "n" | "(" ternary ")"

Values are either ``bool`` or ``int``; operands are coerced with C
truthiness rules.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from pogettext.i18n.errors import PluralExpressionError

Value = Union[bool, int]

_TOKEN_RE = re.compile(
    r"\s*(?:(?P<int>\d+)|(?P<name>[A-Za-z_]\w*)|(?P<op>\|\||&&|==|!=|<=|>=|[-+*/%<>!?:()]))"
)


def _as_int(value: Value) -> int:
    return int(value)


def _truthy(value: Value) -> bool:
    return value != 0


def _c_div(left: int, right: int) -> int:
    if right == 0:
        raise PluralExpressionError("division by zero in plural expression")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _c_mod(left: int, right: int) -> int:
    if right == 0:
        raise PluralExpressionError("modulo by zero in plural expression")
    return left - right * _c_div(left, right)


_ARITHMETIC = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _c_div,
    "%": _c_mod,
}

_COMPARISON = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


class Node:
    """Base class for plural expression tree nodes."""

    def evaluate(self, n: int) -> Value:
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Node):
    value: int

    def evaluate(self, n: int) -> Value:
        return self.value


@dataclass(frozen=True)
class Variable(Node):
    """The ``n`` placeholder."""

    def evaluate(self, n: int) -> Value:
        return n


@dataclass(frozen=True)
class Unary(Node):
    op: str
    operand: Node

    def evaluate(self, n: int) -> Value:
        value = self.operand.evaluate(n)
        if self.op == "!":
            return not _truthy(value)
        if self.op == "-":
            return -_as_int(value)
        return _as_int(value)


@dataclass(frozen=True)
class Binary(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, n: int) -> Value:
        if self.op == "&&":
            return _truthy(self.left.evaluate(n)) and _truthy(self.right.evaluate(n))
        if self.op == "||":
            return _truthy(self.left.evaluate(n)) or _truthy(self.right.evaluate(n))

        left = _as_int(self.left.evaluate(n))
        right = _as_int(self.right.evaluate(n))
        if self.op in _COMPARISON:
            return _COMPARISON[self.op](left, right)
        return _ARITHMETIC[self.op](left, right)


@dataclass(frozen=True)
class Ternary(Node):
    condition: Node
    if_true: Node
    if_false: Node

    def evaluate(self, n: int) -> Value:
        if _truthy(self.condition.evaluate(n)):
            return self.if_true.evaluate(n)
        return self.if_false.evaluate(n)


def tokenize(source: str) -> List[Tuple[str, str]]:
    """Split a plural formula into ``(kind, text)`` tokens.

    Args:
        source: Formula text, e.g. ``"(n != 1)"``.

    Returns:
        List of tokens where kind is ``"int"``, ``"name"`` or ``"op"``.

    Raises:
        PluralExpressionError: On any character outside the grammar.
    """
    tokens = []
    pos = 0
    end = len(source.rstrip())
    while pos < end:
        match = _TOKEN_RE.match(source, pos)
        if match is None or match.end() == pos:
            raise PluralExpressionError(
                f"unexpected character {source[pos:pos + 1]!r} at offset {pos}"
            )
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


class _Parser:
    """Recursive-descent parser over the token list."""

    def __init__(self, tokens: List[Tuple[str, str]]):
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Optional[Tuple[str, str]]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _accept(self, *ops: str) -> Optional[str]:
        token = self._peek()
        if token is not None and token[0] == "op" and token[1] in ops:
            self.pos += 1
            return token[1]
        return None

    def _expect(self, op: str) -> None:
        if self._accept(op) is None:
            found = self._peek()
            raise PluralExpressionError(
                f"expected {op!r}, found {found[1] if found else 'end of input'!r}"
            )

    def parse(self) -> Node:
        if not self.tokens:
            raise PluralExpressionError("empty plural expression")
        node = self._ternary()
        if self._peek() is not None:
            raise PluralExpressionError(f"unexpected token {self._peek()[1]!r}")
        return node

    def _ternary(self) -> Node:
        condition = self._logical_or()
        if self._accept("?") is None:
            return condition
        if_true = self._ternary()
        self._expect(":")
        if_false = self._ternary()
        return Ternary(condition, if_true, if_false)

    def _binary_level(self, operand, ops) -> Node:
        node = operand()
        while True:
            op = self._accept(*ops)
            if op is None:
                return node
            node = Binary(op, node, operand())

    def _logical_or(self) -> Node:
        return self._binary_level(self._logical_and, ("||",))

    def _logical_and(self) -> Node:
        return self._binary_level(self._equality, ("&&",))

    def _equality(self) -> Node:
        return self._binary_level(self._relational, ("==", "!="))

    def _relational(self) -> Node:
        return self._binary_level(self._additive, ("<", "<=", ">", ">="))

    def _additive(self) -> Node:
        return self._binary_level(self._multiplicative, ("+", "-"))

    def _multiplicative(self) -> Node:
        return self._binary_level(self._unary, ("*", "/", "%"))

    def _unary(self) -> Node:
        op = self._accept("!", "-", "+")
        if op is not None:
            return Unary(op, self._unary())
        return self._primary()

    def _primary(self) -> Node:
        token = self._peek()
        if token is None:
            raise PluralExpressionError("unexpected end of plural expression")
        kind, text = token
        if kind == "int":
            self.pos += 1
            return Literal(int(text))
        if kind == "name":
            if text != "n":
                raise PluralExpressionError(f"unknown identifier {text!r}")
            self.pos += 1
            return Variable()
        if self._accept("(") is not None:
            node = self._ternary()
            self._expect(")")
            return node
        raise PluralExpressionError(f"unexpected token {text!r}")


@dataclass(frozen=True)
class PluralExpression:
    """A compiled plural formula.

    Attributes:
        source: The formula text as it appeared in the header.
        root: Root node of the expression tree.
    """

    source: str
    root: Node

    def evaluate(self, n: int) -> Value:
        """Evaluate the raw formula for ``n``.

        Raises:
            PluralExpressionError: On division or modulo by zero.
        """
        return self.root.evaluate(n)

    def index(self, n: int, nplurals: int) -> int:
        """Return the plural-form index for ``n``; never raises.

        ``True`` maps to 1 and ``False`` to 0. Integer results above
        ``nplurals`` or below zero fall back to 0, as does any evaluation
        error.
        """
        if nplurals < 1:
            return 0
        try:
            value = self.evaluate(n)
        except (PluralExpressionError, RecursionError):
            return 0
        if isinstance(value, bool):
            return 1 if value else 0
        if value < 0 or value > nplurals:
            return 0
        return value


def compile_plural(source: str) -> PluralExpression:
    """Compile a plural formula into a reusable PluralExpression.

    Args:
        source: Formula text, e.g. ``"n%10==1 && n%100!=11 ? 0 : 1"``.

    Returns:
        PluralExpression ready for repeated evaluation.

    Raises:
        PluralExpressionError: If the formula is malformed.
    """
    try:
        root = _Parser(tokenize(source)).parse()
    except RecursionError as e:
        raise PluralExpressionError("plural expression nested too deeply") from e
    return PluralExpression(source=source.strip(), root=root)


def plural_form_index(
    expression: Optional[PluralExpression], nplurals: int, n: int
) -> int:
    """Resolve the plural-form index for ``n``, defaulting to 0.

    Args:
        expression: Compiled formula, or None when the header had none.
        nplurals: Declared plural count from the header.
        n: The count being pluralised.

    Returns:
        Non-negative form index.
    """
    if expression is None:
        return 0
    return expression.index(n, nplurals)
