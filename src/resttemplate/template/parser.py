# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Placeholder parser.

Grammar inside one brace pair (placeholders do not nest)::

    placeholder   := modifier? name defaultClause? typeClause?
    modifier      := '!' | '^'
    defaultClause := '=' <chars up to ':' or '}'>
    typeClause    := ':' ('number' | 'boolean')

Anything between braces that does not match is kept as literal text, so
``parse`` never fails. ``\\{`` and ``\\}`` produce literal braces.
"""

from __future__ import annotations

from .tokens import Literal, Token, Variable, VariableType

ESCAPE = "\\"
MODIFIERS = frozenset("!^")
NAME_STOP = frozenset("!^=:{}")
DEFAULT_STOP = frozenset(":}")
TYPE_STOP = frozenset("}")

_TYPES = {
    "number": VariableType.NUMBER,
    "boolean": VariableType.BOOLEAN,
}


class _Cursor:
    def __init__(self, text: str, pos: int):
        self.text = text
        self.pos = pos

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def advance(self) -> str:
        ch = self.peek()
        self.pos += 1
        return ch

    def take_until(self, stops: frozenset[str]) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in stops:
            self.pos += 1
        return self.text[start : self.pos]


def _parse_modifier(cursor: _Cursor) -> bool:
    if cursor.peek() and cursor.peek() in MODIFIERS:
        cursor.advance()
        return True
    return False


def _parse_default(cursor: _Cursor) -> str | None:
    if cursor.peek() != "=":
        return None
    cursor.advance()
    return cursor.take_until(DEFAULT_STOP)


def _parse_type(cursor: _Cursor) -> VariableType | None:
    if cursor.peek() != ":":
        return VariableType.STRING
    cursor.advance()
    return _TYPES.get(cursor.take_until(TYPE_STOP))


def _parse_placeholder(text: str, start: int) -> tuple[Variable, int] | None:
    """Parse the placeholder body that begins at ``start`` (just after ``{``).

    Returns the variable and the index after the closing brace, or None when the
    span is not a placeholder.
    """
    cursor = _Cursor(text, start)
    required = _parse_modifier(cursor)
    name = cursor.take_until(NAME_STOP)
    if not name:
        return None
    default = _parse_default(cursor)
    var_type = _parse_type(cursor)
    if var_type is None or cursor.advance() != "}":
        return None
    return Variable(name=name, required=required, default=default, type=var_type), cursor.pos


def parse(text: str) -> tuple[Token, ...]:
    """Split ``text`` into literal and variable tokens."""
    tokens: list[Token] = []
    literal: list[str] = []
    pos = 0
    length = len(text)

    while pos < length:
        ch = text[pos]
        if ch == ESCAPE and pos + 1 < length and text[pos + 1] in "{}":
            literal.append(text[pos + 1])
            pos += 2
            continue
        if ch == "{":
            parsed = _parse_placeholder(text, pos + 1)
            if parsed is not None:
                variable, pos = parsed
                if literal:
                    tokens.append(Literal("".join(literal)))
                    literal = []
                tokens.append(variable)
                continue
        literal.append(ch)
        pos += 1

    if literal:
        tokens.append(Literal("".join(literal)))
    return tuple(tokens)


__all__ = ["parse"]
