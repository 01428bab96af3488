# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Compile template structures once and substitute arguments per invocation.

A compiled structure is built from a closed set of node kinds: dict (mapping),
list (sequence), ParsedString (string leaf) and any other scalar, which passes
through untouched.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .parser import parse
from .resolver import resolve
from .tokens import Literal, Token, Variable


@dataclass(frozen=True)
class ParsedString:
    """A template string leaf together with its parsed tokens."""

    source: str
    tokens: tuple[Token, ...]

    @classmethod
    def from_text(cls, text: str) -> ParsedString:
        return cls(source=text, tokens=parse(text))

    @property
    def variables(self) -> tuple[Variable, ...]:
        return tuple(token for token in self.tokens if isinstance(token, Variable))

    @property
    def single_variable(self) -> Variable | None:
        """The variable when the whole leaf is exactly one placeholder."""
        if len(self.tokens) == 1 and isinstance(self.tokens[0], Variable):
            return self.tokens[0]
        return None


def render_value(value: Any) -> str:
    """Render a resolved value for interpolation into surrounding text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def compile_structure(value: Any) -> Any:
    """Parse every string leaf of ``value`` into a ParsedString."""
    if isinstance(value, str):
        return ParsedString.from_text(value)
    if isinstance(value, Mapping):
        return {key: compile_structure(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [compile_structure(item) for item in value]
    return value


def substitute_string(parsed: ParsedString, arguments: Mapping[str, Any]) -> Any:
    if not parsed.variables:
        return "".join(token.text for token in parsed.tokens if isinstance(token, Literal))
    single = parsed.single_variable
    if single is not None:
        return resolve(single, arguments)
    parts: list[str] = []
    for token in parsed.tokens:
        if isinstance(token, Literal):
            parts.append(token.text)
        else:
            parts.append(render_value(resolve(token, arguments)))
    return "".join(parts)


def substitute(node: Any, arguments: Mapping[str, Any]) -> Any:
    """Resolve every placeholder in a compiled structure, returning fresh containers."""
    if isinstance(node, ParsedString):
        return substitute_string(node, arguments)
    if isinstance(node, dict):
        return {key: substitute(item, arguments) for key, item in node.items()}
    if isinstance(node, list):
        return [substitute(item, arguments) for item in node]
    return node


def iter_variables(node: Any) -> Iterator[Variable]:
    """Yield variables of a compiled structure in declaration order."""
    if isinstance(node, ParsedString):
        yield from node.variables
    elif isinstance(node, dict):
        for item in node.values():
            yield from iter_variables(item)
    elif isinstance(node, list):
        for item in node:
            yield from iter_variables(item)


__all__ = [
    "ParsedString",
    "compile_structure",
    "iter_variables",
    "render_value",
    "substitute",
    "substitute_string",
]
