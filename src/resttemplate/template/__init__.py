# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Placeholder parsing, resolution and substitution."""

from .parser import parse
from .resolver import coerce, resolve
from .substitution import ParsedString, compile_structure, iter_variables, substitute
from .tokens import Literal, Token, Variable, VariableType

__all__ = [
    "Literal",
    "ParsedString",
    "Token",
    "Variable",
    "VariableType",
    "coerce",
    "compile_structure",
    "iter_variables",
    "parse",
    "resolve",
    "substitute",
]
