# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Parsed placeholder tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class VariableType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Literal:
    """Plain text copied into the resolved string as-is."""

    text: str


@dataclass(frozen=True)
class Variable:
    """A `{...}` placeholder reference."""

    name: str
    required: bool = False
    default: str | None = None
    type: VariableType = VariableType.STRING

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable name must not be empty")


Token = Union[Literal, Variable]


__all__ = ["Literal", "Token", "Variable", "VariableType"]
