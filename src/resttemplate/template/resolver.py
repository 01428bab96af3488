# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Resolve a single placeholder variable against call-time arguments."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from ..errors import MissingRequiredVariable, TypeCoercionError
from .tokens import Variable, VariableType

_INT_RE = re.compile(r"^[+-]?\d+$")


def _coerce_number(variable: Variable, value: Any) -> int | float:
    if isinstance(value, bool):
        raise TypeCoercionError(variable.name, value, variable.type.value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        text = str(value).strip()
        if _INT_RE.match(text):
            return int(text)
        try:
            number = float(text)
        except ValueError:
            raise TypeCoercionError(variable.name, value, variable.type.value) from None
    # NaN and infinities have no JSON representation.
    if not math.isfinite(number):
        raise TypeCoercionError(variable.name, value, variable.type.value)
    return number


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def coerce(variable: Variable, value: Any) -> Any:
    """Apply the variable's declared type to a looked-up value."""
    if value is None:
        return None
    if variable.type is VariableType.NUMBER:
        return _coerce_number(variable, value)
    if variable.type is VariableType.BOOLEAN:
        return _coerce_boolean(value)
    return value


def resolve(variable: Variable, arguments: Mapping[str, Any]) -> Any:
    """
    Produce the concrete value for ``variable``.

    Lookup order: explicit argument (None/False/0 included), then the default,
    then a MissingRequiredVariable for required variables. Absent optional
    variables without a default resolve to an empty string, which a boolean
    variable coerces to False and a number variable keeps as-is.
    """
    if variable.name in arguments:
        value = arguments[variable.name]
    elif variable.default is not None:
        value = variable.default
    elif variable.required:
        raise MissingRequiredVariable(variable.name)
    elif variable.type is VariableType.NUMBER:
        return ""
    else:
        value = ""
    return coerce(variable, value)


__all__ = ["coerce", "resolve"]
