# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bind a template to an ordered parameter list and expose it as a positional callable."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .builder import RequestTemplate


def normalize_names(names: tuple[Any, ...]) -> tuple[str, ...]:
    """Accept ``("a", "b")`` as well as ``(["a", "b"],)``."""
    if len(names) == 1 and not isinstance(names[0], str) and isinstance(names[0], Iterable):
        names = tuple(names[0])
    return tuple(str(name) for name in names)


class Operation:
    """A remote-procedure-style function backed by a RequestTemplate."""

    def __init__(self, template: RequestTemplate, names: Iterable[str]):
        self.template = template
        self.names = tuple(names)

    def arguments(self, values: tuple[Any, ...]) -> dict[str, Any]:
        if len(values) > len(self.names):
            raise TypeError(f"operation takes at most {len(self.names)} arguments ({len(values)} given)")
        return dict(zip(self.names, values))

    def __call__(self, *values: Any, callback: Callable[..., Any] | None = None) -> Any:
        # A trailing callable is always the callback, even when fewer values are given.
        if callback is None and values and callable(values[-1]):
            values, callback = values[:-1], values[-1]
        return self.template.invoke(self.arguments(values), callback)

    def __repr__(self) -> str:
        return f"Operation({', '.join(self.names)})"


__all__ = ["Operation", "normalize_names"]
