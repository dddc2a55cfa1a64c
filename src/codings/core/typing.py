"""
Lightweight typing aliases used across coding schemas and helpers.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from codings.core.typing import Scalar
    >>> def describe(v: Scalar) -> str:
    ...     return "missing" if v is None else str(v)
    >>> describe(None)
    'missing'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = [
    "Scalar",
    "CodePredicate",
    "JsonDict",
]

# A code value; ``None`` is the missing sentinel.
Scalar = bool | int | float | str | None

# Predicate applied to each Code by select_codes_if (extra args are forwarded).
CodePredicate = Callable[..., bool]

JsonDict = dict[str, Any]
