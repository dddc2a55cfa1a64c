"""
Core exception types raised by coding assembly, selection, and the textual grammar.

Provides typed exceptions for core-domain failures:
- SchemaError for coding invariants (uniqueness, value-kind consistency, argument kinds).
- GrammarError for textual expressions that cannot be parsed or reference forbidden names.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Assembly checks in codings.core.schema raise the SchemaError family directly.
    - Field-level failures on Code (empty label, unsupported value) are reported by
      pydantic as ValidationError.
    - CodeTypeError, ValueTypeError, and LabelSetError also derive from TypeError.

Examples:
    Catch a uniqueness violation.

    >>> from codings.core.errors import DuplicateLabelError
    >>> from codings.core.schema import code, coding
    >>> try:
    ...     coding(code("Yes", 1), code("Yes", 2))
    ... except DuplicateLabelError as e:
    ...     msg = str(e)
    >>> "unique" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SchemaError",
    "CodeTypeError",
    "DuplicateLabelError",
    "ValueTypeError",
    "LabelSetError",
    "GrammarError",
]


class SchemaError(ValueError):
    """Coding invariant violation detected at assembly time."""


class CodeTypeError(SchemaError, TypeError):
    """A non-Code object was passed where a Code is required."""


class DuplicateLabelError(SchemaError):
    """Two codes in one coding share a label."""


class ValueTypeError(SchemaError, TypeError):
    """Code values within one coding do not share a value kind."""


class LabelSetError(SchemaError, TypeError):
    """A label set for selection is not a collection of strings."""


class GrammarError(ValueError):
    """Textual coding expression is malformed or references a forbidden name."""
