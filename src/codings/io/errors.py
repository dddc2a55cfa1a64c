"""
Custom exceptions for the codings.io module.

Purpose
- Provide tabular-layer error types distinct from coding invariants.
- Keep codings.core as the source of truth for schema/grammar errors (see
  codings.core.errors).

Source of truth and boundaries
- codings.core.errors.SchemaError and GrammarError are raised by core assembly/parsing.
- codings.io raises Io* errors for frame and configuration concerns:
  - IoConfigError: invalid settings.
  - IoSchemaError: a frame failed validation against a codings.core.tables descriptor.

Notes
- These exceptions perform no IO and are stdlib-only.
"""

from __future__ import annotations

__all__ = [
    "IoError",
    "IoConfigError",
    "IoSchemaError",
]


class IoError(Exception):
    """
    Base class for tabular-layer errors in codings.io.
    """


class IoConfigError(IoError):
    """
    Raised when settings are invalid.

    Examples:
        - print_max_rows < 1
        - suffix_separator that is not a string
    """


class IoSchemaError(IoError):
    """
    Raised when a DataFrame fails validation against a table descriptor.

    Notes:
        Includes missing required columns, unexpected columns in strict mode,
        incompatible dtypes, and choice tables holding several list_name groups.
    """
