"""
codings — portable, introspectable categorical codings.

A ``Code`` maps one value to a label; a ``Coding`` is an ordered, uniquely labeled
collection of codes, decoupled from any data vector. Codings record recoding lineage,
mark missing categories, convert to and from tables (including XLSForm choice lists),
and round-trip through a one-line textual form that is re-parsed without a general
evaluator.

Layers
- codings.core — zero-IO contracts (stdlib, pydantic, lark).
- codings.io — polars-backed tables and printing.
"""

from .core import (
    EMPTY_CODING,
    Code,
    Coding,
    as_character,
    code,
    coding,
    coding_label,
    coding_labels,
    empty_coding,
    eval_coding,
    is_coding,
    is_empty_coding,
    missing_codes,
    parse_expression,
    select_codes_by_label,
    select_codes_if,
    to_expression,
)
from .io import (
    CodingSettings,
    as_data_frame,
    coding_contents,
    coding_to_odk,
    coding_values,
    format_coding,
    odk_to_coding,
    print_coding,
)

__version__ = "0.1.0"

__all__ = [
    "Code",
    "Coding",
    "EMPTY_CODING",
    "code",
    "coding",
    "empty_coding",
    "is_coding",
    "is_empty_coding",
    "coding_labels",
    "coding_label",
    "select_codes_if",
    "select_codes_by_label",
    "missing_codes",
    "coding_values",
    "coding_contents",
    "as_data_frame",
    "odk_to_coding",
    "coding_to_odk",
    "as_character",
    "to_expression",
    "parse_expression",
    "eval_coding",
    "format_coding",
    "print_coding",
    "CodingSettings",
]
