"""
Schema validation utilities for codings.io.

Purpose
- Validate Polars DataFrames against table descriptors from codings.core.tables.
- Apply pragmatic checks with safe casting for string columns.

Checks performed
- Required columns present.
- When strict=True: no columns outside (required | nullable).
- Dtype compatibility:
  - "str" columns are safely cast to Utf8 when possible (e.g., integer choice names).
  - "list[str]" accepts pl.List and casts the inner type to Utf8.
  - "scalar" accepts any non-nested dtype.

Notes
- Row-level semantics (label uniqueness, value kinds) are enforced by codings.core when
  the rows are assembled into a Coding, not here.
"""

from __future__ import annotations

import polars as pl

from codings.core.grammar import TableName
from codings.core.tables import TableDescriptor, get_table

from .errors import IoSchemaError

__all__ = [
    "validate_frame_against_descriptor",
    "validate_frame_for_table",
]


def _is_nested(dtype: pl.DataType) -> bool:
    return isinstance(dtype, (pl.List, pl.Array, pl.Struct)) or dtype == pl.Object


def _safe_cast(df: pl.DataFrame, col: str, target: pl.DataType) -> pl.DataFrame:
    try:
        return df.with_columns(pl.col(col).cast(target, strict=False))
    except pl.exceptions.PolarsError as exc:
        raise IoSchemaError(f"failed to cast column {col!r} to {target}: {exc}") from exc


def _ensure_columns_present(df: pl.DataFrame, needed: list[str]) -> None:
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise IoSchemaError(f"missing required columns: {missing!r}")


def _ensure_no_extra_columns(df: pl.DataFrame, allowed: set[str]) -> None:
    extras = [c for c in df.columns if c not in allowed]
    if extras:
        raise IoSchemaError(f"unexpected columns present: {extras!r} (allowed={sorted(allowed)!r})")


def validate_frame_against_descriptor(
    df: pl.DataFrame,
    desc: TableDescriptor,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Validate a Polars DataFrame against a TableDescriptor.

    Args:
        df (pl.DataFrame): Frame to validate.
        desc (TableDescriptor): Descriptor from codings.core.tables.
        strict (bool): Enforce exact column set (no extras) when True.

    Returns:
        pl.DataFrame: Possibly with safe casts applied to string columns.

    Raises:
        IoSchemaError: If df is not a DataFrame, required columns are missing, extras
            are present under strict mode, or dtypes are incompatible.
    """
    if not isinstance(df, pl.DataFrame):
        raise IoSchemaError(f"expected a polars DataFrame, got {type(df).__name__}")

    _ensure_columns_present(df, desc.required)
    if strict:
        _ensure_no_extra_columns(df, set(desc.required) | set(desc.nullable))

    for col, dtype_name in desc.columns.items():
        if col not in df.columns:
            continue
        actual = df.schema[col]
        if dtype_name == "str":
            if _is_nested(actual):
                raise IoSchemaError(f"column {col!r} expected string dtype; got {actual}")
            if actual != pl.Utf8:
                df = _safe_cast(df, col, pl.Utf8)
        elif dtype_name == "list[str]":
            if not isinstance(actual, pl.List):
                raise IoSchemaError(f"column {col!r} expected list dtype; got {actual}")
            if actual != pl.List(pl.Utf8):
                df = _safe_cast(df, col, pl.List(pl.Utf8))
        elif dtype_name == "scalar":
            if _is_nested(actual):
                raise IoSchemaError(f"column {col!r} expected scalar dtype; got {actual}")
        else:  # pragma: no cover
            raise IoSchemaError(f"unknown descriptor dtype {dtype_name!r} for column {col!r}")

    return df


def validate_frame_for_table(
    df: pl.DataFrame,
    table: TableName | str,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Validate a DataFrame against the descriptor for a given table.

    Args:
        df (pl.DataFrame): DataFrame to validate.
        table (TableName | str): Canonical table name (enum or lower_snake string).
        strict (bool): Enforce exact column set when True.

    Returns:
        pl.DataFrame: Possibly casted frame.

    Raises:
        codings.io.errors.IoSchemaError: On validation failure.
    """
    tname = table.value if isinstance(table, TableName) else str(table)
    desc = get_table(TableName(tname))
    return validate_frame_against_descriptor(df, desc, strict=strict)
