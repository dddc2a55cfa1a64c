"""
Tabular bridge: codings as polars frames and series.

Purpose
- Flatten a coding into the contents table (one row per code).
- Export with an optional column suffix for side-by-side joins of several codings.
- Extract the ordered values of a coding as a typed series.

Schema
- contents columns: link list[str], label str, value <value kind>, description str.
- ``link`` is ``Code.links_from`` renamed; multi-source lineage stays on one row.
- The empty coding gives a zero-row frame with value typed Boolean, the "total
  absence of data" dtype, so the schema is stable regardless of content.
"""

from __future__ import annotations

import polars as pl

from codings.core.constants import CONTENTS_COLUMNS, LINK_COLUMN
from codings.core.schema import Coding, ensure_coding
from codings.core.tables import CONTENTS_DESC

from .config import CodingSettings
from .validate import validate_frame_against_descriptor

__all__ = [
    "coding_values",
    "coding_contents",
    "as_data_frame",
]

_EMPTY_CONTENTS_SCHEMA: dict[str, pl.DataType] = {
    LINK_COLUMN: pl.List(pl.Utf8),
    "label": pl.Utf8,
    "value": pl.Boolean,
    "description": pl.Utf8,
}


def coding_values(coding: Coding) -> pl.Series:
    """
    Ordered values of every code, as a series named ``value``.

    Args:
        coding (Coding): Source coding.

    Returns:
        pl.Series: Values in code order; missing values are null. The empty coding
        and an all-missing coding give a Boolean series.

    Examples:
        >>> from codings.core.schema import code, coding
        >>> coding_values(coding(code("Yes", 1), code("No", 0))).to_list()
        [1, 0]
        >>> coding_values(coding()).dtype
        Boolean
    """
    ensure_coding(coding)
    if coding.is_empty:
        return pl.Series("value", [], dtype=pl.Boolean)
    # Integer and float codes may share a coding; non-strict construction upcasts.
    s = pl.Series("value", [c.value for c in coding.codes], strict=False)
    if s.dtype == pl.Null:
        s = s.cast(pl.Boolean)
    return s


def coding_contents(coding: Coding) -> pl.DataFrame:
    """
    Flatten a coding into one row per code.

    Returns:
        pl.DataFrame: Columns ``link, label, value, description``.
    """
    ensure_coding(coding)
    if coding.is_empty:
        return pl.DataFrame(schema=_EMPTY_CONTENTS_SCHEMA)

    codes = coding.codes
    df = pl.DataFrame(
        [
            pl.Series(LINK_COLUMN, [list(c.links_from) for c in codes], dtype=pl.List(pl.Utf8)),
            pl.Series("label", [c.label for c in codes], dtype=pl.Utf8),
            coding_values(coding),
            pl.Series("description", [c.description for c in codes], dtype=pl.Utf8),
        ]
    )
    return validate_frame_against_descriptor(df, CONTENTS_DESC).select(list(CONTENTS_COLUMNS))


def _check_suffix(suffix: object) -> str:
    if isinstance(suffix, str):
        return suffix
    if isinstance(suffix, int) and not isinstance(suffix, bool) and suffix > 0:
        return str(suffix)
    raise ValueError(f"suffix must be a string or positive integer, got {suffix!r}")


def as_data_frame(
    coding: Coding,
    suffix: str | int | None = None,
    settings: CodingSettings | None = None,
) -> pl.DataFrame:
    """
    Contents table, optionally with every non-link column suffixed.

    Args:
        coding (Coding): Source coding.
        suffix (str | int | None): Appended as ``<column><sep><suffix>`` to every
            column except ``link``.
        settings (CodingSettings | None): Supplies the separator (default "_").

    Returns:
        pl.DataFrame: Contents frame.

    Raises:
        ValueError: If suffix is neither a string nor a positive integer.

    Examples:
        >>> from codings.core.schema import code, coding
        >>> as_data_frame(coding(code("Yes", 1)), suffix=2).columns
        ['link', 'label_2', 'value_2', 'description_2']
    """
    out = coding_contents(coding)
    if suffix is None:
        return out

    tag = _check_suffix(suffix)
    sep = (settings or CodingSettings()).suffix_separator
    return out.rename({c: f"{c}{sep}{tag}" for c in out.columns if c != LINK_COLUMN})
