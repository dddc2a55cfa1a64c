"""
XLSForm choice-list adapter.

The survey tool's choices sheet has ``list_name``, ``name`` and ``label`` columns.
Its terminology is inverted relative to codings:

    XLSForm ``name``   <->  Code.label
    XLSForm ``label``  <->  Code.value
    XLSForm ``list_name`` <-> Coding.label

Callers pass one ``list_name`` group at a time; splitting a full choices sheet is
their responsibility.

Examples:
    >>> import polars as pl
    >>> from codings.io.xlsform import coding_to_odk, odk_to_coding
    >>> choices = pl.DataFrame({"list_name": ["yn", "yn"], "name": ["y", "n"],
    ...                         "label": ["Yes", "No"]})
    >>> yn = odk_to_coding(choices)
    >>> yn.label, [c.value for c in yn]
    ('yn', ['Yes', 'No'])
    >>> coding_to_odk(yn).equals(choices)
    True
"""

from __future__ import annotations

import logging

import polars as pl

from codings.core.constants import XLSFORM_LABEL, XLSFORM_LIST_NAME, XLSFORM_NAME
from codings.core.grammar import TableName
from codings.core.schema import Coding, ensure_coding, code, coding

from .config import CodingSettings
from .errors import IoSchemaError
from .frames import coding_values
from .validate import validate_frame_for_table

__all__ = [
    "odk_to_coding",
    "coding_to_odk",
]

logger = logging.getLogger(__name__)


def _list_name_of(df: pl.DataFrame) -> str | None:
    if XLSFORM_LIST_NAME not in df.columns:
        return None
    names = df.get_column(XLSFORM_LIST_NAME).drop_nulls().unique(maintain_order=True).to_list()
    if len(names) > 1:
        raise IoSchemaError(
            f"choices hold several list_name groups {names!r}; filter to one before converting"
        )
    return names[0] if names else None


def odk_to_coding(
    choices: pl.DataFrame,
    list_name: str | None = None,
    settings: CodingSettings | None = None,
) -> Coding:
    """
    Build a coding from one XLSForm choice list.

    Args:
        choices (pl.DataFrame): Choice rows with at least ``name`` and ``label``.
        list_name (str | None): Collection label; taken from a single-valued
            ``list_name`` column when omitted.
        settings (CodingSettings | None): ``strict_schema`` rejects extra columns.

    Returns:
        Coding: One code per row (``label=name``, ``value=label``); the empty coding
        for a zero-row frame.

    Raises:
        IoSchemaError: If required columns are missing, extra columns are present in
            strict mode, or several list_name groups are present.
        codings.core.errors.SchemaError: If names repeat or labels mix value kinds.
    """
    s = settings or CodingSettings()
    df = validate_frame_for_table(choices, TableName.XLSFORM_CHOICES, strict=s.strict_schema)

    label = list_name if list_name is not None else _list_name_of(df)
    codes = [
        code(row[XLSFORM_NAME], row[XLSFORM_LABEL])
        for row in df.select([XLSFORM_NAME, XLSFORM_LABEL]).iter_rows(named=True)
    ]
    logger.debug("converted %d choices of list %r", len(codes), label)
    return coding(*codes, label=label)


def coding_to_odk(coding: Coding) -> pl.DataFrame:
    """
    Emit XLSForm choice rows for a coding.

    Returns:
        pl.DataFrame: Columns ``list_name`` (the collection label, null when unset),
        ``name`` (code labels), ``label`` (code values).
    """
    ensure_coding(coding)
    if coding.is_empty:
        return pl.DataFrame(
            schema={XLSFORM_LIST_NAME: pl.Utf8, XLSFORM_NAME: pl.Utf8, XLSFORM_LABEL: pl.Boolean}
        )

    n = len(coding)
    return pl.DataFrame(
        [
            pl.Series(XLSFORM_LIST_NAME, [coding.label] * n, dtype=pl.Utf8),
            pl.Series(XLSFORM_NAME, [c.label for c in coding.codes], dtype=pl.Utf8),
            coding_values(coding).alias(XLSFORM_LABEL),
        ]
    )
