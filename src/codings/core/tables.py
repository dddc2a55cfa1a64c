"""
Frozen table descriptors for the tabular forms of a coding.

Notes:
    - Descriptors declare column names/dtypes and required/nullable columns.
    - Column names are lower_snake.
    - dtype is one of {"str","list[str]","scalar"}; "scalar" accepts any primitive
      column dtype (a coding's value kind decides it).
    - Core is zero-IO (stdlib only); codings.io materializes and validates frames.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import LINK_COLUMN, XLSFORM_LABEL, XLSFORM_LIST_NAME, XLSFORM_NAME
from .grammar import TableName

__all__ = [
    "TableDescriptor",
    "CONTENTS_DESC",
    "XLSFORM_CHOICES_DESC",
    "get_table",
    "list_tables",
]


@dataclass(frozen=True)
class TableDescriptor:
    """
    Frozen descriptor for a tabular coding form.

    Attributes:
        name (TableName): Canonical table identifier (lower_snake serialized).
        columns (dict[str, str]): Mapping of lower_snake column_name -> dtype
            where dtype is one of {"str","list[str]","scalar"}. Order is the
            canonical column order.
        required (list[str]): Columns that must exist.
        nullable (list[str]): Columns that may be absent or hold nulls.

    Examples:
        >>> from codings.core.tables import get_table, TableName
        >>> desc = get_table(TableName.CONTENTS)
        >>> list(desc.columns)
        ['link', 'label', 'value', 'description']

    Notes:
        - required and nullable are disjoint and together cover columns; guarded by
          tests.
    """

    name: TableName
    columns: dict[str, str]  # "str","list[str]","scalar"
    required: list[str]
    nullable: list[str]


# -----------------------------------------------------------------------------
# Table descriptors
# -----------------------------------------------------------------------------

CONTENTS_DESC = TableDescriptor(
    name=TableName.CONTENTS,
    columns={
        LINK_COLUMN: "list[str]",
        "label": "str",
        "value": "scalar",
        "description": "str",
    },
    required=[LINK_COLUMN, "label", "description"],
    nullable=["value"],
)

# Survey-tool naming: `name` holds a code label, `label` holds a code value.
XLSFORM_CHOICES_DESC = TableDescriptor(
    name=TableName.XLSFORM_CHOICES,
    columns={
        XLSFORM_LIST_NAME: "str",
        XLSFORM_NAME: "str",
        XLSFORM_LABEL: "scalar",
    },
    required=[XLSFORM_NAME, XLSFORM_LABEL],
    nullable=[XLSFORM_LIST_NAME],
)

# Registry
_TABLES: dict[TableName, TableDescriptor] = {
    CONTENTS_DESC.name: CONTENTS_DESC,
    XLSFORM_CHOICES_DESC.name: XLSFORM_CHOICES_DESC,
}


def get_table(name: TableName) -> TableDescriptor:
    """
    Look up a table descriptor by canonical name.

    Args:
        name (TableName): Canonical table name.

    Returns:
        TableDescriptor: Descriptor for the requested table.
    """
    return _TABLES[name]


def list_tables() -> list[TableDescriptor]:
    """Return all registered table descriptors in registry order."""
    return list(_TABLES.values())
