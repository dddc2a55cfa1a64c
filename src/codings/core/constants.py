"""
Shared names for the tabular and printed forms of a coding.

Defines column names and sentinel strings consumed by the tabular bridge and the
presentation layer. This module is zero-IO and uses only the Python standard library.

Notes:
    - Column names are lower_snake and match codings.core.tables descriptors.
    - XLSForm names follow the survey tool: its ``name`` is a code label and its
      ``label`` is a code value.
"""

from __future__ import annotations

__all__ = [
    "LINK_COLUMN",
    "CONTENTS_COLUMNS",
    "XLSFORM_LIST_NAME",
    "XLSFORM_NAME",
    "XLSFORM_LABEL",
    "XLSFORM_COLUMNS",
    "EMPTY_CODING_BANNER",
]

# Lineage column; renamed from Code.links_from and never suffixed.
LINK_COLUMN: str = "link"

CONTENTS_COLUMNS: tuple[str, ...] = (LINK_COLUMN, "label", "value", "description")

XLSFORM_LIST_NAME: str = "list_name"
XLSFORM_NAME: str = "name"
XLSFORM_LABEL: str = "label"
XLSFORM_COLUMNS: tuple[str, ...] = (XLSFORM_LIST_NAME, XLSFORM_NAME, XLSFORM_LABEL)

EMPTY_CODING_BANNER: str = "<Empty Coding>"
