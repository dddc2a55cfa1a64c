"""
Printed form of a coding.

The empty coding prints a fixed banner. Any other coding prints a header line,
``<Coding: 'name'>`` when a collection label is set and ``<Coding>`` otherwise,
followed by the contents table from codings.io.frames.
"""

from __future__ import annotations

import sys
from typing import TextIO

import polars as pl

from codings.core.constants import EMPTY_CODING_BANNER
from codings.core.schema import Coding, ensure_coding

from .config import CodingSettings
from .frames import as_data_frame

__all__ = [
    "format_coding",
    "print_coding",
]


def format_coding(coding: Coding, settings: CodingSettings | None = None) -> str:
    """
    Render a coding as printable text.

    Args:
        coding (Coding): Coding to render.
        settings (CodingSettings | None): ``print_max_rows`` caps the table rows shown.

    Returns:
        str: Header line, then the table (or the empty banner alone).
    """
    ensure_coding(coding)
    if coding.is_empty:
        return EMPTY_CODING_BANNER

    s = settings or CodingSettings()
    header = f"<Coding: '{coding.label}'>" if coding.label is not None else "<Coding>"
    with pl.Config(tbl_rows=s.print_max_rows):
        table = str(as_data_frame(coding))
    return f"{header}\n{table}"


def print_coding(
    coding: Coding,
    settings: CodingSettings | None = None,
    file: TextIO | None = None,
) -> None:
    """Write ``format_coding(coding)`` to file (stdout by default)."""
    print(format_coding(coding, settings), file=file or sys.stdout)
