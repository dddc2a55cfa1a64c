"""
Configuration for the codings.io module.

Defines CodingSettings, a frozen dataclass carrying runtime configuration for the
tabular and presentation layers.

Precedence
- env (CODINGS_*) > TOML (./codings.toml or [tool.codings] in ./pyproject.toml) > defaults.

Import DAG discipline
- Depends only on stdlib and codings.io.errors.

Notes
- Library functions take an optional ``settings`` argument and fall back to
  ``CodingSettings()`` defaults; call ``CodingSettings.load()`` to honor env/TOML.
- Invalid values found in env/TOML are ignored and the previous value is kept.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import IoConfigError

__all__ = ["CodingSettings"]

_TRUE = {"1", "true", "t", "yes", "y", "on"}


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in _TRUE
    return False


@dataclass(frozen=True)
class CodingSettings:
    """
    Runtime settings for the codings.io layer.

    Attributes:
        print_max_rows (int): Maximum table rows shown by print_coding (>= 1).
        suffix_separator (str): Joiner between column name and suffix in
            as_data_frame(suffix=...).
        strict_schema (bool): If True, reject XLSForm choice tables carrying columns
            outside the descriptor.

    Raises:
        IoConfigError: If a field holds an invalid value.

    Examples:
        >>> from codings.io import CodingSettings
        >>> CodingSettings(print_max_rows=10)  # doctest: +ELLIPSIS
        CodingSettings(...)
    """

    print_max_rows: int = 25
    suffix_separator: str = "_"
    strict_schema: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.print_max_rows, bool) or not isinstance(self.print_max_rows, int):
            raise IoConfigError(f"print_max_rows must be an int, got {self.print_max_rows!r}")
        if self.print_max_rows < 1:
            raise IoConfigError(f"print_max_rows must be >= 1, got {self.print_max_rows}")
        if not isinstance(self.suffix_separator, str):
            raise IoConfigError(
                f"suffix_separator must be a string, got {self.suffix_separator!r}"
            )

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: CodingSettings, cfg: dict[str, Any] | None) -> CodingSettings:
        """Apply a loose config mapping onto CodingSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "print_max_rows" in cfg:
            try:
                s = replace(s, print_max_rows=int(cfg["print_max_rows"]))
            except (TypeError, ValueError, IoConfigError):
                pass

        if "suffix_separator" in cfg and isinstance(cfg["suffix_separator"], str):
            s = replace(s, suffix_separator=cfg["suffix_separator"])

        if "strict_schema" in cfg:
            s = replace(s, strict_schema=_bool(cfg["strict_schema"]))

        return s

    @classmethod
    def from_env(
        cls, base: CodingSettings | None = None, prefix: str = "CODINGS_"
    ) -> CodingSettings:
        """
        Build CodingSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - CODINGS_PRINT_MAX_ROWS
            - CODINGS_SUFFIX_SEPARATOR
            - CODINGS_STRICT_SCHEMA (1/0/true/false/yes/no/on/off)
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("print_max_rows", "suffix_separator", "strict_schema"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> CodingSettings:
        """
        Build CodingSettings from a TOML file.

        Search order when `path` is None:
            1) ./codings.toml (with either a top-level [codings] table or direct keys)
            2) ./pyproject.toml under [tool.codings]

        Returns defaults if no file is present or parseable.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "codings.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("codings") if isinstance(tool, dict) else None
            elif isinstance(data.get("codings"), dict):
                cfg = data["codings"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> CodingSettings:
        """
        Load CodingSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (codings.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)
