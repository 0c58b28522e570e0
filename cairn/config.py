"""Load cairn configuration from pyproject.toml and optional .cairn.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class CairnConfig:
    """Runtime configuration for cairn."""

    # Periods used when the report itself carries none.  Each entry is a
    # table with "index" (1-5), "date" (ISO-8601 or epoch millis) and an
    # optional "label".
    periods: List[dict] = field(default_factory=list)
    # "text" prints one line per component and a summary; "json" prints the
    # measures tree.
    output_format: str = "text"
    # In text mode, print the per-component lines (the summary is always
    # printed).
    verbose: bool = True


def _read_toml(path: Path) -> dict:
    """Read a TOML file; return empty dict if missing or unparseable."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}


def _apply(cfg: CairnConfig, d: dict) -> None:
    """Overlay dict values onto cfg, ignoring unknown keys."""
    valid = set(cfg.__dataclass_fields__)
    for key, val in d.items():
        if key in valid:
            setattr(cfg, key, val)


def load_config(project_root: Optional[Path] = None) -> CairnConfig:
    """Load config from pyproject.toml [tool.cairn], then .cairn.toml."""
    if project_root is None:
        project_root = Path.cwd()
    cfg = CairnConfig()
    pyproject = _read_toml(project_root / "pyproject.toml")
    _apply(cfg, pyproject.get("tool", {}).get("cairn", {}))
    local = _read_toml(project_root / ".cairn.toml")
    _apply(cfg, local)
    return cfg
