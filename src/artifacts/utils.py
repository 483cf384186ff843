"""Utility functions for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import BaseModel

_JSON_OPTIONS = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE


def _write_json(path: Path, model: BaseModel) -> None:
    """Write a model as stable JSON: camelCase aliases, sorted keys."""
    payload = model.model_dump(mode="json", by_alias=True)
    path.write_bytes(orjson.dumps(payload, option=_JSON_OPTIONS))


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """Return the top-level directory of ``out_dir`` under ``root``.

    Returns "" when the output directory lies outside the project, in which
    case discovery needs no extra filtering.
    """
    if not out_dir.is_relative_to(root):
        return ""
    parts = out_dir.relative_to(root).parts
    return parts[0] if parts else ""
