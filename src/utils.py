"""Shared utilities for codemap-core."""

from __future__ import annotations

from pathlib import Path


def normalize_path(file_path: str | Path) -> str:
    """Normalize a project-relative file path to POSIX form.

    Args:
        file_path: Relative file path (e.g., "src\\app\\main.ts" or Path object)

    Returns:
        Path with forward slashes and no empty or "." segments.

    Examples:
        >>> normalize_path("./src/app/main.ts")
        'src/app/main.ts'
        >>> normalize_path("src\\\\lib//x.py")
        'src/lib/x.py'
        >>> normalize_path(Path("foo/bar.go"))
        'foo/bar.go'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    parts = [
        part for part in path_str.replace("\\", "/").split("/") if part and part != "."
    ]
    return "/".join(parts)


def file_extension(file_path: str) -> str:
    """Return the lower-case extension without the leading dot ("" if none).

    Examples:
        >>> file_extension("src/App.TSX")
        'tsx'
        >>> file_extension("Makefile")
        ''
    """
    base = file_path.rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[-1].lower()


def base_name(file_path: str) -> str:
    """Return the file name up to its first dot.

    Examples:
        >>> base_name("web/src/Button.test.tsx")
        'Button'
    """
    return file_path.rsplit("/", 1)[-1].split(".")[0]
