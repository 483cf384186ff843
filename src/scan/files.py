"""File acquisition for codemap-core: discovery and reading of source files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from artifacts.models.nodes import SourceFile
from rules.languages import is_supported_path

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    GitignoreMatcher = Callable[[str], bool]

logger = logging.getLogger(__name__)


def _resolves_inside(path: Path, root: Path) -> bool:
    """Return True when ``path`` still lies under ``root`` once links resolve."""
    try:
        path.resolve().relative_to(root)
    except (OSError, ValueError):
        return False
    return True


def _gitignore_sources(root: Path, *, nested: bool) -> list[Path]:
    candidates = root.rglob(".gitignore") if nested else [root / ".gitignore"]
    found = {
        path
        for path in candidates
        if path.is_file() and not path.is_symlink() and _resolves_inside(path, root)
    }
    return sorted(found, key=lambda p: p.relative_to(root).as_posix())


def _gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> GitignoreMatcher | None:
    """Compose the project's .gitignore rules into a single predicate.

    Only the root .gitignore is read unless ``nested_gitignore`` is set, in
    which case every non-symlinked .gitignore below ``root`` contributes.
    """
    sources = _gitignore_sources(root.resolve(), nested=nested_gitignore)
    if not sources:
        return None
    if len(sources) == 1:
        return cast("GitignoreMatcher", parse_gitignore(sources[0]))

    matchers = [parse_gitignore(path) for path in sources]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                # Path lies outside this .gitignore's base directory.
                continue
        return False

    return matches


@dataclass(frozen=True)
class _SourceFilter:
    root: Path
    output_dir: str
    ignored: GitignoreMatcher | None
    include: tuple[str, ...]
    exclude: tuple[str, ...]

    def admits(self, path: Path) -> bool:
        if path.is_symlink() or not path.is_file():
            return False
        if not _resolves_inside(path, self.root):
            return False

        rel_path = path.relative_to(self.root)
        rel_posix = rel_path.as_posix()
        if not is_supported_path(rel_posix):
            return False
        if self.output_dir and rel_path.parts[0] == self.output_dir:
            return False
        if self.ignored is not None and self.ignored(str(path)):
            return False
        if self.include and not any(fnmatch(rel_posix, pat) for pat in self.include):
            return False
        return not any(fnmatch(rel_posix, pat) for pat in self.exclude)


def find_source_files(
    directory: Path,
    *,
    output_dir: str = ".codemap",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find every file with a registered extension, respecting .gitignore.

    Symlinks (and anything resolving outside ``directory``) are never
    followed.

    Args:
        directory: Directory to search
        output_dir: Top-level directory name to skip (default ".codemap")
        include_patterns: Optional fnmatch patterns; when given, a file must
            match at least one of them
        exclude_patterns: Optional fnmatch patterns; matching files are dropped
        nested_gitignore: Compose every .gitignore below ``directory``
            instead of only the root one

    Yields:
        Paths sorted by their POSIX path relative to ``directory``.
    """
    root = directory.resolve()
    source_filter = _SourceFilter(
        root=root,
        output_dir=output_dir,
        ignored=_gitignore_matcher(root, nested_gitignore=nested_gitignore),
        include=tuple(include_patterns or ()),
        exclude=tuple(exclude_patterns or ()),
    )
    admitted = (path for path in root.rglob("*") if source_filter.admits(path))
    for path in sorted(admitted, key=lambda p: p.relative_to(root).as_posix()):
        yield directory / path.relative_to(root)


def read_source_files(
    directory: Path,
    paths: Iterable[Path],
    *,
    max_file_bytes: int | None = None,
) -> list[SourceFile]:
    """Read files as text into (relative path, content) pairs.

    Oversized, unreadable and non-UTF-8 files are skipped with a warning.
    """
    sources: list[SourceFile] = []
    for path in paths:
        rel_path = path.relative_to(directory).as_posix()
        try:
            if max_file_bytes is not None and path.stat().st_size > max_file_bytes:
                logger.warning(
                    "Skipping %s: larger than %d bytes", rel_path, max_file_bytes
                )
                continue
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", rel_path, exc)
            continue
        sources.append(SourceFile(path=rel_path, content=content))
    return sources


__all__ = ["find_source_files", "read_source_files"]
