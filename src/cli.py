"""Command-line interface for codemap-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artifacts.index import NodeIndex
from artifacts.summaries.builders import build_summary
from artifacts.write import analyze_root, generate_artifacts
from contract.validation import validate_artifacts
from rules.config import ConfigError, load_config
from verify.verify import verify_determinism


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="codemap")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze", help="Analyze a project and write artifacts"
    )
    _add_common_paths(analyze_parser)
    analyze_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    summary_parser = subparsers.add_parser(
        "summary", help="Print cycles, unused exports and hotspots"
    )
    _add_common_paths(summary_parser)
    summary_parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of hotspots to list (default: config summary_top_n)",
    )

    search_parser = subparsers.add_parser(
        "search", help="Find files and symbols by name"
    )
    search_parser.add_argument("term", help="Case-insensitive name fragment")
    search_parser.add_argument(
        "--root",
        dest="root",
        default=".",
        help="Project root (default: .)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of artifacts"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    return parser


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _handle_analyze(root: Path, out_dir: str | None) -> int:
    result = generate_artifacts(root=root, out_dir=_resolve_output_dir(out_dir))
    if not result["file_count"]:
        sys.stderr.write(f"warning: no supported source files found under {root}\n")
    sys.stdout.write(
        f"{result['file_count']} files, {result['symbol_count']} symbols, "
        f"{result['edge_count']} file edges, {result['cycle_count']} cycles\n"
    )
    return 0


def _handle_summary(root: Path, top: int | None) -> int:
    config = load_config(root)
    top_n = top if top is not None and top > 0 else config.summary_top_n
    summary = build_summary(analyze_root(root, config), top_n=top_n)

    out = sys.stdout
    out.write(
        f"files: {summary.file_count}  symbols: {summary.symbol_count}  "
        f"file edges: {summary.edge_count}\n"
    )
    out.write(f"cycles: {len(summary.cycles)}\n")
    for cycle in summary.cycles:
        out.write(f"  {' -> '.join(cycle)}\n")
    out.write(f"unused exports: {len(summary.unused_exports)}\n")
    for unique_id in summary.unused_exports:
        out.write(f"  {unique_id}\n")
    out.write("most complex:\n")
    for hotspot in summary.most_complex:
        out.write(f"  {hotspot.cognitive_complexity:>4}  {hotspot.unique_id}\n")
    out.write("most unstable:\n")
    for file_hotspot in summary.most_unstable:
        out.write(
            f"  {file_hotspot.instability:.2f}  {file_hotspot.path} "
            f"(Ca={file_hotspot.afferent}, Ce={file_hotspot.efferent})\n"
        )
    return 0


def _handle_search(root: Path, term: str) -> int:
    index = NodeIndex(analyze_root(root))
    for node in index.search(term):
        sys.stdout.write(f"{node.kind}\t{node.unique_id}\n")
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "analyze":
            return _handle_analyze(root, args.out_dir)

        if args.command == "summary":
            return _handle_summary(root, args.top)

        if args.command == "search":
            return _handle_search(root, args.term)

        if args.command == "validate":
            return _handle_validate(root, args.artifacts_dir)

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 1

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
