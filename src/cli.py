"""Command-line interface for archgraph-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from codegen.write import generate, write_generated
from contract.artifacts import CodeTarget, UnsupportedTargetError
from contract.validation import validate_graph
from graph.model import ArchitectureGraph, GraphStructureError, SchemaVersionError
from metrics.calculator import calculate_metrics
from rules.config import ArchGraphConfig, ConfigError, load_config, resolve_output_dir
from store.files import parse_graph
from verify.verify import verify_generated

logger = logging.getLogger(__name__)


class _InputError(Exception):
    """Graph file or config could not be used."""


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("graph", help="Path to a graph JSON file")
    parser.add_argument(
        "--root",
        default=".",
        help="Project root holding archgraph.toml (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="archgraph")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate a graph")
    _add_common_args(validate_parser)
    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full validation result as JSON on stdout",
    )

    metrics_parser = subparsers.add_parser("metrics", help="Print graph metrics")
    _add_common_args(metrics_parser)

    target_choices = [target.value for target in CodeTarget]

    generate_parser = subparsers.add_parser("generate", help="Generate source code")
    _add_common_args(generate_parser)
    generate_parser.add_argument(
        "--target",
        action="append",
        choices=target_choices,
        default=None,
        help="Target to generate; repeatable (default: config default_target)",
    )
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Write files here instead of printing a single target to stdout",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify generated sources are up to date"
    )
    _add_common_args(verify_parser)
    verify_parser.add_argument(
        "--target",
        action="append",
        choices=target_choices,
        default=None,
        help="Target to verify; repeatable (default: all)",
    )
    verify_parser.add_argument(
        "--out-dir",
        default=None,
        help="Generated sources directory (default: config output dir)",
    )

    return parser


def _load_graph(path: Path) -> ArchitectureGraph:
    try:
        return parse_graph(path.read_bytes())
    except OSError as exc:
        msg = f"Failed to read graph file {path}: {exc}"
        raise _InputError(msg) from exc
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise _InputError(msg) from exc
    except (GraphStructureError, SchemaVersionError) as exc:
        msg = f"{path}: {exc}"
        raise _InputError(msg) from exc


def _configure_logging(config: ArchGraphConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level)
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )


def _handle_validate(graph: ArchitectureGraph, config: ArchGraphConfig, as_json: bool) -> int:
    result = validate_graph(graph, config)
    if as_json:
        sys.stdout.write(orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2).decode())
        sys.stdout.write("\n")
    else:
        for issue in (*result.errors, *result.warnings):
            sys.stderr.write(f"{issue.severity.value}: [{issue.type.value}] {issue.message}\n")
    return 0 if result.is_valid else 1


def _handle_metrics(graph: ArchitectureGraph, config: ArchGraphConfig) -> int:
    metrics = calculate_metrics(graph, config)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS
    sys.stdout.write(orjson.dumps(metrics.to_dict(), option=opts).decode())
    sys.stdout.write("\n")
    return 0


def _handle_generate(
    graph: ArchitectureGraph,
    config: ArchGraphConfig,
    targets: list[str] | None,
    out_dir: str | None,
) -> int:
    selected = targets or [config.codegen.default_target.value]
    if out_dir is None:
        if len(selected) > 1:
            sys.stderr.write("error: --out-dir is required for more than one target\n")
            return 2
        sys.stdout.write(generate(graph, selected[0]))
        return 0

    resolved_out_dir = Path(out_dir).expanduser().resolve()
    write_generated(graph=graph, out_dir=resolved_out_dir, targets=selected)
    return 0


def _handle_verify(
    root: Path,
    graph: ArchitectureGraph,
    config: ArchGraphConfig,
    targets: list[str] | None,
    out_dir: str | None,
) -> int:
    if out_dir is None:
        try:
            resolved_out_dir = resolve_output_dir(root, config.output_dir)
        except ConfigError as exc:
            sys.stderr.write(f"error: {exc}\n")
            return 2
    else:
        resolved_out_dir = Path(out_dir).expanduser().resolve()

    try:
        result = verify_generated(graph=graph, out_dir=resolved_out_dir, targets=targets)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"out-dir: {resolved_out_dir}\n")
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


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()

    try:
        config = load_config(root)
        _configure_logging(config, args.verbose)
        graph = _load_graph(Path(args.graph).expanduser())
    except (ConfigError, _InputError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    logger.debug("loaded %d node(s), %d edge(s)", len(graph.nodes), len(graph.edges))

    if args.command == "validate":
        return _handle_validate(graph, config, args.json)

    if args.command == "metrics":
        return _handle_metrics(graph, config)

    if args.command == "generate":
        try:
            return _handle_generate(graph, config, args.target, args.out_dir)
        except UnsupportedTargetError as exc:
            sys.stderr.write(f"error: {exc}\n")
            return 2

    if args.command == "verify":
        return _handle_verify(root, graph, config, args.target, args.out_dir)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
