"""Check that generated sources on disk still match the graph."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from codegen.write import write_generated

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.artifacts import CodeTarget
    from graph.model import ArchitectureGraph


@dataclass(frozen=True)
class DeterminismResult:
    """Outcome of a verification run.

    ``missing`` lists files a fresh generation produces that ``out_dir``
    lacks; ``extra`` lists files in ``out_dir`` that generation does not
    produce. All paths are relative to ``out_dir``.
    """

    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)


def _relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def verify_generated(
    *,
    graph: ArchitectureGraph,
    out_dir: Path,
    targets: Iterable[CodeTarget | str] | None = None,
) -> DeterminismResult:
    """Regenerate ``targets`` into a scratch directory and diff against ``out_dir``.

    Files are compared byte for byte.

    Raises:
        FileNotFoundError: If out_dir does not exist.
        NotADirectoryError: If out_dir is not a directory.
    """
    if not out_dir.exists():
        msg = f"Generated sources directory does not exist: {out_dir}"
        raise FileNotFoundError(msg)
    if not out_dir.is_dir():
        msg = f"Generated sources path is not a directory: {out_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as scratch:
        fresh_dir = Path(scratch)
        write_generated(graph=graph, out_dir=fresh_dir, targets=targets)

        on_disk = _relative_files(out_dir)
        expected = _relative_files(fresh_dir)

        mismatches = [
            str(path)
            for path in sorted(on_disk & expected)
            if not filecmp.cmp(out_dir / path, fresh_dir / path, shallow=False)
        ]

    missing = sorted(str(path) for path in expected - on_disk)
    extra = sorted(str(path) for path in on_disk - expected)
    return DeterminismResult(
        ok=not (missing or extra or mismatches),
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
    )


__all__ = ["DeterminismResult", "verify_generated"]
