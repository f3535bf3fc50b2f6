# docmirror/pipeline/writer.py
"""
Publishes document records to the output directory.

Records are written into a staging directory next to the output root;
only after every write has succeeded is the previous output moved aside
and the staging directory renamed into its place. An interrupted or
failed run leaves the previous output intact.
"""

from __future__ import annotations

import os
import posixpath
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from docmirror.core.concurrency import DEFAULT_MAX_WORKERS, map_all
from docmirror.core.document import DocumentRecord
from docmirror.core.paths import escapes_root, output_path
from docmirror.exceptions import OutputWriteError
from docmirror.logging.logger import get_logger
from docmirror.logging.tags import WRITE

logger = get_logger(__name__)


# =============================================================================
# File-system primitives
# =============================================================================


def clear_directory(path: Path) -> None:
    """Recursively delete path. Does nothing if it doesn't exist."""
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def write_document(root: Path, record: DocumentRecord) -> Path:
    """
    Write record.body to root/<lowercased record path>.

    Missing parent directories are created; an existing file is overwritten.
    """
    target = output_path(root, record.path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(record.body.encode("utf-8", errors="surrogateescape"))
    except OSError as e:
        raise OutputWriteError(f"Failed to write {target}: {e}") from e
    return target


def directory_mode(path: Path) -> int:
    """Permission bits of an existing directory, else the umask default for a new one."""
    if path.is_dir():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o777 & ~umask


def _relative_key(path: str) -> str:
    return posixpath.normpath(path).lower()


# =============================================================================
# Writer
# =============================================================================


class OutputWriter:
    """
    Replace the output directory with a freshly written set of documents.

    Args:
        root: Output directory
        preserve: Paths relative to root copied over from the previous output
        max_workers: Concurrent file writes
    """

    def __init__(
        self,
        root: Path,
        preserve: Sequence[str] = (),
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.root = Path(root)
        self.preserve = list(preserve)
        self.max_workers = max_workers

        for rel in self.preserve:
            if escapes_root(rel):
                raise OutputWriteError(f"Preserved path must stay inside the output root: {rel!r}")

    def publish(self, records: Iterable[DocumentRecord]) -> List[Path]:
        """
        Write all records and swap them in as the new output.

        Returns:
            Paths of the written files under the output root
        """
        records = self._dedupe(records)
        target = self.root.resolve()
        target.parent.mkdir(parents=True, exist_ok=True)

        mode = directory_mode(target)
        staging = Path(tempfile.mkdtemp(prefix=f".{target.name}.staging-", dir=target.parent))
        logger.debug(f"{WRITE} Staging {len(records)} pages in {staging}")

        try:
            # mkdtemp creates 0o700; the published root keeps the previous output's mode
            os.chmod(staging, mode)
            written = map_all(
                lambda record: write_document(staging, record),
                records,
                max_workers=self.max_workers,
                label="write documents",
            )
            self._carry_over(target, staging)
        except BaseException:
            clear_directory(staging)
            raise

        logger.info(f"{WRITE} Clearing {self.root}")
        self._swap(target, staging)

        return [target / path.relative_to(staging) for path in written]

    def _dedupe(self, records: Iterable[DocumentRecord]) -> List[DocumentRecord]:
        """Keep the last record for each output path so results are deterministic."""
        by_path: Dict[str, DocumentRecord] = {}
        for record in records:
            key = _relative_key(record.path)
            if key in by_path:
                logger.warning(
                    f"{WRITE} {record.path!r} and {by_path[key].path!r} map to the same "
                    f"output file; keeping {record.path!r}"
                )
                del by_path[key]
            by_path[key] = record
        return list(by_path.values())

    def _carry_over(self, target: Path, staging: Path) -> None:
        for rel in self.preserve:
            src = target / rel
            if not src.exists():
                continue

            dest = staging / rel
            if dest.exists():
                logger.warning(f"{WRITE} Not preserving {rel!r}: a mirrored document uses that path")
                continue

            dest.parent.mkdir(parents=True, exist_ok=True)
            if src.is_dir():
                shutil.copytree(src, dest)
            else:
                shutil.copy2(src, dest)
            logger.debug(f"{WRITE} Preserved {rel}")

    def _swap(self, target: Path, staging: Path) -> None:
        backup = staging.with_name(staging.name + ".old")
        had_previous = target.exists()

        try:
            if had_previous:
                os.replace(target, backup)
            os.replace(staging, target)
        except OSError as e:
            if had_previous and backup.exists() and not target.exists():
                os.replace(backup, target)
            clear_directory(staging)
            raise OutputWriteError(f"Failed to publish {target}: {e}") from e

        if had_previous:
            clear_directory(backup)


__all__ = ["OutputWriter", "clear_directory", "directory_mode", "write_document"]
