"""
reorganize.py - Group, move or delete the images matching an EXIF query

Every operation computes the match set once up front and then works through
that fixed list. Nothing is re-checked between the query and the filesystem
change, and a failure stops the operation without undoing earlier moves.
"""

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from exif_query import query
from exif_tags import Tag

log = logging.getLogger(__name__)

# Called with (source, destination) after each move, or (path, None) after each delete
Reporter = Callable[[Path, Path | None], None]


class ReorganizeError(OSError):
    """Creating, moving or removing a file failed."""


@dataclass
class MoveOperation:
    """Represents a file move operation."""
    source: Path
    destination: Path


@dataclass
class ReorganizeResult:
    """What an operation did (or would do, on a dry run)."""
    matched: list[Path] = field(default_factory=list)
    moved: list[MoveOperation] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    dry_run: bool = False


def build_move_operations(images: list[Path], target_dir: Path) -> list[MoveOperation]:
    """Plan moving each image into target_dir under its own file name."""
    return [MoveOperation(source=image, destination=target_dir / image.name) for image in images]


def execute_move(op: MoveOperation) -> None:
    """
    Move one file. An existing file at the destination is an error, never
    overwritten or renamed around.

    Raises:
        ReorganizeError: If the destination is taken or the move fails
    """
    if op.destination.exists():
        raise ReorganizeError(f"Could not move {op.source}: {op.destination} already exists")
    try:
        shutil.move(str(op.source), str(op.destination))
    except OSError as e:
        raise ReorganizeError(f"Could not move {op.source} to {op.destination}: {e}") from e
    log.debug("Moved %s -> %s", op.source, op.destination)


def _run_moves(
    result: ReorganizeResult,
    operations: list[MoveOperation],
    report: Reporter | None,
) -> ReorganizeResult:
    for op in operations:
        if not result.dry_run:
            execute_move(op)
        result.moved.append(op)
        if report:
            report(op.source, op.destination)
    return result


def group_images(
    root: Path,
    tag: Tag,
    value: str,
    directory_name: str,
    dry_run: bool = False,
    report: Reporter | None = None,
) -> ReorganizeResult:
    """
    Move matching images into a new subdirectory of root.

    Raises:
        ReorganizeError: If the subdirectory already exists or a move fails
        ScanError: If the tree under root can't be walked
    """
    result = ReorganizeResult(dry_run=dry_run)
    result.matched = query(root, tag, value)

    group_dir = root / directory_name
    if not dry_run:
        try:
            group_dir.mkdir()
        except OSError as e:
            raise ReorganizeError(f"Could not create directory {group_dir}: {e}") from e
    elif group_dir.exists():
        raise ReorganizeError(f"Could not create directory {group_dir}: already exists")

    return _run_moves(result, build_move_operations(result.matched, group_dir), report)


def move_images(
    root: Path,
    tag: Tag,
    value: str,
    target_dir: Path,
    dry_run: bool = False,
    report: Reporter | None = None,
) -> ReorganizeResult:
    """
    Move matching images under root into target_dir, creating it if needed.

    Images already sitting directly in target_dir are left where they are.

    Raises:
        ValueError: If target_dir is an existing file
        ReorganizeError: If target_dir can't be created or a move fails
        ScanError: If the tree under root can't be walked
    """
    if target_dir.is_file():
        raise ValueError(f"'{target_dir}' is a file, not a directory")

    result = ReorganizeResult(dry_run=dry_run)

    if not target_dir.is_dir() and not dry_run:
        try:
            target_dir.mkdir(parents=True)
        except OSError as e:
            raise ReorganizeError(f"Could not create directory {target_dir}: {e}") from e

    result.matched = query(root, tag, value)

    operations = []
    resolved_target = target_dir.resolve()
    for op in build_move_operations(result.matched, target_dir):
        if op.source.parent.resolve() == resolved_target:
            result.skipped.append(op.source)
        else:
            operations.append(op)

    return _run_moves(result, operations, report)


def delete_images(
    root: Path,
    tag: Tag,
    value: str,
    dry_run: bool = False,
    report: Reporter | None = None,
) -> ReorganizeResult:
    """
    Delete matching images. Stops at the first file that can't be removed.

    Raises:
        ReorganizeError: If a file can't be deleted
        ScanError: If the tree under root can't be walked
    """
    result = ReorganizeResult(dry_run=dry_run)
    result.matched = query(root, tag, value)

    for path in result.matched:
        if not dry_run:
            try:
                path.unlink()
            except OSError as e:
                raise ReorganizeError(f"Could not delete image at {path}: {e}") from e
            log.debug("Deleted %s", path)
        result.deleted.append(path)
        if report:
            report(path, None)

    return result
