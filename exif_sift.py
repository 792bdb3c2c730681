#!/usr/bin/env python3
"""
exif_sift.py - Inspect, find and reorganize images by their EXIF metadata

Commands:
- view:   show the recognized EXIF fields of one image
- match:  list images under the current directory with a given tag value
- group:  move matching images into a new subdirectory
- move:   move matching images into any directory
- delete: remove matching images
- render: print an image as ASCII art

Tag names are EXIF names such as ColorSpace or ExposureTime. Values are
compared as displayed, units included (e.g. "1/200 s", "f/2.8").
"""

import json
import logging
from pathlib import Path

import click
from rich.console import Console

from ascii_render import RenderError, render
from exif_query import ScanError, query
from exif_reader import MetadataError, read_metadata
from exif_tags import Tag, is_candidate, resolve
from reorganize import ReorganizeError, delete_images, group_images, move_images

__version__ = "0.3.0"

console = Console()

log = logging.getLogger(__name__)


def quote_path(path: Path) -> str:
    """Double-quote a path, escaping quotes, backslashes and control characters."""
    return json.dumps(str(path), ensure_ascii=False)


def join_words(words: tuple[str, ...]) -> str:
    """Rejoin a greedy argument; runs of spaces collapse to one."""
    return " ".join(words)


def resolve_root(root: Path | None) -> Path | None:
    """Return the directory to scan, or None after printing a notice."""
    directory = root if root is not None else Path.cwd()
    if not directory.is_dir():
        console.print("Invalid directory")
        return None
    return directory


def resolve_tag(name: str) -> Tag | None:
    tag = resolve(name)
    if tag is None:
        console.print("Invalid tag")
    return tag


def root_option(f):
    return click.option(
        "--root",
        "-r",
        default=None,
        type=click.Path(path_type=Path),
        help="Directory to scan (defaults to the current directory)",
    )(f)


def dry_run_option(f):
    return click.option(
        "--dry-run",
        is_flag=True,
        help="Preview changes without touching any file",
    )(f)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(__version__, prog_name="exif-sift")
def cli(verbose: bool):
    """Inspect, find and reorganize images by their EXIF metadata."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command()
@click.option("--all", "show_all", is_flag=True, help="Show every field, not just recognized tags")
@click.argument("path", nargs=-1, required=True)
def view(show_all: bool, path: tuple[str, ...]):
    """Show the EXIF metadata of the image at PATH."""
    image = Path(join_words(path))

    if not image.exists() or not is_candidate(image):
        console.print("Not an image")
        return

    try:
        fields = read_metadata(image)
    except MetadataError as e:
        raise click.ClickException(f"Could not get exif from path: {image} ({e})") from e

    if not fields:
        console.print("Could not find any exif data")
        return

    if show_all:
        for field in fields:
            click.echo(f"{field.key}: {field.value}")
        return

    for tag in Tag:
        for field in fields:
            if field.tag is tag:
                click.echo(f"{tag}: {field.value}")


@cli.command("match")
@root_option
@click.argument("tag")
@click.argument("value", nargs=-1, required=True)
def match_cmd(root: Path | None, tag: str, value: tuple[str, ...]):
    """List images whose TAG has VALUE."""
    directory = resolve_root(root)
    if directory is None:
        return
    exif_tag = resolve_tag(tag)
    if exif_tag is None:
        return

    try:
        found = query(directory, exif_tag, join_words(value))
    except ScanError as e:
        raise click.ClickException(str(e)) from e

    for image in found:
        click.echo(quote_path(image))


@cli.command()
@root_option
@dry_run_option
@click.argument("tag")
@click.argument("value")
@click.argument("directory_name", nargs=-1, required=True)
def group(root: Path | None, dry_run: bool, tag: str, value: str, directory_name: tuple[str, ...]):
    """Move images whose TAG has VALUE into a new DIRECTORY_NAME subdirectory."""
    directory = resolve_root(root)
    if directory is None:
        return
    exif_tag = resolve_tag(tag)
    if exif_tag is None:
        return

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No files will be modified[/yellow]")

    try:
        result = group_images(
            directory,
            exif_tag,
            value,
            join_words(directory_name),
            dry_run=dry_run,
            report=_report_move if dry_run else None,
        )
    except (ScanError, ReorganizeError) as e:
        raise click.ClickException(str(e)) from e

    _print_move_summary(result.moved, dry_run)


@cli.command()
@root_option
@dry_run_option
@click.argument("tag")
@click.argument("value")
@click.argument("target_path", nargs=-1, required=True)
def move(root: Path | None, dry_run: bool, tag: str, value: str, target_path: tuple[str, ...]):
    """Move images whose TAG has VALUE into TARGET_PATH, creating it if needed."""
    directory = resolve_root(root)
    if directory is None:
        return
    exif_tag = resolve_tag(tag)
    if exif_tag is None:
        return

    target = Path(join_words(target_path))
    if target.is_file():
        console.print("Invalid directory")
        return

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No files will be modified[/yellow]")

    try:
        result = move_images(
            directory,
            exif_tag,
            value,
            target,
            dry_run=dry_run,
            report=_report_move if dry_run else None,
        )
    except (ScanError, ReorganizeError) as e:
        raise click.ClickException(str(e)) from e

    for skipped in result.skipped:
        log.info("Already in %s: %s", target, skipped.name)
    _print_move_summary(result.moved, dry_run)


@cli.command()
@root_option
@dry_run_option
@click.argument("tag")
@click.argument("value", nargs=-1, required=True)
def delete(root: Path | None, dry_run: bool, tag: str, value: tuple[str, ...]):
    """Delete images whose TAG has VALUE."""
    directory = resolve_root(root)
    if directory is None:
        return
    exif_tag = resolve_tag(tag)
    if exif_tag is None:
        return

    if dry_run:
        console.print("[yellow]DRY RUN MODE - No files will be modified[/yellow]")

    def report(path: Path, _destination: Path | None) -> None:
        verb = "Would delete" if dry_run else "Deleted"
        click.echo(f"{verb} image at {quote_path(path)}")

    try:
        delete_images(directory, exif_tag, join_words(value), dry_run=dry_run, report=report)
    except (ScanError, ReorganizeError) as e:
        raise click.ClickException(str(e)) from e


@cli.command("render")
@click.argument("path", nargs=-1, required=True)
def render_cmd(path: tuple[str, ...]):
    """Print the image at PATH as ASCII art."""
    try:
        art = render(Path(join_words(path)))
    except RenderError as e:
        raise click.ClickException(str(e)) from e
    click.echo(art)


def _report_move(source: Path, destination: Path | None) -> None:
    click.echo(f"Would move {quote_path(source)} -> {quote_path(destination)}")


def _print_move_summary(moved: list, dry_run: bool) -> None:
    if dry_run:
        console.print(f"Would move {len(moved):,} files")
    else:
        console.print(f"Moved {len(moved):,} files")


if __name__ == "__main__":
    cli()
