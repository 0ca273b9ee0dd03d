from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from confero.aggregator import filter_by_space, filter_by_tag, latest
from confero.app.container import build_container
from confero.app.pipeline import build_site
from confero.domain.errors import ConferoError, ContentValidationFailed
from confero.settings import load_settings

logger = logging.getLogger("confero")
console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {n}")
    return n


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="confero", description="Build a multi-space static blog from Markdown/MDX.")
    ap.add_argument("--config", default="settings.toml", help="Settings file (default: settings.toml)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = ap.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Validate content and write the site")
    b.add_argument("--out", default=None, help="Output directory (default: paths.out_dir)")

    sub.add_parser("check", help="Validate content only")

    ls = sub.add_parser("list", help="List posts, newest first")
    ls.add_argument("--space", default=None)
    ls.add_argument("--tag", default=None)
    ls.add_argument("--limit", type=_non_negative_int, default=None)

    sub.add_parser("tags", help="Show the tag catalog with post counts")
    return ap


def _cmd_build(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    c = build_container(settings)
    out_dir = Path(args.out).resolve() if args.out else None
    report = build_site(c.aggregator, c.renderer, settings, out_dir=out_dir)

    console.print(f"[bold]Site built:[/bold] {out_dir or settings.paths.out_dir}")
    console.print(f"  posts:  {report.post_count}")
    console.print(f"  spaces: {report.space_count}")
    console.print(f"  tags:   {report.tag_count}")
    console.print(f"  routes: {len(report.routes)}")
    if report.skipped:
        console.print(f"  [yellow]skipped drafts: {len(report.skipped)}[/yellow]")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    c = build_container(settings)
    posts = c.aggregator.load_all()
    console.print(f"[green]OK[/green] {len(posts)} posts across {len(c.aggregator.catalog)} spaces")
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    c = build_container(settings)
    posts = c.aggregator.load_all()
    if args.space:
        posts = filter_by_space(posts, args.space)
    if args.tag:
        posts = filter_by_tag(posts, args.tag)
    if args.limit is not None:
        posts = latest(posts, args.limit)

    table = Table(title=f"{len(posts)} posts")
    table.add_column("date")
    table.add_column("id")
    table.add_column("space")
    table.add_column("tags")
    table.add_column("title")
    for p in posts:
        table.add_row(p.date.isoformat(), p.id, p.space, ", ".join(p.tags), p.title)
    console.print(table)
    return 0


def _cmd_tags(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    c = build_container(settings)
    c.aggregator.load_all()

    table = Table(title="tags")
    table.add_column("tag")
    table.add_column("posts", justify="right")
    for tag, n in c.aggregator.tag_counts().items():
        table.add_row(tag, str(n))
    console.print(table)
    return 0


_COMMANDS = {
    "build": _cmd_build,
    "check": _cmd_check,
    "list": _cmd_list,
    "tags": _cmd_tags,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_argparser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return _COMMANDS[args.command](args)
    except ContentValidationFailed as e:
        # each error was already logged by the aggregator
        logger.error("Aborted: %d invalid content entries, nothing was written", len(e.errors))
        return 1
    except ConferoError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
