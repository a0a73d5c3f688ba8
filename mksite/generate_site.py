#!/usr/bin/env python3
"""Generate the static site from plain-text page sources."""

from __future__ import annotations

import argparse
import shutil
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .content import Page, format_date_full, import_pages, sort_pages_desc
from .page import load_stylesheet, render_index, render_page

CONTENT_DIR = Path("content")
OUTPUT_DIR = Path("public")
ASSET_DIR = Path("assets")

INDEX_SECTION = "posts"
FAVICON_NAME = "favicon.svg"

Echo = Callable[[str], None]


def _silent(_message: str) -> None:
    return None


def resolve_sections(targets: Sequence[str], content_dir: Path) -> List[Path]:
    if not content_dir.is_dir():
        raise FileNotFoundError(f"Failed to open content directory: {content_dir}")
    if not targets:
        return sorted(path for path in content_dir.iterdir() if path.is_dir())

    resolved: List[Path] = []
    for target in targets:
        candidate = content_dir / target
        if not candidate.is_dir():
            raise FileNotFoundError(f"Cannot locate section '{target}' in {content_dir}")
        resolved.append(candidate)
    return resolved


def install_favicon(asset_dir: Path, output_dir: Path) -> Path:
    source = asset_dir / FAVICON_NAME
    if not source.is_file():
        raise FileNotFoundError(f"Failed to open favicon source: {source}")
    destination = output_dir / FAVICON_NAME
    shutil.copyfile(source, destination)
    return destination


def write_page(
    page: Page,
    output_dir: Path,
    stylesheet: str,
    buffer_limit: Optional[int] = None,
) -> Path:
    if page.date and format_date_full(page.date) is None:
        print(f"Warning: invalid date format in page {page.slug}: {page.date}", file=sys.stderr)

    output_path = output_dir / f"{page.slug}.html"
    with output_path.open("w", encoding="utf-8") as fout:
        state = render_page(
            page.title,
            page.date or None,
            page.content,
            fout,
            stylesheet=stylesheet,
            buffer_limit=buffer_limit,
        )
    if state.truncated:
        print(
            f"Warning: truncated content in page {page.slug} (limit {buffer_limit} characters)",
            file=sys.stderr,
        )
    return output_path


def write_index(pages: Sequence[Page], output_dir: Path, stylesheet: str, section: str = INDEX_SECTION) -> Path:
    index_path = output_dir / "index.html"
    with index_path.open("w", encoding="utf-8") as fout:
        render_index(sort_pages_desc(pages), fout, stylesheet=stylesheet, section=section)
    return index_path


def build_section(
    section_dir: Path,
    output_dir: Path,
    stylesheet: str,
    *,
    buffer_limit: Optional[int] = None,
    echo: Echo = print,
) -> List[Page]:
    pages = import_pages(section_dir)
    echo(f"Scanned {section_dir}: found {len(pages)} pages")
    if not pages:
        raise ValueError(f"No pages found in {section_dir}")

    section_output = output_dir / section_dir.name
    section_output.mkdir(parents=True, exist_ok=True)
    for page in pages:
        output_path = write_page(page, section_output, stylesheet, buffer_limit)
        echo(f"Wrote {output_path}")

    if section_dir.name == INDEX_SECTION:
        index_path = write_index(pages, output_dir, stylesheet)
        echo(f"Wrote {index_path}")
    return pages


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("targets", nargs="*", help="Optional list of section directories to build (default: all)")
    parser.add_argument("--content-dir", default=str(CONTENT_DIR), help="Directory containing one subdirectory per section")
    parser.add_argument("--output-dir", default=str(OUTPUT_DIR), help="Directory for the generated site")
    parser.add_argument("--asset-dir", default=str(ASSET_DIR), help="Directory holding favicon.svg")
    parser.add_argument("--stylesheet", default=None, help="CSS file embedded into every page (default: bundled styles)")
    parser.add_argument(
        "--buffer-limit",
        type=int,
        default=None,
        help="Maximum characters kept per paragraph or code block; excess is dropped with a warning",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Only print warnings and errors")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    started = time.perf_counter()
    echo: Echo = _silent if args.quiet else print

    content_dir = Path(args.content_dir)
    output_dir = Path(args.output_dir)
    asset_dir = Path(args.asset_dir)

    stylesheet_path = Path(args.stylesheet) if args.stylesheet else None
    try:
        stylesheet = load_stylesheet(stylesheet_path)
    except (OSError, ValueError) as exc:
        print(f"Failed to load stylesheet {stylesheet_path or 'bundled styles.css'}: {exc}", file=sys.stderr)
        return 1

    try:
        sections = resolve_sections(args.targets, content_dir)
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if not sections:
        print(f"No sections found in {content_dir}", file=sys.stderr)
        return 1

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        install_favicon(asset_dir, output_dir)
    except OSError as exc:
        print(f"Failed to prepare {output_dir}: {exc}", file=sys.stderr)
        return 1

    for section_dir in sections:
        try:
            build_section(section_dir, output_dir, stylesheet, buffer_limit=args.buffer_limit, echo=echo)
        except (OSError, ValueError) as exc:
            print(f"Failed to build {section_dir}: {exc}", file=sys.stderr)
            return 1

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    echo(f"Site built in {elapsed_ms:.3f} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
