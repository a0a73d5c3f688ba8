"""Page sources: front matter, slugs, display dates and directory import."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

FRONT_MATTER_DELIMITER = "---"
PAGE_SUFFIX = ".txt"

MONTHS_FULL = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTHS_ABBR = tuple(month[:3] for month in MONTHS_FULL)

ISO_DATE_RE = re.compile(r"^\s*(\d+)-(\d+)-(\d+)")


@dataclass
class Page:
    title: str
    slug: str
    date: str
    content: str
    source: Optional[Path] = None


def parse_front_matter(raw: str) -> Tuple[Dict[str, str], str]:
    """Split ``raw`` into its ``key: value`` header and the content body.

    The header runs up to the first line that is exactly ``---``. A leading
    ``---`` line opens the header instead of ending it.
    """
    lines = raw.split("\n")
    start = 0
    if lines[0].rstrip("\r") == FRONT_MATTER_DELIMITER:
        start = 1

    end_index: Optional[int] = None
    for idx in range(start, len(lines)):
        if lines[idx].rstrip("\r") == FRONT_MATTER_DELIMITER:
            end_index = idx
            break
    if end_index is None:
        raise ValueError("Front matter is not closed with '---'")

    metadata: Dict[str, str] = {}
    for raw_line in lines[start:end_index]:
        if ":" not in raw_line:
            continue
        key, value = raw_line.split(":", 1)
        metadata[key.strip().lower()] = value.strip()

    return metadata, "\n".join(lines[end_index + 1:])


def slugify(text: str) -> str:
    parts: List[str] = []
    pending_dash = False
    for char in text:
        if char.isascii() and char.isalnum():
            if pending_dash and parts:
                parts.append("-")
            parts.append(char.lower())
            pending_dash = False
        else:
            pending_dash = True
    return "".join(parts)


def format_date(iso_date: str, months: Sequence[str]) -> Optional[str]:
    match = ISO_DATE_RE.match(iso_date or "")
    if not match:
        return None
    year, month, day = (int(group) for group in match.groups())
    if not 1 <= month <= 12:
        return None
    return f"{months[month - 1]} {day:2d}, {year:04d}"


def format_date_full(iso_date: str) -> Optional[str]:
    return format_date(iso_date, MONTHS_FULL)


def format_date_abbr(iso_date: str) -> Optional[str]:
    return format_date(iso_date, MONTHS_ABBR)


def load_page(path: Path) -> Page:
    raw = path.read_text(encoding="utf-8")
    metadata, body = parse_front_matter(raw)
    title = metadata.get("title") or path.stem
    slug = slugify(metadata.get("title", "")) or slugify(path.stem)
    if not slug:
        raise ValueError(f"Cannot derive a slug for {path}")
    return Page(
        title=title,
        slug=slug,
        date=metadata.get("date", ""),
        content=body,
        source=path,
    )


def import_pages(directory: Path) -> List[Page]:
    if not directory.is_dir():
        raise FileNotFoundError(f"Failed to open directory: {directory}")
    return [load_page(path) for path in sorted(directory.glob(f"*{PAGE_SUFFIX}")) if path.is_file()]


def sort_pages_desc(pages: Sequence[Page]) -> List[Page]:
    return sorted(pages, key=lambda page: page.date, reverse=True)
