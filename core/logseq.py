'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Set, Tuple
from urllib.parse import unquote_plus

from core.document import Document, journal_title, start_of_day
from core.ids import new_block_id
from core.log import Log
from core.outline import Outline
from core.storage import document_titles, ensure_notebook, notebook_paths, save_document

__all__ = [
    "parse_journal_filename",
    "parse_page_filename",
    "convert_scheduled",
    "parse_bullet_line",
    "strip_continuation_indent",
    "parse_content",
    "parse_file",
    "validate_graph",
    "unique_title",
    "import_graph",
]

# SCHEDULED: <2024-01-20 Sat>
_SCHEDULED_RE = re.compile(r"SCHEDULED:\s*<(\d{4}-\d{2}-\d{2})(?:\s+\w+)?>")

Record = Tuple[str, str, int]


def parse_journal_filename(filename: str) -> date:
    """Logseq journals are named YYYY_MM_DD.md"""
    stem = Path(filename).stem
    try:
        return datetime.strptime(stem, "%Y_%m_%d").date()
    except ValueError as e:
        raise ValueError(f"Not a journal filename: {filename}") from e


def parse_page_filename(filename: str) -> str:
    """Page title from a URL-encoded filename, e.g. 'Project%20Notes.md'."""
    return unquote_plus(Path(filename).stem)


def convert_scheduled(text: str) -> str:
    return _SCHEDULED_RE.sub(r"/scheduled \1", text)


def parse_bullet_line(line: str) -> Tuple[int, str, bool]:
    """
    Returns (indent, rest, is_bullet). Each leading tab is one level; a run
    of spaces counts two per level and ends the indentation.
    """
    indent = 0
    i = 0
    while i < len(line):
        if line[i] == "\t":
            indent += 1
            i += 1
        elif line[i] == " ":
            start = i
            while i < len(line) and line[i] == " ":
                i += 1
            indent += (i - start) // 2
            break
        else:
            break

    rest = line[i:]
    for marker in ("- ", "* "):
        if rest.startswith(marker):
            return indent, rest[len(marker):], True
    return indent, rest, False


def strip_continuation_indent(line: str, base_indent: int) -> str:
    """
    Remove the bullet's continuation indentation (base_indent*2 + 2 spaces,
    a tab counting as two) and keep anything deeper.
    """
    to_remove = base_indent * 2 + 2
    removed = 0
    i = 0
    while i < len(line) and removed < to_remove:
        if line[i] == " ":
            removed += 1
        elif line[i] == "\t":
            removed += 2
        else:
            break
        i += 1
    return line[i:]


def _lines(text: str) -> Iterator[str]:
    """Split on line feeds only, dropping one trailing carriage return per line."""
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def _finish(content: str) -> str:
    return convert_scheduled(content.strip())


def parse_content(text: str) -> List[Record]:
    """Split Logseq markdown into (id, content, indent) block records."""
    records: List[Record] = []
    current = None  # [content, indent]
    in_code = False
    had_code = False

    for line in _lines(text):
        if current is None and not records and not line.strip():
            continue

        indent, rest, is_bullet = parse_bullet_line(line)

        if is_bullet:
            if current is not None:
                records.append((new_block_id(), _finish(current[0]), current[1]))
            current = [rest, indent]
            in_code = rest.strip().startswith("```")
            had_code = False
            continue

        if current is None:
            if line.strip():
                current = [line.strip(), 0]
                in_code = line.strip().startswith("```")
            continue

        trimmed = line.strip()
        is_fence = trimmed.startswith("```")
        if is_fence:
            in_code = not in_code
            if not in_code:
                had_code = True

        if in_code or is_fence:
            current[0] += "\n" + strip_continuation_indent(line, current[1])
        elif had_code:
            stripped = strip_continuation_indent(line, current[1])
            if stripped.strip():
                current[0] += "\n" + stripped
        elif trimmed:
            current[0] = f"{current[0]} {trimmed}" if current[0] else trimmed

    if current is not None:
        records.append((new_block_id(), _finish(current[0]), current[1]))

    if not records:
        records.append((new_block_id(), "", 0))
    return records


def parse_file(path: str, is_journal: bool) -> Document:
    p = Path(path)
    # newline="": only "\n" ends a line, see _lines.
    with open(p, encoding="utf-8", newline="") as f:
        text = f.read()

    if is_journal:
        day = parse_journal_filename(p.name)
        title = journal_title(day)
        when = start_of_day(day)
    else:
        title = parse_page_filename(p.name)
        when = datetime.now().astimezone()

    return Document(title=title, date=when, is_journal=is_journal,
                    outline=Outline(parse_content(text)))


def validate_graph(graph_dir: str) -> Path:
    """The graph root; ValueError unless it is a directory with journals/ or pages/."""
    root = Path(graph_dir).expanduser()
    if not root.is_dir():
        raise ValueError(f"Not a directory: {root}")
    if not (root / "journals").is_dir() and not (root / "pages").is_dir():
        raise ValueError(f"No 'journals' or 'pages' directory in {root}; is this a Logseq graph?")
    return root


def unique_title(title: str, taken: Set[str]) -> str:
    """title, or 'title (2)', 'title (3)', ... whichever is free (case-insensitive)."""
    candidate = title
    suffix = 2
    while candidate.lower() in taken:
        candidate = f"{title} ({suffix})"
        suffix += 1
    return candidate


def import_graph(
    graph_dir: str,
    notebook_dir: str,
    *,
    journals: bool = True,
    pages: bool = True,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """
    Import the journals/*.md and pages/*.md files of a Logseq graph into the
    notebook. A title already used in the notebook (or earlier in the same
    import) gets a ' (N)' suffix; each such rename is reported as an
    (original, new) pair. Files that fail to parse are logged and counted,
    not fatal. With dry_run nothing is written.

    Returns: {'journals': int, 'pages': int, 'failed': int, 'renamed': [(str, str)]}
    Raises: ValueError if graph_dir is not a Logseq graph.
    """
    root = validate_graph(graph_dir)
    if not dry_run:
        ensure_notebook(notebook_dir)
    taken = document_titles(notebook_dir) if _has_notebook(notebook_dir) else set()
    counts: Dict[str, Any] = {"journals": 0, "pages": 0, "failed": 0, "renamed": []}

    folders = []
    if journals:
        folders.append(("journals", True))
    if pages:
        folders.append(("pages", False))

    for sub, is_journal in folders:
        folder = root / sub
        if not folder.is_dir():
            continue
        for md in sorted(folder.glob("*.md")):
            try:
                doc = parse_file(str(md), is_journal)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                Log.add(f"Import failed for {md}: {e}")
                counts["failed"] += 1
                continue

            title = unique_title(doc.title, taken)
            if title != doc.title:
                counts["renamed"].append((doc.title, title))
                Log.debug(f"Renamed '{doc.title}' -> '{title}'", 1)
                doc.title = title
            taken.add(title.lower())

            if not dry_run:
                save_document(notebook_dir, doc)
            counts[sub] += 1
            Log.debug(f"Imported {md.name} as '{doc.title}'", 1)

    Log.add(f"Logseq import{' (dry run)' if dry_run else ''}: {counts['journals']} journals, "
            f"{counts['pages']} pages, {counts['failed']} failed, {len(counts['renamed'])} renamed")
    return counts


def _has_notebook(notebook_dir: str) -> bool:
    return notebook_paths(notebook_dir)["notebook_json"].exists()
