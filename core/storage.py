'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

import json
import time
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from core.document import Document, parse_datetime
from core.log import Log
from utils.fs_atomic import atomic_write_text

NOTEBOOK_VERSION = 1

__all__ = [
    "NOTEBOOK_VERSION",
    "notebook_paths",
    "ensure_notebook",
    "load_notebook",
    "save_notebook",
    "document_path",
    "save_record",
    "save_document",
    "load_document",
    "delete_document",
    "list_documents",
    "find_journal",
    "load_or_create_journal",
    "document_titles",
    "find_by_title",
    "load_or_create_by_title",
]

def _read_json(p: Path, default: Any) -> Any:
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON in {p}: {e}") from e

def _write_json(p: Path, obj: Dict[str, Any]) -> None:
    atomic_write_text(p, json.dumps(obj, indent=2, ensure_ascii=False))

def notebook_paths(notebook_dir: str):
    root = Path(notebook_dir).expanduser().resolve()
    return {
        "root": root,
        "notebook_json": root / "notebook.json",
        "documents": root / "documents",
    }

# ---------- notebook.json ----------

def ensure_notebook(target_dir: str, name: Optional[str] = None) -> Dict[str, Any]:
    """
    Create or open a notebook directory.

    Structure:
    <target_dir>/
      notebook.json
      documents/<id[:2]>/<id>.json

    Returns: {'path': str, 'created': bool, 'name': str}
    Raises: ValueError if the directory holds something other than a notebook.
    """
    paths = notebook_paths(target_dir)
    root = paths["root"]

    if paths["notebook_json"].exists():
        meta = load_notebook(target_dir)
        return {"path": str(root), "created": False, "name": meta.get("name", root.name)}

    if root.exists():
        if any(root.iterdir()):
            raise ValueError(f"Directory exists and is not an empty notebook dir: {root}")
    else:
        root.mkdir(parents=True, exist_ok=True)

    paths["documents"].mkdir(exist_ok=True)
    meta = {
        "name": name or root.name,
        "version": NOTEBOOK_VERSION,
        "created_ts": int(time.time()),
        "document_ids": [],
    }
    save_notebook(target_dir, meta)
    Log.debug(f"Created notebook '{meta['name']}' at {root}", 1)
    return {"path": str(root), "created": True, "name": meta["name"]}

def load_notebook(notebook_dir: str) -> Dict[str, Any]:
    meta = _read_json(notebook_paths(notebook_dir)["notebook_json"], {})
    if not meta:
        raise ValueError(f"notebook.json not found in {notebook_dir}")
    return meta

def save_notebook(notebook_dir: str, meta: Dict[str, Any]) -> None:
    _write_json(notebook_paths(notebook_dir)["notebook_json"], meta)

def _document_ids(notebook_dir: str) -> List[str]:
    return list(load_notebook(notebook_dir).get("document_ids", []))

def _set_document_ids(notebook_dir: str, ids: List[str]) -> None:
    meta = load_notebook(notebook_dir)
    meta["document_ids"] = list(ids)
    save_notebook(notebook_dir, meta)

# ---------- documents/<shard>/<id>.json ----------

def document_path(notebook_dir: str, doc_id: str) -> Path:
    """Sharded layout: documents/<first_2_chars>/<doc_id>.json"""
    if len(doc_id) < 2:
        raise ValueError("document id must be at least 2 characters")
    return notebook_paths(notebook_dir)["documents"] / doc_id[:2] / f"{doc_id}.json"

def save_record(notebook_dir: str, record: Dict[str, Any]) -> None:
    """Write an already-serialized document (see Document.to_dict)."""
    doc_id = record["id"]
    record = dict(record, updated_ts=int(time.time()))
    _write_json(document_path(notebook_dir, doc_id), record)

    ids = _document_ids(notebook_dir)
    if doc_id not in ids:
        ids.append(doc_id)
        _set_document_ids(notebook_dir, ids)
    Log.debug(f"Saved document {doc_id} ({len(record.get('blocks', []))} blocks)", 2)

def save_document(notebook_dir: str, doc: Document) -> None:
    save_record(notebook_dir, doc.to_dict())

def _load_record(notebook_dir: str, doc_id: str) -> Dict[str, Any]:
    p = document_path(notebook_dir, doc_id)
    record = _read_json(p, None)
    if record is None:
        raise ValueError(f"document {doc_id} not found")
    if not isinstance(record, dict) or not isinstance(record.get("id"), str):
        raise ValueError(f"document {doc_id} is not a document record")
    return record

def load_document(notebook_dir: str, doc_id: str) -> Document:
    return Document.from_dict(_load_record(notebook_dir, doc_id))

def delete_document(notebook_dir: str, doc_id: str) -> bool:
    p = document_path(notebook_dir, doc_id)
    existed = p.exists()
    p.unlink(missing_ok=True)

    ids = _document_ids(notebook_dir)
    if doc_id in ids:
        ids.remove(doc_id)
        _set_document_ids(notebook_dir, ids)
    return existed

def list_documents(notebook_dir: str) -> List[Dict[str, Any]]:
    """Summaries (id, title, date, is_journal), newest first."""
    summaries = []
    for doc_id in _document_ids(notebook_dir):
        try:
            record = _load_record(notebook_dir, doc_id)
        except ValueError as e:
            Log.debug(f"Skipping unreadable document {doc_id}: {e}", 0)
            continue
        summaries.append({
            "id": record["id"],
            "title": str(record.get("title") or ""),
            "date": record.get("date", ""),
            "is_journal": bool(record.get("is_journal", False)),
        })

    def _sort_key(summary):
        try:
            return parse_datetime(summary["date"]).timestamp()
        except ValueError:
            return 0.0

    summaries.sort(key=_sort_key, reverse=True)
    return summaries

def find_journal(notebook_dir: str, day: date) -> Optional[Document]:
    for summary in list_documents(notebook_dir):
        if not summary["is_journal"]:
            continue
        try:
            summary_day = parse_datetime(summary["date"]).astimezone().date()
        except ValueError:
            continue
        if summary_day == day:
            return load_document(notebook_dir, summary["id"])
    return None

def load_or_create_journal(notebook_dir: str, day: date) -> Document:
    """The journal for day, or a fresh unsaved one with a single empty block."""
    doc = find_journal(notebook_dir, day)
    if doc is None:
        doc = Document.new_journal(day)
    return doc

# ---------- titles ----------

def document_titles(notebook_dir: str) -> Set[str]:
    """Lowercased titles of every readable document; titles match case-insensitively."""
    return {s["title"].lower() for s in list_documents(notebook_dir)}

def find_by_title(notebook_dir: str, title: str) -> Optional[Document]:
    wanted = title.lower()
    for summary in list_documents(notebook_dir):
        if summary["title"].lower() == wanted:
            return load_document(notebook_dir, summary["id"])
    return None

def load_or_create_by_title(notebook_dir: str, title: str) -> Document:
    """The document titled title, or a new one with that title, saved right away."""
    doc = find_by_title(notebook_dir, title)
    if doc is None:
        doc = Document.new(title)
        save_document(notebook_dir, doc)
        Log.add(f"Created document '{title}'")
    return doc
