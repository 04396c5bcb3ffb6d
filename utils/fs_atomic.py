from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Callable, IO, Union

Pathish = Union[str, Path]

__all__ = ["fsync_dir", "atomic_write_bytes", "atomic_write_text"]


def fsync_dir(dir_path: Pathish) -> None:
    """
    Fsync a directory so a rename inside it survives a crash.
    No-op if the directory doesn't exist.
    """
    d = Path(dir_path)
    if not d.exists():
        return
    fd = os.open(str(d), os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def _replace_via_tmp(dst_path: Path, write_fn: Callable[[IO[bytes]], None]) -> None:
    """
    Write through a hidden temp file in the destination directory, fsync it,
    os.replace it over dst_path, then fsync the directory.
    """
    dst_dir = dst_path.parent
    dst_dir.mkdir(parents=True, exist_ok=True)
    tmp_path = dst_dir / f".{dst_path.name}.tmp-{os.getpid()}-{uuid.uuid4().hex[:8]}"

    try:
        with open(tmp_path, "wb") as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, dst_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    fsync_dir(dst_dir)


def atomic_write_bytes(dst: Pathish, data: bytes) -> None:
    _replace_via_tmp(Path(dst), lambda f: f.write(data))


def atomic_write_text(dst: Pathish, text: str, encoding: str = "utf-8") -> None:
    atomic_write_bytes(dst, text.encode(encoding))
