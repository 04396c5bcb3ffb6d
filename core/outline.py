'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from core.ids import new_block_id
from core.log import Log

__all__ = [
    "Block",
    "DeleteAction",
    "BoundaryDelete",
    "OutlineEvent",
    "Outline",
]


@dataclass(slots=True)
class Block:
    """
    One entry of the outline.

    • id      – opaque, unique within the outline, never reused
    • content – markdown source text
    • indent  – tree depth (top level = 0)
    """
    id: str
    content: str = ""
    indent: int = 0

    def record(self) -> Tuple[str, str, int]:
        return (self.id, self.content, self.indent)


class DeleteAction(Enum):
    NONE = "none"
    REMOVED = "removed"
    MERGED = "merged"


@dataclass(frozen=True)
class BoundaryDelete:
    """Outcome of a backspace at the start of a block."""
    action: DeleteAction
    focus_target: Optional[str] = None
    cursor: Optional[int] = None  # caret offset inside focus_target


@dataclass(frozen=True)
class OutlineEvent:
    """
    Change notification for the host.

    kind is one of "created", "removed", "content", "indent". For "indent"
    the blocks list holds the whole subtree that moved and index is the
    position of its root.
    """
    kind: str
    index: int
    blocks: List[Block] = field(default_factory=list)


Listener = Callable[[OutlineEvent], None]
Record = Tuple[str, str, int]


class Outline:
    """
    Flat, ordered list of blocks whose indent levels encode the tree.

    A block is a child of the nearest preceding block with a smaller indent;
    a block's subtree is itself plus the contiguous run of deeper blocks that
    follows it. Every mutating operation keeps these rules intact:

      1. the list is never empty
      2. the first block has indent 0
      3. a block is at most one level deeper than its predecessor
    """

    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        *,
        initial_content: str = "",
        id_factory: Callable[[], str] = new_block_id,
        listener: Optional[Listener] = None,
    ):
        self._new_id = id_factory
        self._listener = listener
        self._blocks: List[Block] = []

        seen = set()
        for block_id, content, indent in records or ():
            if block_id in seen:
                raise ValueError(f"Duplicate block id in outline seed: {block_id}")
            seen.add(block_id)
            self._blocks.append(Block(block_id, content or "", self._seed_indent(indent)))

        if not self._blocks:
            self._blocks.append(Block(self._fresh_id(), initial_content, 0))

    def _seed_indent(self, indent: int) -> int:
        """Clamp a seeded indent into [0, predecessor + 1]."""
        if not self._blocks:
            return 0
        return max(0, min(int(indent), self._blocks[-1].indent + 1))

    # ------------------------------------------------------------------ #
    # Read side
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)

    def __getitem__(self, index: int) -> Block:
        return self._blocks[index]

    @property
    def blocks(self) -> List[Block]:
        return list(self._blocks)

    def records(self) -> List[Record]:
        """(id, content, indent) tuples in document order, for serialization."""
        return [b.record() for b in self._blocks]

    def index_of(self, block_id: Optional[str]) -> Optional[int]:
        if block_id is None:
            return None
        for i, block in enumerate(self._blocks):
            if block.id == block_id:
                return i
        return None

    def get(self, block_id: str) -> Optional[Block]:
        idx = self.index_of(block_id)
        return self._blocks[idx] if idx is not None else None

    def subtree_range(self, index: int) -> range:
        """
        Positions of the subtree rooted at index: the root plus every
        following block whose indent is strictly greater than the root's.
        """
        root_indent = self._blocks[index].indent
        end = index + 1
        while end < len(self._blocks) and self._blocks[end].indent > root_indent:
            end += 1
        return range(index, end)

    def parent_of(self, block_id: str) -> Optional[Block]:
        idx = self.index_of(block_id)
        if idx is None:
            return None
        indent = self._blocks[idx].indent
        for i in range(idx - 1, -1, -1):
            if self._blocks[i].indent < indent:
                return self._blocks[i]
        return None

    def children_of(self, block_id: str) -> List[Block]:
        idx = self.index_of(block_id)
        if idx is None:
            return []
        child_indent = self._blocks[idx].indent + 1
        return [self._blocks[i] for i in self.subtree_range(idx)[1:]
                if self._blocks[i].indent == child_indent]

    def focus_relative(self, block_id: str, delta: int) -> Optional[str]:
        """Id of the block delta positions away, or None past either edge."""
        idx = self.index_of(block_id)
        if idx is None:
            return None
        target = idx + delta
        if 0 <= target < len(self._blocks):
            return self._blocks[target].id
        return None

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def create(self, after_id: Optional[str], indent: int, initial_content: str = "") -> Block:
        """
        Insert a new block right after after_id, or at the end when after_id
        is None or unknown. The indent is clamped so the block is no deeper
        than one level past its predecessor and does not strand the block
        that follows it.
        """
        idx = self.index_of(after_id)
        insert_at = len(self._blocks) if idx is None else idx + 1

        prev = self._blocks[insert_at - 1]
        low = self._blocks[insert_at].indent - 1 if insert_at < len(self._blocks) else 0
        indent = max(0, low, min(int(indent), prev.indent + 1))

        block = Block(self._fresh_id(), initial_content, indent)
        self._blocks.insert(insert_at, block)
        Log.debug(f"create {block.id} at {insert_at} indent={indent}", 2)
        self._emit("created", insert_at, [block])
        return block

    def split_after(self, block_id: str) -> Optional[Block]:
        """
        Enter: add an empty sibling right after block_id with the same indent.
        The source block's text is never split or moved.
        """
        source = self.get(block_id)
        if source is None:
            return None
        return self.create(block_id, source.indent)

    def set_content(self, block_id: str, content: str) -> bool:
        idx = self.index_of(block_id)
        if idx is None:
            return False
        block = self._blocks[idx]
        if block.content == content:
            return False
        block.content = content
        self._emit("content", idx, [block])
        return True

    def handle_boundary_delete(
        self, block_id: str, cursor_at_start: bool, content_empty: bool
    ) -> BoundaryDelete:
        """
        Backspace with the caret at offset 0.

        Empty block: removed (unless it is the only one) and the previous
        block gets focus with the caret at its end. Non-empty block: its text
        is appended to the previous block, it is removed, and the caret lands
        on the join point. The first non-empty block is left alone.
        """
        idx = self.index_of(block_id)
        if idx is None or not cursor_at_start:
            return BoundaryDelete(DeleteAction.NONE)

        if content_empty:
            if len(self._blocks) <= 1:
                return BoundaryDelete(DeleteAction.NONE)
            self._remove_at(idx)
            if idx == 0:
                return BoundaryDelete(DeleteAction.REMOVED)
            prev = self._blocks[idx - 1]
            return BoundaryDelete(DeleteAction.REMOVED, prev.id, len(prev.content))

        if idx == 0:
            return BoundaryDelete(DeleteAction.NONE)

        prev = self._blocks[idx - 1]
        join = len(prev.content)
        prev.content += self._blocks[idx].content
        self._emit("content", idx - 1, [prev])
        self._remove_at(idx)
        return BoundaryDelete(DeleteAction.MERGED, prev.id, join)

    def indent(self, block_id: str) -> bool:
        """
        Tab: move the block and its subtree one level deeper. Refused for the
        first block and for a block already deeper than its predecessor.
        """
        idx = self.index_of(block_id)
        if idx is None or idx == 0:
            return False
        if self._blocks[idx].indent > self._blocks[idx - 1].indent:
            return False
        return self._shift_subtree(idx, 1)

    def unindent(self, block_id: str) -> bool:
        """Shift-Tab: move the block and its subtree one level shallower."""
        idx = self.index_of(block_id)
        if idx is None or self._blocks[idx].indent == 0:
            return False
        return self._shift_subtree(idx, -1)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _shift_subtree(self, index: int, delta: int) -> bool:
        # Boundary is taken from the original indents, before any change.
        span = self.subtree_range(index)
        moved = [self._blocks[i] for i in span]
        for block in moved:
            block.indent += delta
        Log.debug(f"shift {moved[0].id} subtree of {len(moved)} by {delta}", 2)
        self._emit("indent", index, moved)
        return True

    def _remove_at(self, index: int) -> Block:
        """
        Drop the block at index. When its children would end up two levels
        below the new predecessor (or below nothing, at the top), the orphaned
        subtree moves up one level.
        """
        span = self.subtree_range(index)
        removed = self._blocks[index]
        prev_indent = self._blocks[index - 1].indent if index > 0 else -1
        orphans = [self._blocks[i] for i in span[1:]]

        del self._blocks[index]
        Log.debug(f"remove {removed.id} at {index}", 2)
        self._emit("removed", index, [removed])

        if orphans and removed.indent > prev_indent:
            for block in orphans:
                block.indent -= 1
            self._emit("indent", index, orphans)
        return removed

    def _fresh_id(self) -> str:
        existing = {b.id for b in self._blocks}
        block_id = self._new_id()
        while block_id in existing:
            block_id = self._new_id()
        return block_id

    def _emit(self, kind: str, index: int, blocks: Sequence[Block]) -> None:
        if self._listener is not None:
            self._listener(OutlineEvent(kind, index, list(blocks)))

    def set_listener(self, listener: Optional[Listener]) -> None:
        self._listener = listener
