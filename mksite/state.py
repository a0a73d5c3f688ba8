"""Per-page parse state shared by the block assembler and inline formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class BlockKind(Enum):
    NONE = "none"
    CODE = "code"
    UNORDERED_LIST = "ul"
    ORDERED_LIST = "ol"


@dataclass
class ParseState:
    in_section: bool = False
    in_paragraph: bool = False
    block: BlockKind = BlockKind.NONE
    note_counter: int = 0
    buffer_limit: Optional[int] = None
    truncated: bool = False

    def next_note_id(self) -> int:
        self.note_counter += 1
        return self.note_counter

    def scratch(self) -> "ScratchBuffer":
        return ScratchBuffer(self, self.buffer_limit)


@dataclass
class ScratchBuffer:
    """Collects one paragraph or code body.

    With a ``capacity`` set, text past the limit is dropped and the owning
    state is flagged as truncated. Without one the buffer grows as needed.
    """

    state: ParseState
    capacity: Optional[int] = None
    _parts: List[str] = field(default_factory=list, init=False, repr=False)
    _size: int = field(default=0, init=False)

    def append(self, text: str) -> None:
        if self.capacity is not None:
            room = self.capacity - self._size
            if len(text) > room:
                text = text[:max(room, 0)]
                self.state.truncated = True
        if text:
            self._parts.append(text)
            self._size += len(text)

    def getvalue(self) -> str:
        return "".join(self._parts)
