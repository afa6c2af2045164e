"""
Probe models - per-color probing pass and single-shot load results.
"""

from __future__ import annotations

import asyncio
import bisect
from dataclasses import dataclass, field
from typing import Iterable, List, Set

from frameview.models.enums import ProbeMode


@dataclass(frozen=True)
class FrameLoadResult:
    """Completion signal of one frame load (success or failure)."""
    color_id: str
    frame_index: int
    ok: bool


@dataclass
class ProbePass:
    """
    State of one probing pass for one color selection.

    available is kept ascending and duplicate-free at all times; it can be read
    while the pass is still running so navigation can start early.
    """
    color_id: str
    mode: ProbeMode
    total_frames: int
    available: List[int] = field(default_factory=list)
    pending: Set[int] = field(default_factory=set)
    attempted: Set[int] = field(default_factory=set)
    failed: Set[int] = field(default_factory=set)
    loaded_count: int = 0
    complete: bool = False
    cancelled: bool = False
    _done: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    def add_available(self, frame_index: int) -> bool:
        """Insert a frame keeping order; returns False if already present."""
        pos = bisect.bisect_left(self.available, frame_index)
        if pos < len(self.available) and self.available[pos] == frame_index:
            return False
        self.available.insert(pos, frame_index)
        return True

    def set_available(self, frames: Iterable[int]) -> None:
        self.available = sorted(set(frames))

    def record(self, result: FrameLoadResult) -> None:
        """Apply one load result to the pass bookkeeping."""
        self.pending.discard(result.frame_index)
        self.attempted.add(result.frame_index)
        if result.ok:
            self.loaded_count += 1
        else:
            self.failed.add(result.frame_index)

    @property
    def outstanding(self) -> int:
        return len(self.pending)

    def mark_complete(self) -> None:
        if self.mode == ProbeMode.EXPLICIT and self.failed:
            self.available = [f for f in self.available if f not in self.failed]
        self.complete = True
        self._done.set()

    def cancel(self) -> None:
        """Abandon an unfinished pass and wake its waiters."""
        if self.complete:
            return
        self.cancelled = True
        self.pending.clear()
        self._done.set()

    async def wait(self) -> None:
        """Block until every load of the pass has resolved or the pass was cancelled."""
        await self._done.wait()
