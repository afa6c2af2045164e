"""
Frame cache - per color, per frame index load outcome.

True means the frame loaded, False means it failed to load and is never
retried. Monotonic: a loaded flag is never cleared and nothing is ever
evicted. Owned by a single viewer instance.
"""

from typing import Dict, List


class FrameCache:
    """
    Two-level map: color id -> frame index -> loaded (True) or failed (False).

    Example:
        cache = FrameCache()
        cache.mark_loaded("orange", 3)
        cache.mark_failed("orange", 4)
        cache.is_loaded("orange", 3)   # True
        cache.is_failed("orange", 4)   # True
        cache.loaded_frames("orange")  # [3]
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[int, bool]] = {}

    def ensure_color(self, color_id: str) -> None:
        """Create an empty entry for the color if it has none yet."""
        self._entries.setdefault(color_id, {})

    def mark_loaded(self, color_id: str, frame_index: int) -> bool:
        """
        Mark a frame as loaded.

        Returns:
            True if this call changed the cache (frame was not loaded before)
        """
        frames = self._entries.setdefault(color_id, {})
        if frames.get(frame_index):
            return False
        frames[frame_index] = True
        return True

    def mark_failed(self, color_id: str, frame_index: int) -> bool:
        """
        Record that a frame could not be loaded.

        A loaded frame stays loaded. Returns True if this call changed the cache.
        """
        frames = self._entries.setdefault(color_id, {})
        if frame_index in frames:
            return False
        frames[frame_index] = False
        return True

    def is_loaded(self, color_id: str, frame_index: int) -> bool:
        return self._entries.get(color_id, {}).get(frame_index, False)

    def is_failed(self, color_id: str, frame_index: int) -> bool:
        return self._entries.get(color_id, {}).get(frame_index) is False

    def is_resolved(self, color_id: str, frame_index: int) -> bool:
        """Loaded or known to be missing; either way no load is needed."""
        return frame_index in self._entries.get(color_id, {})

    def loaded_frames(self, color_id: str) -> List[int]:
        """Ascending list of loaded frame indices for a color."""
        frames = self._entries.get(color_id, {})
        return sorted(index for index, loaded in frames.items() if loaded)

    def failed_frames(self, color_id: str) -> List[int]:
        frames = self._entries.get(color_id, {})
        return sorted(index for index, loaded in frames.items() if not loaded)

    def all_loaded(self, color_id: str, frame_indices) -> bool:
        """True when every given index is cached (False for an empty selection)."""
        indices = list(frame_indices)
        if not indices:
            return False
        return all(self.is_loaded(color_id, i) for i in indices)

    def colors(self) -> List[str]:
        return list(self._entries.keys())

    def to_dict(self) -> Dict[str, List[int]]:
        return {color_id: self.loaded_frames(color_id) for color_id in self._entries}

    def __contains__(self, color_id: object) -> bool:
        return color_id in self._entries

    def __len__(self) -> int:
        return sum(len(self.loaded_frames(c)) for c in self._entries)
