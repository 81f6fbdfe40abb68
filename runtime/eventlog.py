from typing import List, Optional, Tuple
from planner.model import Event

class EventLog:
    """Append-only record of arena mutations for clients polling for changes."""

    def __init__(self):
        self._log: List[Event] = []

    def append_many(self, evts: List[Event]) -> Tuple[int, int]:
        """Append events and return (start_offset, end_offset)."""
        start = len(self._log)
        self._log.extend(evts)
        return start, len(self._log) - 1

    def since(self, offset: int, limit: int = 1000,
              kind: Optional[str] = None) -> Tuple[List[Event], int]:
        """Return up to limit events from offset, optionally of one kind only.

        The returned offset points past the last entry scanned, so filtered
        polling never revisits skipped events.
        """
        offset = max(0, offset)
        if kind is None:
            chunk = self._log[offset: offset + limit]
            return chunk, offset + len(chunk)

        out: List[Event] = []
        pos = offset
        while pos < len(self._log) and len(out) < limit:
            if self._log[pos].kind == kind:
                out.append(self._log[pos])
            pos += 1
        return out, pos
