import asyncio
from typing import Any, Callable, Optional, Tuple
from planner.insights import Insights, compute_insights
from planner.model import ArenaState
from planner.payload import SAMPLE_PAYLOAD, parse_payload_text
from planner.store import ArenaStore
from .eventlog import EventLog

class PlannerSession:
    """Async owner of one arena store; serializes mutations from concurrent requests."""

    def __init__(self, store: ArenaStore):
        self.store = store
        self.events = EventLog()
        self._lock = asyncio.Lock()
        self._cached: Optional[Tuple[ArenaState, Insights]] = None

    async def mutate(self, op: Callable[..., Any], *args, **kwargs) -> Any:
        """Run one store operation atomically and log the events it produced."""
        async with self._lock:
            try:
                return op(*args, **kwargs)
            finally:
                evts = self.store.drain_events()
                if evts:
                    print(f"[Session] {op.__name__} produced {len(evts)} events")
                    self.events.append_many(evts)

    async def import_text(self, text: Optional[str]) -> None:
        """Parse and import payload text. Raises PayloadImportError, leaving state untouched."""
        payload = parse_payload_text(text)
        await self.mutate(self.store.import_payload, payload)

    async def load_sample(self) -> None:
        await self.mutate(self.store.import_payload, SAMPLE_PAYLOAD)

    async def snapshot(self) -> ArenaState:
        """Get current state (lock-protected)."""
        async with self._lock:
            return self.store.snapshot()

    async def insights(self) -> Tuple[ArenaState, Insights]:
        """Current state with its insights; recomputed only when the snapshot changed."""
        async with self._lock:
            state = self.store.snapshot()
            if self._cached is None or self._cached[0] is not state:
                self._cached = (state, compute_insights(state))
            return self._cached
