import uuid
from dataclasses import replace
from typing import Any, Callable, Iterable, List, Optional
from .clock import Clock, wall_clock_ms
from .geometry import clamp
from .model import (DEFAULT_TARGETS, PLACEMENT_MARGIN_M, ArenaConfig, ArenaState, Event,
                    Position, Target, TargetAssignment, ThreatLevel)
from .payload import validate_payload
from .rng import DRNG

_EDITABLE = ("label", "x", "y", "threat", "assignment")

def _new_id() -> str:
    return uuid.uuid4().hex

def _coerce(name: str, value: Any) -> Any:
    if name == "threat":
        return value if isinstance(value, ThreatLevel) else ThreatLevel(value)
    if name == "assignment":
        return value if isinstance(value, TargetAssignment) else TargetAssignment(value)
    if name in ("x", "y"):
        return float(value)
    return str(value)

class ArenaStore:
    """Owns the arena state. Every mutation installs a new immutable snapshot."""

    def __init__(self, initial_state: Optional[ArenaState] = None, seed: int = 42,
                 clock: Clock = wall_clock_ms, id_factory: Callable[[], str] = _new_id,
                 rng: Optional[DRNG] = None):
        self.state = initial_state if initial_state is not None else ArenaState()
        self._rng = rng if rng is not None else DRNG(seed)
        self._clock = clock
        self._id_factory = id_factory
        self._pending_events: List[Event] = []

    def _emit(self, kind: str, data: dict) -> None:
        self._pending_events.append(Event(kind, self._clock(), data))

    def _fresh_id(self, taken: set) -> str:
        tid = self._id_factory()
        while tid in taken:
            tid = self._id_factory()
        return tid

    def _materialize(self, descriptors: Iterable[Any]) -> tuple:
        """Build targets with fresh ids and timestamps from anything carrying target fields."""
        now = self._clock()
        taken: set = set()
        out = []
        for d in descriptors:
            tid = self._fresh_id(taken)
            taken.add(tid)
            out.append(Target(
                id=tid,
                label=str(d.label),
                x=float(d.x),
                y=float(d.y),
                threat=_coerce("threat", d.threat),
                assignment=_coerce("assignment", d.assignment),
                last_updated=now,
            ))
        return tuple(out)

    def set_config(self, width: Optional[float] = None, height: Optional[float] = None,
                   coverage_radius: Optional[float] = None) -> ArenaConfig:
        """Merge the given config fields. Values are not range-checked or clamped."""
        changes = {k: float(v) for k, v in
                   (("width", width), ("height", height), ("coverage_radius", coverage_radius))
                   if v is not None}
        if changes:
            self.state = replace(self.state, config=replace(self.state.config, **changes))
            self._emit("ConfigChanged", changes)
        return self.state.config

    def add_target(self, position: Optional[Position] = None) -> str:
        """Append a new target and return its id."""
        cfg = self.state.config
        if position is None:
            m = PLACEMENT_MARGIN_M
            rx, ry = self._rng.point(cfg.width, cfg.height)
            x = clamp(rx, m, cfg.width - m)
            y = clamp(ry, m, cfg.height - m)
        else:
            x, y = float(position[0]), float(position[1])

        tid = self._fresh_id({t.id for t in self.state.targets})
        target = Target(
            id=tid,
            label=f"Target {len(self.state.targets) + 1}",
            x=x,
            y=y,
            last_updated=self._clock(),
        )
        self.state = replace(self.state, targets=self.state.targets + (target,))
        self._emit("TargetAdded", {"target_id": tid, "pos": [x, y]})
        return tid

    def remove_target(self, target_id: str) -> bool:
        """Remove a target. Unknown ids are a no-op."""
        kept = tuple(t for t in self.state.targets if t.id != target_id)
        if len(kept) == len(self.state.targets):
            return False
        self.state = replace(self.state, targets=kept)
        self._emit("TargetRemoved", {"target_id": target_id})
        return True

    def update_target(self, target_id: str, **fields: Any) -> bool:
        """Merge fields into a target and refresh its timestamp. Unknown ids are a no-op."""
        bad = [k for k in fields if k not in _EDITABLE]
        if bad:
            raise ValueError(f"Fields not editable: {', '.join(sorted(bad))}")

        current = self.state.find(target_id)
        if current is None:
            return False

        changes = {k: _coerce(k, v) for k, v in fields.items()}
        updated = replace(current, last_updated=self._clock(), **changes)
        self.state = replace(self.state, targets=tuple(
            updated if t.id == target_id else t for t in self.state.targets))
        self._emit("TargetUpdated", {"target_id": target_id,
                                     "fields": sorted(changes)})
        return True

    def replace_all(self, targets: Iterable[Any]) -> None:
        """Discard all targets and install the given ones under fresh ids."""
        fresh = self._materialize(targets)
        self.state = replace(self.state, targets=fresh)
        self._emit("TargetsReplaced", {"count": len(fresh)})

    def reset(self) -> None:
        """Reinstall the default target grid. Arena config is kept."""
        self.replace_all(DEFAULT_TARGETS)

    def import_payload(self, payload: Any) -> None:
        """Validate and atomically install a payload. Raises before any state change."""
        p = validate_payload(payload)
        config = ArenaConfig(width=float(p.arena.width), height=float(p.arena.height),
                             coverage_radius=float(p.coverage_radius))
        fresh = self._materialize(p.targets)
        self.state = ArenaState(config=config, targets=fresh)
        print(f"[Store] Imported {len(fresh)} targets into {config.width}x{config.height} arena")
        self._emit("PayloadImported", {"count": len(fresh), "width": config.width,
                                       "height": config.height,
                                       "coverage_radius": config.coverage_radius})

    def drain_events(self) -> List[Event]:
        """Return and clear events emitted since the last drain."""
        evts = self._pending_events
        self._pending_events = []
        return evts

    def snapshot(self) -> ArenaState:
        """Return current state."""
        return self.state
