from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from planner.clock import time_since, wall_clock_ms
from planner.envelope import EnvelopeResult, evaluate_envelope
from planner.errors import PayloadImportError, PayloadValidationError
from planner.insights import Insights
from planner.model import (EDIT_DIMENSION_RANGE, EDIT_RADIUS_RANGE, IMPORT_DIMENSION_RANGE,
                           IMPORT_RADIUS_RANGE, ArenaState, Target)
from planner.store import ArenaStore
from runtime.session import PlannerSession
from .schemas import AddTargetRequest, ConfigPatch, EventsResponse, LimitsResponse, TargetPatch

app = FastAPI(title="Arena Planner API")

# Enable CORS for development (React runs on different port)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:5174", "http://localhost:5175"],  # Vite dev server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _make_session() -> PlannerSession:
    """Create a session holding the default arena and target grid."""
    store = ArenaStore(seed=42)
    store.reset()
    store.drain_events()
    return PlannerSession(store)

session = _make_session()

def _target_dict(t: Target, now_ms: int) -> dict:
    return {
        "id": t.id,
        "label": t.label,
        "x": t.x,
        "y": t.y,
        "threat": t.threat.value,
        "assignment": t.assignment.value,
        "last_updated": t.last_updated,
        "age": time_since(t.last_updated, now_ms),
    }

def _envelope_dict(e: EnvelopeResult) -> dict:
    return {"border_distance": e.border_distance, "clearance": e.clearance,
            "status": e.status.value}

def _state_dict(s: ArenaState) -> dict:
    now = wall_clock_ms()
    return {
        "width": s.config.width,
        "height": s.config.height,
        "coverage_radius": s.config.coverage_radius,
        "targets": [_target_dict(t, now) for t in s.targets],
    }

def _insights_dict(ins: Insights) -> dict:
    return {
        "targets": {"total": ins.total, "critical": ins.critical},
        "assignments": {"assigned": ins.assigned, "utilization": ins.utilization},
        "overlaps": {
            "count": ins.overlap_count,
            "conflicts": [{"pair": [c.pair[0].id, c.pair[1].id], "distance": c.distance}
                          for c in ins.conflicts],
        },
        "coverage": {
            "health": ins.health.value,
            "message": ins.message,
            "mean_distance": ins.mean_distance,
        },
        "envelopes": {tid: _envelope_dict(e) for tid, e in ins.envelopes.items()},
    }

@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Arena Planner API",
        "docs": "/docs",
        "version": "1.0"
    }

@app.get("/arena/state")
async def get_state():
    """Get current arena snapshot."""
    return _state_dict(await session.snapshot())

@app.get("/arena/limits")
async def get_limits():
    """Accepted import ranges and the interactive editor ranges (advisory)."""
    return LimitsResponse(
        import_dimension=IMPORT_DIMENSION_RANGE,
        import_radius=IMPORT_RADIUS_RANGE,
        edit_dimension=EDIT_DIMENSION_RANGE,
        edit_radius=EDIT_RADIUS_RANGE,
    )

@app.get("/arena/insights")
async def get_insights():
    """Get metrics derived from the current snapshot."""
    _, ins = await session.insights()
    return _insights_dict(ins)

@app.patch("/arena/config")
async def patch_config(req: ConfigPatch):
    """Merge arena dimensions and coverage radius."""
    cfg = await session.mutate(session.store.set_config, **req.model_dump())
    return {"width": cfg.width, "height": cfg.height, "coverage_radius": cfg.coverage_radius}

@app.post("/arena/targets")
async def add_target(req: AddTargetRequest | None = None):
    """Add a target at the given position, or a random one."""
    pos = None
    if req is not None and req.x is not None:
        pos = (req.x, req.y)
    tid = await session.mutate(session.store.add_target, pos)
    return {"id": tid}

@app.patch("/arena/targets/{target_id}")
async def patch_target(target_id: str, req: TargetPatch):
    """Update target fields; unknown ids are ignored."""
    fields = req.model_dump(exclude_none=True)
    updated = await session.mutate(session.store.update_target, target_id, **fields)
    return {"updated": updated}

@app.delete("/arena/targets/{target_id}")
async def delete_target(target_id: str):
    """Remove a target; unknown ids are ignored."""
    removed = await session.mutate(session.store.remove_target, target_id)
    return {"removed": removed}

@app.get("/arena/targets/{target_id}/envelope")
async def get_envelope(target_id: str):
    """Envelope diagnostic for one target."""
    s = await session.snapshot()
    t = s.find(target_id)
    if t is None:
        raise HTTPException(404, f"Unknown target {target_id}")
    cfg = s.config
    result = evaluate_envelope(t, cfg.coverage_radius, cfg.width, cfg.height)
    return {"target_id": t.id, "coverage_radius": cfg.coverage_radius, **_envelope_dict(result)}

@app.post("/arena/reset")
async def reset_grid():
    """Reinstall the default target grid."""
    await session.mutate(session.store.reset)
    s = await session.snapshot()
    return {"count": len(s.targets)}

@app.post("/arena/sample")
async def load_sample():
    """Import the built-in sample payload."""
    await session.load_sample()
    s = await session.snapshot()
    return {"count": len(s.targets)}

@app.post("/arena/import")
async def import_payload(request: Request):
    """Import a raw JSON payload body."""
    body = (await request.body()).decode("utf-8", errors="replace")
    try:
        await session.import_text(body)
    except PayloadValidationError as exc:
        print(f"[API] Import rejected: {exc}")
        raise HTTPException(422, str(exc))
    except PayloadImportError as exc:
        print(f"[API] Import failed: {exc}")
        raise HTTPException(400, str(exc))
    s = await session.snapshot()
    return {"count": len(s.targets)}

@app.get("/arena/events")
async def get_events(since: int = 0, limit: int = 500, kind: str | None = None):
    """Get mutation events since offset."""
    evts, next_offset = session.events.since(since, limit, kind)
    return EventsResponse(
        next_offset=next_offset,
        events=[{"kind": e.kind, "ts_ms": e.ts_ms, "data": e.data} for e in evts]
    )
