"""Import front door for arena payloads.

Payloads arrive as JSON text (or an already-decoded mapping), are checked
against the pydantic schema below and only then handed to the store. Every
failure surfaces as a ``PayloadImportError`` subclass so callers can report
it without touching state.
"""
import json
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from .errors import MalformedPayloadError, PayloadValidationError, SourceUnavailableError
from .model import IMPORT_DIMENSION_RANGE, IMPORT_RADIUS_RANGE

_DIM_MIN, _DIM_MAX = IMPORT_DIMENSION_RANGE
_RAD_MIN, _RAD_MAX = IMPORT_RADIUS_RANGE

class ArenaIn(BaseModel):
    """Arena dimensions in meters."""
    model_config = ConfigDict(strict=True)

    width: float = Field(ge=_DIM_MIN, le=_DIM_MAX)
    height: float = Field(ge=_DIM_MIN, le=_DIM_MAX)

class TargetIn(BaseModel):
    """Target descriptor without id or timestamp."""
    model_config = ConfigDict(strict=True)

    label: str
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    threat: Literal["Low", "Medium", "High", "Critical"]
    assignment: Literal["Alpha", "Bravo", "Charlie", "Delta", "Unassigned"]

class ImportPayload(BaseModel):
    """Full arena payload accepted by import."""
    model_config = ConfigDict(strict=True, populate_by_name=True)

    arena: ArenaIn
    coverage_radius: float = Field(alias="coverageRadius", ge=_RAD_MIN, le=_RAD_MAX)
    targets: List[TargetIn] = Field(min_length=1)

SAMPLE_PAYLOAD = {
    "arena": {"width": 120, "height": 120},
    "coverageRadius": 24,
    "targets": [
        {"label": "Command Relay", "x": 35, "y": 40, "threat": "High", "assignment": "Alpha"},
        {"label": "Forward Repair", "x": 82, "y": 55, "threat": "Medium", "assignment": "Bravo"},
        {"label": "VIP Convoy", "x": 68, "y": 88, "threat": "Critical", "assignment": "Charlie"},
        {"label": "Ammo Cache", "x": 50, "y": 20, "threat": "Low", "assignment": "Delta"},
    ],
}

def _describe(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e["loc"]) or "payload"
        parts.append(f"{loc}: {e['msg']}")
    return "Invalid arena payload - " + "; ".join(parts)

def validate_payload(raw: Any) -> ImportPayload:
    """Validate a decoded payload, raising PayloadValidationError on failure."""
    if isinstance(raw, ImportPayload):
        return raw
    try:
        return ImportPayload.model_validate(raw)
    except ValidationError as exc:
        raise PayloadValidationError(_describe(exc)) from exc

def parse_payload_text(text: Optional[str]) -> ImportPayload:
    """Decode and validate payload text (e.g. a pasted clipboard or request body)."""
    if text is None or not text.strip():
        raise SourceUnavailableError("Payload source is empty; nothing to import.")
    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise MalformedPayloadError("Unable to import payload: input is not valid JSON.") from exc
    return validate_payload(raw)
