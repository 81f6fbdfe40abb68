from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator

class ConfigPatch(BaseModel):
    """Arena config update; omitted fields are left alone."""
    width: Optional[float] = Field(default=None, allow_inf_nan=False)
    height: Optional[float] = Field(default=None, allow_inf_nan=False)
    coverage_radius: Optional[float] = Field(default=None, allow_inf_nan=False)

class AddTargetRequest(BaseModel):
    """New target; random placement when both x and y are omitted."""
    x: Optional[float] = Field(default=None, allow_inf_nan=False)
    y: Optional[float] = Field(default=None, allow_inf_nan=False)

    @model_validator(mode="after")
    def _both_or_neither(self):
        if (self.x is None) != (self.y is None):
            raise ValueError("x and y must be given together")
        return self

class TargetPatch(BaseModel):
    """Target field update."""
    label: Optional[str] = None
    x: Optional[float] = Field(default=None, allow_inf_nan=False)
    y: Optional[float] = Field(default=None, allow_inf_nan=False)
    threat: Optional[Literal["Low", "Medium", "High", "Critical"]] = None
    assignment: Optional[Literal["Alpha", "Bravo", "Charlie", "Delta", "Unassigned"]] = None

class LimitsResponse(BaseModel):
    """Import and interactive editor ranges, as [min, max] pairs in meters."""
    import_dimension: tuple[float, float]
    import_radius: tuple[float, float]
    edit_dimension: tuple[float, float]
    edit_radius: tuple[float, float]

class EventsResponse(BaseModel):
    """Events response schema."""
    next_offset: int
    events: list[dict]
