from pydantic import BaseModel, Field
from typing import Any

class Location(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

class Envelope(BaseModel):
    success: bool = True
    data: Any = None

class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
