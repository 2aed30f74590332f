# food_resources/schemas/resources.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class Resource(BaseModel):
    # datasets may carry extra keys (notes, createdAt, ...); pass them through
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zipCode: str | None = None
    county: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    phone: str | None = None
    website: str | None = None
    description: str | None = None
    services: List[str] = []
    hours: str | None = None
    distance: Optional[float] = Field(None, description="Miles from the query point; null when unknown")

class ResourcePage(BaseModel):
    resources: List[Resource]
    total: int
    limit: int
    offset: int
    hasMore: bool

class ResourcePageEnvelope(BaseModel):
    success: bool = True
    data: ResourcePage

class ResourceEnvelope(BaseModel):
    success: bool = True
    data: Resource

class CountyCount(BaseModel):
    name: str
    resourceCount: int

class ServiceType(BaseModel):
    name: str
    category: str | None = None

class ServiceGroup(BaseModel):
    category: str
    services: List[str]
