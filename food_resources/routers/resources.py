# food_resources/routers/resources.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..schemas.common import Envelope, ErrorEnvelope, Location
from ..schemas.resources import (
    CountyCount,
    ResourceEnvelope,
    ResourcePage,
    ResourcePageEnvelope,
    ServiceGroup,
    ServiceType,
)
from ..services.catalog import DEFAULT_LIMIT, ResourceCatalog

router = APIRouter(prefix="/api", tags=["resources"])


def get_catalog(request: Request) -> ResourceCatalog:
    return request.app.state.catalog


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorEnvelope(error=message).model_dump())


def _split_services(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


@router.get(
    "/resources",
    response_model=ResourcePageEnvelope,
    response_model_exclude_unset=True,
    responses={400: {"description": "Invalid coordinates"}},
)
def list_resources(
    county: Optional[str] = None,
    zip_code: Optional[str] = Query(None, alias="zip", description="5-digit zip code"),
    services: Optional[str] = Query(None, description="Comma-separated service types; any match"),
    search: Optional[str] = Query(None, description="Substring match over name, description, address, city"),
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    lat: Optional[float] = Query(None, description="Latitude of the user; with lng sorts nearest first"),
    lng: Optional[float] = Query(None, description="Longitude of the user"),
    catalog: ResourceCatalog = Depends(get_catalog),
):
    origin = None
    if lat is not None and lng is not None:
        try:
            location = Location(lat=lat, lon=lng)
        except ValidationError:
            return _error(400, "Invalid coordinates")
        origin = (location.lat, location.lon)

    page = catalog.search(
        county=county,
        zip_code=zip_code,
        services=_split_services(services),
        search=search,
        limit=limit,
        offset=offset,
        origin=origin,
    )
    return ResourcePageEnvelope(
        success=True,
        data=ResourcePage(
            resources=page.resources,
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            hasMore=page.has_more,
        ),
    )


@router.get(
    "/resources/{resource_id}",
    response_model=ResourceEnvelope,
    response_model_exclude_unset=True,
    responses={400: {"description": "Invalid resource ID"}, 404: {"description": "Resource not found"}},
)
def get_resource(resource_id: str, catalog: ResourceCatalog = Depends(get_catalog)):
    try:
        rid = int(resource_id)
    except ValueError:
        return _error(400, "Invalid resource ID")
    if rid < 1:
        return _error(400, "Invalid resource ID")

    # ResourceNotFound is turned into a 404 envelope by the app-level handler
    return ResourceEnvelope(success=True, data=catalog.get(rid))


@router.get("/counties", response_model=Envelope)
def list_counties(catalog: ResourceCatalog = Depends(get_catalog)):
    counties = [CountyCount(**c) for c in catalog.counties()]
    return Envelope(success=True, data=counties)


@router.get("/service-types", response_model=Envelope)
def list_service_types(grouped: bool = False, catalog: ResourceCatalog = Depends(get_catalog)):
    data: Union[List[ServiceGroup], List[ServiceType]]
    if grouped:
        data = [ServiceGroup(**g) for g in catalog.service_types(grouped=True)]
    else:
        data = [ServiceType(**s) for s in catalog.service_types()]
    return Envelope(success=True, data=data)
