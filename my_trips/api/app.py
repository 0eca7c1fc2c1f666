from fastapi import FastAPI, HTTPException, Depends
from pydantic import BaseModel, Field
import logging
from typing import Optional

from my_trips import __version__, config
from my_trips.exceptions import (
    IndexOutOfRange,
    InvalidTransition,
    LocationError,
    NoActiveResolution,
    PermissionDenied,
    PermissionDeniedForever,
    ResolutionInProgress,
)
from my_trips.geocoding import create_geocoding_client
from my_trips.location import PermissionStatus, ReportedLocationProvider
from my_trips.models import Coordinates
from my_trips.session import TripSession

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="My Trips API",
    description="Pick a point, reverse-geocode it and keep a list of named trips",
    version=__version__
)

_session: Optional[TripSession] = None


def get_session() -> TripSession:
    """Return the process-wide session, creating it on first use."""
    global _session
    if _session is None:
        _session = TripSession(create_geocoding_client(), ReportedLocationProvider())
    return _session


class PointRequest(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)

    def to_coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


class ConfirmRequest(BaseModel):
    name: Optional[str] = None


class ManualNameRequest(BaseModel):
    name: str


class SortRequest(BaseModel):
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0, allow_inf_nan=False)


class LocationReport(BaseModel):
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0, allow_inf_nan=False)
    permission: PermissionStatus = PermissionStatus.GRANTED
    service_enabled: bool = True


def _location_error(e: LocationError) -> HTTPException:
    actions = ["retry"]
    if e.can_open_settings:
        actions.append("open_settings")
    status_code = 403 if isinstance(e, (PermissionDenied, PermissionDeniedForever)) else 503
    return HTTPException(
        status_code=status_code,
        detail={"message": str(e), "error": type(e).__name__, "actions": actions}
    )


def _trip_list(session: TripSession):
    return [
        dict(record.to_dict(), index=index)
        for index, record in enumerate(session.snapshot())
    ]


@app.get("/")
def read_root():
    return {"message": "Welcome to the My Trips API"}


@app.get("/trips")
def list_trips(session: TripSession = Depends(get_session)):
    if session.trips.is_empty():
        return {"trips": [], "message": "No trips added"}
    return {"trips": _trip_list(session)}


@app.delete("/trips/{index}")
def delete_trip(index: int, session: TripSession = Depends(get_session)):
    try:
        record = session.delete(index)
        return {"deleted": record.to_dict(), "remaining": len(session.trips)}
    except IndexOutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/trips/resolve")
def resolve_location(point: PointRequest, session: TripSession = Depends(get_session)):
    """
    Start an add-location request for a picked point.

    The response is either ``awaiting_confirmation`` with a suggested name and
    the provider's display string, or ``manual_entry`` when the lookup failed
    and a name has to be typed in.
    """
    try:
        pipeline = session.begin_add(point.to_coordinates())
        return pipeline.view()
    except ResolutionInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.get("/trips/resolve")
def get_resolution(session: TripSession = Depends(get_session)):
    if session.pipeline is None:
        raise HTTPException(status_code=404, detail=str(NoActiveResolution()))
    return session.pipeline.view()


@app.post("/trips/resolve/confirm")
def confirm_location(body: ConfirmRequest, session: TripSession = Depends(get_session)):
    try:
        session.confirm(body.name)
        return session.pipeline.view()
    except NoActiveResolution as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.post("/trips/resolve/manual")
def name_location(body: ManualNameRequest, session: TripSession = Depends(get_session)):
    try:
        session.submit_manual_name(body.name)
        return session.pipeline.view()
    except NoActiveResolution as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.post("/trips/resolve/cancel")
def cancel_location(session: TripSession = Depends(get_session)):
    try:
        session.cancel()
        return session.pipeline.view()
    except NoActiveResolution as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.post("/trips/sort")
def sort_trips(body: Optional[SortRequest] = None, session: TripSession = Depends(get_session)):
    """Sort trips nearest first, from the given point or the device position."""
    body = body or SortRequest()
    if (body.latitude is None) != (body.longitude is None):
        raise HTTPException(status_code=422, detail="Provide both latitude and longitude, or neither")

    try:
        if body.latitude is not None:
            reference = Coordinates(latitude=body.latitude, longitude=body.longitude)
            session.sort_by_distance_from(reference)
        else:
            reference = session.sort_by_current_position()
    except LocationError as e:
        raise _location_error(e) from e

    return {"reference": reference.model_dump(), "trips": _trip_list(session)}


@app.put("/location")
def report_location(report: LocationReport, session: TripSession = Depends(get_session)):
    if (report.latitude is None) != (report.longitude is None):
        raise HTTPException(status_code=422, detail="Provide both latitude and longitude, or neither")

    position = None
    if report.latitude is not None:
        position = Coordinates(latitude=report.latitude, longitude=report.longitude)

    provider = session.location_provider
    if not isinstance(provider, ReportedLocationProvider):
        raise HTTPException(status_code=400, detail="This session reads its position from the platform")
    provider.report(position, report.permission, report.service_enabled)
    return {"status": "ok"}


@app.delete("/location")
def forget_location(session: TripSession = Depends(get_session)):
    provider = session.location_provider
    if not isinstance(provider, ReportedLocationProvider):
        raise HTTPException(status_code=400, detail="This session reads its position from the platform")
    provider.forget()
    return {"status": "ok"}
