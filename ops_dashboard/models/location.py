from typing import Any, Literal, Optional

from pydantic import BaseModel


class GeoPoint(BaseModel):
    entity_type: str = "load"
    entity_id: str
    role: str
    lat: float
    lng: float
    geohash: str
    country: str = "US"
    state: Optional[str] = None
    city: Optional[str] = None
    timestamp_utc: Optional[str] = None
    extras: dict[str, Any] = {}


class RouteEndpoint(BaseModel):
    lng: float
    lat: float
    city: str = ""
    state: str = ""


class LoadRoute(BaseModel):
    load_id: str
    origin: RouteEndpoint
    destination: RouteEndpoint
    equipment_type: Optional[str] = None
    loadboard_rate: Optional[float] = None
    miles: Optional[int] = None


class MapPoint(BaseModel):
    call_id: str
    load_id: str
    lat: float
    lng: float
    equipment: str
    loadboard_rate: float
    final_rate: Optional[float] = None
    agent_name: str
    timestamp_utc: str
    origin_city: Optional[str] = None
    origin_state: Optional[str] = None


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]  # [lng, lat]


class MapFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    properties: dict[str, Any]
    geometry: PointGeometry


class MapFeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[MapFeature]


class GeoSeedReport(BaseModel):
    processed: int = 0
    origin_points: int = 0
    destination_points: int = 0
    skipped: int = 0


class MapRebuildReport(BaseModel):
    processed: int = 0
    created: int = 0
    errors: int = 0
    missing_load_ids: list[str] = []
