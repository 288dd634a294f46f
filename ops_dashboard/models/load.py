from typing import Optional

from pydantic import BaseModel

from ops_dashboard.models.enums import LoadSortField, SortOrder


class Load(BaseModel):
    load_id: str
    origin: str
    destination: str
    pickup_datetime: str
    delivery_datetime: str
    equipment_type: str
    loadboard_rate: float
    notes: str = ""
    weight: int
    commodity_type: str
    num_of_pieces: int = 0
    miles: int
    dimensions: str = ""


class LoadFilters(BaseModel):
    """Listing filters. Datetime bounds are ISO strings, compared inclusively."""

    load_id: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    equipment_type: Optional[str] = None
    pickup_from: Optional[str] = None
    pickup_to: Optional[str] = None
    delivery_from: Optional[str] = None
    delivery_to: Optional[str] = None
    min_rate: Optional[float] = None
    max_rate: Optional[float] = None


class LoadListQuery(BaseModel):
    filters: LoadFilters = LoadFilters()
    limit: int = 5
    offset: int = 0
    sort_by: LoadSortField = LoadSortField.PICKUP_DATETIME
    sort_order: SortOrder = SortOrder.ASC


class LoadListResponse(BaseModel):
    items: list[Load]
    total: int
    limit: int
    offset: int
