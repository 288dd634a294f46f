from ops_dashboard.models.enums import (
    EquipmentType,
    OutcomeTag,
    SentimentTag,
    LoadSortField,
    SortOrder,
    GeoRole,
    Role,
)
from ops_dashboard.models.load import (
    Load,
    LoadFilters,
    LoadListQuery,
    LoadListResponse,
)
from ops_dashboard.models.call_metric import (
    CallMetric,
    CallMetricCreateRequest,
    CallMetricCreateResponse,
    CallMetricFilters,
    CallMetricsSummary,
    OutcomeBreakdown,
    WinsSegmented,
    PriceDisagreementBreakdown,
    NoFitBreakdown,
    AgentMetric,
)
from ops_dashboard.models.carrier_call import (
    CarrierCall,
    CarrierCallFilters,
    CarrierCallAnalytics,
)
from ops_dashboard.models.location import (
    GeoPoint,
    LoadRoute,
    MapPoint,
    MapFeatureCollection,
    GeoSeedReport,
    MapRebuildReport,
)
from ops_dashboard.models.user import (
    User,
    UserCreateRequest,
    RoleUpdateRequest,
    ProfileUpdateRequest,
    UserPage,
    RoleStats,
)
from ops_dashboard.models.seed import ResetReport

__all__ = [
    "EquipmentType",
    "OutcomeTag",
    "SentimentTag",
    "LoadSortField",
    "SortOrder",
    "GeoRole",
    "Role",
    "Load",
    "LoadFilters",
    "LoadListQuery",
    "LoadListResponse",
    "CallMetric",
    "CallMetricCreateRequest",
    "CallMetricCreateResponse",
    "CallMetricFilters",
    "CallMetricsSummary",
    "OutcomeBreakdown",
    "WinsSegmented",
    "PriceDisagreementBreakdown",
    "NoFitBreakdown",
    "AgentMetric",
    "CarrierCall",
    "CarrierCallFilters",
    "CarrierCallAnalytics",
    "GeoPoint",
    "LoadRoute",
    "MapPoint",
    "MapFeatureCollection",
    "GeoSeedReport",
    "MapRebuildReport",
    "User",
    "UserCreateRequest",
    "RoleUpdateRequest",
    "ProfileUpdateRequest",
    "UserPage",
    "RoleStats",
    "ResetReport",
]
