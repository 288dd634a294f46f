from pydantic import BaseModel

from ops_dashboard.models.location import GeoSeedReport, MapRebuildReport


class TableSeedReport(BaseModel):
    cleared: int
    seeded: int


class ResetReport(BaseModel):
    loads: TableSeedReport
    geo_points: GeoSeedReport
    call_metrics: TableSeedReport
    carrier_calls: TableSeedReport
    map_points: MapRebuildReport
