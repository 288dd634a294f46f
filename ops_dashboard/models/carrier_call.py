from typing import Optional

from pydantic import BaseModel, field_validator


class CarrierCall(BaseModel):
    id: str
    call_date: str
    agent_name: str
    equipment_type: str
    origin_city: str
    origin_state: str
    destination_city: str
    destination_state: str
    outcome: str
    negotiation_rounds: int
    listed_rate: Optional[float] = None
    final_rate: Optional[float] = None
    sentiment_score: float
    call_duration_seconds: Optional[int] = None


class CarrierCallFilters(BaseModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    equipment_type: Optional[str] = None
    agent_name: Optional[str] = None
    outcome: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_all(cls, v):
        if v is None or v == "" or v == "all":
            return None
        return v


class CarrierCallKpis(BaseModel):
    total_calls: int = 0
    win_rate: float = 0
    avg_negotiation_rounds: float = 0
    pct_no_agreement_price: float = 0
    pct_no_fit_found: float = 0
    avg_sentiment_score: float = 0
    avg_listed: float = 0
    avg_final: float = 0
    avg_uplift_pct: float = 0


class DailyOutcomes(BaseModel):
    date: str
    total: int
    counts: dict[str, int]
    percentages: dict[str, float]


class DailySentiment(BaseModel):
    date: str
    avg_sentiment: float
    count: int


class LaneStat(BaseModel):
    lane: str
    origin: str
    destination: str
    calls: int
    wins: int
    win_rate: float


class CarrierCallAnalytics(BaseModel):
    calls: list[CarrierCall]
    kpis: CarrierCallKpis
    daily_outcomes: list[DailyOutcomes]
    daily_sentiment: list[DailySentiment]
    lanes: list[LaneStat]
