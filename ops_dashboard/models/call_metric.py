from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ops_dashboard.models.enums import (
    PRIMARY_OUTCOMES,
    OutcomeTag,
    SentimentTag,
)

_OUTCOME_VALUES = [o.value for o in PRIMARY_OUTCOMES]
_SENTIMENT_VALUES = [s.value for s in SentimentTag]


class CallMetricCreateRequest(BaseModel):
    agent_name: str
    equipment_type: str
    outcome_tag: str
    sentiment_tag: str
    negotiation_rounds: int
    loadboard_rate: float
    final_rate: Optional[float] = None
    related_load_id: Optional[str] = None
    rejected_rate: Optional[float] = None
    loads_offered: Optional[int] = None

    @field_validator("agent_name", "equipment_type")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("outcome_tag")
    @classmethod
    def check_outcome(cls, v: str) -> str:
        if v not in _OUTCOME_VALUES:
            raise ValueError(
                f"Invalid outcome_tag. Must be one of: {', '.join(_OUTCOME_VALUES)}"
            )
        return v

    @field_validator("sentiment_tag")
    @classmethod
    def check_sentiment(cls, v: str) -> str:
        if v not in _SENTIMENT_VALUES:
            raise ValueError(
                f"Invalid sentiment_tag. Must be one of: {', '.join(_SENTIMENT_VALUES)}"
            )
        return v

    @model_validator(mode="after")
    def final_rate_matches_outcome(self):
        won = self.outcome_tag == OutcomeTag.WON_TRANSFERRED.value
        if won and self.final_rate is None:
            raise ValueError(
                "final_rate must be provided when outcome_tag is 'won_transferred'"
            )
        if not won and self.final_rate is not None:
            raise ValueError(
                "final_rate must be null when outcome_tag is not 'won_transferred'"
            )
        return self


class CallMetricCreateResponse(BaseModel):
    id: str
    message: str = "Call metric created successfully"


class CallMetric(BaseModel):
    id: str
    timestamp_utc: str
    agent_name: str
    equipment_type: str
    outcome_tag: str
    sentiment_tag: str
    negotiation_rounds: int
    loadboard_rate: float
    final_rate: Optional[float] = None
    related_load_id: Optional[str] = None
    rejected_rate: Optional[float] = None
    loads_offered: Optional[int] = None


class CallMetricFilters(BaseModel):
    """Dashboard filters. 'all' or an empty value means no filter."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    equipment_type: Optional[str] = None
    agent_name: Optional[str] = None
    outcome_tag: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_all(cls, v):
        if v is None or v == "" or v == "all":
            return None
        return v


class CallMetricsSummary(BaseModel):
    total_calls: int = 0
    win_rate: float = 0  # 0-1
    avg_negotiation_rounds: float = 0
    pct_no_agreement_price: float = 0  # 0-1
    pct_no_fit_found: float = 0  # 0-1
    sentiment_score: float = 0  # -1..+1
    avg_listed: float = 0
    avg_final: float = 0
    avg_uplift_pct: float = 0  # 0-1


class OutcomeBreakdown(BaseModel):
    won_transferred: int = 0
    no_agreement_price: int = 0
    no_fit_found: int = 0
    total: int = 0


class WinsSegmented(BaseModel):
    low_uplift_wins: int = 0
    high_uplift_wins: int = 0
    total_wins: int = 0


class PriceDisagreementBreakdown(BaseModel):
    small_gap: int = 0
    medium_gap: int = 0
    large_gap: int = 0
    unknown_gap: int = 0
    total: int = 0


class NoFitBreakdown(BaseModel):
    few_loads: int = 0
    multiple_loads: int = 0
    many_loads: int = 0
    total: int = 0


class AgentMetric(BaseModel):
    agent_name: str
    total_calls: int
    win_rate: float
    avg_negotiation_rounds: float
    avg_sentiment_score: float
    avg_uplift_pct: float
