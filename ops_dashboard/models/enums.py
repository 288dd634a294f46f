from enum import Enum


class EquipmentType(str, Enum):
    """Equipment type for loads. Values: dry_van, reefer, flatbed."""

    DRY_VAN = "dry_van"
    REEFER = "reefer"
    FLATBED = "flatbed"


class OutcomeTag(str, Enum):
    WON_TRANSFERRED = "won_transferred"
    NO_AGREEMENT_PRICE = "no_agreement_price"
    NO_FIT_FOUND = "no_fit_found"
    # Legacy values, only present on carrier_calls rows
    INELIGIBLE = "ineligible"
    OTHER = "other"


# Outcomes a new call metric may carry
PRIMARY_OUTCOMES = (
    OutcomeTag.WON_TRANSFERRED,
    OutcomeTag.NO_AGREEMENT_PRICE,
    OutcomeTag.NO_FIT_FOUND,
)


class SentimentTag(str, Enum):
    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very_negative"


SENTIMENT_SCORES: dict[str, int] = {
    SentimentTag.VERY_POSITIVE.value: 2,
    SentimentTag.POSITIVE.value: 1,
    SentimentTag.NEUTRAL.value: 0,
    SentimentTag.NEGATIVE.value: -1,
    SentimentTag.VERY_NEGATIVE.value: -2,
}


class LoadSortField(str, Enum):
    PICKUP_DATETIME = "pickup_datetime"
    LOADBOARD_RATE = "loadboard_rate"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class GeoRole(str, Enum):
    ORIGIN = "origin"
    DESTINATION = "destination"


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


# Higher numbers mean more permissions
ROLE_HIERARCHY: dict[str, int] = {
    Role.ADMIN.value: 300,
    Role.EDITOR.value: 200,
    Role.VIEWER.value: 100,
}
