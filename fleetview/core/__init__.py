"""
core/ - Records and shared enumerations
"""

from .enums import (
    Severity,
    DetailTab,
    DEFAULT_LABELS,
    DETAILS_TAB_ICON,
)

from .models import (
    RATING_MIN,
    RATING_MAX,
    Vessel,
    PartialVessel,
    VesselReview,
    ReviewDraft,
    Column,
    VESSEL_COLUMNS,
    to_vessel,
    to_vessels,
    to_review,
    to_reviews,
)

__all__ = [
    "Severity",
    "DetailTab",
    "DEFAULT_LABELS",
    "DETAILS_TAB_ICON",
    "RATING_MIN",
    "RATING_MAX",
    "Vessel",
    "PartialVessel",
    "VesselReview",
    "ReviewDraft",
    "Column",
    "VESSEL_COLUMNS",
    "to_vessel",
    "to_vessels",
    "to_review",
    "to_reviews",
]
