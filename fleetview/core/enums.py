"""
fleetview Core Enumerations

Enumeration types and fixed UI texts shared across views.
"""

from enum import Enum


class Severity(str, Enum):
    """Notification severity."""
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class DetailTab(str, Enum):
    """Tabs hosted by the vessel detail view."""
    DETAILS = "details"
    REVIEWS = "reviews"
    ADD_REVIEW = "add_review"


# Default label set; a deployment may override entries via UIConfig.labels
DEFAULT_LABELS = {
    "details": "Details",
    "reviews": "Reviews",
    "add_review": "Add Review",
    "full_details": "Full Details",
    "please_select_a_boat": "Please select a boat",
}

# Notification texts
SAVE_SUCCESS_TITLE = "Success"
SAVE_SUCCESS_MESSAGE = "Ship it!"
ERROR_TITLE = "Error"
REVIEW_CREATED_TITLE = "Review Created!"
RATING_REQUIRED_MESSAGE = "Select a rating before submitting the review"
PARENT_REQUIRED_MESSAGE = "Select a boat before submitting the review"

# Icon shown on the details tab once a record is loaded
DETAILS_TAB_ICON = "utility:anchor"
