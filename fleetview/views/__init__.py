"""
views/ - Data views of the vessel page

Each view owns its load state; views talk to each other only through
the SelectionBus and the references their host hands them.
"""

from .base import BaseView
from .search_results import SearchResultsView
from .search import VesselSearchView
from .review_list import ReviewListView
from .review_form import InputField, ReviewSubmissionForm, DEFAULT_INPUT_FIELDS
from .detail import DetailView

__all__ = [
    "BaseView",
    "SearchResultsView",
    "VesselSearchView",
    "ReviewListView",
    "InputField",
    "ReviewSubmissionForm",
    "DEFAULT_INPUT_FIELDS",
    "DetailView",
]
