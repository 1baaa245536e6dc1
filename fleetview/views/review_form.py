"""
views/review_form.py - New review form

Collects a star rating plus free text and creates a review for the
vessel supplied by the host. Submission is blocked while the rating is
unset; the backend is never called with a missing rating.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional
import logging

from pydantic import ValidationError

from fleetview.core.enums import (
    ERROR_TITLE,
    PARENT_REQUIRED_MESSAGE,
    RATING_REQUIRED_MESSAGE,
    REVIEW_CREATED_TITLE,
    Severity,
)
from fleetview.core.models import RATING_MAX, RATING_MIN, ReviewDraft, VesselReview, to_review
from fleetview.errors import InputValidationError, describe_error
from fleetview.services.protocol import Notifier, VesselDataService
from fleetview.ui.events import ReviewCreated, ViewEvent

from .base import BaseView

logger = logging.getLogger("views.review_form")

DEFAULT_INPUT_FIELDS = ("Name", "Comment")


@dataclass
class InputField:
    """One text input of the form."""
    field_name: str
    value: Optional[str] = None

    def reset(self) -> None:
        self.value = None


class ReviewSubmissionForm(BaseView):
    """Form creating a review for ``record_id``."""

    def __init__(
        self,
        service: VesselDataService,
        notifier: Optional[Notifier] = None,
        input_fields: Iterable[str] = DEFAULT_INPUT_FIELDS,
        name: str = "review_form",
    ):
        super().__init__(name, notifier)
        self._service = service
        self.record_id: Optional[str] = None
        self.rating: Optional[int] = None
        self.inputs: Dict[str, InputField] = {
            field_name: InputField(field_name) for field_name in input_fields
        }
        self._submitting = False

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def handle_rating_changed(self, rating: int) -> None:
        """Take the value picked in the star rating control."""
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise InputValidationError(f"Rating must be an integer, got {rating!r}", field="Rating")
        if not RATING_MIN <= rating <= RATING_MAX:
            raise InputValidationError(
                f"Rating must be between {RATING_MIN} and {RATING_MAX}",
                field="Rating",
            )
        self.rating = rating

    def set_field(self, field_name: str, value: Optional[str]) -> None:
        field = self.inputs.get(field_name)
        if field is None:
            raise InputValidationError(f"Unknown form field {field_name}", field=field_name)
        field.value = value

    def _collect(self) -> Dict[str, Any]:
        return {
            name: field.value
            for name, field in self.inputs.items()
            if field.value not in (None, "")
        }

    async def submit(self, fields: Optional[Mapping[str, Any]] = None) -> Optional[VesselReview]:
        """
        Create the review.

        Args:
            fields: Field set to submit; defaults to the form's inputs. The
                parent vessel and the rating are injected before sending.

        Returns:
            The created review, or None if submission was blocked or failed
        """
        if self.rating is None:
            logger.info("Review submission blocked: rating not set")
            self.notify(ERROR_TITLE, RATING_REQUIRED_MESSAGE, Severity.ERROR)
            return None
        if not self.record_id:
            logger.info("Review submission blocked: no parent vessel")
            self.notify(ERROR_TITLE, PARENT_REQUIRED_MESSAGE, Severity.ERROR)
            return None

        parent_id = self.record_id
        outgoing = dict(fields) if fields is not None else self._collect()
        outgoing["Boat"] = parent_id
        outgoing["Rating"] = self.rating

        try:
            draft = ReviewDraft.model_validate(outgoing)
        except ValidationError as e:
            self.notify(ERROR_TITLE, describe_error(e), Severity.ERROR)
            return None

        self._submitting = True
        try:
            created = await self._service.create_review(draft.to_fields())
        except Exception as e:
            logger.warning(f"Review creation for {parent_id} failed: {e}")
            self.notify(ERROR_TITLE, describe_error(e), Severity.ERROR)
            return None
        finally:
            self._submitting = False

        review = to_review(created) if created is not None else None
        self.handle_success(review, parent_id)
        return review

    def handle_success(
        self,
        review: Optional[VesselReview] = None,
        boat_id: Optional[str] = None,
    ) -> None:
        """Signal the host, confirm to the user and clear the form."""
        event = ViewEvent.review_created(
            ReviewCreated(
                boat_id=boat_id or self.record_id,
                review_id=review.id if review is not None else None,
            ),
            source=self.name,
        )
        self.dispatch(event)
        self.notify(REVIEW_CREATED_TITLE, None, Severity.SUCCESS)
        self.reset()

    def reset(self) -> None:
        """Clear the rating and every input field."""
        self.rating = None
        for field in self.inputs.values():
            field.reset()
