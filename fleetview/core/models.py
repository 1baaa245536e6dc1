"""
core/models.py - Vessel and review record shapes v1.0

Typed records exchanged with the backend. Wire names (``Id``, ``Name``,
``Boat``, ``Rating``...) are pydantic aliases; Python names are accepted
too so fixtures and adapters can use either.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RATING_MIN = 1
RATING_MAX = 5


class Vessel(BaseModel):
    """A boat record."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., alias="Id", min_length=1)
    name: str = Field("", alias="Name")
    boat_type: Optional[str] = Field(None, alias="BoatType")
    length: Optional[float] = Field(None, alias="Length")
    price: Optional[float] = Field(None, alias="Price")
    description: Optional[str] = Field(None, alias="Description")

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class PartialVessel(BaseModel):
    """
    One row of inline edits.

    Only the editable grid columns are accepted; any other key is a
    validation error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    id: str = Field(..., alias="Id", min_length=1)
    name: Optional[str] = Field(None, alias="Name")
    length: Optional[float] = Field(None, alias="Length")
    price: Optional[float] = Field(None, alias="Price")
    description: Optional[str] = Field(None, alias="Description")

    def to_fields(self) -> Dict[str, Any]:
        """Alias-keyed dict holding the id and only the edited fields."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class VesselReview(BaseModel):
    """A review attached to a boat."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = Field(None, alias="Id")
    boat_id: str = Field(..., alias="Boat", min_length=1)
    name: str = Field("", alias="Name")
    rating: Optional[int] = Field(None, alias="Rating", ge=RATING_MIN, le=RATING_MAX)
    comment: Optional[str] = Field(None, alias="Comment")


class ReviewDraft(BaseModel):
    """
    Outgoing field set for review creation.

    Form fields beyond Name and Comment are kept as extras and sent under
    their own names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    boat_id: str = Field(..., alias="Boat", min_length=1)
    rating: int = Field(..., alias="Rating", ge=RATING_MIN, le=RATING_MAX)
    name: Optional[str] = Field(None, alias="Name")
    comment: Optional[str] = Field(None, alias="Comment")

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class Column:
    """Search results grid column."""
    label: str
    field_name: str
    editable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "fieldName": self.field_name,
            "editable": self.editable,
        }


VESSEL_COLUMNS: List[Column] = [
    Column("Name", "Name", editable=True),
    Column("Length", "Length", editable=True),
    Column("Price", "Price", editable=True),
    Column("Description", "Description", editable=True),
]


RecordLike = Union[BaseModel, Mapping[str, Any]]


def to_vessel(row: RecordLike) -> Vessel:
    """Coerce a backend row into a Vessel."""
    if isinstance(row, Vessel):
        return row
    if isinstance(row, BaseModel):
        row = row.model_dump(by_alias=True)
    return Vessel.model_validate(row)


def to_vessels(rows: Optional[Iterable[RecordLike]]) -> List[Vessel]:
    return [to_vessel(row) for row in rows or []]


def to_review(row: RecordLike) -> VesselReview:
    """Coerce a backend row into a VesselReview."""
    if isinstance(row, VesselReview):
        return row
    if isinstance(row, BaseModel):
        row = row.model_dump(by_alias=True)
    return VesselReview.model_validate(row)


def to_reviews(rows: Optional[Iterable[RecordLike]]) -> List[VesselReview]:
    return [to_review(row) for row in rows or []]
