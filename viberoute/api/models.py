"""Shared data structures for city guide queries.

Record shapes are ``TypedDict`` definitions so parsed model output can be
passed around as plain JSON-compatible dicts while still documenting the
exact fields each category carries. They mirror ``schemas.py`` field for
field; ``tests/test_schemas.py`` keeps the two in sync.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict, Union


class Category(str, Enum):
    """Query types that produce a model call."""

    ITINERARY = "itinerary"
    SAFETY = "safety"
    BITES = "bites"
    SOCIAL = "social"
    OVERVIEW = "overview"

    @property
    def is_list(self) -> bool:
        return self is not Category.OVERVIEW

    def empty_data(self):
        """Return the empty collection used when the model gives nothing back."""
        return [] if self.is_list else {}


# Tab identifiers that only navigate and never query the model.
NAVIGATION_TABS = ("explore", "menu")

# Detail tabs from the page that all render parts of the city overview.
OVERVIEW_TABS = ("overview-detail", "food-detail", "monuments-detail")


class ItineraryStop(TypedDict):
    time: str
    activity: str
    location: str
    description: str
    historicalContext: str
    costEstimate: str
    proTip: str
    bestPhotoSpot: str


class NeighborhoodSafety(TypedDict):
    neighborhood: str
    rating: float
    tip: str
    safeZones: str
    cautionAreas: str
    commonScams: str
    nightSafety: str
    emergencyInfo: str


class Eatery(TypedDict):
    name: str
    price: str
    mustTry: str
    dishHistory: str
    reason: str
    address: str
    mapsUrl: str
    bestTime: str
    type: str


class SocialActivity(TypedDict):
    activity: str
    vibe: str
    description: str
    totalCost: str
    groupSize: str
    meetingPoint: str
    duration: str
    included: str
    whatToBring: str


class RecommendedPlace(TypedDict):
    placeName: str
    mapsUrl: str


class Dish(TypedDict):
    name: str
    description: str
    history: str
    priceRange: str
    recommendedPlaces: List[RecommendedPlace]


class Monument(TypedDict):
    name: str
    description: str
    whyVisit: str
    transport: str
    price: str


class HiddenGem(TypedDict):
    name: str
    description: str


class CityOverview(TypedDict):
    description: str
    typicalFoods: List[Dish]
    monuments: List[Monument]
    transportTips: str
    localEtiquette: str
    bestTime: str
    hiddenGems: List[HiddenGem]


RECORD_TYPES = {
    Category.ITINERARY: ItineraryStop,
    Category.SAFETY: NeighborhoodSafety,
    Category.BITES: Eatery,
    Category.SOCIAL: SocialActivity,
    Category.OVERVIEW: CityOverview,
}

QueryData = Union[List[Dict[str, Any]], Dict[str, Any]]


@dataclass
class SourceCitation:
    """A web page the model grounded its answer on."""

    uri: str
    title: Optional[str] = None

    def to_dict(self) -> dict:
        return {"uri": self.uri, "title": self.title}


@dataclass
class PreparedQuery:
    """Prompt and schema ready to be sent to the model."""

    category: Category
    prompt: str
    schema: Dict[str, Any]


@dataclass
class QueryResult:
    """Normalized answer for one query: ``{data, sources}`` plus an error slot.

    ``error`` is ``None`` when the model call succeeded, so an empty answer
    and a failed call can be told apart.
    """

    category: Category
    data: QueryData
    sources: List[SourceCitation] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, category: Category, error: str) -> "QueryResult":
        return cls(category=category, data=category.empty_data(), sources=[], error=error)

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "data": self.data,
            "sources": [s.to_dict() for s in self.sources],
            "error": self.error,
        }
