# viberoute/api/schemas.py
"""Structured-output schemas handed to the model, one per category.

Schemas use the Gemini dialect (upper-case ``type`` names). Every property
is listed in ``required``: the page renders all of them.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from viberoute.api.models import Category

STRING = {"type": "STRING"}
NUMBER = {"type": "NUMBER"}


def _record(fields: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": fields,
        "required": list(fields),
    }


def _strings(*names: str) -> Dict[str, Dict[str, Any]]:
    return {name: dict(STRING) for name in names}


def _list_of(record: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": record}


ITINERARY_SCHEMA = _list_of(_record(_strings(
    "time", "activity", "location", "description",
    "historicalContext", "costEstimate", "proTip", "bestPhotoSpot",
)))

SAFETY_SCHEMA = _list_of(_record({
    "neighborhood": dict(STRING),
    "rating": dict(NUMBER),
    **_strings("tip", "safeZones", "cautionAreas", "commonScams", "nightSafety", "emergencyInfo"),
}))

BITES_SCHEMA = _list_of(_record(_strings(
    "name", "price", "mustTry", "dishHistory", "reason",
    "address", "mapsUrl", "bestTime", "type",
)))

SOCIAL_SCHEMA = _list_of(_record(_strings(
    "activity", "vibe", "description", "totalCost", "groupSize",
    "meetingPoint", "duration", "included", "whatToBring",
)))

OVERVIEW_SCHEMA = _record({
    "description": dict(STRING),
    "typicalFoods": _list_of(_record({
        **_strings("name", "description", "history", "priceRange"),
        "recommendedPlaces": _list_of(_record(_strings("placeName", "mapsUrl"))),
    })),
    "monuments": _list_of(_record(_strings(
        "name", "description", "whyVisit", "transport", "price",
    ))),
    **_strings("transportTips", "localEtiquette", "bestTime"),
    "hiddenGems": _list_of(_record(_strings("name", "description"))),
})

SCHEMAS = {
    Category.ITINERARY: ITINERARY_SCHEMA,
    Category.SAFETY: SAFETY_SCHEMA,
    Category.BITES: BITES_SCHEMA,
    Category.SOCIAL: SOCIAL_SCHEMA,
    Category.OVERVIEW: OVERVIEW_SCHEMA,
}


def get_schema(category: Category) -> Dict[str, Any]:
    """Return a copy of the schema for ``category`` so callers may mutate it."""
    return copy.deepcopy(SCHEMAS[category])


def record_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Return the per-record object schema (the item schema for arrays)."""
    return schema["items"] if schema["type"] == "ARRAY" else schema


def required_fields(schema: Dict[str, Any]) -> List[str]:
    return list(record_schema(schema).get("required", []))


def to_json_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a Gemini-dialect schema to standard JSON Schema.

    Objects are closed (``additionalProperties: false``) as strict structured
    output requires.
    """
    converted: Dict[str, Any] = {"type": schema["type"].lower()}
    if "properties" in schema:
        converted["properties"] = {
            name: to_json_schema(prop) for name, prop in schema["properties"].items()
        }
        converted["required"] = list(schema.get("required", []))
        converted["additionalProperties"] = False
    if "items" in schema:
        converted["items"] = to_json_schema(schema["items"])
    return converted
