# viberoute/api/normalizer.py
"""Turn raw model replies into ``{data, sources}`` results."""

from __future__ import annotations

import json
import logging
from typing import Any, List

from viberoute.api.models import Category, QueryData, QueryResult, SourceCitation

logger = logging.getLogger(__name__)


def _get(obj: Any, name: str):
    """Read ``name`` from a dict or an SDK object."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def parse_data(text: str | None, category: Category) -> QueryData:
    """Parse the reply text as JSON, falling back to the category's empty collection.

    Missing, empty or unparseable text never raises. A JSON value of the
    wrong kind (an object where a list is expected, or the reverse) is also
    replaced, so the page always gets the shape it renders.
    """
    if not text:
        return category.empty_data()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Unparseable %s reply, using empty result: %s", category.value, exc)
        return category.empty_data()

    expected = list if category.is_list else dict
    if not isinstance(data, expected):
        logger.warning(
            "Expected %s for %s, got %s; using empty result",
            expected.__name__, category.value, type(data).__name__,
        )
        return category.empty_data()
    return data


def extract_sources(grounding_metadata: Any) -> List[SourceCitation]:
    """Collect web citations from grounding metadata, in order.

    Accepts either SDK objects or plain dicts. Chunks without web metadata
    (for example retrieved-context chunks) are skipped.
    """
    sources: List[SourceCitation] = []
    for chunk in _get(grounding_metadata, "grounding_chunks") or []:
        web = _get(chunk, "web")
        if web is None:
            continue
        sources.append(SourceCitation(uri=_get(web, "uri") or "", title=_get(web, "title")))
    return sources


def normalize(reply, category: Category) -> QueryResult:
    """Build the ``QueryResult`` for a ``ModelReply``."""
    return QueryResult(
        category=category,
        data=parse_data(reply.text, category),
        sources=extract_sources(reply.grounding_metadata),
    )
