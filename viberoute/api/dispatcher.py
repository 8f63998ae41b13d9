"""Map tab identifiers to prompt/schema pairs and run the model call.

The dispatch table is keyed by ``Category``. Tab identifiers coming from
the page are resolved to a category first; the overview detail tabs all
share the overview query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from viberoute.api import prompts
from viberoute.api.models import OVERVIEW_TABS, Category, PreparedQuery, QueryResult
from viberoute.api.normalizer import normalize
from viberoute.api.schemas import get_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryHandler:
    """Prompt builder plus schema for one category."""

    build_prompt: Callable[..., str]
    takes_hours: bool = False

    def prepare(self, category: Category, city: str, hours: int) -> PreparedQuery:
        prompt = self.build_prompt(city, hours) if self.takes_hours else self.build_prompt(city)
        return PreparedQuery(category=category, prompt=prompt, schema=get_schema(category))


QUERY_HANDLERS: Dict[Category, QueryHandler] = {
    Category.ITINERARY: QueryHandler(prompts.build_itinerary_prompt, takes_hours=True),
    Category.SAFETY: QueryHandler(prompts.build_safety_prompt),
    Category.BITES: QueryHandler(prompts.build_bites_prompt),
    Category.SOCIAL: QueryHandler(prompts.build_social_prompt),
    Category.OVERVIEW: QueryHandler(prompts.build_overview_prompt),
}


def resolve_category(tab: str) -> Optional[Category]:
    """Return the category a tab identifier queries, or ``None``."""
    if tab in OVERVIEW_TABS:
        return Category.OVERVIEW
    try:
        return Category(tab)
    except ValueError:
        return None


def build_query(tab: str, city: str, hours: int = 4) -> Optional[PreparedQuery]:
    """Prepare the prompt and schema for ``tab`` without calling the model."""
    category = resolve_category(tab)
    if category is None:
        return None
    return QUERY_HANDLERS[category].prepare(category, city, hours)


def dispatch(tab: str, city: str, hours: int, client: Any) -> Optional[QueryResult]:
    """Run the query for ``tab`` against ``client``.

    Unknown tabs (including the navigation-only ``menu``) return ``None``.
    ``GenerationError`` from the client is not caught here.
    """
    query = build_query(tab, city, hours)
    if query is None:
        logger.warning("No query registered for tab '%s'", tab)
        return None

    logger.info(f"Dispatching {query.category.value} query for {city}")
    reply = client.generate(query.prompt, query.schema)
    result = normalize(reply, query.category)
    logger.debug(
        "Normalized %s reply: %d sources", query.category.value, len(result.sources)
    )
    return result
