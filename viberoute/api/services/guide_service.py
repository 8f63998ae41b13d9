# viberoute/api/services/guide_service.py
"""Service layer for city guide queries."""

import logging
from typing import Optional

from viberoute.api.dispatcher import dispatch, resolve_category
from viberoute.api.geocoding import attach_coordinates, geocoding_enabled
from viberoute.api.llm import GenerationError, get_model_client
from viberoute.api.models import QueryResult

logger = logging.getLogger(__name__)

MIN_HOURS = 1
MAX_HOURS = 24


def parse_hours(value, default: int) -> int:
    """Read an hours value coming from a form field or a JSON body.

    Whole numbers are accepted as int, integral float or digit string.
    A missing or blank value gives ``default``.

    Raises:
        ValueError: If the value is not a whole number
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise ValueError("Hours must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError("Hours must be an integer")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValueError("Hours must be an integer") from None
    raise ValueError("Hours must be an integer")


class GuideService:
    """Runs guide queries and turns model failures into failed results."""

    def __init__(self, client=None, geocode: Optional[bool] = None):
        self._client = client
        self._geocode = geocode

    @property
    def client(self):
        if self._client is None:
            self._client = get_model_client()
        return self._client

    @property
    def geocode(self) -> bool:
        if self._geocode is None:
            return geocoding_enabled()
        return self._geocode

    @staticmethod
    def validate(city: str, hours: int) -> str:
        """Validate query parameters and return the cleaned city name.

        Raises:
            ValueError: If invalid parameters
        """
        if not city or not isinstance(city, str) or not city.strip():
            raise ValueError("Invalid city parameter")

        GuideService.validate_hours(hours)
        return city.strip()

    @staticmethod
    def validate_hours(hours: int) -> int:
        if isinstance(hours, bool) or not isinstance(hours, int) or not MIN_HOURS <= hours <= MAX_HOURS:
            raise ValueError(f"Hours must be between {MIN_HOURS} and {MAX_HOURS}")
        return hours

    def run_query(self, tab: str, city: str, hours: int = 4) -> Optional[QueryResult]:
        """Run the query behind ``tab`` for ``city``.

        Args:
            tab: Tab identifier selected on the page
            city: City name
            hours: Itinerary length, ignored by other categories

        Returns:
            The normalized result, a failed result if the model call broke,
            or None when the tab does not query anything

        Raises:
            ValueError: If invalid parameters
        """
        city = self.validate(city, hours)

        category = resolve_category(tab)
        if category is None:
            logger.warning(f"Ignoring query for unknown tab '{tab}'")
            return None

        try:
            result = dispatch(tab, city, hours, self.client)
        except GenerationError as e:
            logger.error(f"Failed to generate {category.value} for {city}: {e}")
            return QueryResult.failed(category, "Il servizio di guida non è disponibile. Riprova più tardi.")
        except Exception as e:
            logger.exception(f"Unexpected error generating {category.value} for {city}: {e}")
            return QueryResult.failed(category, "Si è verificato un errore imprevisto.")

        if self.geocode and isinstance(result.data, list):
            try:
                attach_coordinates(result.data, category, city)
            except Exception as e:
                logger.warning(f"Geocoding skipped for {category.value} in {city}: {e}")

        logger.info(
            f"Generated {category.value} for {city}: "
            f"{len(result.data)} entries, {len(result.sources)} sources"
        )
        return result
