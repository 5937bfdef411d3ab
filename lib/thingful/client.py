"""
Thingful API Async Client

This module provides the ThingfulClient class, a stateful search session
against the Thingful /things endpoint with cursor-based pagination.
"""

import logging
import numbers
from collections.abc import Mapping
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .constants import (
    API_BASE_URL,
    BOUNDS_KEYS,
    CONFIG_BASE_URL,
    CONFIG_LIMIT,
    CONFIG_REQUEST_TIMEOUT,
    DEFAULT_LIMIT,
    DEFAULT_TIMEOUT,
    PARAM_LIMIT,
    PARAM_MAX_LAT,
    PARAM_MAX_LONG,
    PARAM_MIN_LAT,
    PARAM_MIN_LONG,
    PARAM_QUERY,
)
from .exceptions import (
    HttpError,
    InvalidBoundsError,
    InvalidQueryError,
    InvalidResponseShapeError,
    MissingArgsError,
    MissingBoundsError,
    MissingQueryError,
    TransportError,
)
from .mapper import mapThing
from .models import BoundingBox, Thing

logger = logging.getLogger(__name__)


def isValidBounds(bounds: Any) -> bool:
    """Check that bounds is a mapping with all four numeric edges, dood!"""
    if not isinstance(bounds, Mapping):
        return False
    for key in BOUNDS_KEYS:
        value = bounds.get(key)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return False
    return True


def formatCoordinate(value: numbers.Real) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ThingfulClient:
    """Async search session for the Thingful API, dood!

    Holds the current query, bounds, page limit, pagination cursors and the
    things of the last fetched page. Every operation mutates the session in
    place and returns it.

    Creates a new HTTP session for each request, so separate clients can
    run requests concurrently. Calls against a single client must be
    awaited one after another: overlapping calls race on the cursors and
    on ``things``.

    Example:
        >>> from lib.thingful import createClient
        >>>
        >>> client = createClient()
        >>> bounds = {"minLat": 51.15, "maxLat": 51.30, "minLon": 0.1, "maxLon": 0.3}
        >>> await client.query("temperature", bounds)
        >>> print(client.things, client.nextPage)
        >>>
        >>> # Next page
        >>> await client.next()
        >>>
        >>> # Keep paging until 3 things with channels are collected
        >>> await client.nextPageUntilAmount(3, query="humidity", bounds=bounds, unit="%")
    """

    def __init__(
        self,
        apiBaseUrl: str = API_BASE_URL,
        requestTimeout: int = DEFAULT_TIMEOUT,
        limit: int = DEFAULT_LIMIT,
    ):
        """Initialize an empty Thingful session, dood!

        Args:
            apiBaseUrl: /things endpoint URL (default: https://api.thingful.net/things)
            requestTimeout: HTTP request timeout in seconds (default: 30)
            limit: Page size for fresh queries (default: 10)
        """
        self.apiBaseUrl = apiBaseUrl
        self.requestTimeout = requestTimeout
        self.limit = limit

        self.things: List[Thing] = []
        self.currentQuery: Optional[str] = None
        self.bounds: Optional[BoundingBox] = None
        self.currentPage: Optional[str] = None
        self.nextPage: Optional[str] = None

    def buildUrl(self) -> str:
        """Build a fresh /things URL from the current query, bounds and limit.

        Integral coordinates are written without a fractional part, so
        ``51.0`` and ``51`` both become ``51``.

        Returns:
            Request URL with parameters in a fixed order

        Raises:
            MissingQueryError: If no query is set
            InvalidBoundsError: If bounds are unset or incomplete
        """
        if self.currentQuery is None:
            raise MissingQueryError()

        if not isValidBounds(self.bounds):
            raise InvalidBoundsError()

        bounds = self.bounds
        return (
            f"{self.apiBaseUrl}?"
            f"{PARAM_MIN_LONG}={formatCoordinate(bounds['minLon'])}"
            f"&{PARAM_MAX_LONG}={formatCoordinate(bounds['maxLon'])}"
            f"&{PARAM_MIN_LAT}={formatCoordinate(bounds['minLat'])}"
            f"&{PARAM_MAX_LAT}={formatCoordinate(bounds['maxLat'])}"
            f"&{PARAM_LIMIT}={self.limit}"
            f"&{PARAM_QUERY}={quote(self.currentQuery, safe='')}"
        )

    async def query(self, queryString: Any, bounds: Any) -> "ThingfulClient":
        """Set query and bounds, then run the search, dood!

        Args:
            queryString: Full text search query
            bounds: Bounding box with minLat, maxLat, minLon and maxLon

        Returns:
            This client, populated with the first page

        Raises:
            InvalidQueryError: If queryString is not a non-empty string
            InvalidBoundsError: If bounds are missing or incomplete
            ThingfulError: Anything execute() raises
        """
        if not isinstance(queryString, str) or not queryString:
            raise InvalidQueryError()

        if not isValidBounds(bounds):
            raise InvalidBoundsError()

        self.currentQuery = queryString
        self.bounds = bounds

        return await self.execute()

    async def execute(self, executeCurrentPage: bool = False) -> "ThingfulClient":
        """Fetch a page and store its things and cursors, dood!

        Args:
            executeCurrentPage: Re-fetch the ``currentPage`` URL as is instead
                of building a fresh URL. Falls back to a fresh URL when there
                is no current page.

        Returns:
            This client with ``things``, ``currentPage`` and ``nextPage`` updated

        Raises:
            MissingQueryError: No cursor used and no query set
            InvalidBoundsError: No cursor used and bounds are incomplete
            TransportError: Timeout or network failure
            HttpError: Non-200 response
            InvalidResponseShapeError: Body is not JSON or misses links/data
        """
        if executeCurrentPage and self.currentPage is not None:
            url = self.currentPage
        else:
            url = self.buildUrl()

        body = await self._makeRequest(url)

        links = body.get("links") if isinstance(body, dict) else None
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(links, dict) or "self" not in links:
            raise InvalidResponseShapeError("Response has no links.self")
        if not isinstance(data, list):
            raise InvalidResponseShapeError("Response has no data array")

        # Session is updated only once every record has mapped
        things = [mapThing(rawData) for rawData in data]

        self.currentPage = links["self"]
        self.nextPage = links.get("next") or None
        self.things = things
        logger.debug(f"Fetched {len(things)} things, next page: {self.nextPage}")

        return self

    async def next(self) -> "ThingfulClient":
        """Move to the next page, dood!

        Sets ``currentPage`` to ``nextPage`` and fetches it. There is no
        special handling of the last page: with no ``nextPage`` the request
        is built from the query like a plain execute(), so an unconfigured
        client raises MissingQueryError and a configured one gets its first
        page again.

        Returns:
            This client, populated with the next page
        """
        self.currentPage = self.nextPage
        return await self.execute(True)

    async def nextPageUntilAmount(
        self,
        amount: Optional[int] = None,
        *,
        query: Optional[str] = None,
        bounds: Optional[BoundingBox] = None,
        unit: Optional[str] = None,
        accumulated: Optional[List[Thing]] = None,
        filterByUnit: bool = False,
    ) -> "ThingfulClient":
        """Page one thing at a time until enough matching things are found, dood!

        Each iteration re-validates the arguments, writes ``query`` and
        ``bounds`` into the session (even when they are None), forces
        ``limit`` to 1 and calls next(). Matching things are appended to the
        accumulated list. The loop ends once ``amount`` things are collected
        or there is no next page; ``things`` then holds everything collected.

        A thing matches when it has at least one channel. With
        ``filterByUnit`` it must also have a channel whose unit equals ``unit``.

        Args:
            amount: Number of matching things wanted
            query: Search query written into the session each iteration
            bounds: Bounding box written into the session each iteration
            unit: Channel unit to look for when ``filterByUnit`` is set
            accumulated: Things collected so far (default: empty)
            filterByUnit: Only count things with a channel in ``unit``

        Returns:
            This client with ``things`` set to the accumulated things

        Raises:
            MissingArgsError: If amount is None
            MissingQueryError: If neither query nor the session has a query
            MissingBoundsError: If neither bounds nor the session has bounds
            ThingfulError: Anything next() raises
        """
        collected: List[Thing] = list(accumulated) if accumulated is not None else []

        while True:
            if amount is None:
                raise MissingArgsError()
            if query is None and self.currentQuery is None:
                raise MissingQueryError()
            if bounds is None and self.bounds is None:
                raise MissingBoundsError()

            self.currentQuery = query
            self.bounds = bounds
            self.limit = 1

            await self.next()

            matching = [thing for thing in self.things if self._thingMatches(thing, unit, filterByUnit)]
            collected.extend(matching)
            logger.debug(f"Collected {len(collected)}/{amount} things, next page: {self.nextPage}")

            if len(collected) >= amount or self.nextPage is None:
                self.things = collected
                return self

    @staticmethod
    def _thingMatches(thing: Thing, unit: Optional[str], filterByUnit: bool) -> bool:
        for channel in thing["data"].values():
            if not filterByUnit:
                return True
            if unit is not None and channel["unit"] == unit:
                return True
        return False

    async def _makeRequest(self, url: str) -> Dict[str, Any]:
        """Make HTTP GET request to Thingful API, dood!

        Single point for all HTTP requests. Creates new session per request
        so independent clients never share connections. No retries.

        Args:
            url: Full request URL

        Returns:
            Parsed JSON response

        Raises:
            TransportError: On timeout or network failure
            HttpError: On any non-200 status
            InvalidResponseShapeError: If the body is not valid UTF-8 JSON
        """
        logger.debug(f"Making request to {url}")

        try:
            async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                response = await session.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"Request timeout: {url}")
            raise TransportError(f"Request timeout: {type(e).__name__}#{e}", cause=e)
        except httpx.RequestError as e:
            logger.warning(f"Network error: {type(e).__name__}#{e}")
            raise TransportError(f"Network error: {type(e).__name__}#{e}", cause=e)

        if response.status_code != 200:
            logger.warning(f"API request failed: {response.status_code}")
            raise HttpError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError both land here
            logger.warning(f"Failed to parse JSON response: {e}")
            raise InvalidResponseShapeError(f"Failed to parse JSON response: {e}")

        logger.debug(f"API request successful: {response.status_code}")
        return data


def createClient(config: Optional[Dict[str, Any]] = None) -> ThingfulClient:
    """Create a new, empty ThingfulClient, dood!

    Args:
        config: Optional ``[thingful]`` config section with ``base-url``,
            ``request-timeout`` and ``limit`` keys

    Returns:
        A fresh client with no query, bounds or cursors
    """
    config = config or {}
    return ThingfulClient(
        apiBaseUrl=config.get(CONFIG_BASE_URL, API_BASE_URL),
        requestTimeout=int(config.get(CONFIG_REQUEST_TIMEOUT, DEFAULT_TIMEOUT)),
        limit=int(config.get(CONFIG_LIMIT, DEFAULT_LIMIT)),
    )
