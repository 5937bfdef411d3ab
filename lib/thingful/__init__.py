"""
Thingful API Client Library

This module provides a Python async client library for the Thingful search
API (api.thingful.net): text + bounding box search over connected things,
cursor-based pagination, and flattening of the raw records.

Example usage:
    from lib.thingful import createClient

    client = createClient()
    bounds = {"minLat": 51.15, "maxLat": 51.30, "minLon": 0.1, "maxLon": 0.3}

    # First page
    await client.query("temperature", bounds)
    for thing in client.things:
        print(thing["title"], thing["data"])

    # Next page
    await client.next()

    # Collect at least 3 things across pages
    await client.nextPageUntilAmount(3, query="humidity", bounds=bounds, unit="%")
"""

from lib.thingful.client import ThingfulClient, createClient, isValidBounds
from lib.thingful.exceptions import (
    HttpError,
    InvalidBoundsError,
    InvalidQueryError,
    InvalidResponseShapeError,
    MissingArgsError,
    MissingBoundsError,
    MissingQueryError,
    ThingfulError,
    TransportError,
)
from lib.thingful.mapper import mapThing
from lib.thingful.models import (
    BoundingBox,
    ChannelData,
    Links,
    RawAttributes,
    RawChannel,
    RawThing,
    Thing,
    ThingsResponse,
)

__all__ = [
    "ThingfulClient",
    "createClient",
    "isValidBounds",
    "mapThing",
    "BoundingBox",
    "ChannelData",
    "Links",
    "RawAttributes",
    "RawChannel",
    "RawThing",
    "Thing",
    "ThingsResponse",
    "ThingfulError",
    "InvalidQueryError",
    "InvalidBoundsError",
    "MissingArgsError",
    "MissingQueryError",
    "MissingBoundsError",
    "TransportError",
    "HttpError",
    "InvalidResponseShapeError",
]
