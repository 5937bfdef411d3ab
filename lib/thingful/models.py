"""
Thingful API Data Models

This module defines TypedDict data models for the Thingful /things endpoint
responses and for the flattened records the client exposes.
"""

from typing import Any, Dict, List, NotRequired, Optional, TypedDict


class BoundingBox(TypedDict, total=False):
    """Geographic search area, dood!

    All four fields are required for a request, but callers may hand in
    partial boxes, which the client rejects.
    """

    minLat: float  # Southern edge
    maxLat: float  # Northern edge
    minLon: float  # Western edge
    maxLon: float  # Eastern edge


# Raw API Response Models


class RawChannel(TypedDict, total=False):
    """Single data channel preview of a thing"""

    id: str  # Channel identifier
    value: Any  # Latest value (may be missing or falsy)
    unit: Optional[str]  # Unit of the value (e.g., "%", "C")
    recorded_at: str  # Timestamp of the latest value


class RawAttributes(TypedDict, total=False):
    """Attributes block of a thing"""

    title: str
    description: str
    datasource: str
    created_at: str
    updated_at: str
    indexed_at: str
    longitude: float
    latitude: float
    distance: float  # Distance from the search area centre
    channels: List[RawChannel]


class RawThing(TypedDict):
    """Single record from the /things data array"""

    id: str
    attributes: RawAttributes
    relationships: NotRequired[Dict[str, Any]]


class Links(TypedDict):
    """Pagination links, dood!"""

    self: str  # URL reproducing the current page
    next: NotRequired[str]  # URL of the next page, absent on the last page


class ThingsResponse(TypedDict):
    """Full /things response body"""

    links: Links
    data: List[RawThing]


# Flattened Models


class ChannelData(TypedDict):
    """Latest reading of one channel"""

    value: Any  # None when the API sent nothing (or a falsy value)
    unit: Optional[str]  # None when the API sent nothing (or an empty unit)
    recordedAt: Optional[str]


class Thing(TypedDict):
    """Flattened thing as exposed by ThingfulClient.things

    Built once from a RawThing by mapThing() and not modified afterwards.
    """

    id: str
    title: Optional[str]
    description: Optional[str]
    datasource: Optional[str]
    createdAt: Optional[str]
    updatedAt: Optional[str]
    indexedAt: Optional[str]
    longitude: Optional[float]
    latitude: Optional[float]
    distance: Optional[float]
    data: Dict[str, ChannelData]  # Channel id -> latest reading
    relationships: Optional[Dict[str, Any]]  # Passed through as is
