"""
Thingful Result Mapper

Turns raw /things records into flat Thing dictionaries.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict

from .exceptions import InvalidResponseShapeError
from .models import ChannelData, Thing

logger = logging.getLogger(__name__)


def mapThing(rawData: Mapping[str, Any]) -> Thing:
    """Flatten a raw thing record, dood!

    Args:
        rawData: One element of the response's data array

    Returns:
        Thing with attributes lifted to the top level and channels
        collected into the ``data`` mapping keyed by channel id

    Raises:
        InvalidResponseShapeError: If the record has no attributes block or
            its channels are not an array of objects
    """
    if not isinstance(rawData, Mapping):
        raise InvalidResponseShapeError(f"Thing record is not an object: {rawData!r}")

    attributes = rawData.get("attributes")
    if not isinstance(attributes, Mapping):
        raise InvalidResponseShapeError(f"Thing {rawData.get('id')} has no attributes")

    channels = attributes.get("channels") or []
    if not isinstance(channels, list):
        raise InvalidResponseShapeError(f"Thing {rawData.get('id')} channels is not an array")

    data: Dict[str, ChannelData] = {}
    for channel in channels:
        if not isinstance(channel, Mapping):
            raise InvalidResponseShapeError(f"Thing {rawData.get('id')} has a malformed channel: {channel!r}")
        # Falsy values collapse to None, so a 0 reading reads as "no value"
        data[channel.get("id")] = {
            "value": channel.get("value") or None,
            "unit": channel.get("unit") or None,
            "recordedAt": channel.get("recorded_at"),
        }

    return {
        "id": rawData.get("id"),
        "title": attributes.get("title"),
        "description": attributes.get("description"),
        "datasource": attributes.get("datasource"),
        "createdAt": attributes.get("created_at"),
        "updatedAt": attributes.get("updated_at"),
        "indexedAt": attributes.get("indexed_at"),
        "longitude": attributes.get("longitude"),
        "latitude": attributes.get("latitude"),
        "distance": attributes.get("distance"),
        "data": data,
        "relationships": rawData.get("relationships"),
    }
