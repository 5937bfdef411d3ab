"""
Thingful API Constants

Endpoint, defaults and query parameter names used by the Thingful client.
"""

API_BASE_URL = "https://api.thingful.net/things"

DEFAULT_LIMIT = 10
DEFAULT_TIMEOUT = 30  # seconds

# Query parameters, in the order they are written into a fresh URL
PARAM_MIN_LONG = "geobound-minlong"
PARAM_MAX_LONG = "geobound-maxlong"
PARAM_MIN_LAT = "geobound-minlat"
PARAM_MAX_LAT = "geobound-maxlat"
PARAM_LIMIT = "limit"
PARAM_QUERY = "q"

# Bounding box keys
BOUNDS_KEYS = ("minLat", "maxLat", "minLon", "maxLon")

# Config section keys
CONFIG_BASE_URL = "base-url"
CONFIG_REQUEST_TIMEOUT = "request-timeout"
CONFIG_LIMIT = "limit"
