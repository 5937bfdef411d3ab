"""
Common utilities for the Thingful client.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def jsonDumps(data: Any, compact: Optional[bool] = None, **kwargs) -> str:
    """Dump data to JSON with sorted keys, keeping non-ASCII text as is.

    Args:
        data: Data to serialize, unknown types are converted with str()
        compact: Use compact separators (default: compact unless ``indent`` is passed)
        **kwargs: Extra json.dumps() arguments

    Returns:
        JSON string
    """
    dumpKwargs = {
        "ensure_ascii": False,
        "default": str,
        "sort_keys": True,
    }

    if compact is None:
        compact = "indent" not in kwargs

    if compact:
        dumpKwargs["separators"] = (",", ":")
    dumpKwargs.update(kwargs)
    return json.dumps(data, **dumpKwargs)


def load_dotenv(path: str = ".env", populateEnv: bool = True) -> Dict[str, str]:
    """
    Simple dotenv file loader.
    Reads KEY=VALUE lines, skipping blanks and comments.

    Args:
        path: Path to .env file (default ".env"), missing file is not an error
        populateEnv: Whether to populate environment variables (default True)

    Returns:
        Dictionary of key-value pairs from .env file
    """
    ret: Dict[str, str] = {}
    envPath = Path(path)
    if not envPath.is_file():
        logger.debug(f"No dotenv file at {path}")
        return ret

    with open(envPath, "rt", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            ret[key.strip()] = value.strip().strip('"')

    if populateEnv:
        for k, v in ret.items():
            os.environ[k] = v
    return ret
