"""
Field path helpers - nested lookup and default filling.

A field path is a dot-delimited string such as ``"address.zip"``. Each
segment names a key in a mapping; list indices are not supported.

PATH -> VALUE examples:
- "name"          -> data["name"]
- "address.zip"   -> data["address"]["zip"]
- "a.b.c" on {"a": {}} -> None (missing segment)
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Returned for any path that cannot be followed to the end.
MISSING = None


def resolve_path(path: Optional[str], data: Mapping[str, Any]) -> Any:
    """
    Resolve a dot-delimited path against nested mappings.

    Args:
        path: Field path (e.g. "address.zip")
        data: Record to walk

    Returns:
        The value at the path, or MISSING if any segment is absent or
        the value reached before the last segment is not a mapping
    """
    if path is None:
        return MISSING

    current = data
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return MISSING
        current = current[key]
    return current


def fill_defaults(data: Dict[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Insert each default whose key is absent from the top level of data.

    Keys are taken literally - "a.b" sets a top-level key named "a.b".
    Present keys are never overwritten, so repeated calls are idempotent.

    Args:
        data: Working record, mutated in place
        defaults: Mapping of top-level key to default value

    Returns:
        The same data dict, for chaining
    """
    for key, default in defaults.items():
        if key not in data:
            logger.debug(f"Filling default for '{key}'")
            data[key] = default
    return data
