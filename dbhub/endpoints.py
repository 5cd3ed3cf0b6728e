"""
Endpoint table for the DBHub.io API.

Maps each operation name to its versioned URL path. Entries are only ever
added; an existing path never changes for a given version.
"""

from types import MappingProxyType
from typing import Mapping


API_VERSION = 1

OPERATIONS = (
    "branches",
    "columns",
    "commits",
    "databases",
    "delete",
    "execute",
    "query",
)


def get_endpoints(version: int = API_VERSION) -> Mapping[str, str]:
    """
    Build the read-only endpoint table for an API version.

    Args:
        version: API version number used as the path prefix.

    Returns:
        Mapping of operation name -> path, e.g. 'query' -> '/v1/query'.
    """
    return MappingProxyType({name: f"/v{version}/{name}" for name in OPERATIONS})


def resolve(endpoints: Mapping[str, str], operation: str) -> str:
    """Return the path for an operation, or raise ValueError if it is unknown."""
    try:
        return endpoints[operation]
    except KeyError:
        raise ValueError(f"Unknown DBHub operation: {operation!r}") from None
