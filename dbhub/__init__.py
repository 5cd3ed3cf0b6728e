"""
dbhub - Python client for the DBHub.io API.

Run SQL queries and statements against hosted SQLite databases and read
their columns, branches and commits.
"""

from dbhub.aio import AsyncDBHub
from dbhub.base import encode_sql
from dbhub.client import DBHub
from dbhub.endpoints import API_VERSION, get_endpoints
from dbhub.errors import ApiError, ConfigurationError, DBHubError, TransportError

__version__ = '0.1.0'
__license__ = 'MIT'

__all__ = [
    'DBHub',
    'AsyncDBHub',
    'API_VERSION',
    'get_endpoints',
    'encode_sql',
    'DBHubError',
    'ConfigurationError',
    'TransportError',
    'ApiError',
]
