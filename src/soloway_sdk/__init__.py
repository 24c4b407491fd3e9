"""Soloway DSP API client.

Client for the Soloway advertising platform supporting:
- Login with session token (X-Sid) caching
- Account lookup (whoami)
- Placement listing
- Aggregated and per-day placement statistics
"""

from .client import (
    AccountInfoNotFetchedError,
    SolowayAPIError,
    SolowayAuthError,
    SolowayClient,
    SolowayError,
)
from .config_schema import (
    SolowayConnectionConfig,
    SolowayEndpoints,
    load_connection_config_from_env,
    parse_connection_config,
)
from .schemas import (
    AccountInfo,
    ClientInfo,
    Placement,
    PlacementDayStat,
    PlacementsInfo,
    PlacementsStatByDay,
    UserInfo,
    format_date,
)
from .version import get_version

__version__ = get_version()

__all__ = [
    "AccountInfo",
    "AccountInfoNotFetchedError",
    "ClientInfo",
    "Placement",
    "PlacementDayStat",
    "PlacementsInfo",
    "PlacementsStatByDay",
    "SolowayAPIError",
    "SolowayAuthError",
    "SolowayClient",
    "SolowayConnectionConfig",
    "SolowayEndpoints",
    "SolowayError",
    "UserInfo",
    "__version__",
    "format_date",
    "load_connection_config_from_env",
    "parse_connection_config",
]
