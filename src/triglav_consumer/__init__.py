"""triglav_consumer package exports."""

from .api import TriglavApi
from .client import MAX_AUTH_RETRIES, TriglavClient
from .config import ClientConfig, create_client_from_env, load_env_config
from .errors import (
    ApiError,
    TriglavAuthenticationError,
    TriglavClientError,
    TriglavConnectionError,
)
from .logging import LogfmtFormatter, setup_logging
from .models import (
    Credential,
    JobMessageEachResponse,
    JobRequest,
    JobResponse,
    LastJobMessageIdResponse,
    ResourceRequest,
    ResourceResponse,
    TokenResponse,
)
from .protocols import JobClient
from .stub import StubClient
from .token_store import TokenAuth, TokenStore

__all__ = [
    # Clients
    "TriglavClient",
    "StubClient",
    "JobClient",
    "TriglavApi",
    "MAX_AUTH_RETRIES",
    # Token handling
    "TokenStore",
    "TokenAuth",
    # Exceptions
    "TriglavClientError",
    "TriglavConnectionError",
    "TriglavAuthenticationError",
    "ApiError",
    # Models
    "Credential",
    "TokenResponse",
    "ResourceRequest",
    "ResourceResponse",
    "JobRequest",
    "JobResponse",
    "JobMessageEachResponse",
    "LastJobMessageIdResponse",
    # Config / logging helpers
    "ClientConfig",
    "load_env_config",
    "create_client_from_env",
    "setup_logging",
    "LogfmtFormatter",
]
