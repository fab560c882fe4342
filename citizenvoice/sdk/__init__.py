"""Client SDK used by the CitizenVoice mobile app.

The SDK talks to the backend over HTTP and never raises for remote failures:
every call returns a :class:`~citizenvoice.sdk.results.Result` (or an
:class:`~citizenvoice.sdk.results.ApiResponse` for the AI functions).
"""
from .config import ClientSettings, ConfigurationError, load_client_settings
from .results import ApiResponse, Result, ServiceError
from .transport import ApiClient

__all__ = [
    "ApiClient",
    "ApiResponse",
    "ClientSettings",
    "ConfigurationError",
    "Result",
    "ServiceError",
    "load_client_settings",
]
