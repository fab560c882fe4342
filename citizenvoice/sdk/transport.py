"""HTTP transport and auth session handling for the client SDK."""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..schemas import SessionResponse, UserResponse
from .config import ClientSettings, load_client_settings
from .results import Result, ServiceError

logger = logging.getLogger(__name__)

AuthEvent = Literal["SIGNED_IN", "SIGNED_OUT", "USER_UPDATED"]
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class AuthSession:
    access_token: str
    user: UserResponse
    expires_in: int | None = None


AuthCallback = Callable[[AuthEvent, "AuthSession | None"], None]


def error_from_response(response: httpx.Response) -> ServiceError:
    """Turn a non-2xx response into a :class:`ServiceError` carrying the server's message."""

    code: str | None = None
    message: str | None = None
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        detail = payload.get("detail", payload.get("error", payload.get("message")))
        if isinstance(detail, dict):
            message = detail.get("message") if isinstance(detail.get("message"), str) else None
            code = detail.get("code") if isinstance(detail.get("code"), str) else None
        elif isinstance(detail, list):
            # Request validation errors arrive as a list of field problems.
            message = "; ".join(
                str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail
            )
        elif isinstance(detail, str):
            message = detail

    if not message:
        message = (response.text or "").strip() or f"Request failed with status {response.status_code}"
    return ServiceError(message, status_code=response.status_code, code=code)


def parse_model(model: type[M], payload: Any) -> Result[M | None]:
    try:
        return Result(model.model_validate(payload))
    except ValidationError as exc:
        logger.warning("Unexpected %s payload: %s", model.__name__, exc)
        return Result(None, ServiceError(f"Unexpected response from server ({model.__name__})"))


def parse_models(model: type[M], payload: Any) -> Result[list[M]]:
    if not isinstance(payload, list):
        return Result([], ServiceError(f"Unexpected response from server ({model.__name__} list)"))
    try:
        return Result([model.model_validate(item) for item in payload])
    except ValidationError as exc:
        logger.warning("Unexpected %s payload: %s", model.__name__, exc)
        return Result([], ServiceError(f"Unexpected response from server ({model.__name__})"))


class Subscription:
    """Handle returned by :meth:`AuthClient.on_auth_state_change`."""

    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Callable[[], None] | None = release

    @property
    def active(self) -> bool:
        return self._release is not None

    def unsubscribe(self) -> None:
        if self._release is not None:
            self._release()
            self._release = None


class ApiClient:
    """Wraps an ``httpx.Client`` and adds the project key and bearer token to each request."""

    def __init__(self, settings: ClientSettings | None = None, *, http_client: httpx.Client | None = None) -> None:
        self.settings = settings or load_client_settings()
        self._http = http_client or httpx.Client(
            base_url=self.settings.api_url.rstrip("/"),
            timeout=self.settings.request_timeout,
        )
        self._access_token: str | None = None
        self._session: AuthSession | None = None
        self.auth = AuthClient(self)

    @property
    def base_url(self) -> str:
        return str(self._http.base_url).rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.settings.anon_key:
            headers["apikey"] = self.settings.anon_key
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        context: str | None = None,
    ) -> Result[Any]:
        label = context or f"{method.upper()} {path} failed"
        try:
            response = self._http.request(
                method,
                path,
                json=json,
                params=params,
                files=files,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("%s: %s", label, reason)
            return Result(None, ServiceError(f"{label}: {reason}"))

        if response.is_error:
            return Result(None, error_from_response(response))
        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return Result(None)
        try:
            return Result(response.json())
        except ValueError:
            return Result(None, ServiceError(f"{label}: response was not valid JSON", status_code=response.status_code))

    def rpc(self, name: str, params: Mapping[str, Any] | None = None) -> Result[Any]:
        return self.request("POST", f"/rpc/{name}", json=dict(params or {}), context=f"RPC {name} failed")

    def close(self) -> None:
        self._http.close()


class AuthClient:
    """Password auth against ``/auth`` with a local session and change notifications."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._listeners: dict[int, AuthCallback] = {}
        self._ids = itertools.count()

    def get_session(self) -> AuthSession | None:
        return self._client._session

    def _emit(self, event: AuthEvent, session: AuthSession | None) -> None:
        for callback in list(self._listeners.values()):
            try:
                callback(event, session)
            except Exception:
                logger.exception("Auth state listener failed for %s", event)

    def _start_session(self, result: Result[Any]) -> Result[AuthSession | None]:
        if result.error is not None:
            return Result(None, result.error)
        parsed = parse_model(SessionResponse, result.data)
        if parsed.error is not None or parsed.data is None:
            return Result(None, parsed.error)
        session = AuthSession(
            access_token=parsed.data.access_token,
            user=parsed.data.user,
            expires_in=parsed.data.expires_in,
        )
        self._client._access_token = session.access_token
        self._client._session = session
        self._emit("SIGNED_IN", session)
        return Result(session)

    def sign_up(
        self,
        email: str,
        password: str,
        user_metadata: Mapping[str, Any] | None = None,
    ) -> Result[AuthSession | None]:
        payload = {"email": email, "password": password, "user_metadata": dict(user_metadata or {})}
        return self._start_session(self._client.request("POST", "/auth/signup", json=payload, context="Sign up failed"))

    def sign_in_with_password(self, email: str, password: str) -> Result[AuthSession | None]:
        payload = {"email": email, "password": password}
        return self._start_session(self._client.request("POST", "/auth/token", json=payload, context="Sign in failed"))

    def sign_out(self) -> Result[None]:
        """Drop the local session; tokens are stateless so nothing is revoked remotely."""

        had_session = self._client._session is not None
        self._client._access_token = None
        self._client._session = None
        if had_session:
            self._emit("SIGNED_OUT", None)
        return Result(None)

    def set_session(self, access_token: str) -> Result[UserResponse | None]:
        """Restore a session from a stored token after confirming it with the server."""

        self._client._access_token = access_token
        result = self._fetch_user()
        if result.error is not None or result.data is None:
            self._client._access_token = None
            self._client._session = None
            return result
        session = AuthSession(access_token=access_token, user=result.data)
        self._client._session = session
        self._emit("SIGNED_IN", session)
        return result

    def _fetch_user(self) -> Result[UserResponse | None]:
        result = self._client.request("GET", "/auth/user", context="Loading user failed")
        if result.error is not None:
            return Result(None, result.error)
        return parse_model(UserResponse, result.data)

    def get_user(self) -> Result[UserResponse | None]:
        """Return the signed-in user, or ``None`` data without an error when signed out."""

        if self._client._session is None:
            return Result(None)
        return self._fetch_user()

    def update_user(self, user_metadata: Mapping[str, Any]) -> Result[UserResponse | None]:
        current = self._client._session
        if current is None:
            return Result(None, ServiceError("Auth session missing", status_code=401))
        result = self._client.request(
            "PATCH",
            "/auth/user",
            json={"user_metadata": dict(user_metadata)},
            context="Updating user failed",
        )
        if result.error is not None:
            return Result(None, result.error)
        parsed = parse_model(UserResponse, result.data)
        if parsed.data is not None:
            session = AuthSession(access_token=current.access_token, user=parsed.data, expires_in=current.expires_in)
            self._client._session = session
            self._emit("USER_UPDATED", session)
        return parsed

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        key = next(self._ids)
        self._listeners[key] = callback
        return Subscription(lambda: self._listeners.pop(key, None))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


__all__ = [
    "AuthEvent",
    "AuthSession",
    "ApiClient",
    "AuthClient",
    "Subscription",
    "error_from_response",
    "parse_model",
    "parse_models",
]
