"""Soloway DSP API client.

Handles authentication and HTTP requests to the Soloway API.
Base URL: https://dsp.soloway.ru
Auth: session token from the X-Sid header of the login response, sent back
in the X-sid header of every authenticated request.
"""

import logging
from datetime import date, datetime
from typing import Any

import requests
from pydantic import TypeAdapter

from soloway_sdk.config_schema import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, SolowayConnectionConfig, SolowayEndpoints
from soloway_sdk.schemas import (
    AccountInfo,
    LoginRequest,
    PlacementsInfo,
    PlacementsStatByDay,
    PlacementsStatRequest,
    PlacementStatByDayRequest,
    UserInfo,
)

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Sid"

_json_string = TypeAdapter(str)


class SolowayError(Exception):
    """Base class for Soloway client errors."""


class SolowayAPIError(SolowayError):
    """Exception raised for Soloway API errors (non-200 status or error field)."""

    def __init__(self, message: str, status_code: int | None = None, response_body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class SolowayAuthError(SolowayError):
    """Raised when an authenticated call is made before login."""

    def __init__(self, message: str = "not authenticated: login first"):
        super().__init__(message)


class AccountInfoNotFetchedError(SolowayError):
    """Raised when a placement call is made before whoami."""

    def __init__(self, message: str = "account info not fetched: call whoami first"):
        super().__init__(message)


class SolowayClient:
    """Client for interacting with the Soloway DSP API.

    The client keeps the session token and the last fetched account info
    as plain attributes and is not safe for concurrent use; use one
    instance per logical session.

    Attributes:
        username: Account username
        password: Account password
        base_url: API base URL (default: https://dsp.soloway.ru)
        timeout: Default request timeout in seconds
        endpoints: API endpoint paths
        session: requests session used as transport
        account_info: Result of the last whoami call, None until then
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = DEFAULT_TIMEOUT

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        endpoints: SolowayEndpoints | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the Soloway client.

        Args:
            username: Account username
            password: Account password
            base_url: Optional custom API base URL
            timeout: Default request timeout in seconds
            endpoints: Optional custom endpoint paths
            session: Optional preconfigured requests session
        """
        self.username = username
        self.password = password
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.endpoints = endpoints or SolowayEndpoints()
        self.session = session or requests.Session()
        self.account_info: AccountInfo | None = None
        self._x_sid = ""

    @classmethod
    def from_config(cls, config: SolowayConnectionConfig, session: requests.Session | None = None) -> "SolowayClient":
        """Create a client from a validated connection config."""
        return cls(
            username=config.username,
            password=config.password,
            base_url=config.base_url,
            timeout=config.timeout,
            endpoints=config.endpoints,
            session=session,
        )

    @property
    def x_sid(self) -> str:
        """Session token, empty until login succeeds."""
        return self._x_sid

    @property
    def is_authenticated(self) -> bool:
        return bool(self._x_sid)

    def close(self) -> None:
        """Release the underlying transport."""
        self.session.close()

    def __enter__(self) -> "SolowayClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _build_headers(self, authenticated: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if authenticated and self._x_sid:
            headers["X-sid"] = self._x_sid
        return headers

    def _send(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        authenticated: bool = True,
        timeout: float | None = None,
    ) -> tuple[bytes, Any]:
        """Send a request and read the whole response.

        The response is closed before returning, whatever the outcome.

        Returns:
            Tuple of (raw response body, response headers)

        Raises:
            SolowayAPIError: If the status is not 200
            requests.RequestException: On transport failure
        """
        url = f"{self.base_url}{path}"
        logger.debug("Soloway %s %s", method, path)

        response = self.session.request(
            method=method,
            url=url,
            headers=self._build_headers(authenticated),
            json=data,
            timeout=timeout if timeout is not None else self.timeout,
        )
        try:
            content = response.content
            if response.status_code != 200:
                raise SolowayAPIError(
                    f"{response.status_code} {response.reason}",
                    status_code=response.status_code,
                    response_body=content,
                )
            return content, response.headers
        finally:
            try:
                response.close()
            except Exception as e:
                logger.warning("Failed to close Soloway response for %s %s: %s", method, path, e)

    def _request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> bytes:
        """Make an authenticated API request.

        Args:
            method: HTTP method (GET, POST)
            path: API endpoint path
            data: Request body data
            timeout: Optional per-call timeout in seconds

        Returns:
            Raw response body

        Raises:
            SolowayAuthError: If login has not succeeded yet
            SolowayAPIError: If the status is not 200
        """
        self._require_token()
        content, _ = self._send(method, path, data=data, authenticated=True, timeout=timeout)
        return content

    def _require_token(self) -> None:
        if not self._x_sid:
            raise SolowayAuthError()

    def _require_account_info(self) -> AccountInfo:
        if self.account_info is None:
            raise AccountInfoNotFetchedError()
        return self.account_info

    # =========================================================================
    # Authentication
    # =========================================================================

    def login(self, username: str | None = None, password: str | None = None, timeout: float | None = None) -> UserInfo:
        """Log in and store the session token.

        Args:
            username: Optional username replacing the stored one
            password: Optional password replacing the stored one
            timeout: Optional per-call timeout in seconds

        Returns:
            Decoded login response

        Raises:
            SolowayAPIError: On non-200 status, missing X-Sid header, or an
                error reported in the response body
        """
        if username is not None:
            self.username = username
        if password is not None:
            self.password = password

        body = LoginRequest(username=self.username, password=self.password)
        content, headers = self._send(
            "POST",
            self.endpoints.login,
            data=body.model_dump(),
            authenticated=False,
            timeout=timeout,
        )

        user_info = UserInfo.model_validate_json(content)
        if user_info.error:
            raise SolowayAPIError(user_info.error, status_code=200, response_body=content)

        x_sid = headers.get(SESSION_HEADER)
        if not x_sid:
            raise SolowayAPIError(f"Login response has no {SESSION_HEADER} header", status_code=200)

        self._x_sid = x_sid
        logger.info("Logged in to Soloway as %s", self.username)
        return user_info

    def whoami(self, timeout: float | None = None) -> AccountInfo:
        """Fetch the current account and store it on the client."""
        content = self._request("GET", self.endpoints.whoami, timeout=timeout)
        self.account_info = AccountInfo.model_validate_json(content)
        logger.info("Fetched Soloway account info for client %s", self.account_info.client.guid)
        return self.account_info

    # =========================================================================
    # Placement Operations
    # =========================================================================

    def get_placements(self, timeout: float | None = None) -> PlacementsInfo:
        """Get the placements of the account's client.

        Raises:
            AccountInfoNotFetchedError: If whoami has not been called
        """
        account_info = self._require_account_info()
        content = self._request(
            "GET",
            self.endpoints.client_placements(account_info.client.guid),
            timeout=timeout,
        )
        return PlacementsInfo.model_validate_json(content)

    def get_placements_stat(
        self,
        placement_ids: list[str],
        start_date: date | datetime,
        stop_date: date | datetime,
        with_archived: bool = False,
        timeout: float | None = None,
    ) -> None:
        """Request aggregated statistics for placements.

        Only success or failure is reported; the response body must be a
        JSON string and is discarded.

        Args:
            placement_ids: Placement GUIDs
            start_date: First day of the range
            stop_date: Last day of the range
            with_archived: Include archived placements
            timeout: Optional per-call timeout in seconds

        Raises:
            AccountInfoNotFetchedError: If whoami has not been called
        """
        self._require_account_info()
        body = PlacementsStatRequest.build(placement_ids, start_date, stop_date, with_archived)
        content = self._request("POST", self.endpoints.placements_stat, data=body.model_dump(), timeout=timeout)
        _json_string.validate_json(content)

    def get_placement_stat_by_day(
        self,
        placement_guid: str,
        start_date: date | datetime,
        stop_date: date | datetime,
        timeout: float | None = None,
    ) -> PlacementsStatByDay:
        """Get per-day statistics of a placement.

        Args:
            placement_guid: Placement GUID
            start_date: First day of the range
            stop_date: Last day of the range
            timeout: Optional per-call timeout in seconds

        Returns:
            Daily statistics rows
        """
        self._require_token()
        body = PlacementStatByDayRequest.build(start_date, stop_date)
        content = self._request(
            "POST",
            self.endpoints.placement_stat(placement_guid),
            data=body.model_dump(),
            timeout=timeout,
        )
        return PlacementsStatByDay.model_validate_json(content)
