"""
Steam Market — HTTP Transport

The clients consume exactly one capability:

    issue(method, url, form=None, headers=None) -> HttpResponse

Building the request, carrying the session cookies and echoing the
`sessionid` token into form posts all live here. The transport never retries
and never interprets bodies; a network failure surfaces as TransportError.
Timeouts are the transport's concern (HTTP_TIMEOUT_SECONDS).
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

import httpx
import structlog
from pydantic import BaseModel, ConfigDict

from steam_market.config import settings
from steam_market.errors import HTTPStatusError, TransportError

logger = structlog.get_logger(__name__)

HTTP_OK = 200


class HttpResponse(BaseModel):
    """Raw body and status code of one exchange."""

    model_config = ConfigDict(frozen=True)

    body: bytes
    status_code: int


class Transport(Protocol):
    @property
    def base_url(self) -> str: ...

    def issue(
        self,
        method: str,
        url: str,
        form: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse: ...


class HttpxTransport:
    """
    Synchronous transport on httpx.Client.

    Usage:
        with HttpxTransport() as transport:
            client = MarketClient(transport)
            points = client.get_price_history(730, "AK-47 | Redline (Field-Tested)")
    """

    def __init__(
        self,
        base_url: str | None = None,
        session_id: str | None = None,
        login_secure: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self._base_url = (base_url or settings.STEAM_COMMUNITY_URL).rstrip("/")
        self._session_id = session_id if session_id is not None else settings.STEAM_SESSION_ID
        self._login_secure = login_secure if login_secure is not None else settings.STEAM_LOGIN_SECURE
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._user_agent = user_agent or settings.USER_AGENT
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        """Origin that relative request paths and Referer headers resolve against."""
        return self._base_url

    def __enter__(self) -> HttpxTransport:
        cookies: dict[str, str] = {}
        if self._session_id:
            cookies["sessionid"] = self._session_id
        if self._login_secure:
            cookies["steamLoginSecure"] = self._login_secure
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"User-Agent": self._user_agent},
            cookies=cookies,
            timeout=self._timeout,
            follow_redirects=True,
        )
        return self

    def __exit__(self, *args: Any) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def issue(
        self,
        method: str,
        url: str,
        form: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        assert self._client is not None, "Transport not opened. Use 'with'."

        data: dict[str, str] | None = None
        if form is not None:
            data = dict(form)
            if self._session_id:
                data["sessionid"] = self._session_id

        try:
            response = self._client.request(method, url, data=data, headers=headers)
        except httpx.RequestError as e:
            logger.error(
                "transport_request_error",
                method=method,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise TransportError(str(e)) from e

        logger.debug(
            "transport_response",
            method=method,
            url=url,
            status_code=response.status_code,
            bytes=len(response.content),
        )
        return HttpResponse(body=response.content, status_code=response.status_code)


def issue_ok(
    transport: Transport,
    method: str,
    url: str,
    form: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
) -> bytes:
    """Issue a request and return its body, raising HTTPStatusError unless 200."""
    response = transport.issue(method, url, form=form, headers=headers)
    if response.status_code != HTTP_OK:
        logger.warning("http_status_error", method=method, url=url, status_code=response.status_code)
        raise HTTPStatusError(response.status_code, url)
    return response.body
