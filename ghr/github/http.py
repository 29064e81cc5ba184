"""HTTP client abstraction for the GitHub REST API.

This module provides:
- HttpClient: Protocol for JSON requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Canned responses keyed by method and URL
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

from ghr.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpMethod",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]

HttpMethod = Literal["GET", "POST", "PATCH", "DELETE"]


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Decoded response.

    Attributes:
        status: HTTP status code
        data: Parsed JSON body, or None for empty bodies (204)
    """

    status: int
    data: object = None


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        method: Request method
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    method: str
    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.method} {self.url})"
        return f"{self.message} ({self.method} {self.url})"


@runtime_checkable
class HttpClient(Protocol):
    def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        json_body: dict[str, object] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Send a request and decode the JSON response.

        Returns:
            Ok with HttpResponse for 2xx, or Err with HttpError
        """
        ...


def _error_message(raw: bytes, fallback: str) -> str:
    # GitHub error bodies look like {"message": "Not Found", "documentation_url": ...}
    try:
        obj: object = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return fallback
    if isinstance(obj, dict):
        message = obj.get("message")
        if isinstance(message, str) and message:
            return message
    return fallback


class RealHttpClient:
    """Authenticated GitHub client using urllib.

    Handles:
    - HTTPS with system certificates
    - Bearer token and GitHub media type headers
    - JSON request and response bodies
    - Timeout handling
    """

    def __init__(
        self,
        token: str,
        *,
        timeout: float = 30.0,
        user_agent: str = "ghr/0.1.0",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self, *, has_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        json_body: dict[str, object] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        data = None if json_body is None else json.dumps(json_body).encode("utf-8")
        try:
            req = urllib.request.Request(
                url,
                data=data,
                method=method,
                headers=self._headers(has_body=data is not None),
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                status = int(response.status)
                raw = response.read()
        except urllib.error.HTTPError as e:
            body = e.read() if e.fp is not None else b""
            return Err(
                HttpError(
                    method=method,
                    url=url,
                    status=e.code,
                    message=_error_message(body, str(e.reason)),
                )
            )
        except urllib.error.URLError as e:
            return Err(HttpError(method=method, url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(method=method, url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(method=method, url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(method=method, url=url, status=0, message=str(e)))

        if not raw.strip():
            return Ok(HttpResponse(status=status))

        try:
            obj: object = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(
                HttpError(method=method, url=url, status=0, message=f"JSON parse error: {e}")
            )
        return Ok(HttpResponse(status=status, data=obj))


def _empty_calls() -> list[tuple[str, str, dict[str, object] | None]]:
    return []


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set("GET", "https://api.github.com/repos/o/r/releases/tags/v1", {"id": 1})
        result = client.request("GET", "https://api.github.com/repos/o/r/releases/tags/v1")
        assert isinstance(result, Ok)

    Unknown routes answer 404, like the real API does for missing resources.
    """

    responses: dict[tuple[str, str], HttpResponse | HttpError] = field(default_factory=dict)
    calls: list[tuple[str, str, dict[str, object] | None]] = field(default_factory=_empty_calls)

    def set(
        self,
        method: HttpMethod,
        url: str,
        data: object = None,
        *,
        status: int = 200,
    ) -> None:
        self.responses[(method, url)] = HttpResponse(status=status, data=data)

    def set_error(self, method: HttpMethod, url: str, *, status: int, message: str) -> None:
        self.responses[(method, url)] = HttpError(
            method=method, url=url, status=status, message=message
        )

    def request(
        self,
        method: HttpMethod,
        url: str,
        *,
        json_body: dict[str, object] | None = None,
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append((method, url, json_body))

        response = self.responses.get((method, url))
        if response is None:
            return Err(HttpError(method=method, url=url, status=404, message="Not Found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
