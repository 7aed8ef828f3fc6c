"""Main Judge0 HTTP client."""

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import httpx

from .models import About, Language, Status, Submission, Worker
from ..config.config import Config
from ..errors import (
    InvalidHeaderName,
    InvalidHeaderValue,
    RequestFailed,
    SerializationFailed,
)

logger = logging.getLogger(__name__)

# RFC 7230 token characters
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
# Visible ASCII, space and tab; httpx sends header values as ASCII
_HEADER_VALUE_RE = re.compile(r"[\t\x20-\x7e]*")

Params = List[Tuple[str, str]]


def _header(name: str, value: str) -> Tuple[str, str]:
    if not _HEADER_NAME_RE.fullmatch(name):
        raise InvalidHeaderName(name)
    if not _HEADER_VALUE_RE.fullmatch(value):
        raise InvalidHeaderValue(value)
    return name, value


def build_headers(config: Config) -> Dict[str, str]:
    """
    Build the headers sent with every request.
    Raises InvalidHeaderName/InvalidHeaderValue for malformed settings.
    """
    headers = {"content-type": "application/json"}

    if config.authentication_token is not None:
        name, value = _header(
            config.authentication_header_name, config.authentication_token
        )
        headers[name] = value

    if config.authorization_token is not None:
        name, value = _header(
            config.authorization_header_name, config.authorization_token
        )
        headers[name] = value

    return headers


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _list_of(decode: Callable[[Any], Any]) -> Callable[[Any], list]:
    def decode_list(data: Any) -> list:
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [decode(item) for item in data]

    return decode_list


def _submissions_envelope(data: Any) -> List[Submission]:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return _list_of(Submission.from_dict)(data["submissions"])


def _any(data: Any) -> Any:
    return data


class Client:
    """
    Asynchronous client for a Judge0 instance.

    Paths are appended to base_url verbatim, so pass it without a
    trailing slash. The client is read-only after construction and can
    be shared between tasks; use with_config() to get a client bound to
    a different configuration.
    """

    def __init__(
        self,
        base_url: str,
        config: Optional[Config] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client."""
        self.base_url = base_url
        self.config = config if config is not None else Config()
        self._owns_http_client = http_client is None
        self.http_client = http_client if http_client is not None else httpx.AsyncClient()

    def with_config(self, config: Config) -> "Client":
        """Return a client with the same URL and transport but another config."""
        return Client(self.base_url, config, self.http_client)

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _url(self, path: str, params: Optional[Params]) -> str:
        url = f"{self.base_url}{path}"
        if params:
            url += "?" + "&".join(f"{key}={value}" for key, value in params)
        return url

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Params] = None,
        body: Any = None,
    ) -> httpx.Response:
        """Send one request; nothing goes out unless headers and body are valid."""
        headers = build_headers(self.config)

        content = None
        if body is not None:
            try:
                content = json.dumps(body, allow_nan=False)
            except (TypeError, ValueError) as e:
                raise SerializationFailed(e) from e

        url = self._url(path, params)
        logger.debug("%s %s", method, url)
        try:
            return await self.http_client.request(
                method, url, headers=headers, content=content
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Request %s %s failed: %s", method, url, e)
            raise RequestFailed(e) from e

    async def _fetch(
        self,
        method: str,
        path: str,
        decode: Callable[[Any], Any],
        params: Optional[Params] = None,
        body: Any = None,
    ) -> Any:
        """Send a request and decode its JSON body with decode."""
        response = await self._request(method, path, params, body)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(
                "Undecodable response from %s %s (HTTP %s)",
                method,
                path,
                response.status_code,
            )
            raise RequestFailed(e) from e

        try:
            return decode(data)
        except (TypeError, ValueError, KeyError) as e:
            logger.warning(
                "Unexpected response shape from %s %s (HTTP %s): %s",
                method,
                path,
                response.status_code,
                e,
            )
            # An error body in place of a typed result means the request failed
            if not response.is_success:
                raise RequestFailed(e) from e
            raise SerializationFailed(e) from e

    def _fields(self, fields: Optional[str]) -> str:
        return "*" if fields is None else fields

    async def authenticate(self) -> None:
        """Check the authentication token against the service."""
        await self._request("POST", "/authenticate")

    async def authorize(self) -> None:
        """Check the authorization token against the service."""
        await self._request("POST", "/authorize")

    async def list_languages(self) -> List[Language]:
        """Get active languages."""
        return await self._fetch("GET", "/languages", _list_of(Language.from_dict))

    async def list_all_languages(self) -> List[Language]:
        """Get active and archived languages."""
        return await self._fetch("GET", "/languages/all", _list_of(Language.from_dict))

    async def get_language(self, id: int) -> Language:
        """Get a single language by identifier."""
        return await self._fetch("GET", f"/languages/{id}", Language.from_dict)

    async def list_statuses(self) -> List[Status]:
        return await self._fetch("GET", "/statuses", _list_of(Status.from_dict))

    async def get_about(self) -> About:
        return await self._fetch("GET", "/about", About.from_dict)

    async def list_workers(self) -> List[Worker]:
        """Get the load of every execution queue."""
        return await self._fetch("GET", "/workers", _list_of(Worker.from_dict))

    async def get_config_info(self) -> Any:
        """Get the limits and defaults the instance is configured with."""
        return await self._fetch("GET", "/config_info", _any)

    async def get_statistics(self) -> Any:
        return await self._fetch("GET", "/statistics", _any)

    async def get_system_info(self) -> Any:
        return await self._fetch("GET", "/system_info", _any)

    async def create_submission(self, submission: Submission) -> Any:
        """
        Create a submission.

        Returns the decoded body as is: usually {"token": ...}, the full
        submission when wait is enabled, or the service's validation
        errors (HTTP 422 bodies are not raised).
        """
        params = [
            ("base64_encoded", _flag(self.config.base64_encoded)),
            ("wait", _flag(self.config.wait)),
        ]
        return await self._fetch(
            "POST", "/submissions", _any, params, submission.to_dict()
        )

    async def get_submission(self, token: str, fields: Optional[str] = None) -> Submission:
        """Get a submission, projected to fields ("*" for all of them)."""
        params = [
            ("base64_encoded", _flag(self.config.base64_encoded)),
            ("wait", _flag(self.config.wait)),
            ("fields", self._fields(fields)),
        ]
        return await self._fetch(
            "GET", f"/submissions/{token}", Submission.from_dict, params
        )

    async def delete_submission(
        self, token: str, fields: Optional[str] = None
    ) -> Submission:
        """Delete a submission and return its last snapshot."""
        params = [("fields", self._fields(fields))]
        return await self._fetch(
            "DELETE", f"/submissions/{token}", Submission.from_dict, params
        )

    async def list_submissions(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        fields: Optional[str] = None,
    ) -> List[Submission]:
        """Get one page of all submissions. Requires authorization."""
        params = [
            ("base64_encoded", _flag(self.config.base64_encoded)),
            ("fields", self._fields(fields)),
        ]
        if page is not None:
            params.append(("page", str(page)))
        if per_page is not None:
            params.append(("per_page", str(per_page)))
        return await self._fetch("GET", "/submissions", _submissions_envelope, params)

    async def batch_submit(self, submissions: Sequence[Submission]) -> List[Any]:
        """
        Create several submissions at once.
        Returns one token or error object per submission, in order.
        """
        params = [("base64_encoded", _flag(self.config.base64_encoded))]
        body = {"submissions": [submission.to_dict() for submission in submissions]}
        return await self._fetch(
            "POST", "/submissions/batch", _list_of(_any), params, body
        )

    async def get_batch_submissions(
        self, tokens: Sequence[str], fields: Optional[str] = None
    ) -> List[Submission]:
        """Get several submissions, in the order the service returns them."""
        params = [
            ("tokens", ",".join(tokens)),
            ("base64_encoded", _flag(self.config.base64_encoded)),
            ("fields", self._fields(fields)),
        ]
        return await self._fetch(
            "GET", "/submissions/batch", _submissions_envelope, params
        )
