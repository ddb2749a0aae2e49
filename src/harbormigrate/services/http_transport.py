"""HTTP transport shared by every registry API call."""

from typing import Any, Dict, Optional

import requests

from harbormigrate.constants import CONTENT_TYPE, DEFAULT_CONNECT_TIMEOUT, USER_AGENT
from harbormigrate.errors import MigrationCancelled, TransportError
from harbormigrate.models import HttpResult, RegistryEndpoint, RunContext


class HttpTransport:
    """Issues authenticated registry API requests with a fixed header and timeout policy.

    Built once per run and injected into the services that talk to a registry,
    so tests can pass a fake session instead of a real ``requests.Session``.
    """

    DEFAULT_HEADERS = {
        "User-Agent": USER_AGENT,
        "Content-Type": CONTENT_TYPE,
        "Connection": "close",
    }

    def __init__(
        self,
        logger,
        session=None,
        verify_tls: bool = True,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: Optional[float] = None,
    ):
        self.logger = logger
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(self.DEFAULT_HEADERS)
        self.verify_tls = verify_tls
        self.timeout = (connect_timeout, read_timeout)

    def get(
        self,
        context: RunContext,
        endpoint: RegistryEndpoint,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> HttpResult:
        return self._request(context, "GET", endpoint, path, params=params)

    def post(
        self,
        context: RunContext,
        endpoint: RegistryEndpoint,
        path: str,
        body: bytes,
    ) -> HttpResult:
        return self._request(context, "POST", endpoint, path, data=body)

    def close(self):
        self.session.close()

    def _request(
        self,
        context: RunContext,
        method: str,
        endpoint: RegistryEndpoint,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[bytes] = None,
    ) -> HttpResult:
        context.raise_if_cancelled()

        url = endpoint.api_url(path)
        self.logger.debug("%s %s params=%s", method, url, params or {})

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=data,
                auth=(endpoint.username, endpoint.password),
                timeout=self.timeout,
                verify=self.verify_tls,
            )
        except requests.RequestException as exc:
            if context.cancelled:
                raise MigrationCancelled(f"{method} {url} aborted: run cancelled.") from exc
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        try:
            body = response.content
        except requests.RequestException as exc:
            raise TransportError(f"Reading response of {method} {url} failed: {exc}") from exc
        finally:
            response.close()

        self.logger.debug("%s %s -> %s (%s bytes)", method, url, response.status_code, len(body))
        return HttpResult(status_code=response.status_code, body=body)
