"""Shared domain models for harbor-migrate."""

import enum
import threading
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urljoin, urlparse

from harbormigrate.constants import DEFAULT_CONNECT_TIMEOUT
from harbormigrate.errors import MigrationCancelled


@dataclass(frozen=True)
class RegistryEndpoint:
    """Base URL and credentials of one registry, fixed for the whole run."""

    url: str
    username: str
    password: str = field(repr=False)

    @property
    def host(self) -> str:
        parsed = urlparse(self.url)
        host = parsed.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        if parsed.port is not None:
            host = f"{host}:{parsed.port}"
        return host

    def api_url(self, path: str) -> str:
        return urljoin(self.url, path)


@dataclass(frozen=True)
class Project:
    name: str
    public: str


@dataclass(frozen=True)
class HttpResult:
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class MigrationOptions:
    """Validated options for one migration run."""

    source: RegistryEndpoint
    target: RegistryEndpoint
    verify_tls: bool = True
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    allow_insecure_http: bool = False
    docker_binary: str = "docker"


class PageOutcome(enum.Enum):
    """What a page handler tells the fetcher after consuming one page."""

    CONTINUE = "continue"
    DONE = "done"


class RunContext:
    """Cancellable execution scope shared by every call of one run.

    A derived context is cancelled when it or any of its ancestors is.
    """

    def __init__(self, parent: Optional["RunContext"] = None):
        self.parent = parent
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def derive(self) -> "RunContext":
        return RunContext(parent=self)

    def cancel(self, reason: str = "Run cancelled."):
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.parent is not None and self.parent.cancelled

    @property
    def reason(self) -> Optional[str]:
        if self._event.is_set():
            return self._reason
        if self.parent is not None:
            return self.parent.reason
        return None

    def raise_if_cancelled(self):
        if self.cancelled:
            raise MigrationCancelled(self.reason or "Run cancelled.")
