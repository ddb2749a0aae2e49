"""Page-by-page walking of registry list endpoints."""

import json
from typing import Any, Callable, Dict, List, Optional

from harbormigrate.constants import PAGE_SIZE
from harbormigrate.errors import DecodeError
from harbormigrate.models import PageOutcome, RegistryEndpoint, RunContext

PageHandler = Callable[[bytes], PageOutcome]


def decode_page(body: bytes, path: str) -> List[Any]:
    """Decode one page body into a list. An empty body decodes to an empty page."""
    if not body or not body.strip():
        return []

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"Invalid JSON page from {path}: {exc}") from exc

    if not isinstance(payload, list):
        snippet = body[:200].decode("utf-8", errors="replace")
        raise DecodeError(f"Expected a JSON array from {path}, got: {snippet}")

    return payload


class PaginatedFetcher:
    """Walks a ``page``/``page_size`` list endpoint until the handler reports the end.

    The fetcher never looks at page contents. Each raw body goes to the handler,
    which returns ``PageOutcome.DONE`` once it sees an empty page.
    """

    def __init__(self, transport, logger, page_size: int = PAGE_SIZE):
        self.transport = transport
        self.logger = logger
        self.page_size = page_size

    def fetch_pages(
        self,
        context: RunContext,
        endpoint: RegistryEndpoint,
        path: str,
        handler: PageHandler,
        params: Optional[Dict[str, Any]] = None,
    ) -> int:
        page = 1
        while True:
            context.raise_if_cancelled()

            query = dict(params or {})
            query["page"] = page
            query["page_size"] = self.page_size

            result = self.transport.get(context, endpoint, path, params=query)
            outcome = handler(result.body)
            if outcome is PageOutcome.DONE:
                self.logger.debug("Reached end of %s after %s page(s).", path, page)
                return page
            if outcome is not PageOutcome.CONTINUE:
                raise TypeError(f"Page handler returned {outcome!r}, expected a PageOutcome.")

            page += 1
