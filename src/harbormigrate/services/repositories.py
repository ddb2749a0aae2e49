"""Repository discovery on a registry."""

from typing import List

from harbormigrate.constants import REPOSITORIES_PATH
from harbormigrate.errors import DecodeError
from harbormigrate.models import PageOutcome, RegistryEndpoint, RunContext
from harbormigrate.services.pagination import decode_page


class RepositoryEnumerator:
    """Collects every repository name of a registry, in listing order."""

    def __init__(self, fetcher, logger):
        self.fetcher = fetcher
        self.logger = logger

    def fetch_image_names(self, context: RunContext, registry: RegistryEndpoint) -> List[str]:
        names: List[str] = []

        def handle_page(body: bytes) -> PageOutcome:
            records = decode_page(body, REPOSITORIES_PATH)
            if not records:
                return PageOutcome.DONE

            for record in records:
                if not isinstance(record, dict) or not isinstance(record.get("name"), str):
                    raise DecodeError(f"Repository record without a name: {record!r}")
                names.append(record["name"])
            return PageOutcome.CONTINUE

        self.fetcher.fetch_pages(context, registry, REPOSITORIES_PATH, handle_page)
        self.logger.info("Discovered %s repositories on %s.", len(names), registry.host)
        return names
