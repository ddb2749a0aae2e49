"""Project migration from the source registry to the target registry."""

import json
from typing import Any, List

from harbormigrate.constants import PROJECTS_PATH, UNLIMITED_STORAGE
from harbormigrate.errors import DecodeError
from harbormigrate.models import PageOutcome, Project, RegistryEndpoint, RunContext
from harbormigrate.services.pagination import decode_page


class ProjectMigrator:
    """Recreates every source project on the target, one creation call per project."""

    def __init__(self, transport, fetcher, logger, console):
        self.transport = transport
        self.fetcher = fetcher
        self.logger = logger
        self.console = console

    def transfer_projects(
        self,
        context: RunContext,
        source: RegistryEndpoint,
        target: RegistryEndpoint,
    ) -> int:
        created = 0

        def handle_page(body: bytes) -> PageOutcome:
            nonlocal created
            projects = self.parse_projects(body)
            if not projects:
                return PageOutcome.DONE

            for project in projects:
                self.create_project(context, target, project)
                created += 1
            return PageOutcome.CONTINUE

        self.fetcher.fetch_pages(
            context,
            source,
            PROJECTS_PATH,
            handle_page,
            params={"with_detail": "true"},
        )
        self.logger.info("Issued %s project creation request(s).", created)
        return created

    def parse_projects(self, body: bytes) -> List[Project]:
        return [self._to_project(record) for record in decode_page(body, PROJECTS_PATH)]

    def create_project(self, context: RunContext, target: RegistryEndpoint, project: Project):
        self.console.print(f"[blue]Creating project[/blue] {project.name} (public={project.public})")
        result = self.transport.post(context, target, PROJECTS_PATH, self.build_create_body(project))

        if not result.body:
            return

        text = result.body.decode("utf-8", errors="replace").strip()
        if result.ok:
            self.logger.info("%s", text)
        else:
            self.logger.warning(
                "Creating project '%s' returned %s: %s",
                project.name,
                result.status_code,
                text,
            )

    @staticmethod
    def build_create_body(project: Project) -> bytes:
        payload = {
            "project_name": project.name,
            "metadata": {"public": project.public},
            "storage_limit": UNLIMITED_STORAGE,
            "registry_id": None,
        }
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")

    @staticmethod
    def _to_project(record: Any) -> Project:
        if not isinstance(record, dict) or not isinstance(record.get("name"), str):
            raise DecodeError(f"Project record without a name: {record!r}")

        metadata = record.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise DecodeError(f"Project '{record['name']}' has invalid metadata: {metadata!r}")

        public = metadata.get("public")
        if public is None:
            public = "false"
        elif isinstance(public, bool):
            public = "true" if public else "false"

        return Project(name=record["name"], public=str(public))
