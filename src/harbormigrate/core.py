import logging
from typing import Optional

import requests
from rich.console import Console

from . import __version__
from .errors import MigrationCancelled, MigrationError
from .models import MigrationOptions, RunContext
from .services.command_runner import CommandRunner
from .services.docker_executor import DockerCliExecutor
from .services.http_transport import HttpTransport
from .services.image_transfer import ImageTransferExecutor, ImageTransferOrchestrator
from .services.pagination import PaginatedFetcher
from .services.projects import ProjectMigrator
from .services.repositories import RepositoryEnumerator
from .services.validation import ValidationService

console = Console()
logger = logging.getLogger("harbormigrate")


class HarborMigrator:
    """Runs one migration: every project first, then every repository's images."""

    def __init__(
        self,
        options: MigrationOptions,
        session: Optional[requests.Session] = None,
        executor: Optional[ImageTransferExecutor] = None,
    ):
        self.options = options
        self.source = options.source
        self.target = options.target

        self.validation_service = ValidationService(
            allow_insecure_http=options.allow_insecure_http,
        )
        self.validation_service.validate_options(options, logger, console)

        self.transport = HttpTransport(
            logger=logger,
            session=session,
            verify_tls=options.verify_tls,
            connect_timeout=options.connect_timeout,
        )
        self.fetcher = PaginatedFetcher(transport=self.transport, logger=logger)
        self.command_runner = CommandRunner(logger=logger)
        self.executor = executor or DockerCliExecutor(
            logger=logger,
            console=console,
            run_cmd=self.command_runner.run,
            docker_binary=options.docker_binary,
        )
        self.project_migrator = ProjectMigrator(
            transport=self.transport,
            fetcher=self.fetcher,
            logger=logger,
            console=console,
        )
        self.repository_enumerator = RepositoryEnumerator(fetcher=self.fetcher, logger=logger)
        self.image_orchestrator = ImageTransferOrchestrator(
            executor=self.executor,
            enumerator=self.repository_enumerator,
            logger=logger,
            console=console,
        )

        if not options.verify_tls:
            logger.warning("TLS certificate verification is disabled for both registries.")

    def _run_step(self, name: str, callback, *args, **kwargs):
        logger.info("%s start", name)
        result = callback(*args, **kwargs)
        logger.info("%s end", name)
        return result

    def verify_environment(self, context: RunContext):
        self.executor.verify_available(context)

    def transfer_projects(self, context: RunContext) -> int:
        return self.project_migrator.transfer_projects(context, self.source, self.target)

    def transfer_images(self, context: RunContext) -> int:
        return self.image_orchestrator.transfer_images(context, self.source, self.target)

    def execute(self, context: RunContext):
        """Run both phases under a child of ``context``; raises on the first failure."""
        logger.info("HarborMigrate version %s", __version__)
        logger.info("Migrating %s => %s", self.source.url, self.target.url)

        run_context = context.derive()
        try:
            self._run_step("verify environment", self.verify_environment, run_context)
            projects = self._run_step("transfer projects", self.transfer_projects, run_context)
            images = self._run_step("transfer images", self.transfer_images, run_context)
        finally:
            run_context.cancel("Run finished.")

        console.print(
            f"[green]Migration finished:[/green] {projects} project(s), {images} repositories."
        )

    def run(self, context: Optional[RunContext] = None) -> int:
        context = context or RunContext()
        try:
            self.execute(context)
            return 0
        except (KeyboardInterrupt, MigrationCancelled):
            context.cancel()
            console.print("[bold red]Migration cancelled.[/bold red]")
            logger.info("HarborMigrate canceled")
            return 1
        except MigrationError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            logger.error("HarborMigrate failed: %s", exc)
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {exc}")
            logger.exception("Unexpected error")
            return 1
        finally:
            self.transport.close()
