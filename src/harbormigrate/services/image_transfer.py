"""Image replication from the source registry to the target registry."""

from typing import Protocol

from harbormigrate.models import RegistryEndpoint, RunContext


class ImageTransferExecutor(Protocol):
    """Capability that actually moves image bytes between hosts."""

    def verify_available(self, context: RunContext):
        ...

    def login(self, context: RunContext, host: str, username: str, password: str):
        ...

    def pull(self, context: RunContext, ref: str):
        ...

    def tag_all(self, context: RunContext, source_ref: str, target_ref: str):
        ...

    def push(self, context: RunContext, ref: str):
        ...


class ImageTransferOrchestrator:
    """Discovers source repositories, logs in to both hosts, then pulls, re-tags and pushes each one.

    Repositories are handled one at a time in discovery order. The first failure
    aborts the whole transfer; later repositories are not attempted.
    """

    def __init__(self, executor: ImageTransferExecutor, enumerator, logger, console):
        self.executor = executor
        self.enumerator = enumerator
        self.logger = logger
        self.console = console

    def transfer_images(
        self,
        context: RunContext,
        source: RegistryEndpoint,
        target: RegistryEndpoint,
    ) -> int:
        # Discovery runs before login so a listing failure never touches docker.
        image_names = self.enumerator.fetch_image_names(context, source)
        total = len(image_names)

        self.executor.login(context, source.host, source.username, source.password)
        self.executor.login(context, target.host, target.username, target.password)

        for index, image_name in enumerate(image_names, start=1):
            context.raise_if_cancelled()
            source_ref = f"{source.host}/{image_name}"
            target_ref = f"{target.host}/{image_name}"
            self.transfer_image(context, source_ref, target_ref, index, total)

        return total

    def transfer_image(self, context: RunContext, source_ref: str, target_ref: str, index: int, total: int):
        self.console.print(f"[bold blue]transfer[/bold blue] {source_ref} => {target_ref} ({index}/{total})")
        self.logger.info("Transferring %s => %s", source_ref, target_ref)

        self.executor.pull(context, source_ref)
        self.executor.tag_all(context, source_ref, target_ref)
        self.executor.push(context, target_ref)
