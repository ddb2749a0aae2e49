"""Docker CLI implementation of the image transfer executor."""

from typing import Callable, List

from harbormigrate.errors import CommandError
from harbormigrate.errors_catalog import actionable_error
from harbormigrate.models import RunContext

UNTAGGED = "<none>"


class DockerCliExecutor:
    """Moves image bytes with the local ``docker`` client, one process per call."""

    def __init__(self, logger, console, run_cmd: Callable, docker_binary: str = "docker"):
        self.logger = logger
        self.console = console
        self.run_cmd = run_cmd
        self.docker = docker_binary

    def verify_available(self, context: RunContext):
        self.console.print("[blue]Validating Docker environment...[/blue]")
        self.run_cmd(context, [self.docker, "version"], capture_output=True)
        self.console.print("[green]Docker is available.[/green]")

    def login(self, context: RunContext, host: str, username: str, password: str):
        self.logger.info("Logging in to %s as %s", host, username)
        try:
            self.run_cmd(
                context,
                [self.docker, "login", "--username", username, "--password-stdin", host],
                input_text=password,
            )
        except CommandError as exc:
            raise CommandError(
                actionable_error("docker_login_failed", host=host),
                command=exc.command,
                returncode=exc.returncode,
            ) from exc

    def pull(self, context: RunContext, ref: str):
        self.run_cmd(context, [self.docker, "pull", "--all-tags", ref])

    def list_local_tags(self, context: RunContext, ref: str) -> List[str]:
        result = self.run_cmd(
            context,
            [self.docker, "images", ref, "--format", "{{.Tag}}"],
            capture_output=True,
        )
        tags = []
        for line in (result.stdout or "").splitlines():
            tag = line.strip()
            if tag and tag != UNTAGGED and tag not in tags:
                tags.append(tag)
        return tags

    def tag_all(self, context: RunContext, source_ref: str, target_ref: str) -> int:
        tags = self.list_local_tags(context, source_ref)
        if not tags:
            self.logger.warning("No local tags found for %s after pull.", source_ref)

        for tag in tags:
            self.run_cmd(context, [self.docker, "tag", f"{source_ref}:{tag}", f"{target_ref}:{tag}"])
        return len(tags)

    def push(self, context: RunContext, ref: str):
        self.run_cmd(context, [self.docker, "push", "--all-tags", ref])
