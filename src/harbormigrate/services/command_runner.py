"""Subprocess execution service for harbor-migrate."""

import subprocess
from typing import List, Optional

from harbormigrate.errors import CommandError
from harbormigrate.errors_catalog import actionable_error
from harbormigrate.models import RunContext


class CommandRunner:
    """Runs external commands with consistent error handling.

    ``subprocess.run`` kills the child when the wait is interrupted, so a
    ``KeyboardInterrupt`` raised by the signal handler never leaves an orphan.
    """

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(
        self,
        context: RunContext,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        input_text: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> subprocess.CompletedProcess:
        context.raise_if_cancelled()

        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        effective_timeout = timeout if timeout is not None else self.default_timeout

        try:
            result = subprocess.run(
                cmd,
                text=True,
                input=input_text,
                capture_output=capture_output,
                timeout=effective_timeout,
            )
        except FileNotFoundError as exc:
            raise CommandError(
                actionable_error("command_not_found", command=cmd[0]),
                command=cmd,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(
                f"Command timed out after {effective_timeout}s: {cmd_str}",
                command=cmd,
            ) from exc
        except OSError as exc:
            raise CommandError(f"Failed to execute command: {cmd_str}. {exc}", command=cmd) from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"

        if check:
            raise CommandError(message, command=cmd, returncode=result.returncode)

        self.logger.warning(message)
        return result
