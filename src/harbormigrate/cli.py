import logging
import os

import click
from rich.logging import RichHandler

from . import __version__
from .constants import DEFAULT_CONFIG_FILE, DEFAULT_CONNECT_TIMEOUT, DEFAULT_USERNAME
from .core import HarborMigrator
from .errors import MigrationError
from .errors_catalog import actionable_error
from .models import MigrationOptions, RegistryEndpoint
from .services.config_loader import ConfigLoader
from .services.signals import setup_signal_context


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


def _require(value, option, key):
    if not value:
        raise click.ClickException(actionable_error("missing_option", option=option, key=key))
    return str(value)


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="harbor-migrate")
@click.option("--source-url", required=False, help="Base URL of the source registry.")
@click.option("--source-user", required=False, help=f"Source registry username (default: {DEFAULT_USERNAME}).")
@click.option(
    "--source-pass",
    required=False,
    envvar="HARBOR_SOURCE_PASSWORD",
    help="Source registry password. Also read from HARBOR_SOURCE_PASSWORD.",
)
@click.option("--target-url", required=False, help="Base URL of the target registry.")
@click.option("--target-user", required=False, help=f"Target registry username (default: {DEFAULT_USERNAME}).")
@click.option(
    "--target-pass",
    required=False,
    envvar="HARBOR_TARGET_PASSWORD",
    help="Target registry password. Also read from HARBOR_TARGET_PASSWORD.",
)
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.option(
    "--allow-insecure-http",
    is_flag=True,
    default=None,
    help="Allow HTTP registry URLs (insecure). By default only HTTPS URLs are accepted.",
)
@click.option(
    "--insecure",
    is_flag=True,
    default=None,
    help="Skip TLS certificate verification for both registries.",
)
@click.option(
    "--connect-timeout",
    required=False,
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help=f"HTTP connect timeout in seconds (default: {DEFAULT_CONNECT_TIMEOUT:g}).",
)
@click.option(
    "--docker-binary",
    required=False,
    help="Docker client used to pull, tag and push images (default: docker).",
)
def main(
    source_url,
    source_user,
    source_pass,
    target_url,
    target_user,
    target_pass,
    config,
    verbose,
    log_file,
    allow_insecure_http,
    insecure,
    connect_timeout,
    docker_binary,
):
    """Migrate every project and image of a Harbor registry to another one."""
    logger = logging.getLogger("harbormigrate")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except MigrationError as exc:
        raise click.ClickException(str(exc)) from exc

    source_url = _require(
        _resolve_option(source_url, config_values, "source_url"), "--source-url", "source_url"
    )
    source_user = str(_resolve_option(source_user, config_values, "source_user", default=DEFAULT_USERNAME))
    source_pass = _require(
        _resolve_option(source_pass, config_values, "source_password"), "--source-pass", "source_password"
    )
    target_url = _require(
        _resolve_option(target_url, config_values, "target_url"), "--target-url", "target_url"
    )
    target_user = str(_resolve_option(target_user, config_values, "target_user", default=DEFAULT_USERNAME))
    target_pass = _require(
        _resolve_option(target_pass, config_values, "target_password"), "--target-pass", "target_password"
    )
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")
    allow_insecure_http = bool(
        _resolve_option(allow_insecure_http, config_values, "allow_insecure_http", default=False)
    )
    insecure = bool(_resolve_option(insecure, config_values, "insecure", default=False))
    try:
        connect_timeout = float(
            _resolve_option(connect_timeout, config_values, "connect_timeout", default=DEFAULT_CONNECT_TIMEOUT)
        )
    except (TypeError, ValueError) as exc:
        raise click.ClickException(
            actionable_error("invalid_connect_timeout", value=str(config_values.get("connect_timeout")))
        ) from exc
    docker_binary = str(_resolve_option(docker_binary, config_values, "docker_binary", default="docker"))

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    options = MigrationOptions(
        source=RegistryEndpoint(url=source_url, username=source_user, password=source_pass),
        target=RegistryEndpoint(url=target_url, username=target_user, password=target_pass),
        verify_tls=not insecure,
        connect_timeout=connect_timeout,
        allow_insecure_http=allow_insecure_http,
        docker_binary=docker_binary,
    )

    try:
        migrator = HarborMigrator(options=options)
    except MigrationError as exc:
        logger.error("Validate options failed: %s", exc)
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(migrator.run(setup_signal_context()))


if __name__ == "__main__":
    main()
