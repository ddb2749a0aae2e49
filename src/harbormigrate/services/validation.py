"""Option validation helpers for harbor-migrate."""

from urllib.parse import urlparse

from harbormigrate.errors import ConfigurationError
from harbormigrate.errors_catalog import actionable_error
from harbormigrate.models import MigrationOptions, RegistryEndpoint


class ValidationService:
    """Validates registry URLs and protocol policy before any network activity."""

    SUPPORTED_SCHEMES = {"http", "https"}

    def __init__(self, allow_insecure_http: bool = False):
        self.allow_insecure_http = allow_insecure_http

    def validate_registry_url(self, url: str, label: str):
        parsed = urlparse(url or "")
        scheme = parsed.scheme.lower()
        if scheme not in self.SUPPORTED_SCHEMES or not parsed.netloc:
            raise ConfigurationError(actionable_error("invalid_registry_url", label=label, url=url))
        try:
            parsed.port
        except ValueError as exc:
            raise ConfigurationError(
                actionable_error("invalid_registry_url", label=label, url=url)
            ) from exc
        if parsed.username is not None or parsed.password is not None:
            raise ConfigurationError(actionable_error("credentials_in_url", label=label))

    def enforce_https_policy(self, url: str, label: str, logger, console):
        scheme = urlparse(url).scheme.lower()
        if scheme != "http":
            return

        if not self.allow_insecure_http:
            raise ConfigurationError(actionable_error("insecure_http", label=label))

        logger.warning("Insecure HTTP enabled for %s: %s", label, url)
        console.print(
            f"[yellow]Warning:[/yellow] Using insecure HTTP for {label}. "
            "Prefer HTTPS whenever possible."
        )

    def validate_connect_timeout(self, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not value > 0:
            raise ConfigurationError(actionable_error("invalid_connect_timeout", value=str(value)))

    @staticmethod
    def normalize_url(url: str) -> str:
        return url.strip().rstrip("/").lower()

    def validate_options(self, options: MigrationOptions, logger, console):
        endpoints = (("source URL", options.source), ("target URL", options.target))
        for label, endpoint in endpoints:
            self._validate_endpoint(endpoint, label, logger, console)

        if self.normalize_url(options.source.url) == self.normalize_url(options.target.url):
            raise ConfigurationError(actionable_error("same_source_target", url=options.source.url))

        self.validate_connect_timeout(options.connect_timeout)

    def _validate_endpoint(self, endpoint: RegistryEndpoint, label: str, logger, console):
        self.validate_registry_url(endpoint.url, label)
        self.enforce_https_policy(endpoint.url, label, logger, console)
