"""Actionable error catalog for harbor-migrate."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "same_source_target": {
        "what": "The same 'source' and 'target' registry ({url}), nothing to do.",
        "next": "Point `--target-url` at a different registry instance.",
    },
    "invalid_registry_url": {
        "what": "Invalid {label}: {url}",
        "next": "Use a full URL such as `https://harbor.example.com`.",
    },
    "insecure_http": {
        "what": "{label} uses insecure HTTP.",
        "next": "Switch to HTTPS or use `--allow-insecure-http` only for trusted registries.",
    },
    "invalid_connect_timeout": {
        "what": "Invalid connect timeout: {value}",
        "next": "Use a positive number of seconds, for example `--connect-timeout 30`.",
    },
    "credentials_in_url": {
        "what": "{label} must not embed credentials.",
        "next": "Remove `user:password@` from the URL and pass the credentials as options.",
    },
    "missing_option": {
        "what": "Missing required option '{option}'.",
        "next": "Pass it on the command line or set `{key}` in the config file.",
    },
    "command_not_found": {
        "what": "Required command not found: {command}",
        "next": "Install it or pass its location with `--docker-binary`.",
    },
    "docker_login_failed": {
        "what": "Login to {host} failed.",
        "next": "Check the username and password for this registry.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
