"""Configuration loader for harbor-migrate."""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from harbormigrate.errors import ConfigurationError

_TEXT = (str,)
_FLAG = (bool,)
_NUMBER = (int, float)


class ConfigLoader:
    """Loads YAML configuration files for CLI defaults.

    Each key maps to the YAML types it accepts. Usernames and passwords may be
    written unquoted, so YAML numbers are accepted there and turned into text.
    """

    KEY_TYPES: Dict[str, Tuple[type, ...]] = {
        "source_url": _TEXT,
        "source_user": _TEXT + _NUMBER,
        "source_password": _TEXT + _NUMBER,
        "target_url": _TEXT,
        "target_user": _TEXT + _NUMBER,
        "target_password": _TEXT + _NUMBER,
        "verbose": _FLAG,
        "log_file": _TEXT,
        "allow_insecure_http": _FLAG,
        "insecure": _FLAG,
        "connect_timeout": _NUMBER,
        "docker_binary": _TEXT,
    }

    def load(self, config_path: Optional[str]) -> Dict[str, Any]:
        if not config_path:
            return {}

        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise ConfigurationError(f"Invalid config file '{config_path}': {exc}") from exc

        if parsed is None:
            return {}
        if not isinstance(parsed, dict):
            raise ConfigurationError("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(map(str, parsed.keys())) - set(self.KEY_TYPES))
        if unknown:
            unknown_list = ", ".join(unknown)
            raise ConfigurationError(f"Unknown configuration keys: {unknown_list}")

        return {key: self._check_value(key, value) for key, value in parsed.items()}

    def _check_value(self, key: str, value: Any) -> Any:
        expected = self.KEY_TYPES[key]
        # bool is an int subclass; a flag is never a valid number.
        if isinstance(value, bool) and bool not in expected:
            value_ok = False
        else:
            value_ok = isinstance(value, expected)

        if not value_ok:
            names = " or ".join(dict.fromkeys(self._type_name(kind) for kind in expected))
            raise ConfigurationError(
                f"Config key '{key}' must be {names}, got {type(value).__name__}."
            )

        if key == "connect_timeout" and not value > 0:
            raise ConfigurationError(f"Config key 'connect_timeout' must be positive, got {value!r}")

        if str in expected and not isinstance(value, str):
            return str(value)
        return value

    @staticmethod
    def _type_name(kind: type) -> str:
        return {str: "text", bool: "true/false", int: "a number", float: "a number"}[kind]
