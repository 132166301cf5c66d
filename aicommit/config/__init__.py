"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional

# Valid configuration values
VALID_PROVIDERS = {"auto", "anthropic", "gemini", "openai"}

ENV_PREFIX = "AI_COMMIT_"

# Checked in order before the config file
API_KEY_ENV_VARS = {
    "anthropic": ["ANTHROPIC_API_KEY", "AI_COMMIT_ANTHROPIC_KEY"],
    "gemini": ["GEMINI_API_KEY", "AI_COMMIT_GEMINI_KEY"],
    "openai": ["OPENAI_API_KEY", "AI_COMMIT_OPENAI_KEY"],
}


class ConfigError(Exception):
    """Raised when an explicitly requested config file cannot be used."""
    pass


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "anthropic"
    model: Optional[str] = None
    max_diff_length: int = 30000
    timeout: int = 120  # seconds per provider request, no retries
    anthropic_model: str = "claude-haiku-4-5-20251001"
    gemini_model: str = "gemini-2.5-flash"
    openai_model: str = "gpt-5-mini"
    api_keys: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None and v != {}}

    def model_for(self, provider: str) -> Optional[str]:
        """Explicit model if set, else the per-provider default."""
        if self.model:
            return self.model
        return getattr(self, f"{provider}_model", None)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.provider, str) or self.provider.lower() not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider
        else:
            self.provider = self.provider.lower()

        if not isinstance(self.max_diff_length, int) or self.max_diff_length <= 0:
            warnings.append(f"Invalid max_diff_length '{self.max_diff_length}', using {defaults.max_diff_length}")
            self.max_diff_length = defaults.max_diff_length

        if not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        if not isinstance(self.api_keys, dict):
            warnings.append("Invalid api_keys, expected a mapping of provider to key")
            self.api_keys = {}

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


def apply_env_overrides(config: Config, environ=None) -> Config:
    """Apply AI_COMMIT_* environment variables on top of file values."""
    environ = os.environ if environ is None else environ

    if environ.get(f"{ENV_PREFIX}PROVIDER"):
        config.provider = environ[f"{ENV_PREFIX}PROVIDER"]
    if environ.get(f"{ENV_PREFIX}MODEL"):
        config.model = environ[f"{ENV_PREFIX}MODEL"]

    for name in ("max_diff_length", "timeout"):
        raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw:
            try:
                setattr(config, name, int(raw))
            except ValueError:
                print(f"Config warning: Ignoring non-integer {ENV_PREFIX}{name.upper()}={raw}", file=sys.stderr)

    for warning in config.validate():
        print(f"Config warning: {warning}", file=sys.stderr)
    return config


def resolve_api_key(provider: str, config: Config, environ=None) -> str:
    """Find the API key for `provider`: environment first, then config file."""
    environ = os.environ if environ is None else environ
    provider = provider.lower()

    for var in API_KEY_ENV_VARS.get(provider, []):
        if environ.get(var):
            return environ[var]

    return config.api_keys.get(provider) or ""


class ConfigManager:
    """Loads configuration.

    Lookup order:
    1. explicit path (--config)
    2. .aicommitrc in current directory
    3. .aicommitrc in home directory
    4. Defaults
    """

    CONFIG_FILENAME = ".aicommitrc"

    def __init__(self, path: str | Path | None = None):
        self.explicit_path = Path(path) if path else None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self.explicit_path is not None:
            if not self.explicit_path.exists():
                raise ConfigError(f"Config file not found: {self.explicit_path}")
            self._config_path = self.explicit_path
            return self._load_from_file(self.explicit_path)

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config_path = path
                return self._load_from_file(path)

        return Config()

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()
        if not isinstance(data, dict):
            print(f"Warning: Could not load {path}: expected a JSON object", file=sys.stderr)
            return Config()
        return Config.from_dict(data)

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "apply_env_overrides",
    "resolve_api_key",
    "VALID_PROVIDERS",
    "API_KEY_ENV_VARS",
]
