"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

VALID_PROVIDERS = {"auto", "claude", "ollama"}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "auto"
    model: Optional[str] = None
    include_body: bool = True
    max_subject_length: int = 72
    max_tokens: int = 3900  # Prompt budget before the diff is rejected as too large

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if not isinstance(self.include_body, bool):
            warnings.append(f"Invalid include_body '{self.include_body}', using {str(defaults.include_body).lower()}")
            self.include_body = defaults.include_body

        if not isinstance(self.max_subject_length, int) or self.max_subject_length <= 0:
            warnings.append(f"Invalid max_subject_length '{self.max_subject_length}', using {defaults.max_subject_length}")
            self.max_subject_length = defaults.max_subject_length

        if not isinstance(self.max_tokens, int) or self.max_tokens <= 0:
            warnings.append(f"Invalid max_tokens '{self.max_tokens}', using {defaults.max_tokens}")
            self.max_tokens = defaults.max_tokens

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Finds and loads the .ocrc file, local before global."""

    CONFIG_FILENAME = ".ocrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, IOError) as e:
            print(f"Config warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


def resolve_provider_and_model(config: Config, provider: str | None = None, model: str | None = None) -> tuple[str, str | None]:
    """Resolve provider and model.

    Precedence: CLI args > environment variables > config file
    """
    provider = provider or os.environ.get('OC_PROVIDER') or config.provider
    model = model or os.environ.get('OC_MODEL') or config.model
    return provider, model


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "get_config_path",
    "resolve_provider_and_model",
    "VALID_PROVIDERS",
]
