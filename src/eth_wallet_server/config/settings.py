# File: src/eth_wallet_server/config/settings.py

import os
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigError

CONFIG_FILE_ENV = "CONFIG_FILE"
DEFAULT_CONFIG_FILE = "config.yaml"
ENV_PREFIX = "APP_"

# dotted config file key -> settings field
FILE_KEYS = {
    "server.host": "host",
    "server.port": "port",
    "ethereum.rpc_url": "rpc_url",
    "ethereum.network_id": "network_id",
    "ethereum.rpc_timeout": "rpc_timeout",
    "wallet.key_file": "key_file",
    "logging.level": "log_level",
    "logging.dir": "log_dir",
}

NETWORK_NAMES = {
    1: "Mainnet",
    5: "Goerli",
    17000: "Holesky",
    11155111: "Sepolia",
    1337: "Local",
    31337: "Local",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    host: str = "0.0.0.0"
    port: int = Field(3000, ge=1, le=65535)
    rpc_url: str = "http://127.0.0.1:8545"
    network_id: int = Field(1, ge=1)
    key_file: str = "account_config.json"
    rpc_timeout: float = Field(30.0, gt=0)
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    @field_validator("host", "rpc_url", "key_file")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def server_address(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def network_name(self) -> str:
        return NETWORK_NAMES.get(self.network_id, "Unknown")


class ConfigLoader:
    """Reads the optional YAML config file and flattens it into settings fields."""

    def __init__(self, config_path: str, required: bool = False):
        self.config_path = config_path
        self.required = required
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            if self.required:
                raise ConfigError(f"Config file not found: {self.config_path}")
            return {}

        try:
            with open(self.config_path, 'r') as f:
                config = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {self.config_path}: {e.strerror}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed config file {self.config_path}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError(f"Malformed config file {self.config_path}: top level must be a mapping")
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key."""
        try:
            value = self.config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def to_fields(self) -> Dict[str, Any]:
        """Map the nested file layout onto flat settings fields."""
        known = {}
        for key in FILE_KEYS:
            section, name = key.split('.')
            known.setdefault(section, set()).add(name)

        for section, values in self.config.items():
            if section not in known:
                raise ConfigError(f"Unknown config section '{section}' in {self.config_path}")
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section}' in {self.config_path} must be a mapping")
            unknown = set(values) - known[section]
            if unknown:
                raise ConfigError(
                    f"Unknown config key '{section}.{sorted(unknown)[0]}' in {self.config_path}"
                )

        missing = object()
        fields = {}
        for key, field in FILE_KEYS.items():
            value = self.get(key, missing)
            if value is not missing:
                fields[field] = value
        return fields


def env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect APP_* overrides for known settings fields."""
    overrides = {}
    for field in Settings.model_fields:
        name = f"{ENV_PREFIX}{field.upper()}"
        if name in environ:
            overrides[field] = environ[name]
    return overrides


def resolve(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Resolve settings: environment > config file > defaults."""
    if environ is None:
        environ = os.environ

    config_path = environ.get(CONFIG_FILE_ENV)
    if config_path:
        loader = ConfigLoader(config_path, required=True)
    else:
        loader = ConfigLoader(DEFAULT_CONFIG_FILE)

    values = loader.to_fields()
    values.update(env_overrides(environ))

    try:
        return Settings(**values)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e
