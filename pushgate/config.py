"""
Configuration module for pushgate connections.

Provides the immutable endpoint description a Connection is built from,
plus loaders for environment variables and JSON/YAML files.
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigurationError

PRODUCTION_GATEWAY = "gateway.push.apple.com"
SANDBOX_GATEWAY = "gateway.sandbox.push.apple.com"
DEFAULT_PORT = 2195
DEFAULT_RETRIES = 3
DEFAULT_READ_TIMEOUT = 3.0

ENV_PREFIX = "PUSHGATE_"


@dataclass(frozen=True)
class ConnectionConfig:
    """Gateway endpoint and retry budget for a single Connection."""
    certificate: str
    passphrase: Optional[str] = field(default=None, repr=False)
    gateway: str = PRODUCTION_GATEWAY
    port: int = DEFAULT_PORT
    retries: int = DEFAULT_RETRIES
    read_timeout: float = DEFAULT_READ_TIMEOUT
    connect_timeout: Optional[float] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> bool:
        """Validate the configuration"""
        if not self.certificate:
            raise ConfigurationError("certificate is required", config_key="certificate")
        if not self.gateway:
            raise ConfigurationError("gateway is required", config_key="gateway")
        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigurationError("port must be an integer in 1..65535",
                                     config_key="port", config_value=self.port)
        if isinstance(self.retries, bool) or not isinstance(self.retries, int) or self.retries < 1:
            raise ConfigurationError("retries must be a positive integer",
                                     config_key="retries", config_value=self.retries)
        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ConfigurationError("read_timeout must be positive",
                                     config_key="read_timeout", config_value=self.read_timeout)
        if self.connect_timeout is not None and self.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be positive",
                                     config_key="connect_timeout", config_value=self.connect_timeout)
        return True

    @property
    def address(self) -> tuple:
        return (self.gateway, self.port)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionConfig":
        """Create configuration from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        options = {}
        for key, value in data.items():
            key = normalize_config_key(key)
            if key in known:
                options[key] = value
        return cls(**options)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> "ConnectionConfig":
        """Create configuration from environment variables"""
        options: Dict[str, Any] = {
            "certificate": os.getenv(f"{prefix}CERTIFICATE", ""),
            "passphrase": os.getenv(f"{prefix}PASSPHRASE") or None,
            "gateway": os.getenv(f"{prefix}GATEWAY", PRODUCTION_GATEWAY),
        }
        options["port"] = _env_number(prefix, "port", int, DEFAULT_PORT)
        options["retries"] = _env_number(prefix, "retries", int, DEFAULT_RETRIES)
        options["read_timeout"] = _env_number(prefix, "read_timeout", float, DEFAULT_READ_TIMEOUT)
        options["connect_timeout"] = _env_number(prefix, "connect_timeout", float, None)
        return cls(**options)

    @classmethod
    def from_file(cls, file_path: str) -> "ConnectionConfig":
        """Create configuration from a JSON or YAML file."""
        return cls.from_dict(load_config_file(file_path))


def _env_number(prefix: str, key: str, cast_type: type, default: Any) -> Any:
    env_key = f"{prefix}{key.upper()}"
    value = os.environ.get(env_key)
    if value is None or value == "":
        return default
    try:
        return cast_type(value)
    except (ValueError, TypeError):
        raise ConfigurationError(f"{env_key} must be a number",
                                 config_key=key, config_value=value)


def normalize_config_key(key: str) -> str:
    """Normalize configuration key to standard format."""
    return key.lower().replace('-', '_')


def load_config_file(file_path: str) -> Dict[str, Any]:
    """Load configuration from a file (JSON or YAML)."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    file_ext = Path(file_path).suffix.lower()

    with open(file_path, 'r', encoding='utf-8') as f:
        if file_ext == '.json':
            data = json.load(f)
        elif file_ext in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        else:
            raise ConfigurationError(f"Unsupported configuration file format: {file_ext}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {file_path}")
    return data
