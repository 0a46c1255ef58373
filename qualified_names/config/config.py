"""Configuration management for qualified_names."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import yaml
from pathlib import Path

from ..errors import ConfigError


@dataclass
class ConnectionConfig:
    """Configuration for a single connection."""

    name: str
    type: str  # "duckdb", "postgresql"
    config: Dict[str, Any]


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    connections: Dict[str, ConnectionConfig] = field(default_factory=dict)
    default_connection: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def get_connection(self, name: Optional[str] = None) -> ConnectionConfig:
        """Look up a connection by name, falling back to the default one.

        Raises:
            ConfigError: If no matching connection is configured
        """
        target = name or self.default_connection
        if target is None:
            if len(self.connections) == 1:
                return next(iter(self.connections.values()))
            raise ConfigError("No connection name given and no default_connection set")
        if target not in self.connections:
            raise ConfigError(f"Unknown connection: {target}")
        return self.connections[target]


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Example YAML format:
        connections:
          local:
            type: duckdb
            path: /data/local.duckdb
            read_only: true

          warehouse:
            type: postgresql
            host: localhost
            port: 5432
            database: analytics
            user: user
            password: pass

        default_connection: local

        logging:
          level: DEBUG
          structured: true
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    connections = {}
    for name, conn_config in (data.get("connections") or {}).items():
        conn_config = dict(conn_config or {})
        if "type" not in conn_config:
            raise ConfigError(f"Connection '{name}' is missing a type")
        conn_type = conn_config.pop("type")
        connections[name] = ConnectionConfig(name=name, type=conn_type, config=conn_config)

    default_connection = data.get("default_connection")
    if default_connection is not None and default_connection not in connections:
        raise ConfigError(f"default_connection '{default_connection}' is not configured")

    logging_data = data.get("logging") or {}
    try:
        logging_config = LoggingConfig(**logging_data)
    except TypeError as e:
        raise ConfigError(f"Invalid logging section: {e}") from e

    return Config(
        connections=connections,
        default_connection=default_connection,
        logging=logging_config,
    )
