"""
Configuration Settings
======================

Configuration dataclasses for the package-document resolver and its API.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, List
import json
import logging

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ParserConfig:
    """lxml parser options used when loading package documents."""

    recover: bool = False
    remove_blank_text: bool = False
    resolve_entities: bool = False
    no_network: bool = True
    huge_tree: bool = False


@dataclass
class ServerConfig:
    """REST API settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    document_path: str = ""  # Empty means no default document
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class ResolverConfig:
    """
    Complete resolver configuration.

    Example:
        config = ResolverConfig()
        config.parser.recover = True
        config.server.document_path = "book/content.opf"
        save_config(config, Path("config.yaml"))
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    log_level: str = "INFO"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'parser': asdict(self.parser),
            'server': asdict(self.server),
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ResolverConfig':
        """Create from dictionary."""
        config = cls()

        if 'parser' in data:
            config.parser = ParserConfig(**data['parser'])
        if 'server' in data:
            config.server = ServerConfig(**data['server'])

        if 'log_level' in data:
            config.log_level = data['log_level']

        return config

    @property
    def document_path(self) -> Optional[Path]:
        """Configured package document, if any."""
        if not self.server.document_path:
            return None
        return Path(self.server.document_path)


def load_config(config_path: Path) -> ResolverConfig:
    """
    Load configuration from file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config_path: Path to config file

    Returns:
        ResolverConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is not supported
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f) or {}
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    logger.info(f"Loaded configuration from {config_path}")
    return ResolverConfig.from_dict(data)


def save_config(config: ResolverConfig, config_path: Path) -> None:
    """
    Save configuration to file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config: ResolverConfig to save
        config_path: Path to save config file

    Raises:
        ValueError: If file format is not supported
    """
    suffix = config_path.suffix.lower()
    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported config format: {suffix}")

    data = config.to_dict()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        if suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")


def get_default_config() -> ResolverConfig:
    """Get default configuration."""
    return ResolverConfig()
