"""
Configuration management for bookproject.

Handles loading and saving user configuration from:
- $XDG_CONFIG_HOME/bookproject/config.json
- ~/.config/bookproject/config.json
- Fallback: ~/.bookproject/config.json
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict, field

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Web server configuration."""
    host: str = "127.0.0.1"
    port: int = 8000
    auto_open_browser: bool = False


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True


@dataclass
class LibraryConfig:
    """Library-related settings."""
    default_path: Optional[str] = None


@dataclass
class BookProjectConfig:
    """Main bookproject configuration."""
    server: ServerConfig = field(default_factory=ServerConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "server": asdict(self.server),
            "cli": asdict(self.cli),
            "library": asdict(self.library),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BookProjectConfig':
        """Create from dictionary."""
        return cls(
            server=ServerConfig(**data.get("server", {})),
            cli=CLIConfig(**data.get("cli", {})),
            library=LibraryConfig(**data.get("library", {})),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. $XDG_CONFIG_HOME/bookproject/config.json
    2. ~/.config/bookproject/config.json if ~/.config exists
    3. Fallback: ~/.bookproject/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "bookproject" / "config.json"

    default_config_home = Path.home() / ".config"
    if default_config_home.exists():
        config_dir = default_config_home / "bookproject"
    else:
        config_dir = Path.home() / ".bookproject"

    return config_dir / "config.json"


def load_config() -> BookProjectConfig:
    """
    Load configuration from file.

    Returns:
        BookProjectConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return BookProjectConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        return BookProjectConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}. Using default configuration")
        return BookProjectConfig()


def save_config(config: BookProjectConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.debug(f"Configuration saved to {config_path}")
    return config_path


def update_config(
    server_host: Optional[str] = None,
    server_port: Optional[int] = None,
    server_auto_open: Optional[bool] = None,
    cli_verbose: Optional[bool] = None,
    cli_color: Optional[bool] = None,
    library_default_path: Optional[str] = None,
) -> BookProjectConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.
    """
    config = load_config()

    if server_host is not None:
        config.server.host = server_host
    if server_port is not None:
        config.server.port = server_port
    if server_auto_open is not None:
        config.server.auto_open_browser = server_auto_open

    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_color is not None:
        config.cli.color = cli_color

    if library_default_path is not None:
        config.library.default_path = library_default_path

    save_config(config)
    return config
