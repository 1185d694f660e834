#!/usr/bin/env python3

import os
import json
import tomllib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from .exit_codes import ConfigError

logger = logging.getLogger("ghafs")

DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "ghafs"


def configure_logging(level: str = "INFO", fmt: str = "%(levelname)s: %(message)s"):
    """Configure the root logger to write to stderr."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=fmt,
        handlers=[
            logging.StreamHandler(sys.stderr)  # Default to stderr
        ],
        force=True,
    )


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GHAFS_CONFIG environment variable
    2. ~/.ghafs/ directory
    """
    if 'GHAFS_CONFIG' in os.environ:
        path = Path(os.environ['GHAFS_CONFIG'])
        if path.exists():
            return path

    ghafs_dir = Path.home() / '.ghafs'
    for filename in ['config.json', 'config.toml', 'config.yaml', 'config.yml']:
        path = ghafs_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return ghafs_dir / 'config.json'


def get_default_config():
    """Get default configuration."""
    return {
        "github": {
            "token": "",
            "api_url": DEFAULT_API_URL,
            "timeout_seconds": 30,
            "per_page": 100,
        },
        "mount": {
            "foreground": True,
            "threads": True,
            "allow_other": False,
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
    }


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ('.yaml', '.yml'):
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    with open(config_path, 'r') as f:
        return json.load(f)


def load_config():
    """Load configuration from file.

    Raises:
        ConfigError: If the config file exists but cannot be parsed
    """
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    if not config["github"].get("token"):
        config["github"]["token"] = os.environ.get('GHAFS_GITHUB_TOKEN') or os.environ.get('GITHUB_TOKEN') or ""
    else:
        config["github"]["token"] = str(config["github"]["token"])

    return config


def save_config(config):
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    suffix = config_path.suffix.lower()
    if suffix in ('.yaml', '.yml'):
        with open(config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)
    else:
        if suffix == '.toml':
            # tomllib is read-only
            logger.warning("TOML writing is not supported. Saving as JSON instead.")
            config_path = config_path.with_suffix('.json')
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def mask_token(token: str) -> str:
    """Mask a token for display, keeping the first and last 4 characters."""
    if not token:
        return ""
    token = str(token)
    return token[:4] + "..." + token[-4:] if len(token) > 8 else "***"


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GHAFS_SECTION_KEY
    For example: GHAFS_GITHUB_TIMEOUT_SECONDS=10
    """
    env_prefix = "GHAFS_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix):
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')

        # Convert value
        if value.lower() in ('true', 'yes', 'on'):
            typed_value = True
        elif value.lower() in ('false', 'no', 'off'):
            typed_value = False
        elif value.isdigit():
            typed_value = int(value)
        else:
            typed_value = value

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i:i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key is None:
                break

            if i + best_match_len == len(key_parts):
                # Credentials stay strings even when all digits
                current_level[matched_key] = value if matched_key == "token" else typed_value
                break

            if not isinstance(current_level[matched_key], dict):
                # Path conflict: env var is longer than the config path
                break
            current_level = current_level[matched_key]
            i += best_match_len

    return config


@dataclass(frozen=True)
class ClientSettings:
    """
    Remote access settings shared by every catalog and the content fetcher.

    Captured once at startup and passed by reference; nodes never copy
    the credential.
    """
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = 30
    per_page: int = 100
    user_agent: str = USER_AGENT

    @classmethod
    def from_config(cls, config: Dict[str, Any], token: Optional[str] = None) -> 'ClientSettings':
        """
        Build settings from a loaded config.

        Args:
            config: Configuration dictionary from load_config()
            token: Explicit token overriding the configured one

        Returns:
            ClientSettings
        """
        github = config.get('github', {})
        return cls(
            token=token or github.get('token') or None,
            api_url=str(github.get('api_url') or DEFAULT_API_URL).rstrip('/'),
            timeout=github.get('timeout_seconds', 30),
            per_page=github.get('per_page', 100),
        )

    def auth_headers(self) -> Dict[str, str]:
        """Headers carrying the credential, empty when none is configured."""
        if self.token:
            return {'Authorization': f'token {self.token}'}
        return {}
