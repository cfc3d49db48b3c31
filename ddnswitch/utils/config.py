#!/usr/bin/env python3

import os
import yaml
from typing import Any, Dict, Optional

from ..utils.system import get_real_home

# Type definitions
ConfigDict = Dict[str, Dict[str, Any]]

# Default paths
DEFAULT_CONFIG_PATH = "ddnswitch.yaml"
DEFAULT_RELEASES_URL = (
    "https://gist.githubusercontent.com/shukla2112/"
    "7cab141a3eafab4d4565d7347eec9029/raw/releases.json"
)
DEFAULT_INSTALL_DIR = ".ddnswitch"
DEFAULT_INCLUDE_PRERELEASE = False
DEFAULT_CACHE_EXPIRY = 3600  # Cache expiry in seconds (1 hour)
DEFAULT_REQUEST_TIMEOUT = 60


def user_config_dir() -> str:
    return os.path.join(get_real_home(), ".config/ddnswitch")


def ensure_user_config_dir() -> str:
    """Ensure the user's config directory exists"""
    config_dir = user_config_dir()
    os.makedirs(config_dir, exist_ok=True)
    return config_dir


def default_options() -> Dict[str, Any]:
    return {
        "include_prerelease": DEFAULT_INCLUDE_PRERELEASE,
        "cache_expiry": DEFAULT_CACHE_EXPIRY,
        "request_timeout": DEFAULT_REQUEST_TIMEOUT,
        "install_dir": os.path.join(get_real_home(), DEFAULT_INSTALL_DIR),
        "releases_url": DEFAULT_RELEASES_URL,
    }


def find_config_file(config_path: Optional[str] = None) -> Optional[str]:
    """
    Find the configuration file by checking multiple locations:
    1. Specified path from command line
    2. Current directory
    3. User config directory (~/.config/ddnswitch/)
    4. System-wide location (/etc/ddnswitch)

    Returns None when no file exists; the defaults apply in that case.
    """
    if config_path:
        if os.path.isfile(config_path):
            return config_path
        raise FileNotFoundError(f"Config file not found at: {config_path}")

    candidates = [
        os.path.join(os.getcwd(), DEFAULT_CONFIG_PATH),
        os.path.join(user_config_dir(), DEFAULT_CONFIG_PATH),
        os.path.join("/etc/ddnswitch", DEFAULT_CONFIG_PATH),
    ]
    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate

    return None


def create_default_config(config_path: str) -> ConfigDict:
    """Create a default configuration file"""
    default_config = {"options": default_options()}

    # Ensure the directory exists
    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)

    try:
        with open(config_path, "w") as f:
            yaml.dump(default_config, f, default_flow_style=False)
        return default_config
    except OSError as e:
        raise IOError(f"Failed to create config file: {e}") from e


def validate_options(options: Dict[str, Any]) -> None:
    """Reject option values of the wrong type"""
    if not isinstance(options["include_prerelease"], bool):
        raise ValueError("'include_prerelease' must be true or false")

    for key in ("cache_expiry", "request_timeout"):
        value = options[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"'{key}' must be a positive number of seconds, got {value!r}")

    for key in ("install_dir", "releases_url"):
        value = options[key]
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"'{key}' must be a non-empty string, got {value!r}")


def load_config(config_path: Optional[str]) -> ConfigDict:
    """Load the configuration from the specified path, filling in defaults"""
    config: ConfigDict = {}
    if config_path:
        try:
            with open(config_path, "r") as file:
                config = yaml.safe_load(file) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Config file not found at: {config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    options = config.get("options") or {}
    if not isinstance(options, dict):
        raise ValueError("'options' must be a mapping")

    for key, value in default_options().items():
        options.setdefault(key, value)
    validate_options(options)
    options["install_dir"] = os.path.expanduser(options["install_dir"])

    config["options"] = options
    return config
