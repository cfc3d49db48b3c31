#!/usr/bin/env python3

import logging
import os
import platform
import subprocess
import sys
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

BIN_NAME = "ddn"
VERSION_QUERY_TIMEOUT = 30


def get_real_home() -> str:
    """Get the real user's home directory even when running with sudo"""
    if "SUDO_USER" in os.environ and os.environ.get("HOME") == "/root":
        real_user = os.environ["SUDO_USER"]
        return os.path.expanduser(f"~{real_user}")
    return os.path.expanduser("~")


def detect_platform() -> Tuple[str, str]:
    """Return the (os, arch) pair used in download URLs"""
    current_platform = sys.platform
    if current_platform.startswith("linux"):
        current_platform = "linux"
    elif current_platform.startswith("darwin"):
        current_platform = "darwin"
    elif current_platform.startswith("win"):
        current_platform = "windows"

    current_arch = platform.machine().lower()
    if current_arch in ["x86_64", "amd64", "x64"]:
        current_arch = "amd64"
    elif current_arch in ["aarch64", "arm64"]:
        current_arch = "arm64"
    elif current_arch.startswith("arm"):
        current_arch = "arm"

    return current_platform, current_arch


def exe_suffix(os_name: Optional[str] = None) -> str:
    """Executable file extension for the given platform"""
    if os_name is None:
        os_name = detect_platform()[0]
    return ".exe" if os_name == "windows" else ""


def query_version(command: str, timeout: int = VERSION_QUERY_TIMEOUT) -> Optional[str]:
    """
    Run ``command version`` and return its combined output.

    Returns None when the command cannot be started, exits non-zero or
    times out.
    """
    try:
        result = subprocess.run(
            [command, "version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        logger.debug("Failed to execute %s: %s", command, e)
        logger.debug("Command output: %s", e.output)
        return None
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Failed to execute %s: %s", command, e)
        return None

    return result.stdout.strip()
