#!/usr/bin/env python3

"""
ddnswitch - Switch between different versions of the DDN CLI
Features:
- Cached list of available releases (optionally including pre-releases)
- Versioned installs under ~/.ddnswitch with download verification
- Automatic reinstall of corrupted or mismatched binaries
- A single active `ddn` symlink placed in a directory on PATH
"""

try:
    from version import __version__
except ImportError:
    __version__ = "0.0.0-unknown"

from .core.manager import VersionManager
from .core.operations import (
    list_versions,
    install_version,
    switch_version,
    uninstall_version,
)
from .core.errors import (
    DDNSwitchError,
    FetchError,
    InstallError,
    ActivationError,
    LinkPathError,
)
from .cli.cli import run_cli
