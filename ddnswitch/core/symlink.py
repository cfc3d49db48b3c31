#!/usr/bin/env python3

import logging
import os
from typing import List, Optional

from colorama import Fore, Style

from .errors import LinkPathError
from ..utils.system import BIN_NAME, exe_suffix, get_real_home

logger = logging.getLogger(__name__)

MARKER_FILE = ".ddnswitch_test"


class SymlinkResolver:
    """Decides where the active ``ddn`` link lives"""

    def __init__(
        self,
        home: Optional[str] = None,
        search_path: Optional[str] = None,
        os_name: Optional[str] = None,
    ):
        self.home = home or get_real_home()
        self.search_path = (
            search_path if search_path is not None else os.environ.get("PATH", "")
        )
        self.link_name = BIN_NAME + exe_suffix(os_name)

    def preferred_dirs(self) -> List[str]:
        return [
            os.path.join(self.home, "bin"),
            os.path.join(self.home, ".local", "bin"),
            "/usr/local/bin",
        ]

    def path_dirs(self) -> List[str]:
        return self.search_path.split(os.pathsep)

    def resolve(self) -> str:
        """Return the full path of the active link"""
        return os.path.join(self._find_dir(), self.link_name)

    def _find_dir(self) -> str:
        path_dirs = self.path_dirs()

        for preferred in self.preferred_dirs():
            if preferred in path_dirs:
                logger.debug("Found preferred directory in PATH: %s", preferred)
                return preferred

        for path_dir in path_dirs:
            if path_dir in ("", "."):
                continue
            if self._is_writable(path_dir):
                logger.debug("Found writable directory in PATH: %s", path_dir)
                return path_dir

        fallback = os.path.join(self.home, "bin")
        logger.debug("No suitable directory found in PATH, using %s", fallback)
        try:
            os.makedirs(fallback, mode=0o755, exist_ok=True)
        except OSError as e:
            raise LinkPathError(f"failed to create {fallback}: {e}") from e
        print(
            f"{Fore.YELLOW}⚠️ {fallback} is not in your PATH. Add it so the active ddn can be found.{Style.RESET_ALL}"
        )
        return fallback

    @staticmethod
    def _is_writable(directory: str) -> bool:
        """Check a directory by creating and removing a marker file"""
        marker = os.path.join(directory, MARKER_FILE)
        try:
            with open(marker, "w"):
                pass
            os.remove(marker)
        except OSError:
            return False
        return True
