#!/usr/bin/env python3

import logging
import os
import shutil
import sys
from typing import Callable, Optional, Tuple

import requests
from colorama import Fore, Style

from .catalog import create_session
from .errors import (
    DOWNLOAD_FAILED,
    FILESYSTEM,
    UNSUPPORTED_PLATFORM,
    VERIFICATION_FAILED,
    InstallError,
)
from ..utils.system import BIN_NAME, detect_platform, exe_suffix, query_version

logger = logging.getLogger(__name__)

DOWNLOAD_URL_TEMPLATE = (
    "https://graphql-engine-cdn.hasura.io/ddn/cli/v4/{tag}/cli-ddn-{os}-{arch}"
)
BLOCK_SIZE = 8192
PROGRESS_BAR_LENGTH = 30

# (os, arch) pairs the DDN CLI is not published for
UNSUPPORTED_PLATFORMS = {
    ("linux", "arm64"): "DDN CLI does not support ARM-based Linux systems",
    ("linux", "arm"): "DDN CLI does not support ARM-based Linux systems",
}


def download_url(tag: str, os_name: str, arch: str) -> str:
    return DOWNLOAD_URL_TEMPLATE.format(tag=tag, os=os_name, arch=arch)


def version_dir(install_dir: str, tag: str) -> str:
    """Directory for tag, which must be a single name directly under install_dir"""
    separators = [sep for sep in (os.sep, os.altsep) if sep]
    if tag in ("", ".", "..") or any(sep in tag for sep in separators):
        raise InstallError(FILESYSTEM, f"invalid version tag: {tag!r}")

    path = os.path.normpath(os.path.join(install_dir, tag))
    if os.path.dirname(path) != os.path.normpath(install_dir):
        raise InstallError(FILESYSTEM, f"invalid version tag: {tag!r}")
    return path


def _print_progress(downloaded: int, total_size: int) -> None:
    if total_size > 0:
        progress = int(PROGRESS_BAR_LENGTH * min(downloaded, total_size) / total_size)
        sys.stdout.write(
            f"\r[{'=' * progress}{' ' * (PROGRESS_BAR_LENGTH - progress)}] {downloaded}/{total_size} bytes "
        )
    else:
        sys.stdout.write(f"\r{downloaded} bytes ")
    sys.stdout.flush()


class Installer:
    """Downloads DDN CLI binaries into the install root and verifies them"""

    def __init__(
        self,
        install_dir: str,
        session: Optional[requests.Session] = None,
        platform: Optional[Tuple[str, str]] = None,
        version_query: Callable[[str], Optional[str]] = query_version,
        timeout: Optional[float] = None,
    ):
        self.install_dir = install_dir
        self.session = session or create_session()
        self.os_name, self.arch = platform or detect_platform()
        self.version_query = version_query
        self.timeout = timeout

    def binary_path(self, tag: str) -> str:
        return os.path.join(self.install_dir, tag, BIN_NAME + exe_suffix(self.os_name))

    def check_platform(self) -> None:
        reason = UNSUPPORTED_PLATFORMS.get((self.os_name, self.arch))
        if reason:
            raise InstallError(UNSUPPORTED_PLATFORM, reason)

    def install(self, tag: str) -> str:
        """
        Download ``tag`` into a fresh version directory and verify it.

        Returns the path of the verified binary.
        """
        logger.debug("Starting install for %s", tag)
        logger.debug("Platform: %s, Architecture: %s", self.os_name, self.arch)
        self.check_platform()

        target_dir = version_dir(self.install_dir, tag)
        logger.debug("Version directory: %s", target_dir)
        try:
            if os.path.lexists(target_dir):
                logger.debug("Removing existing version directory")
                if os.path.isdir(target_dir) and not os.path.islink(target_dir):
                    shutil.rmtree(target_dir)
                else:
                    os.remove(target_dir)
            os.makedirs(target_dir, mode=0o755)
        except OSError as e:
            raise InstallError(
                FILESYSTEM, f"failed to prepare directory for version {tag}: {e}"
            ) from e

        url = download_url(tag, self.os_name, self.arch)
        bin_path = os.path.join(target_dir, BIN_NAME + exe_suffix(self.os_name))
        self._download(url, bin_path)

        if self.os_name != "windows":
            try:
                os.chmod(bin_path, 0o755)
            except OSError as e:
                raise InstallError(
                    FILESYSTEM, f"failed to set executable permissions: {e}"
                ) from e

        logger.debug("Verifying downloaded binary")
        reported = self.version_query(bin_path)
        if reported is None:
            raise InstallError(
                VERIFICATION_FAILED,
                f"failed to verify downloaded binary for version {tag}",
            )
        logger.debug("Binary reports version: %s", reported)
        if tag not in reported:
            raise InstallError(
                VERIFICATION_FAILED,
                f"downloaded binary reports version {reported}, expected {tag}",
            )

        print(f"{Fore.GREEN}✅ Successfully installed DDN CLI {tag}{Style.RESET_ALL}")
        return bin_path

    def _download(self, url: str, dest_path: str) -> None:
        print(f"⬇️  Downloading from {url}")
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                if response.status_code != 200:
                    raise InstallError(
                        DOWNLOAD_FAILED,
                        f"failed to download: HTTP status {response.status_code}",
                    )

                total_size = int(response.headers.get("content-length", 0) or 0)
                downloaded = 0
                with open(dest_path, "wb") as f:
                    for data in response.iter_content(BLOCK_SIZE):
                        f.write(data)
                        downloaded += len(data)
                        _print_progress(downloaded, total_size)
                print()  # Newline after progress bar
        except requests.RequestException as e:
            self._discard(dest_path)
            raise InstallError(DOWNLOAD_FAILED, f"HTTP request failed: {e}") from e
        except OSError as e:
            self._discard(dest_path)
            raise InstallError(
                FILESYSTEM, f"failed to write binary data: {e}"
            ) from e

    @staticmethod
    def _discard(path: str) -> None:
        if os.path.exists(path):
            os.remove(path)
