#!/usr/bin/env python3

import logging
import os
import shutil
from typing import Callable, List, Optional

from colorama import Fore, Style

from .catalog import ReleaseCatalog
from .errors import (
    FILESYSTEM,
    ActivationError,
    DDNSwitchError,
    InstallError,
    LinkPathError,
    VersionNotInstalledError,
)
from .installer import Installer, version_dir
from .models import CatalogSnapshot, sort_tags
from .symlink import SymlinkResolver
from ..utils.cache import VersionCache
from ..utils.config import ConfigDict, find_config_file, load_config
from ..utils.system import BIN_NAME, detect_platform, exe_suffix, query_version

logger = logging.getLogger(__name__)


class VersionManager:
    """Core class for installing and activating DDN CLI versions"""

    def __init__(
        self,
        config_path: Optional[str] = None,
        install_dir: Optional[str] = None,
        catalog: Optional[ReleaseCatalog] = None,
        cache: Optional[VersionCache] = None,
        installer: Optional[Installer] = None,
        resolver: Optional[SymlinkResolver] = None,
        version_query: Callable[[str], Optional[str]] = query_version,
        symlink: Callable[[str, str], None] = os.symlink,
        os_name: Optional[str] = None,
    ):
        self.config_path = find_config_file(config_path)
        self.config = self._load_config()
        options = self.config["options"]

        self.include_prerelease = bool(options["include_prerelease"])
        self.install_dir = install_dir or options["install_dir"]
        self.os_name = os_name or detect_platform()[0]
        self.version_query = version_query
        self._symlink = symlink

        self.catalog = catalog or ReleaseCatalog(
            options["releases_url"], options["request_timeout"]
        )
        self.cache = cache or VersionCache(self.catalog.fetch, options["cache_expiry"])
        self.installer = installer or Installer(
            self.install_dir,
            session=self.catalog.session,
            version_query=version_query,
            timeout=options["request_timeout"],
        )
        self.resolver = resolver or SymlinkResolver(os_name=self.os_name)

    def _load_config(self) -> ConfigDict:
        """Load the configuration file, or defaults when there is none"""
        config = load_config(self.config_path)
        logger.debug("Configuration loaded from %s", self.config_path or "defaults")
        return config

    def binary_path(self, tag: str) -> str:
        return os.path.join(self.install_dir, tag, BIN_NAME + exe_suffix(self.os_name))

    def ensure_install_dir(self) -> None:
        os.makedirs(self.install_dir, mode=0o755, exist_ok=True)

    def list_versions(self, include_prerelease: Optional[bool] = None) -> CatalogSnapshot:
        """Available releases, served from the cache while it is fresh"""
        if include_prerelease is None:
            include_prerelease = self.include_prerelease
        return self.cache.get_snapshot(include_prerelease)

    def current_version(self) -> Optional[str]:
        """Version string reported by the ddn found on PATH"""
        return self.version_query(BIN_NAME)

    def is_current_version(self, tag: str) -> bool:
        current = self.current_version()
        # Substring match, so "v2.0" also matches an active "v2.0.0"
        return current is not None and tag in current

    def installed_versions(self) -> List[str]:
        """Tags with a version directory under the install root, newest first"""
        if not os.path.isdir(self.install_dir):
            return []
        tags = [
            item
            for item in os.listdir(self.install_dir)
            if os.path.isdir(os.path.join(self.install_dir, item))
            and not os.path.islink(os.path.join(self.install_dir, item))
        ]
        return sort_tags(tags)

    def install(self, tag: str) -> str:
        try:
            self.ensure_install_dir()
        except OSError as e:
            raise InstallError(FILESYSTEM, f"failed to create {self.install_dir}: {e}") from e
        return self.installer.install(tag)

    def uninstall(self, tag: str) -> None:
        target_dir = version_dir(self.install_dir, tag)
        if not os.path.isdir(target_dir) or os.path.islink(target_dir):
            raise VersionNotInstalledError(f"version {tag} is not installed")
        try:
            shutil.rmtree(target_dir)
        except OSError as e:
            raise DDNSwitchError(
                f"failed to uninstall version {tag}: {e}"
            ) from e

    def switch_to(self, tag: str) -> bool:
        """
        Make ``tag`` the active DDN CLI version.

        Installs the version when it is missing, reinstalls it once when the
        installed binary does not report ``tag``, then points the active link
        at it. Returns False when the link already pointed at the binary.
        """
        logger.debug("Starting switch to %s", tag)
        try:
            version_dir(self.install_dir, tag)
        except InstallError as e:
            raise ActivationError(str(e)) from e

        try:
            self.ensure_install_dir()
        except OSError as e:
            raise ActivationError(f"failed to create {self.install_dir}: {e}") from e
        logger.debug("Install directory is %s", self.install_dir)

        bin_path = self.binary_path(tag)
        logger.debug("Binary path should be %s", bin_path)

        if not os.path.exists(bin_path):
            print(f"📦 Version {tag} not found locally. Installing...")
            self._install_or_fail(tag, "install")
        else:
            logger.debug("Binary exists at %s", bin_path)
            self._ensure_executable(bin_path)

            reported = self.version_query(bin_path)
            if reported is None:
                print(
                    f"{Fore.YELLOW}Reinstalling version {tag} due to verification failure{Style.RESET_ALL}"
                )
                self._install_or_fail(tag, "reinstall")
            elif tag not in reported:
                logger.debug("Version mismatch! Expected %s, got %s", tag, reported)
                print(
                    f"{Fore.YELLOW}Reinstalling version {tag} due to version mismatch{Style.RESET_ALL}"
                )
                self._install_or_fail(tag, "reinstall")
            else:
                logger.debug("Version verification successful")

        try:
            link_path = self.resolver.resolve()
        except LinkPathError as e:
            raise ActivationError(f"failed to determine symlink path: {e}") from e
        logger.debug("Symlink path is %s", link_path)

        if os.path.islink(link_path):
            target = os.readlink(link_path)
            logger.debug("Current symlink points to %s", target)
            if target == bin_path:
                print(f"{Fore.GREEN}✔ Already using DDN CLI version {tag}{Style.RESET_ALL}")
                return False

        try:
            self._create_symlink(bin_path, link_path)
        except OSError as e:
            raise ActivationError(
                f"failed to create symlink for version {tag}: {e}"
            ) from e

        self._verify_active(tag)
        return True

    def _install_or_fail(self, tag: str, action: str) -> None:
        try:
            self.install(tag)
        except InstallError as e:
            raise ActivationError(f"failed to {action} version {tag}: {e}") from e

    def _ensure_executable(self, bin_path: str) -> None:
        if self.os_name == "windows":
            return
        try:
            mode = os.stat(bin_path).st_mode
            logger.debug("Binary permissions: %o", mode & 0o777)
            if mode & 0o111 == 0:
                logger.debug("Binary is not executable, fixing permissions")
                os.chmod(bin_path, 0o755)
        except OSError as e:
            logger.debug("Failed to make binary executable: %s", e)

    def _create_symlink(self, source: str, link_name: str) -> None:
        """Point link_name at source, copying the file when symlinks fail"""
        if os.path.lexists(link_name):
            if os.path.isdir(link_name) and not os.path.islink(link_name):
                raise ActivationError(
                    f"{link_name} is a directory, refusing to replace it with a link"
                )
            logger.debug("Removing existing symlink or file")
            os.remove(link_name)

        logger.debug("Creating symlink from %s to %s", link_name, source)
        try:
            self._symlink(source, link_name)
        except (OSError, NotImplementedError) as e:
            logger.debug("Failed to create symlink: %s", e)
            logger.debug("Falling back to file copy")
            shutil.copyfile(source, link_name)
            shutil.copymode(source, link_name)

    def _verify_active(self, tag: str) -> None:
        """Warn when the ddn on PATH does not report the new version"""
        active = self.current_version()
        if active is None:
            logger.debug("Could not run %s from PATH", BIN_NAME)
            return

        logger.debug("Active ddn reports version: %s", active)
        if tag not in active:
            print(
                f"{Fore.YELLOW}⚠️ WARNING: Active DDN CLI reports version {active}, expected {tag}{Style.RESET_ALL}"
            )
        else:
            print(f"{Fore.GREEN}✅ Verified: Active DDN CLI is now version {tag}{Style.RESET_ALL}")
