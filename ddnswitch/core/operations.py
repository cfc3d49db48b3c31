#!/usr/bin/env python3

import logging
from typing import Optional

from colorama import Fore, Style

from .errors import DDNSwitchError
from .manager import VersionManager
from .models import CatalogSnapshot, Release

logger = logging.getLogger(__name__)


def _format_release(release: Release, is_current: bool) -> str:
    prerelease = f" {Fore.YELLOW}[pre-release]{Style.RESET_ALL}" if release.prerelease else ""
    current = f" {Fore.GREEN}(current){Style.RESET_ALL}" if is_current else ""
    return f"{release.tag}{prerelease}{current}"


def _fetch_releases(manager: VersionManager) -> CatalogSnapshot:
    print("📥 Fetching available DDN CLI versions...")
    logger.debug("Cache status: %s", manager.cache.status(manager.include_prerelease))
    releases = manager.list_versions()
    logger.debug("Cache status: %s", manager.cache.status(manager.include_prerelease))
    return releases


def list_versions(manager: VersionManager) -> None:
    """List all available versions, marking the active one"""
    releases = _fetch_releases(manager)

    print(f"\n{Fore.CYAN}{Style.BRIGHT}Available DDN CLI versions:{Style.RESET_ALL}")
    if not releases:
        print(f"{Fore.YELLOW}No releases found.{Style.RESET_ALL}")
        return

    current = manager.current_version()
    for i, release in enumerate(releases, start=1):
        is_current = current is not None and release.tag in current
        print(f"{i:2d}. {_format_release(release, is_current)}")


def select_and_switch(manager: VersionManager) -> None:
    """Prompt for a version from the release list and switch to it"""
    releases = _fetch_releases(manager)
    if not releases:
        raise DDNSwitchError("no DDN CLI releases found")

    current = manager.current_version()
    print()
    for i, release in enumerate(releases, start=1):
        is_current = current is not None and release.tag in current
        print(f"{i:2d}. {_format_release(release, is_current)}")

    response = input("\nSelect DDN CLI version to install (number or tag): ").strip()
    tag = _resolve_selection(releases, response)
    if tag is None:
        raise DDNSwitchError(f"invalid selection: {response!r}")

    switch_version(manager, tag)


def _resolve_selection(releases: CatalogSnapshot, response: str) -> Optional[str]:
    if response.isdigit():
        index = int(response)
        if 1 <= index <= len(releases):
            return releases[index - 1].tag
        return None
    for release in releases:
        if release.tag == response:
            return release.tag
    return None


def switch_version(manager: VersionManager, tag: str) -> None:
    """Switch the active DDN CLI to the given version"""
    print(f"🔀 Switching to DDN CLI version {tag}...")
    if manager.switch_to(tag):
        print(f"{Fore.GREEN}✅ DDN CLI {tag} is now active{Style.RESET_ALL}")


def install_version(manager: VersionManager, tag: str) -> None:
    """Install a version without activating it"""
    print(f"📦 Installing DDN CLI version {tag}...")
    manager.install(tag)


def show_current(manager: VersionManager) -> None:
    """Show the version reported by the active DDN CLI"""
    current = manager.current_version()
    if current is None:
        print(
            f"{Fore.YELLOW}No DDN CLI found in PATH or unable to determine version{Style.RESET_ALL}"
        )
        return
    print(f"Current DDN CLI version: {current}")


def list_installed(manager: VersionManager) -> None:
    """List versions present under the install root"""
    versions = manager.installed_versions()
    print(f"\n{Fore.CYAN}{Style.BRIGHT}Installed in {manager.install_dir}:{Style.RESET_ALL}")
    if not versions:
        print(f"{Fore.YELLOW}No versions installed.{Style.RESET_ALL}")
        return
    for version in versions:
        print(f"  {version}")


def uninstall_version(manager: VersionManager, tag: str) -> None:
    """Remove an installed version directory"""
    manager.uninstall(tag)
    print(f"{Fore.GREEN}✅ Successfully uninstalled DDN CLI version {tag}{Style.RESET_ALL}")
