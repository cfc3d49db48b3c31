#!/usr/bin/env python3

import argparse
import os
import sys
from typing import List, Optional

from colorama import Fore, Style

from ..core.errors import DDNSwitchError
from ..core.manager import VersionManager
from ..core.operations import (
    install_version,
    list_installed,
    list_versions,
    select_and_switch,
    show_current,
    switch_version,
    uninstall_version,
)
from ..utils.config import (
    DEFAULT_CONFIG_PATH,
    create_default_config,
    ensure_user_config_dir,
)
from ..utils.logging import setup_logging

try:
    from version import __version__
except ImportError:
    __version__ = "0.0.0-unknown"

COMMANDS = ("list", "install", "current", "installed", "uninstall", "version", "init")
# Commands that take a version argument
VERSION_COMMANDS = ("install", "uninstall")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        prog="ddnswitch",
        description=f"ddnswitch v{__version__} - Switch between different versions of the DDN CLI",
        epilog=(
            "commands:\n"
            "  VERSION            switch to VERSION (prompt when omitted)\n"
            "  list               list available versions\n"
            "  install VERSION    install a version without activating it\n"
            "  current            show the active version\n"
            "  installed          list locally installed versions\n"
            "  uninstall VERSION  remove an installed version\n"
            "  version            show the ddnswitch version\n"
            "  init               create a default config file"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "command",
        nargs="?",
        metavar="COMMAND|VERSION",
        help="Command to run, or a version to switch to",
    )
    parser.add_argument(
        "version",
        nargs="?",
        help="Version for install/uninstall",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Configuration file (default: search for {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--pre",
        action="store_true",
        help="Include pre-release versions",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if args.command in VERSION_COMMANDS and not args.version:
        parser.error(f"{args.command} requires a version argument")
    if args.version and args.command not in VERSION_COMMANDS:
        parser.error(f"unexpected argument: {args.version}")

    return args


def handle_init_command() -> int:
    """Handle the init command to create a default config file"""
    user_config_dir = ensure_user_config_dir()
    user_config_path = os.path.join(user_config_dir, DEFAULT_CONFIG_PATH)

    if os.path.isfile(user_config_path):
        print(
            f"{Fore.YELLOW}Config file already exists at {user_config_path}{Style.RESET_ALL}"
        )
        return 0

    try:
        create_default_config(user_config_path)
    except IOError as e:
        print(f"{Fore.RED}❌ Failed to create config file: {e}{Style.RESET_ALL}")
        return 1
    print(f"{Fore.GREEN}✅ Created default config file at {user_config_path}{Style.RESET_ALL}")
    return 0


def run_command(manager: VersionManager, args: argparse.Namespace) -> None:
    """Dispatch a parsed command to its operation"""
    if args.command is None:
        select_and_switch(manager)
    elif args.command == "list":
        list_versions(manager)
    elif args.command == "install":
        install_version(manager, args.version)
    elif args.command == "current":
        show_current(manager)
    elif args.command == "installed":
        list_installed(manager)
    elif args.command == "uninstall":
        uninstall_version(manager, args.version)
    else:
        switch_version(manager, args.command)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.debug)

    if args.command == "version":
        print(f"ddnswitch version {__version__}")
        return 0

    if args.command == "init":
        return handle_init_command()

    try:
        manager = VersionManager(args.config)
        if args.pre:
            manager.include_prerelease = True
        run_command(manager, args)
    except FileNotFoundError as e:
        print(f"{Fore.RED}❌ {e}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}Use 'ddnswitch init' to create a default configuration file{Style.RESET_ALL}")
        return 1
    except (DDNSwitchError, ValueError) as e:
        print(f"{Fore.RED}❌ Error: {e}{Style.RESET_ALL}")
        return 1
    except (KeyboardInterrupt, EOFError):
        print(f"\n{Fore.YELLOW}Aborted{Style.RESET_ALL}")
        return 1

    return 0


def run_cli() -> None:
    """Run the command-line interface"""
    sys.exit(main())


if __name__ == "__main__":
    run_cli()
