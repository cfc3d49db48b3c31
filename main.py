#!/usr/bin/env python3

"""
ddnswitch - Switch between different versions of the DDN CLI

Usage:
  ddnswitch [options] [VERSION]
  ddnswitch [options] COMMAND [VERSION]

Commands:
  VERSION            Switch to VERSION (interactive selection when omitted)
  list               List available versions
  install VERSION    Install a version without activating it
  current            Show the active version
  installed          List locally installed versions
  uninstall VERSION  Remove an installed version
  version            Show the ddnswitch version
  init               Create a default config file in ~/.config/ddnswitch/

Options:
  --pre            Include pre-release versions
  --debug          Enable debug logging
  --config FILE    Configuration file
  --help           Show this help message

Configuration file is searched in the following locations:
1. Specified path via --config
2. Current directory (ddnswitch.yaml)
3. User config directory (~/.config/ddnswitch/ddnswitch.yaml)
4. System-wide location (/etc/ddnswitch/ddnswitch.yaml)
"""

from ddnswitch import run_cli

if __name__ == "__main__":
    run_cli()
