#!/usr/bin/env python3

import logging


def setup_logging(debug: bool = False) -> None:
    """Send diagnostic logging to the console, verbose only with --debug"""
    handler = logging.StreamHandler()
    if debug:
        handler.setFormatter(logging.Formatter("[DEBUG] %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)

    # Keep third-party request chatter out of --debug output
    logging.getLogger("urllib3").setLevel(logging.WARNING)
