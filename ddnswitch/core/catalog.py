#!/usr/bin/env python3

import logging
from typing import Optional

import requests

from .errors import FetchError
from .models import CatalogSnapshot, Release, build_snapshot
from ..utils.config import DEFAULT_RELEASES_URL, DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

USER_AGENT = "ddnswitch"


def create_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


class ReleaseCatalog:
    """Fetches the list of DDN CLI releases"""

    def __init__(
        self,
        url: str = DEFAULT_RELEASES_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.session = session or create_session()

    def fetch(self, include_prerelease: bool = False) -> CatalogSnapshot:
        """Fetch, filter and sort the release list in a single request"""
        logger.debug("Fetching releases from %s", self.url)
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"failed to fetch releases: {e}") from e

        if response.status_code != 200:
            raise FetchError(
                f"Releases API returned status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"failed to decode releases: {e}") from e

        if not isinstance(payload, list):
            raise FetchError("failed to decode releases: expected a JSON array")

        try:
            releases = [Release.from_json(item) for item in payload]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FetchError(f"failed to decode releases: {e}") from e

        snapshot = build_snapshot(releases, include_prerelease)
        logger.debug(
            "Fetched %d releases, %d after filtering", len(releases), len(snapshot)
        )
        return snapshot
