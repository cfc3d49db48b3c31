#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple, Union

import semver


@dataclass(frozen=True)
class Release:
    """A single entry of the remote release list"""

    tag: str
    name: str = ""
    prerelease: bool = False
    draft: bool = False

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Release":
        """Build a release from one object of the releases JSON array"""
        tag = data["tag_name"]
        if not isinstance(tag, str) or not tag:
            raise ValueError(f"invalid tag_name: {tag!r}")
        return cls(
            tag=tag,
            name=data.get("name") or "",
            prerelease=bool(data.get("prerelease", False)),
            draft=bool(data.get("draft", False)),
        )


# Ordered newest first; replaced as a whole on every fetch
CatalogSnapshot = Tuple[Release, ...]


def version_sort_key(tag: str) -> Tuple[int, Union[semver.Version, str]]:
    """
    Sort key for version tags.

    Tags that parse as a semantic version compare by semver precedence, with
    missing minor and patch parts read as zero. Tags that do not parse
    compare as plain strings and rank below every parseable tag.
    """
    try:
        version = semver.Version.parse(
            tag[1:] if tag.startswith("v") else tag, optional_minor_and_patch=True
        )
    except (ValueError, TypeError):
        return (0, tag)
    return (1, version)


def sort_tags(tags: Iterable[str]) -> list:
    """Sort version tags newest first"""
    return sorted(tags, key=version_sort_key, reverse=True)


def build_snapshot(
    releases: Iterable[Release], include_prerelease: bool = False
) -> CatalogSnapshot:
    """Drop drafts (and prereleases unless requested) and sort newest first"""
    valid = [
        release
        for release in releases
        if not release.draft and (include_prerelease or not release.prerelease)
    ]
    valid.sort(key=lambda release: version_sort_key(release.tag), reverse=True)
    return tuple(valid)
