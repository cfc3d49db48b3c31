from __future__ import annotations

import json
import os
import stat
import sys
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

import pytest

posix_only = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="uses shell scripts as fake ddn binaries"
)


def fake_binary_script(reported: str) -> bytes:
    return f'#!/bin/sh\necho "DDN CLI Version: {reported}"\n'.encode()


def write_fake_binary(path: Path, reported: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(fake_binary_script(reported))
    path.chmod(0o755)
    return path


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        body: bytes = b"",
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.headers = headers if headers is not None else {"content-length": str(len(body))}

    def json(self):
        return json.loads(self.body.decode())

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start : start + chunk_size]

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> None:
        return None


class FakeSession:
    """Stands in for requests.Session; answers every GET through ``handler``"""

    def __init__(self, handler: Callable[[str], FakeResponse]) -> None:
        self.handler = handler
        self.calls: List[str] = []

    def get(self, url: str, **kwargs) -> FakeResponse:
        del kwargs
        self.calls.append(url)
        return self.handler(url)


def cdn_handler(reported: Optional[Dict[str, str]] = None) -> Callable[[str], FakeResponse]:
    """Serve a fake binary for any download URL; it reports the tag from the URL"""
    reported = reported or {}

    def handler(url: str) -> FakeResponse:
        tag = url.split("/")[-2]
        return FakeResponse(body=fake_binary_script(reported.get(tag, tag)))

    return handler


@pytest.fixture
def config_file(tmp_path: Path) -> str:
    path = tmp_path / "ddnswitch.yaml"
    path.write_text("options: {}\n")
    return str(path)


def is_executable(path: Path) -> bool:
    return bool(os.stat(path).st_mode & stat.S_IXUSR)
