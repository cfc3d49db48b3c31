#!/usr/bin/env python3

from typing import Optional


class DDNSwitchError(Exception):
    """Base class for every error reported to the user"""


class FetchError(DDNSwitchError):
    """The release list could not be fetched or parsed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# Installer failure kinds
UNSUPPORTED_PLATFORM = "unsupported_platform"
DOWNLOAD_FAILED = "download_failed"
VERIFICATION_FAILED = "verification_failed"
FILESYSTEM = "filesystem"


class InstallError(DDNSwitchError):
    """A version could not be downloaded, written or verified"""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind


class ActivationError(DDNSwitchError):
    """Switching the active version failed"""


class LinkPathError(DDNSwitchError):
    """No usable directory was found for the active link"""


class VersionNotInstalledError(DDNSwitchError):
    """The requested version has no directory under the install root"""
