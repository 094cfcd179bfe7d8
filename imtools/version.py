"""Build and version information."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from typing import Any

__all__ = [
    "GIT_MAJOR",
    "GIT_MINOR",
    "GIT_VERSION",
    "GIT_COMMIT",
    "GIT_TREE_STATE",
    "BUILD_DATE",
    "Info",
    "ClientVersion",
    "Output",
    "get",
    "get_single_version",
]

# Fallback values, replaced by the build process for release builds.
GIT_MAJOR = ""
GIT_MINOR = ""
GIT_VERSION = "latest"
GIT_COMMIT = ""
GIT_TREE_STATE = ""
BUILD_DATE = "1970-01-01T00:00:00Z"


@dataclass(frozen=True)
class Info:
    """Version details of a build."""

    major: str
    minor: str
    git_version: str
    git_tree_state: str
    git_commit: str
    build_date: str
    python_version: str
    compiler: str
    platform: str

    def __str__(self) -> str:
        return self.git_version

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping; empty optional fields are left out."""
        result: dict[str, Any] = {}
        for key, value in (("major", self.major), ("minor", self.minor)):
            if value:
                result[key] = value
        result["gitVersion"] = self.git_version
        if self.git_tree_state:
            result["gitTreeState"] = self.git_tree_state
        if self.git_commit:
            result["gitCommit"] = self.git_commit
        result["buildDate"] = self.build_date
        result["pythonVersion"] = self.python_version
        result["compiler"] = self.compiler
        result["platform"] = self.platform
        return result


@dataclass(frozen=True)
class ClientVersion:
    """Version of the client SDK core."""

    client_version: str = ""


@dataclass(frozen=True)
class Output:
    """Server version, with the client version when known."""

    server_version: Info
    client_version: ClientVersion | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"OpenIMServerVersion": self.server_version.to_dict()}
        if self.client_version is not None:
            client: dict[str, Any] = {}
            if self.client_version.client_version:
                client["clientVersion"] = self.client_version.client_version
            result["OpenIMClientVersion"] = client
        return result


def get() -> Info:
    """Version information of this build and the running interpreter."""
    return Info(
        major=GIT_MAJOR,
        minor=GIT_MINOR,
        git_version=GIT_VERSION,
        git_tree_state=GIT_TREE_STATE,
        git_commit=GIT_COMMIT,
        build_date=BUILD_DATE,
        python_version=platform.python_version(),
        compiler=platform.python_implementation(),
        platform=f"{sys.platform}/{platform.machine().lower() or 'unknown'}",
    )


def get_single_version() -> str:
    return GIT_VERSION