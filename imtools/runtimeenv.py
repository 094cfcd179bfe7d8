"""Detection of the environment the process runs in."""

from __future__ import annotations

import functools
import os

__all__ = [
    "KUBERNETES",
    "DOCKER",
    "SOURCE",
    "detect_runtime_environment",
    "runtime_environment",
]

KUBERNETES = "kubernetes"
DOCKER = "docker"
SOURCE = "source"

_CGROUP_PATH = "/proc/1/cgroup"
_SERVICEACCOUNT_PATH = "/var/run/secrets/kubernetes.io/serviceaccount"


def _is_docker(cgroup_path: str) -> bool:
    try:
        with open(cgroup_path, encoding="utf-8", errors="replace") as handle:
            return "docker" in handle.read()
    except OSError:
        return False


def _is_kubernetes(serviceaccount_path: str) -> bool:
    try:
        os.stat(serviceaccount_path)
    except OSError:
        return False
    return True


def detect_runtime_environment(
    cgroup_path: str = _CGROUP_PATH,
    serviceaccount_path: str = _SERVICEACCOUNT_PATH,
) -> str:
    """Return "kubernetes", "docker" or "source", checked in that order."""
    if _is_kubernetes(serviceaccount_path):
        return KUBERNETES
    if _is_docker(cgroup_path):
        return DOCKER
    return SOURCE


@functools.lru_cache(maxsize=None)
def runtime_environment() -> str:
    """The environment of this process, detected once and remembered."""
    return detect_runtime_environment()