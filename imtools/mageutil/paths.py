"""Output directory layout and platform names."""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from pathlib import Path

__all__ = ["OutputPaths", "build_output_paths", "os_arch", "detect_platform"]

_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}
_SUPPORTED_ARCHES = ("amd64", "arm64")


def _go_os() -> str:
    name = sys.platform
    if name.startswith("linux"):
        return "linux"
    if name.startswith("freebsd"):
        return "freebsd"
    if name in ("win32", "cygwin"):
        return "windows"
    return name


def _go_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_NAMES.get(machine, machine)


def os_arch() -> str:
    """Operating system and architecture joined with the platform's path separator."""
    system = _go_os()
    separator = "\\" if system == "windows" else "/"
    return f"{system}{separator}{_go_arch()}"


def detect_platform() -> str:
    """Return "<os>_<arch>"; only amd64 and arm64 are supported."""
    arch = _go_arch()
    if arch not in _SUPPORTED_ARCHES:
        raise ValueError(f"Unsupported architecture: {arch}")
    return f"{_go_os()}_{arch}"


@dataclass(frozen=True)
class OutputPaths:
    """Directories and files used when building and running the services."""

    root: Path
    config: Path
    output: Path
    tools: Path
    tmp: Path
    logs: Path
    bin: Path
    bin_path: Path
    bin_tool_path: Path
    init_err_log_file: Path
    init_log_file: Path
    host_bin: Path
    host_bin_tools: Path

    def create_dirs(self) -> None:
        """Create every output directory that does not exist yet."""
        for directory in (
            self.config,
            self.output,
            self.tools,
            self.tmp,
            self.logs,
            self.bin,
            self.bin_path,
            self.bin_tool_path,
            self.host_bin,
            self.host_bin_tools,
        ):
            directory.mkdir(parents=True, exist_ok=True)

    def bin_full_path(self, bin_name: str) -> str:
        return str(self.host_bin / bin_name)

    def tool_full_path(self, tool_name: str) -> str:
        return str(self.host_bin_tools / tool_name)


def build_output_paths(root: str | Path | None = None) -> OutputPaths:
    """Lay out the output tree under ``root`` (the working directory by default)."""
    base = Path(root) if root is not None else Path.cwd()
    output = base / "_output"
    logs = output / "logs"
    bin_dir = output / "bin"
    bin_path = bin_dir / "platforms"
    bin_tool_path = bin_dir / "tools"
    host = os_arch()
    return OutputPaths(
        root=base,
        config=base / "config",
        output=output,
        tools=output / "tools",
        tmp=output / "tmp",
        logs=logs,
        bin=bin_dir,
        bin_path=bin_path,
        bin_tool_path=bin_tool_path,
        init_err_log_file=logs / "openim-init-err.log",
        init_log_file=logs / "openim-init.log",
        host_bin=bin_path / host,
        host_bin_tools=bin_tool_path / host,
    )