"""Starting, stopping and checking the configured service binaries."""

from __future__ import annotations

import os
import subprocess
import sys

from imtools.mageutil.config import StartConfig
from imtools.mageutil.paths import OutputPaths
from imtools.mageutil.process import (
    ProcessCountError,
    check_process_names,
    check_process_names_exist,
    kill_exist_binary,
    print_binary_ports,
)

__all__ = ["ServiceError", "ServiceManager"]


class ServiceError(RuntimeError):
    """Raised when services or tools cannot be started, or are in the wrong state."""


class ServiceManager:
    """Runs the service and tool binaries described by a start configuration."""

    def __init__(self, config: StartConfig, paths: OutputPaths) -> None:
        self.config = config
        self.paths = paths
        self._started: list[subprocess.Popen] = []

    @property
    def _config_dir(self) -> str:
        return str(self.paths.config) + os.sep

    def stop_binaries(self) -> None:
        """Stop every process of every configured service."""
        for binary in self.config.service_binaries:
            kill_exist_binary(self.paths.bin_full_path(binary))

    def start_binaries(self) -> None:
        """Start the configured number of instances of each service, without waiting."""
        for binary, count in self.config.service_binaries.items():
            bin_full_path = self.paths.bin_full_path(binary)
            for index in range(count):
                args = [bin_full_path, "-i", str(index), "-c", self._config_dir]
                print(f"Starting {' '.join(args)}")
                try:
                    process = subprocess.Popen(args, cwd=self.paths.host_bin)
                except OSError as exc:
                    print(f"Failed to start {bin_full_path} with args {args[1:]}: {exc}", file=sys.stderr)
                    raise ServiceError(f"failed to start {bin_full_path}: {exc}") from exc
                self._started.append(process)

    def start_tools(self) -> None:
        """Run each tool to completion, stopping at the first failure."""
        for tool in self.config.tool_binaries:
            tool_full_path = self.paths.tool_full_path(tool)
            args = [tool_full_path, "-c", self._config_dir]
            command = " ".join(args)
            print(f"Starting {command}")
            try:
                process = subprocess.Popen(args, cwd=self.paths.host_bin_tools)
            except OSError as exc:
                print(f"Failed to start {tool_full_path} with error: {exc}")
                raise ServiceError(f"failed to start {tool_full_path}: {exc}") from exc
            code = process.wait()
            if code != 0:
                print(f"Failed to execute {tool_full_path} with exit code: {code}")
                raise ServiceError(f"{tool_full_path} exited with code {code}")
            print(f"Starting {command} successfully ")

    def kill_exist_binaries(self) -> None:
        self.stop_binaries()

    def check_binaries_stop(self) -> None:
        """Raise ServiceError if any configured service is still running."""
        running = [
            binary
            for binary in self.config.service_binaries
            if check_process_names_exist(self.paths.bin_full_path(binary))
        ]
        if running:
            raise ServiceError(f"the following binaries are still running: {', '.join(running)}")

    def check_binaries_running(self) -> None:
        """Raise ServiceError if any service does not run the configured number of instances."""
        messages = []
        for binary, expected in self.config.service_binaries.items():
            try:
                check_process_names(self.paths.bin_full_path(binary), expected)
            except ProcessCountError as exc:
                messages.append(f"binary {binary} is not running as expected: {exc}")
        if messages:
            raise ServiceError("\n".join(messages))

    def print_listened_ports_by_binaries(self) -> None:
        for binary in self.config.service_binaries:
            print_binary_ports(self.paths.bin_full_path(binary))