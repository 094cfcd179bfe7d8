"""Finding, inspecting and stopping processes by executable path."""

from __future__ import annotations

from collections.abc import Iterator

import psutil

from imtools.mageutil.console import print_green

__all__ = [
    "ProcessCountError",
    "check_process_names",
    "check_process_names_exist",
    "find_pids_by_binary_path",
    "print_binary_ports",
    "kill_exist_binary",
]

_PROCESS_ERRORS = (psutil.Error, OSError)


class ProcessCountError(RuntimeError):
    """Raised when the number of running instances differs from the expected one."""

    def __init__(self, process_path: str, expected: int, running: int) -> None:
        self.process_path = process_path
        self.expected = expected
        self.running = running
        super().__init__(f"{process_path} Expected {expected} processes, but {running} running")


def _executables() -> Iterator[tuple[psutil.Process, str]]:
    """Each process whose executable path can be read, with that path."""
    for proc in psutil.process_iter():
        try:
            exe = proc.exe()
        except _PROCESS_ERRORS:
            continue
        yield proc, exe or ""


def _same_path(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def check_process_names(process_path: str, expected_count: int) -> None:
    """Raise ProcessCountError unless exactly ``expected_count`` instances run."""
    running = sum(1 for _, exe in _executables() if _same_path(exe, process_path))
    if running != expected_count:
        raise ProcessCountError(process_path, expected_count, running)


def check_process_names_exist(process_path: str) -> bool:
    """Whether any process runs from exactly ``process_path``."""
    return any(exe == process_path for _, exe in _executables())


def find_pids_by_binary_path(binary_path: str) -> list[int]:
    return [proc.pid for proc, exe in _executables() if _same_path(exe, binary_path)]


def _connections(proc: psutil.Process):
    method = getattr(proc, "net_connections", None) or proc.connections
    return method(kind="all")


def print_binary_ports(binary_path: str) -> None:
    """Print the command line and listening ports of each instance of a binary."""
    pids = find_pids_by_binary_path(binary_path)
    if not pids:
        print(f"No running processes found for binary: {binary_path}")
        return
    for pid in pids:
        try:
            proc = psutil.Process(pid)
        except _PROCESS_ERRORS as exc:
            print(f"Failed to create process object for PID {pid}: {exc}")
            continue
        try:
            cmdline = " ".join(proc.cmdline())
        except _PROCESS_ERRORS as exc:
            print(f"Failed to get command line for PID {pid}: {exc}")
            continue
        try:
            connections = _connections(proc)
        except _PROCESS_ERRORS as exc:
            print(f"Error getting connections for PID {pid}: {exc}")
            continue
        ports = sorted(
            {conn.laddr.port for conn in connections if conn.status == psutil.CONN_LISTEN and conn.laddr}
        )
        if ports:
            listed = ", ".join(str(port) for port in ports)
            print_green(f"Cmdline: {cmdline}, PID: {pid} is listening on ports: {listed}")
        else:
            print_green(f"Cmdline: {cmdline}, PID: {pid} is not listening on any ports.")


def kill_exist_binary(binary_path: str) -> None:
    """Terminate, or failing that kill, every process whose executable path contains ``binary_path``."""
    if not binary_path:
        raise ValueError("binary_path must not be empty")
    needle = binary_path.lower()
    for proc, exe in _executables():
        if needle not in exe.lower():
            continue
        try:
            cmdline = " ".join(proc.cmdline())
        except _PROCESS_ERRORS as exc:
            print(f"Failed to get command line for process {proc.pid}: {exc}")
            continue
        try:
            proc.terminate()
        except _PROCESS_ERRORS:
            try:
                proc.kill()
            except _PROCESS_ERRORS as exc:
                print(f"Failed to kill process cmdline: {cmdline}, pid: {proc.pid}, err: {exc}")
            else:
                print(f"Killed process cmdline: {cmdline}, pid: {proc.pid}")
        else:
            print(f"Terminated process cmdline: {cmdline}, pid: {proc.pid}")