"""Subprocess execution with rich error context."""

import subprocess
from collections.abc import Sequence
from typing import Any


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    *,
    timeout: float | None = None,
    check: bool = True,
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """Execute subprocess with enriched error reporting for the integration layer.

    Wraps subprocess.run() and re-raises failures as RuntimeError with the
    operation context, the command line and any captured stderr.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of the operation
        timeout: Seconds before the process is killed (None = no limit)
        check: Whether to raise on non-zero exit
        **kwargs: Additional arguments passed to subprocess.run()

    Returns:
        CompletedProcess with text stdout/stderr

    Raises:
        RuntimeError: If the command fails, times out, or is not installed
    """
    cmd_str = " ".join(str(arg) for arg in cmd)
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=check,
            **kwargs,
        )

    except subprocess.CalledProcessError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        error_msg += f"\nExit code: {e.returncode}"
        if e.stderr and e.stderr.strip():
            error_msg += f"\nstderr: {e.stderr.strip()}"
        raise RuntimeError(error_msg) from e

    except subprocess.TimeoutExpired as e:
        raise RuntimeError(
            f"Timed out after {timeout}s while trying to {operation_context}\nCommand: {cmd_str}"
        ) from e

    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {cmd_str}"
        raise RuntimeError(error_msg) from e
