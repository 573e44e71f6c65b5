"""Production shell implementation using subprocess."""

import logging
import queue
import shutil
import subprocess
import threading
from collections.abc import Iterator
from typing import IO

from tkit.core.shell.abc import Shell, ShellEvent, StreamName
from tkit.core.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)

# (stream, line) pairs; None marks the end of one stream
_Item = tuple[StreamName, str] | None


class RealShell(Shell):
    """Runs commands through /bin/sh so pipes, && and variables work."""

    def execute_streaming(self, command: str) -> Iterator[ShellEvent]:
        """Run command and yield stdout/stderr lines as they arrive.

        Implementation details:
        - Uses subprocess.Popen() with both streams piped and line buffered
        - One reader thread per stream feeds a shared queue so stderr lines
          are relayed immediately instead of after stdout closes
        - stdin is inherited so interactive prompts (sudo) still work
        """
        logger.debug("Executing: %s", command)
        process = subprocess.Popen(
            command,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )

        lines: queue.Queue[_Item] = queue.Queue()

        def pump(stream: StreamName, pipe: IO[str] | None) -> None:
            if pipe is not None:
                for line in pipe:
                    lines.put((stream, line.rstrip("\n")))
            lines.put(None)

        readers = [
            threading.Thread(target=pump, args=("stdout", process.stdout), daemon=True),
            threading.Thread(target=pump, args=("stderr", process.stderr), daemon=True),
        ]
        for reader in readers:
            reader.start()

        open_streams = len(readers)
        while open_streams:
            item = lines.get()
            if item is None:
                open_streams -= 1
                continue
            stream, content = item
            yield ShellEvent(stream, content)

        returncode = process.wait()
        for reader in readers:
            reader.join(timeout=1.0)

        logger.debug("Exit code %d for: %s", returncode, command)
        yield ShellEvent("exit", "", exit_code=returncode)

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def capture(self, args: list[str], *, timeout: float) -> tuple[int, str]:
        result = run_subprocess_with_context(
            args, f"run {args[0]}", timeout=timeout, check=False, stdin=subprocess.DEVNULL
        )
        return result.returncode, result.stdout
