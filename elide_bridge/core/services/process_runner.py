"""
Process runner — the single place the bridge spawns the Elide binary.

Output is captured, never streamed: stdout lines first, then stderr
lines, each terminated with the platform line separator, trailing
whitespace of the whole result trimmed. Both pipes are drained
concurrently (``communicate``) so a chatty child cannot stall on a
full stderr buffer while we are still reading stdout.

Output is decoded as UTF-8; undecodable bytes become U+FFFD rather
than failing the run.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path

from elide_bridge.core.errors import Interrupted, ToolExecutionFailed, ToolLaunchFailed
from elide_bridge.core.models.tool import CapturedOutput

logger = logging.getLogger(__name__)

# Seconds to wait after SIGTERM before escalating to SIGKILL
TERMINATE_GRACE = 5.0


def combine_output(stdout: str, stderr: str) -> str:
    """Join both streams line by line, stdout first."""
    lines = stdout.splitlines() + stderr.splitlines()
    return "".join(line + os.linesep for line in lines).rstrip()


class ProcessRunner:
    """Blocking, captured execution of an external binary."""

    def __init__(self, cwd: Path | None = None):
        self._cwd = cwd

    def run(self, path: Path | str, args: list[str]) -> CapturedOutput:
        """Run ``path`` with ``args`` and wait for it to exit.

        Raises:
            ToolLaunchFailed: The process could not be started.
            ToolExecutionFailed: It exited non-zero.
            Interrupted: The caller was interrupted while waiting.
        """
        cmd = [str(path), *args]
        logger.debug("Executing: %s (cwd=%s)", cmd, self._cwd)
        start = time.monotonic()

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self._cwd,
            )
        except OSError as e:
            raise ToolLaunchFailed(str(path), e.strerror or str(e)) from e

        try:
            stdout, stderr = proc.communicate()
        except KeyboardInterrupt as e:
            _terminate(proc)
            raise Interrupted(f"Interrupted while waiting for `{' '.join(cmd)}`") from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        text = combine_output(stdout or "", stderr or "")

        if proc.returncode != 0:
            logger.debug("Command failed (exit %d): %s", proc.returncode, text[-2000:])
            raise ToolExecutionFailed(cmd, proc.returncode, text)

        return CapturedOutput(text=text, exit_code=proc.returncode, duration_ms=elapsed_ms)


def _terminate(proc: subprocess.Popen) -> None:
    """Stop the child and release its pipes; no orphan survives a cancelled build."""
    try:
        if proc.poll() is None:
            proc.terminate()
            try:
                proc.wait(timeout=TERMINATE_GRACE)
            except subprocess.TimeoutExpired:
                logger.warning("Process %d ignored SIGTERM; killing it", proc.pid)
                proc.kill()
                proc.wait()
    finally:
        for stream in (proc.stdout, proc.stderr):
            if stream is not None:
                stream.close()
