"""
Error taxonomy — every failure the bridge can raise.

Fatal errors abort configuration or the action that triggered them.
Each message names the remediation: what to install, what command
to run, what permission to change.

Shim problems are NOT here. They are recoverable and travel as
``ShimResult(status="unavailable")`` values instead, unless the
project asked for `elide-strict` (``ShimRequired``).
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for all bridge failures."""


class ConfigError(BridgeError):
    """Raised when bridge configuration is invalid or unreadable."""


class ToolNotFound(BridgeError):
    """No candidate binary is both present and executable."""

    def __init__(self, binary: str, searched: list[str] | None = None):
        self.binary = binary
        self.searched = searched or []
        message = (
            f"Failed to find `{binary}` on your PATH; is it installed? "
            f"Install it (https://elide.dev) and make sure `{binary}` is on "
            f"your PATH or at ~/{binary}/{binary}."
        )
        super().__init__(message)


class ToolLaunchFailed(BridgeError):
    """The subprocess could not be started at all."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Failed to start `{path}`: {reason}. "
            f"Check that the file exists and is executable (chmod +x {path})."
        )


class ToolExecutionFailed(BridgeError):
    """The subprocess ran but exited non-zero."""

    def __init__(self, command: list[str], exit_code: int, output: str = ""):
        self.command = command
        self.exit_code = exit_code
        self.output = output
        super().__init__(
            f"`{' '.join(command)}` failed with exit code {exit_code}. "
            f"Run it by hand to see the full error."
        )


class ToolVersionMismatch(BridgeError):
    """Strict version check is on and the probed version differs."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Elide version check failed: expected {expected}, but got {actual}. "
            f"Install Elide {expected} or update `version` in elide.yml."
        )


class ShimRequired(BridgeError):
    """An `elide-strict` tool could not be routed through its shim."""

    def __init__(self, tool: str, message: str, remediation: str = ""):
        self.tool = tool
        self.remediation = remediation
        detail = f" {remediation}" if remediation else ""
        super().__init__(
            f"{message}{detail} (the {tool} strategy is `elide-strict`; "
            f"set it to `prefer-elide` to fall back to the stock {tool})."
        )


class Interrupted(BridgeError):
    """The build was cancelled while waiting on a subprocess."""


class TaskGraphError(BridgeError):
    """The task graph is inconsistent (unknown task, cycle)."""
