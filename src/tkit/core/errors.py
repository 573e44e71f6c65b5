"""Error kinds raised by tkit operations.

Every error derives from TkitError so the CLI entry point can translate
domain failures into a styled message and an exit status in one place.
"""


class TkitError(Exception):
    """Base class for all recoverable tkit errors."""

    exit_code = 1


class NotInitialized(TkitError):
    """No persisted registry exists yet."""

    def __init__(self, path: object) -> None:
        super().__init__(f"tkit is not initialized (no config at {path}). Run 'tkit init' first.")
        self.path = path


class NotFound(TkitError):
    """A tool or a remote document does not exist."""


class DuplicateName(TkitError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' already exists.")
        self.name = name


class CommandFailure(TkitError):
    """A command in an action's sequence exited non-zero.

    Attributes:
        index: Zero-based position of the failing command in the sequence
        exit_code: Exit status reported by the shell
        command: The command string that failed
    """

    def __init__(self, tool: str, action: str, index: int, exit_code: int, command: str) -> None:
        super().__init__(
            f"{action} of '{tool}' failed at step {index + 1} (exit code {exit_code}): {command}"
        )
        self.tool = tool
        self.action = action
        self.index = index
        self.exit_code = exit_code
        self.command = command


class Unconfigured(TkitError):
    """Sync was requested but no repository or token is set up."""


class AuthFailure(TkitError):
    """The remote rejected the credential."""


class NetworkFailure(TkitError):
    """The remote could not be reached or returned a server error."""


class SerializationFailure(TkitError):
    """Persisted or remote state is corrupt or malformed."""
