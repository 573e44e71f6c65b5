"""Shell operations subpackage.

Abstraction over process spawning with a subprocess-backed implementation;
tests substitute tests.fakes.shell.FakeShell.
"""

from tkit.core.shell.abc import Shell, ShellEvent
from tkit.core.shell.real import RealShell

__all__ = ["Shell", "ShellEvent", "RealShell"]
