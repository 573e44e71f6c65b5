"""tkit - a customizable tool manager with GitHub-backed config sync."""

__version__ = "0.2.0"
