"""pacbridge — pacman-style commands for whatever package manager you have."""

__version__ = "0.1.0"
