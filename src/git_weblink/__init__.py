"""git-weblink: link a line of code to its page on the Git hosting service."""

__version__ = "0.1.0"
