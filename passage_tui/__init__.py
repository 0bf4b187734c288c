"""Terminal typing practice over a list of configured passages."""

__version__ = "0.1.0"
