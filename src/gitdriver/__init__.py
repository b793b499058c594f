"""gitdriver — typed, asynchronous git operations for automated agents."""

__version__ = "0.4.0"
