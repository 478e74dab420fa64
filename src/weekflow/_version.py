"""Version information for weekflow."""

__version__ = "1.0.0"
