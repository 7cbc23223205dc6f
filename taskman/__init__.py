"""taskman - a single-user command-line task tracker."""

__version__ = "1.0.0"
