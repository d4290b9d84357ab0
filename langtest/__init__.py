"""Run commands against source files and check them against embedded expectations."""

__version__ = "0.1.0"
