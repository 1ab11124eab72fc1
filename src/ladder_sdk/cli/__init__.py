"""
Ladder SDK Command-Line Interface
=================================

This package provides the command-line tool for the Ladder SDK:

- **ladc**: ladder logic translator

The tool is a Click-based CLI application with help text and
consistent exit codes (see errors.ExitCode).
"""

__all__ = ["ladc"]
