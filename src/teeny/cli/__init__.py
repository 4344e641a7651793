"""
Teeny Command-Line Interface
============================

This package provides the command-line tool for the Teeny compiler:

- **teenyc**: Teeny to C compiler

The tool is implemented as a Click-based CLI application with
help text and consistent exit codes (see teeny.cli.errors).
"""

__all__ = ["teenyc"]
