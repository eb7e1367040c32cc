"""Ctesiphus CLI module.

Provides an argparse-based command-line driver for running a campaign.

Usage:
    ctesiphus --help

Or directly:
    python -m ctesiphus.cli.app
"""

from ctesiphus.cli.app import build_parser, main

__all__ = ["build_parser", "main"]
