"""Ctesiphus: campaign tracker for a hex-crawl kill team campaign."""

__version__ = "0.1.0"
