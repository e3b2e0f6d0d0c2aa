"""Dependency maps of GitHub issues, rendered as Mermaid flowcharts."""

__version__ = "0.1.0"
