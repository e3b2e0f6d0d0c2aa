"""Diagram rendering."""

from .mermaid import render, render_flowchart

__all__ = ["render", "render_flowchart"]
