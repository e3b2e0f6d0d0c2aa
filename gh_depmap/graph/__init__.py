"""Dependency extraction, graph construction and filtering."""

from .builder import ExtractionReport, build, build_graph, extract_all
from .extractor import Extraction, extract
from .filters import FilterOptions, apply_filters
from .references import resolve_reference, scan_references

__all__ = [
    "Extraction",
    "ExtractionReport",
    "FilterOptions",
    "apply_filters",
    "build",
    "build_graph",
    "extract",
    "extract_all",
    "resolve_reference",
    "scan_references",
]
