"""Streaming access to NDeps report documents."""

from .cursor import AssemblyCursor, ReportSource, child_elements, local_name

__all__ = ["AssemblyCursor", "ReportSource", "child_elements", "local_name"]
