"""Draft export for writemotion."""
from writemotion.export.draft_writer import SUPPORTED_SUFFIXES, export_draft, render_pdf

__all__ = ["export_draft", "render_pdf", "SUPPORTED_SUFFIXES"]
