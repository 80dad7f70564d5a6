"""
Export
======

Renderers that consume a ``SizingResult`` without recomputing it:
- tables: pandas views of specs, guides and checks
- charts: plotly figures for the UI
- pdf: matplotlib PDF reports
- text: package description and summary text files
"""

from .pdf import write_custom_check_pdf, write_summary_pdf
from .text import package_description, summary_text, write_package_file

__all__ = [
    "package_description",
    "summary_text",
    "write_custom_check_pdf",
    "write_package_file",
    "write_summary_pdf",
]
