"""
Spreadsheet and document exports of the movie catalog.
"""

from app.core.export.formatter import (
    DOCX_MEDIA_TYPE,
    EXPORT_FORMATS,
    XLSX_MEDIA_TYPE,
    document_rows,
    export_basename,
    export_filename,
    format_date,
    spreadsheet_rows,
    status_label,
    to_docx,
    to_xlsx,
)

__all__ = [
    "DOCX_MEDIA_TYPE",
    "EXPORT_FORMATS",
    "XLSX_MEDIA_TYPE",
    "document_rows",
    "export_basename",
    "export_filename",
    "format_date",
    "spreadsheet_rows",
    "status_label",
    "to_docx",
    "to_xlsx",
]
