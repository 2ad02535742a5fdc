"""
Tabular exports of the movie catalog.

Pure transforms from a list of ExportMovie records into in-memory
artifacts: an .xlsx workbook (xlsxwriter) and a .docx report (python-docx).
Writing the bytes to disk or sending them to a browser is up to the caller.
"""

import re
from datetime import date, datetime
from io import BytesIO
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import xlsxwriter
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH

from app.core.catalog.results import ExportMovie

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

DEFAULT_BASENAME = "movies_export"

STATUS_LABELS = {
    "now showing": "Đang chiếu",
    "coming soon": "Sắp chiếu",
    "expired": "Đã kết thúc",
}

SHEET_NAME = "Danh sách phim"

# (header, column width in characters)
SPREADSHEET_COLUMNS: Tuple[Tuple[str, int], ...] = (
    ("STT", 5),
    ("ID", 8),
    ("Tên phim", 30),
    ("Tên gốc", 30),
    ("Đạo diễn", 20),
    ("Diễn viên", 40),
    ("Thời lượng (phút)", 12),
    ("Ngày phát hành", 15),
    ("Ngày kết thúc", 15),
    ("Ngôn ngữ", 12),
    ("Phụ đề", 12),
    ("Quốc gia", 15),
    ("Phân loại độ tuổi", 15),
    ("Trạng thái", 15),
    ("Thể loại", 20),
    ("Mô tả", 50),
)
SPREADSHEET_HEADERS = [header for header, _ in SPREADSHEET_COLUMNS]

DOCUMENT_TITLE = "DANH SÁCH PHIM CINEMA"
DOCUMENT_HEADERS = ["STT", "Tên phim", "Đạo diễn", "Thời lượng", "Ngày phát hành", "Trạng thái", "Mô tả"]
# columns rendered centered in the document table
DOCUMENT_CENTERED = {0, 3, 4, 5}
DOCUMENT_LEGEND = (
    "- Đang chiếu: Phim hiện đang được chiếu tại rạp",
    "- Sắp chiếu: Phim sẽ được chiếu trong thời gian tới",
    "- Đã kết thúc: Phim đã ngừng chiếu",
)
DESCRIPTION_PREVIEW = 100

Cell = Union[str, int, None]


def status_label(status: Optional[str]) -> str:
    """Human label for a status code; unknown codes pass through unchanged."""
    if status is None:
        return ""
    return STATUS_LABELS.get(status, status)


def format_date(value: Union[date, datetime, str, None]) -> str:
    """Render a date as dd/mm/yyyy; empty string when missing."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        value = date.fromisoformat(value[:10])
    return value.strftime("%d/%m/%Y")


def truncate(text: Optional[str], length: int = DESCRIPTION_PREVIEW) -> str:
    if not text:
        return ""
    return text[:length] + ("..." if len(text) > length else "")


def spreadsheet_rows(movies: Sequence[ExportMovie]) -> List[List[Cell]]:
    """
    One spreadsheet row per movie, in input order, matching SPREADSHEET_HEADERS.
    """
    rows = []
    for index, movie in enumerate(movies, start=1):
        rows.append([
            index,
            movie.id_movie,
            movie.title,
            movie.original_title or "",
            movie.director or "",
            movie.actors or "",
            movie.duration,
            format_date(movie.release_date),
            format_date(movie.end_date),
            movie.language or "",
            movie.subtitle or "",
            movie.country or "",
            movie.age_restriction or "",
            status_label(movie.status),
            movie.genres or "",
            movie.description or "",
        ])
    return rows


def document_rows(movies: Sequence[ExportMovie]) -> List[List[str]]:
    """One document-table row per movie, in input order, matching DOCUMENT_HEADERS."""
    rows = []
    for index, movie in enumerate(movies, start=1):
        rows.append([
            str(index),
            movie.title,
            movie.director or "",
            f"{movie.duration} phút" if movie.duration is not None else "",
            format_date(movie.release_date),
            status_label(movie.status),
            truncate(movie.description),
        ])
    return rows


def to_xlsx(movies: Sequence[ExportMovie]) -> bytes:
    """
    Build a single-sheet workbook listing the movies.

    Args:
        movies: Records to export

    Returns:
        Contents of the .xlsx file
    """
    output = BytesIO()
    workbook = xlsxwriter.Workbook(output, {"in_memory": True})
    worksheet = workbook.add_worksheet(SHEET_NAME)
    header_format = workbook.add_format({
        "bold": True,
        "align": "center",
        "font_color": "white",
        "bg_color": "#0D47A1",
    })

    for col_idx, (header, width) in enumerate(SPREADSHEET_COLUMNS):
        worksheet.set_column(col_idx, col_idx, width)
        worksheet.write(0, col_idx, header, header_format)

    for row_idx, row in enumerate(spreadsheet_rows(movies), start=1):
        for col_idx, value in enumerate(row):
            worksheet.write(row_idx, col_idx, value)

    worksheet.freeze_panes(1, 0)
    workbook.close()
    return output.getvalue()


def to_docx(movies: Sequence[ExportMovie], exported_on: Optional[date] = None) -> bytes:
    """
    Build a Word report: title, export date, count, movie table and status legend.

    Args:
        movies: Records to export
        exported_on: Date printed in the header (defaults to today)

    Returns:
        Contents of the .docx file
    """
    document = Document()

    heading = document.add_heading(DOCUMENT_TITLE, level=0)
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

    exported = document.add_paragraph(f"Ngày xuất: {format_date(exported_on or date.today())}")
    exported.alignment = WD_ALIGN_PARAGRAPH.RIGHT
    document.add_paragraph(f"Tổng số phim: {len(movies)}")
    document.add_paragraph("")

    table = document.add_table(rows=1, cols=len(DOCUMENT_HEADERS))
    table.style = "Table Grid"
    for cell, header in zip(table.rows[0].cells, DOCUMENT_HEADERS):
        cell.text = header
        cell.paragraphs[0].alignment = WD_ALIGN_PARAGRAPH.CENTER

    for row in document_rows(movies):
        cells = table.add_row().cells
        for col_idx, (cell, value) in enumerate(zip(cells, row)):
            cell.text = value
            if col_idx in DOCUMENT_CENTERED:
                cell.paragraphs[0].alignment = WD_ALIGN_PARAGRAPH.CENTER

    document.add_paragraph("")
    document.add_paragraph().add_run("Ghi chú:").bold = True
    for line in DOCUMENT_LEGEND:
        document.add_paragraph(line)

    output = BytesIO()
    document.save(output)
    return output.getvalue()


EXPORT_FORMATS: Dict[str, Tuple[Callable[[Sequence[ExportMovie]], bytes], str]] = {
    "xlsx": (to_xlsx, XLSX_MEDIA_TYPE),
    "docx": (to_docx, DOCX_MEDIA_TYPE),
}


def export_basename(status: Optional[str] = None, search: Optional[str] = None) -> str:
    """
    File base name describing the filters used for an export.

    e.g. movies_export_now_showing_search_the_matrix
    """
    name = DEFAULT_BASENAME
    if status and status != "all":
        name += "_" + status.replace(" ", "_")
    if search:
        name += "_search_" + re.sub(r"[^a-zA-Z0-9]", "_", search)
    return name


def export_filename(base: str, ext: str, on: Optional[date] = None) -> str:
    """<base>_<ISO date>.<ext>"""
    return f"{base}_{(on or date.today()).isoformat()}.{ext}"
