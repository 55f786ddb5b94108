"""Excel export - list sheet and calendar sheet in one workbook (openpyxl)."""

from collections.abc import Sequence
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from backend.travelgpt.models.activity import Activity
from backend.travelgpt.schedule.layout import CalendarLayout, SheetRegion, build_layout, sheet_regions
from backend.travelgpt.schedule.listing import LIST_COLUMNS, extra_field_keys, list_headers, list_rows

EXPORT_FILENAME = "travel_schedule.xlsx"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LIST_SHEET_TITLE = "Activities List"
CALENDAR_SHEET_TITLE = "Travel Calendar"

EXTRA_COLUMN_WIDTH = 20
TIME_COLUMN_WIDTH = 10
DAY_COLUMN_WIDTH = 20

CENTERED = Alignment(horizontal="center", vertical="center", wrap_text=True)
BOLD = Font(bold=True)


def _solid(argb: str) -> PatternFill:
    return PatternFill(fill_type="solid", start_color=argb, end_color=argb)


def add_list_sheet(workbook: Workbook, activities: Sequence[Activity]) -> Worksheet:
    """Add the flat activity list, one row per activity plus extra-field columns."""
    sheet = workbook.create_sheet(LIST_SHEET_TITLE)
    headers = list_headers(activities)
    sheet.append(headers)
    for cell in sheet[1]:
        cell.font = BOLD

    widths = [width for _, width in LIST_COLUMNS]
    widths += [EXTRA_COLUMN_WIDTH] * len(extra_field_keys(activities))
    for i, width in enumerate(widths, start=1):
        sheet.column_dimensions[get_column_letter(i)].width = width

    for row in list_rows(activities):
        sheet.append([row[header] for header in headers])
    return sheet


def _paint(sheet: Worksheet, region: SheetRegion) -> None:
    anchor = sheet.cell(row=region.first_row, column=region.first_col)
    anchor.value = region.label
    anchor.fill = _solid(region.color)
    anchor.alignment = CENTERED
    if region.is_merged:
        sheet.merge_cells(
            start_row=region.first_row,
            start_column=region.first_col,
            end_row=region.last_row,
            end_column=region.last_col,
        )


def add_calendar_sheet(workbook: Workbook, layout: CalendarLayout) -> Worksheet:
    """Add the calendar grid: Time column, one column per day, Stay rows on top."""
    sheet = workbook.create_sheet(CALENDAR_SHEET_TITLE)
    plan = sheet_regions(layout)

    for col, title in enumerate(plan.header, start=1):
        cell = sheet.cell(row=1, column=col, value=title)
        cell.font = BOLD
        cell.alignment = CENTERED
        width = TIME_COLUMN_WIDTH if col == 1 else DAY_COLUMN_WIDTH
        sheet.column_dimensions[get_column_letter(col)].width = width

    for row, label in plan.time_labels():
        sheet.cell(row=row, column=1, value=label)

    for region in plan.regions:
        _paint(sheet, region)
    sheet.freeze_panes = sheet.cell(row=plan.first_hour_row, column=2)
    return sheet


def build_workbook(activities: Sequence[Activity], *, split_overnight: bool = True) -> Workbook:
    """Workbook with the list sheet followed by the calendar sheet."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    add_list_sheet(workbook, activities)
    add_calendar_sheet(workbook, build_layout(activities, split_overnight=split_overnight))
    return workbook


def export_combined_workbook(
    activities: Sequence[Activity], *, split_overnight: bool = True
) -> bytes:
    """Serialize the combined workbook to xlsx bytes."""
    buffer = BytesIO()
    build_workbook(activities, split_overnight=split_overnight).save(buffer)
    return buffer.getvalue()
