"""Excel weekly timetable grid generator."""

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .models import GroupKey, ScheduleEntry, SchedulingConfig, SessionType

# Fonts
FONT_TITLE = Font(name="Times New Roman", size=14, bold=True)
FONT_HEADER = Font(name="Times New Roman", size=11, bold=True)
FONT_TIME = Font(name="Times New Roman", size=10, bold=False)
FONT_CELL = Font(name="Times New Roman", size=10, bold=False)

# Alignments
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

# Borders
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

# Fills
FILL_BREAK = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")
FILL_BY_TYPE = {
    SessionType.LECTURE: PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid"),
    SessionType.TUTORIAL: PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid"),
    SessionType.PRACTICAL: PatternFill(start_color="E2EFDA", end_color="E2EFDA", fill_type="solid"),
}

TIME_COLUMN_WIDTH = 14.0
DAY_COLUMN_WIDTH = 24.0

# Title occupies row 1, day headers row 3, slots start at row 4
HEADER_ROW = 3
FIRST_SLOT_ROW = 4


class TimetableExcelGenerator:
    """Renders schedules as a day x time-slot grid, one sheet per group."""

    def __init__(self, config: SchedulingConfig, course_names: dict[str, str] | None = None):
        """Initialize generator.

        Args:
            config: Scheduling configuration (grid and working days)
            course_names: Optional course code -> display name mapping
        """
        self.config = config
        self.course_names = course_names or {}

    @staticmethod
    def sanitize_sheet_name(name: str) -> str:
        """Sanitize sheet name by removing invalid characters.

        Excel sheet names cannot contain: / \\ * ? : [ ]

        Args:
            name: Original sheet name.

        Returns:
            Sanitized sheet name (max 31 chars).
        """
        invalid_chars = r"/\*?:[]"
        for char in invalid_chars:
            name = name.replace(char, "")
        return name[:31]

    def format_cell_content(self, entry: ScheduleEntry) -> str:
        """Format an entry for cell display."""
        title = entry.course_code
        name = self.course_names.get(entry.course_code)
        if name:
            title = f"{entry.course_code} {name}"
        return f"{title}\n{entry.session_type.value.title()}\n{entry.faculty_id}, {entry.room_id}"

    def group_entries(
        self, schedule: list[ScheduleEntry]
    ) -> dict[GroupKey, list[ScheduleEntry]]:
        """Split a schedule by student group, in first-seen order."""
        groups: dict[GroupKey, list[ScheduleEntry]] = {}
        for entry in schedule:
            groups.setdefault(entry.group_key, []).append(entry)
        return groups

    def create_workbook(self, schedule: list[ScheduleEntry]) -> Workbook:
        """Create Excel workbook with one grid sheet per group.

        Args:
            schedule: Entries to render

        Returns:
            Populated Workbook object.
        """
        wb = Workbook()
        wb.remove(wb.active)

        groups = self.group_entries(schedule)
        if not groups:
            wb.create_sheet(title="Empty")
            return wb

        for (department, semester), entries in groups.items():
            ws = wb.create_sheet(
                title=self.sanitize_sheet_name(f"{department} sem {semester}")
            )
            self._write_grid(ws, f"{department} - Semester {semester}", entries)

        return wb

    def _slot_rows(self) -> dict[int, int]:
        return {
            slot.id: FIRST_SLOT_ROW + index
            for index, slot in enumerate(self.config.time_slots)
        }

    def _write_grid(self, ws: Worksheet, title: str, entries: list[ScheduleEntry]) -> None:
        days = list(self.config.working_days)
        last_column = len(days) + 1
        slot_rows = self._slot_rows()

        ws.cell(row=1, column=1, value=title).font = FONT_TITLE
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=last_column)
        ws.cell(row=1, column=1).alignment = ALIGN_CENTER

        ws.column_dimensions["A"].width = TIME_COLUMN_WIDTH
        header = ws.cell(row=HEADER_ROW, column=1, value="Time")
        header.font = FONT_HEADER
        header.alignment = ALIGN_CENTER
        header.border = THIN_BORDER
        for offset, day in enumerate(days, start=2):
            ws.column_dimensions[get_column_letter(offset)].width = DAY_COLUMN_WIDTH
            cell = ws.cell(row=HEADER_ROW, column=offset, value=day.value.title())
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER

        for slot in self.config.time_slots:
            row = slot_rows[slot.id]
            time_cell = ws.cell(row=row, column=1, value=slot.label)
            time_cell.font = FONT_TIME
            time_cell.alignment = ALIGN_CENTER
            time_cell.border = THIN_BORDER
            ws.row_dimensions[row].height = 45
            for column in range(2, last_column + 1):
                cell = ws.cell(row=row, column=column)
                cell.border = THIN_BORDER
                cell.alignment = ALIGN_CENTER
                if slot.is_break:
                    cell.fill = FILL_BREAK
            if slot.is_break:
                ws.cell(row=row, column=2, value="Break").font = FONT_CELL
                ws.merge_cells(start_row=row, start_column=2, end_row=row, end_column=last_column)

        day_columns = {day: offset for offset, day in enumerate(days, start=2)}
        for entry in entries:
            column = day_columns.get(entry.day)
            start_row = slot_rows.get(entry.time_slot_id)
            if column is None or start_row is None:
                continue
            cell = ws.cell(row=start_row, column=column, value=self.format_cell_content(entry))
            cell.font = FONT_CELL
            cell.alignment = ALIGN_CENTER
            cell.fill = FILL_BY_TYPE[entry.session_type]
            end_row = start_row + entry.duration - 1
            if entry.duration > 1:
                ws.merge_cells(
                    start_row=start_row, start_column=column,
                    end_row=end_row, end_column=column,
                )

    def generate(self, schedule: list[ScheduleEntry], output_path: Path | str) -> Path:
        """Generate Excel grid file.

        Args:
            schedule: Entries to render
            output_path: Path for output Excel file.

        Returns:
            Path to generated file.
        """
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        wb = self.create_workbook(schedule)
        wb.save(output)
        return output
