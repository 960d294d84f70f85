from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import clock_time
from ..core.exceptions import NothingToExportError
from ..users.repository import EmployeeRepository

REPORT_HEADERS = [
    "Employee Name",
    "Date",
    "Punch In",
    "Punch Out",
    "Duration (Minutes)",
    "Work Log",
    "Status",
]


@dataclass(frozen=True)
class ReportData:
    work_date: date
    rows: list[dict]

    @property
    def filename(self) -> str:
        return f"attendance_report_{self.work_date.strftime('%Y-%m-%d')}.csv"

    def to_csv_bytes(self) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_HEADERS)
        writer.writeheader()
        for row in self.rows:
            writer.writerow(row)
        # BOM so spreadsheet apps pick up UTF-8 names
        return out.getvalue().encode("utf-8-sig")


class TeamReportService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def build_daily_report(self, work_date: date) -> ReportData:
        records = self._attendance.list_for_date(work_date)
        if not records:
            raise NothingToExportError("No records to export for this date.")

        names = {e.employee_id: e.name for e in self._employees.list_all()}
        rows = [
            {
                "Employee Name": names.get(r.employee_id, "Unknown"),
                "Date": r.work_date.strftime("%Y-%m-%d"),
                "Punch In": clock_time(r.punch_in),
                "Punch Out": clock_time(r.punch_out),
                "Duration (Minutes)": r.working_minutes or 0,
                "Work Log": r.work_log or "",
                "Status": "Working" if r.is_open else "Completed",
            }
            for r in records
        ]
        return ReportData(work_date=work_date, rows=rows)
