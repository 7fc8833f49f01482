"""Spreadsheet export of meetings, attendance and photos."""

import io
import logging
import zipfile
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

import pandas as pd

logger = logging.getLogger(__name__)

MEETING_COLUMNS = [
    "Meeting ID",
    "Meeting Title",
    "Meeting Date",
    "Number of Attendees",
    "Attendees",
    "Created Date",
]
ATTENDANCE_COLUMNS = [
    "Meeting Title",
    "Meeting Date",
    "Attendee Name",
    "Check-in Time",
    "Attendance ID",
]
PHOTO_COLUMNS = [
    "Meeting Title",
    "Meeting Date",
    "Photo ID",
    "Photo URL",
    "File Name",
    "File Size (bytes)",
    "Upload Time",
]

UNKNOWN_MEETING = "Unknown Meeting"
UNKNOWN_DATE = "Unknown Date"


class ExportRepository(Protocol):
    """Read-only queries feeding the export."""

    def list_meetings_with_attendees(self) -> list[dict[str, object]]:
        """Return meetings with nested `attendance` person names."""

    def list_attendance_with_meetings(self) -> list[dict[str, object]]:
        """Return attendance rows with the nested `meetings` title and date."""

    def list_photos_with_meetings(self) -> list[dict[str, object]]:
        """Return photo rows with the nested `meetings` title and date."""


@dataclass(frozen=True)
class ExportFile:
    """A generated spreadsheet file."""

    filename: str
    content: bytes
    media_type: str = "text/csv"


@dataclass
class ExportService:
    """Builds CSV exports of the whole data set."""

    repository: ExportRepository
    timezone_name: str = "UTC"

    def export(
        self, include_photos: bool = False, today: date | None = None
    ) -> list[ExportFile]:
        """Return one CSV per non-empty dataset."""
        tz = ZoneInfo(self.timezone_name)
        stamp = (today or datetime.now(tz=tz).date()).isoformat()
        datasets = [
            (
                f"meetings_with_attendees_{stamp}.csv",
                MEETING_COLUMNS,
                [
                    _meeting_row(row, tz)
                    for row in self.repository.list_meetings_with_attendees()
                ],
            ),
            (
                f"attendance_details_{stamp}.csv",
                ATTENDANCE_COLUMNS,
                [
                    _attendance_row(row, tz)
                    for row in self.repository.list_attendance_with_meetings()
                ],
            ),
        ]
        if include_photos:
            datasets.append(
                (
                    f"meeting_photos_{stamp}.csv",
                    PHOTO_COLUMNS,
                    [
                        _photo_row(row, tz)
                        for row in self.repository.list_photos_with_meetings()
                    ],
                )
            )

        files = []
        for filename, columns, rows in datasets:
            if not rows:
                logger.info("Skipping empty export %s", filename)
                continue
            files.append(ExportFile(filename=filename, content=_to_csv(rows, columns)))
        return files

    def export_archive(
        self, include_photos: bool = False, today: date | None = None
    ) -> bytes:
        """Bundle the exported CSV files into a zip archive."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for export_file in self.export(include_photos=include_photos, today=today):
                archive.writestr(export_file.filename, export_file.content)
        return buffer.getvalue()


def _to_csv(rows: list[dict[str, object]], columns: list[str]) -> bytes:
    frame = pd.DataFrame(rows, columns=columns)
    return frame.to_csv(index=False, lineterminator="\n").encode("utf-8")


def _meeting_row(row: dict[str, object], tz: ZoneInfo) -> dict[str, object]:
    attendance = row.get("attendance") or []
    names = [
        str(entry.get("person_name", ""))
        for entry in attendance
        if isinstance(entry, dict)
    ]
    return {
        "Meeting ID": row.get("id"),
        "Meeting Title": row.get("title"),
        "Meeting Date": _format_long_date(row.get("date"), tz) or UNKNOWN_DATE,
        "Number of Attendees": len(names),
        "Attendees": "; ".join(names) if names else "No attendees",
        "Created Date": _format_timestamp(row.get("created_at"), tz),
    }


def _attendance_row(row: dict[str, object], tz: ZoneInfo) -> dict[str, object]:
    meeting = row.get("meetings") if isinstance(row.get("meetings"), dict) else {}
    return {
        "Meeting Title": meeting.get("title") or UNKNOWN_MEETING,
        "Meeting Date": _format_long_date(meeting.get("date"), tz) or UNKNOWN_DATE,
        "Attendee Name": row.get("person_name"),
        "Check-in Time": _format_timestamp(
            row.get("timestamp"), tz, with_seconds=True
        ),
        "Attendance ID": row.get("id"),
    }


def _photo_row(row: dict[str, object], tz: ZoneInfo) -> dict[str, object]:
    meeting = row.get("meetings") if isinstance(row.get("meetings"), dict) else {}
    return {
        "Meeting Title": meeting.get("title") or UNKNOWN_MEETING,
        "Meeting Date": _format_long_date(meeting.get("date"), tz) or UNKNOWN_DATE,
        "Photo ID": row.get("id"),
        "Photo URL": row.get("photo_url"),
        "File Name": row.get("file_name"),
        "File Size (bytes)": row.get("file_size") or 0,
        "Upload Time": _format_timestamp(row.get("created_at"), tz),
    }


def _format_long_date(value: object, tz: ZoneInfo) -> str | None:
    """Render a date like `January 5, 2025`."""
    if not isinstance(value, str) or not value:
        return None
    if "T" in value:
        day = _parse_timestamp(value).astimezone(tz).date()
    else:
        day = date.fromisoformat(value)
    return f"{day:%B} {day.day}, {day.year}"


def _format_timestamp(
    value: object, tz: ZoneInfo, with_seconds: bool = False
) -> str:
    """Render a timestamp like `Jan 5, 2025, 03:04 PM`."""
    if not isinstance(value, str) or not value:
        return ""
    moment = _parse_timestamp(value).astimezone(tz)
    clock = moment.strftime("%I:%M:%S %p" if with_seconds else "%I:%M %p")
    return f"{moment:%b} {moment.day}, {moment.year}, {clock}"


def _parse_timestamp(value: str) -> datetime:
    parsed = pd.Timestamp(value).to_pydatetime()
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
