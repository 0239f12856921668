# asset_receiving/utils/date_converter.py

from datetime import date, datetime
from typing import Optional, Union, Any
import jdatetime

from asset_receiving.config import DISPLAY_CALENDAR
from asset_receiving.constants import DATE_FORMAT

def parse_date(value: Any) -> Optional[date]:
    """Accepts a date, a datetime or an ISO string ("2024-05-01" or "2024-05-01T10:00:00Z")."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()
        except ValueError:
            return None
    return None

def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            only_date = parse_date(text)
            return datetime.combine(only_date, datetime.min.time()) if only_date else None
    return None

def date_part(value: Any) -> str:
    """First ten characters of a timestamp, i.e. its YYYY-MM-DD portion."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    return str(value)[:10]

def to_iso_str(value: Optional[date]) -> str:
    if value is None:
        return ""
    return date_part(value)

def to_shamsi_str(gregorian_date: Optional[date]) -> str:
    """Converts a Gregorian date to a Shamsi (Jalali) string formatted YYYY/MM/DD."""
    if gregorian_date is None:
        return "-"
    if not isinstance(gregorian_date, (date, datetime)):
        return str(gregorian_date)
    if isinstance(gregorian_date, datetime):
        gregorian_date = gregorian_date.date()

    try:
        shamsi_date = jdatetime.date.fromgregorian(date=gregorian_date)
        return shamsi_date.strftime("%Y/%m/%d")
    except (ValueError, TypeError):
        return "Invalid date"

def to_display_str(value: Optional[Union[date, datetime]], calendar: Optional[str] = None) -> str:
    """Formats a date for tables and detail views in the configured calendar."""
    if value is None:
        return "-"
    calendar = (calendar or DISPLAY_CALENDAR).lower()
    if calendar == "shamsi":
        return to_shamsi_str(value)
    return to_iso_str(value if isinstance(value, date) else parse_date(value))

def from_qdate(q_date: 'QDate') -> date:
    """Converts a PyQt QDate to a standard python date."""
    return q_date.toPyDate()

def to_qdate(g_date: Optional[Union[date, datetime]]) -> 'QDate':
    """Converts a python date to QDate; None maps to today."""
    from PyQt5.QtCore import QDate
    if g_date is None:
        return QDate.currentDate()
    return QDate(g_date.year, g_date.month, g_date.day)
