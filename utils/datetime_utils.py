from datetime import date, datetime
import pytz

DATE_FORMAT = "%Y-%m-%d"

def get_timezone(name: str = "UTC"):
    return pytz.timezone(name)

def now_local(tz_name: str = "UTC") -> datetime:
    return datetime.now(get_timezone(tz_name))

def today_str(tz_name: str = "UTC") -> str:
    """Сегодняшняя дата (YYYY-MM-DD) по часам хоста в заданном поясе"""
    return now_local(tz_name).strftime(DATE_FORMAT)

def parse_date(date_str: str) -> date:
    return datetime.strptime(date_str, DATE_FORMAT).date()

def format_date(date_str: str, fmt: str = "%d.%m.%Y") -> str:
    return parse_date(date_str).strftime(fmt)
