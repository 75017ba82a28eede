import re
from datetime import date

MAX_NAME_LENGTH = 200

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

def is_valid_name(name) -> bool:
    return isinstance(name, str) and 1 <= len(name.strip()) <= MAX_NAME_LENGTH

def is_valid_date(date_str) -> bool:
    if not isinstance(date_str, str) or not _DATE_RE.match(date_str):
        return False
    try:
        date.fromisoformat(date_str)
    except ValueError:
        return False
    return True
