"""PHP-style date() formatting for datetimes.

Clients of the time tool pass formats such as "Y-m-d H:i:s", "c" or "r".
Each letter below is replaced by the matching component; a backslash
escapes the next character and every other character is copied as is.
"""
import calendar
from datetime import datetime

_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def _suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _offset(dt: datetime, colon: bool) -> str:
    delta = dt.utcoffset()
    seconds = int(delta.total_seconds()) if delta is not None else 0
    sign = "-" if seconds < 0 else "+"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    sep = ":" if colon else ""
    return f"{sign}{hours:02d}{sep}{minutes:02d}"


def _tz_identifier(dt: datetime) -> str:
    key = getattr(dt.tzinfo, "key", None)
    return key or dt.tzname() or "UTC"


def _hour12(dt: datetime) -> int:
    return dt.hour % 12 or 12


def _components(dt: datetime) -> dict:
    iso_year, iso_week, iso_day = dt.isocalendar()
    return {
        # day
        "d": lambda: f"{dt.day:02d}",
        "D": lambda: _DAYS[dt.weekday()][:3],
        "j": lambda: str(dt.day),
        "l": lambda: _DAYS[dt.weekday()],
        "N": lambda: str(iso_day),
        "S": lambda: _suffix(dt.day),
        "w": lambda: str(iso_day % 7),
        "z": lambda: str(dt.timetuple().tm_yday - 1),
        # week
        "W": lambda: f"{iso_week:02d}",
        # month
        "F": lambda: _MONTHS[dt.month - 1],
        "m": lambda: f"{dt.month:02d}",
        "M": lambda: _MONTHS[dt.month - 1][:3],
        "n": lambda: str(dt.month),
        "t": lambda: str(calendar.monthrange(dt.year, dt.month)[1]),
        # year
        "L": lambda: "1" if calendar.isleap(dt.year) else "0",
        "o": lambda: str(iso_year),
        "Y": lambda: str(dt.year),
        "y": lambda: f"{dt.year % 100:02d}",
        # time
        "a": lambda: "am" if dt.hour < 12 else "pm",
        "A": lambda: "AM" if dt.hour < 12 else "PM",
        "g": lambda: str(_hour12(dt)),
        "G": lambda: str(dt.hour),
        "h": lambda: f"{_hour12(dt):02d}",
        "H": lambda: f"{dt.hour:02d}",
        "i": lambda: f"{dt.minute:02d}",
        "s": lambda: f"{dt.second:02d}",
        "u": lambda: f"{dt.microsecond:06d}",
        "v": lambda: f"{dt.microsecond // 1000:03d}",
        # timezone
        "e": lambda: _tz_identifier(dt),
        "I": lambda: "1" if dt.dst() else "0",
        "O": lambda: _offset(dt, colon=False),
        "P": lambda: _offset(dt, colon=True),
        "p": lambda: "Z" if not dt.utcoffset() else _offset(dt, colon=True),
        "T": lambda: dt.tzname() or "UTC",
        "Z": lambda: str(int(dt.utcoffset().total_seconds()) if dt.utcoffset() else 0),
        # full date/time
        "c": lambda: format_php_date(dt, "Y-m-d\\TH:i:sP"),
        "r": lambda: format_php_date(dt, "D, d M Y H:i:s O"),
        "U": lambda: str(int(dt.timestamp())),
    }


def format_php_date(dt: datetime, fmt: str) -> str:
    components = _components(dt)
    out = []
    escaped = False
    for char in fmt:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            render = components.get(char)
            out.append(render() if render else char)
    return "".join(out)
