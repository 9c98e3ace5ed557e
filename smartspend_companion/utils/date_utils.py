"""Date manipulation utilities"""

from datetime import date


def month_key(on: date | None = None) -> str:
    """Budget month identifier in YYYY-MM format (default: current month)"""
    on = on or date.today()
    return f"{on.year:04d}-{on.month:02d}"


def time_of_day(hour: int) -> str:
    """Bucket an hour (0-23) into morning, afternoon or evening"""
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"
