"""Display helpers for turning resolved chapters into table rows."""

from iiifmedia.models import Chapter


def format_timestamp(total_seconds: float) -> str:
    """Format seconds as ``M:SS`` or ``H:MM:SS`` with an optional fraction.

    >>> format_timestamp(3971.24)
    '1:06:11.24'
    >>> format_timestamp(90)
    '1:30'
    """
    if total_seconds < 0:
        raise ValueError(f"Cannot format negative time: {total_seconds}")

    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    seconds = int(total_seconds % 60)

    if hours > 0:
        result = f"{hours}:{minutes:02d}:{seconds:02d}"
    else:
        result = f"{minutes}:{seconds:02d}"

    fractional = total_seconds % 1
    if fractional > 0:
        # Ten places hides float noise such as 0.2400000000002365
        digits = f"{fractional:.10f}".rstrip("0")
        if digits.startswith("0.") and len(digits) > 2:
            result += digits[1:]
    return result


def display_chapters(chapters: list[Chapter]) -> list[dict]:
    """Render chapters as ``{id, label, startTime, endTime}`` rows with formatted times."""
    return [
        {
            "id": ch.id,
            "label": ch.label,
            "startTime": format_timestamp(ch.start_time),
            "endTime": format_timestamp(ch.end_time),
        }
        for ch in chapters
    ]
