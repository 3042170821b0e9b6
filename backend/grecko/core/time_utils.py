from datetime import datetime, timezone

from grecko.core.constants import CALC_LABEL_PREFIX


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        try:
            from zoneinfo import ZoneInfo
            return dt.astimezone(ZoneInfo(tz_name))
        except (KeyError, ValueError):
            # Unknown zone name: fall back to the system zone
            return dt.astimezone()
    return dt.astimezone()


def short_date(dt, tz_name: str | None = None) -> str:
    """Format a datetime as 'Mon D', e.g. 'Nov 12'."""
    local = to_local_datetime(dt, tz_name)
    return f"{local.strftime('%b')} {local.day}"


def calc_label(now: datetime | None = None, tz_name: str | None = None) -> str:
    """Label for a snapshot produced by the course calculator.

    Example: 2025-11-12T15:00Z -> 'Calc Nov 12'
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return f"{CALC_LABEL_PREFIX} {short_date(now, tz_name)}"


def history_label(label: str | None, created_at, tz_name: str | None = None) -> str:
    """Display label for a stored snapshot: its own label, else its date."""
    if label:
        return label
    if created_at is None:
        return ""
    return short_date(created_at, tz_name)
