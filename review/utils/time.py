from datetime import timedelta, timezone as dt_tz

CST = dt_tz(timedelta(hours=8))


def to_cst_iso(dt_utc):
    if dt_utc is None:
        return None
    return dt_utc.astimezone(CST).isoformat()
