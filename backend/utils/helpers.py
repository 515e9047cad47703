# utils/helpers.py
def safe_strip(value):
    """Safely strip a string value, handling None and blank strings"""
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None
    return value


def truncate(text, limit, suffix='...'):
    """Cut text to at most limit characters, marking the cut with suffix"""
    if len(text) <= limit:
        return text
    return text[:limit - len(suffix)] + suffix
