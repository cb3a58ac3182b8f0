class InvalidRecord(ValueError):
    """
    The API returned something that does not have the shape of a donor record.
    """


def require(data, *keys):
    """
    Return the first non-null, non-blank value found under ``keys``.
    The API is not consistent about some names (``_id`` vs ``id``), so
    aliases can be passed in order of preference.
    """
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    raise InvalidRecord(f"Missing required field '{keys[0]}'.")


def optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def as_bool(value) -> bool:
    # some endpoints send availability flags as strings
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)
