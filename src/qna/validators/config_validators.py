def to_uppercase(value: str | None) -> str | None:
    """
    Strip and upper-case a string setting, leaving None untouched.
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Strip and lower-case a string setting, leaving None untouched.
    """
    if value is None:
        return None
    return value.strip().lower()


def with_async_driver(url: str, driver: str) -> str:
    """
    Rewrite a bare Postgres URL so SQLAlchemy picks the async driver.

    `postgres://u:p@host/db` and `postgresql://u:p@host/db` (the form most hosting
    providers and `psql` hand out) become `postgresql+<driver>://u:p@host/db`.
    URLs that already name a driver, or other engines, are returned unchanged.
    """
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return f"postgresql+{driver}://" + url[len(prefix):]
    return url
