import datetime as _dt


def format_date(value: _dt.date) -> str:
    """
    Форматирует дату в строку ``YYYYMMDD`` (атрибут DT).
    - Год дополняется нулями до 4 цифр, месяц и день – до 2.
    - `datetime` тоже подходит: время просто игнорируется.
    """
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def is_date(value: object) -> bool:
    """`True`, если *value* – настоящая дата (или datetime)."""
    return isinstance(value, _dt.date)
