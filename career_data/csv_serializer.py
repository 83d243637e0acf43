"""
CSV serialization with fixed column order.
"""

from typing import Any, Dict, Iterable, List, Sequence

QUOTE_TRIGGERS = (',', '"', '\n', '\r')


def _to_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def encode_field(value: Any, list_delimiter: str = ';') -> str:
    """
    Encode a single value as a CSV field.

    None becomes an empty field, booleans are written as JSON writes them
    and lists are joined with the list delimiter. Quotes are doubled and the
    field is quoted when it contains a comma, quote or line break.
    """
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        value = list_delimiter.join(_to_text(v) for v in value)

    text = _to_text(value).replace('"', '""')
    if any(trigger in text for trigger in QUOTE_TRIGGERS):
        text = f'"{text}"'
    return text


def to_csv(records: Iterable[Dict[str, Any]], columns: Sequence[str],
           list_delimiter: str = ';') -> str:
    """
    Serialize records to CSV text.

    Args:
        records: Row mappings; keys outside `columns` are ignored
        columns: Output columns, in order
        list_delimiter: Separator used to flatten list values

    Returns:
        Header line plus one line per record, joined by newlines
    """
    lines: List[str] = [','.join(columns)]
    for record in records:
        lines.append(','.join(
            encode_field(record.get(column), list_delimiter) for column in columns))
    return '\n'.join(lines)
