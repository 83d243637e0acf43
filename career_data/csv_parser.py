"""
Quote-aware CSV parser for the hand-edited nodes.csv / paths.csv master copies.

Records are split on LF or CRLF outside quotes, so quoted fields may contain
commas, doubled quotes and line breaks. Blank records are discarded, the first
record is the header, and data records whose field count differs from the
header are dropped with a warning. A stray quote in a hand-edited cell costs
only its own line.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class CsvParseStats:
    """Statistics about one parse."""
    total_records: int = 0
    valid_rows: int = 0
    blank_records: int = 0
    dropped_rows: List[int] = field(default_factory=list)


@dataclass
class CsvTable:
    """Parsed CSV: header, rows and the source record number of each row."""
    header: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)
    row_numbers: List[int] = field(default_factory=list)
    stats: CsvParseStats = field(default_factory=CsvParseStats)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Dict[str, str]]:
        return iter(self.rows)

    def numbered_rows(self) -> Iterator[Tuple[int, Dict[str, str]]]:
        """Yield (record number, row) pairs; the header is record 1."""
        return zip(self.row_numbers, self.rows)


@dataclass
class _Record:
    """One scanned record and where it sits in the text (0-based lines)."""
    fields: List[str]
    first_line: int
    last_line: int
    unterminated: bool = False  # text ended inside quotes
    spans_quoted_newline: bool = False
    stray_quote: bool = False  # the quote held open over a line break began mid-field


def _scan_records(text: str, first_line: int = 0) -> Iterator[_Record]:
    """
    Split raw CSV text into records of fields.

    A '"' toggles quoted mode unless it is inside quotes and followed by a
    second '"', which yields one literal quote. Commas and line breaks are
    literal inside quotes.
    """
    fields: List[str] = []
    current: List[str] = []
    inside_quotes = False
    opened_mid_field = False
    line = start_line = first_line
    spans_newline = stray = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char == '"':
            if inside_quotes and i + 1 < length and text[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                inside_quotes = not inside_quotes
                if inside_quotes:
                    opened_mid_field = bool(current)
        elif char == ',' and not inside_quotes:
            fields.append(''.join(current))
            current = []
        elif char == '\n' and not inside_quotes:
            fields.append(''.join(current))
            yield _Record(fields, start_line, line,
                          spans_quoted_newline=spans_newline, stray_quote=stray)
            line += 1
            start_line = line
            fields, current = [], []
            spans_newline = stray = False
        elif char == '\r' and not inside_quotes and i + 1 < length and text[i + 1] == '\n':
            pass  # CR of a CRLF terminator
        else:
            if char == '\n':
                if not spans_newline:
                    spans_newline = True
                    stray = opened_mid_field
                line += 1
            current.append(char)
        i += 1

    if current or fields or inside_quotes:
        fields.append(''.join(current))
        yield _Record(fields, start_line, line, unterminated=inside_quotes,
                      spans_quoted_newline=spans_newline, stray_quote=stray)


def iter_records(text: str) -> Iterator[List[str]]:
    """Split raw CSV text into records of fields (see _scan_records)."""
    for record in _scan_records(text):
        yield record.fields


def _is_blank(record: List[str]) -> bool:
    return len(record) == 1 and not record[0].strip()


def _is_runaway(record: _Record, header: List[str]) -> bool:
    """True when a quote most likely swallowed the lines after it."""
    if record.unterminated:
        return True
    if not record.spans_quoted_newline:
        return False
    return record.stray_quote or (bool(header) and len(record.fields) != len(header))


def _line_starts(text: str) -> List[int]:
    starts = [0]
    position = text.find('\n')
    while position != -1:
        starts.append(position + 1)
        position = text.find('\n', position + 1)
    return starts


def parse_csv(text: str, source: str = '<string>') -> CsvTable:
    """
    Parse CSV text into an ordered table of header-keyed rows.

    A quote that is never closed, or that holds a line break open and leaves
    the record malformed, only costs the line it was opened on: that line is
    dropped with a warning and scanning resumes on the next line.

    Args:
        text: Raw CSV content
        source: Name used in log messages (usually the file path)

    Returns:
        CsvTable with trimmed header names and verbatim values
    """
    table = CsvTable()
    record_number = 0

    # Spreadsheet exports often start with a byte order mark
    if text.startswith('\ufeff'):
        text = text[1:]

    starts: Optional[List[int]] = None
    resume_line: Optional[int] = 0

    while resume_line is not None:
        if starts is None:
            remaining = text
        else:
            remaining = text[starts[resume_line]:] if resume_line < len(starts) else ''
        records = _scan_records(remaining, resume_line)
        resume_line = None

        for record in records:
            table.stats.total_records += 1

            if _is_runaway(record, table.header):
                if starts is None:
                    starts = _line_starts(text)
                bad_line = record.first_line
                end = starts[bad_line + 1] if bad_line + 1 < len(starts) else len(text)
                line_text = text[starts[bad_line]:end].rstrip('\n').rstrip('\r')
                record_number += 1
                if not table.header:
                    header_record = next(_scan_records(line_text))
                    table.header = [name.strip() for name in header_record.fields]
                    logger.warning(
                        f"{source}: unterminated quote in header row {record_number}")
                else:
                    logger.warning(
                        f"{source}: dropping row {record_number} with an unterminated quote "
                        f"(line {bad_line + 1})")
                    table.stats.dropped_rows.append(record_number)
                resume_line = bad_line + 1
                break

            if _is_blank(record.fields):
                table.stats.blank_records += 1
                continue

            record_number += 1
            if not table.header:
                table.header = [name.strip() for name in record.fields]
                continue

            if len(record.fields) != len(table.header):
                logger.warning(
                    f"{source}: dropping row {record_number} with {len(record.fields)} fields "
                    f"(header has {len(table.header)})")
                table.stats.dropped_rows.append(record_number)
                continue

            table.rows.append(dict(zip(table.header, record.fields)))
            table.row_numbers.append(record_number)
            table.stats.valid_rows += 1

    logger.debug(
        f"{source}: parsed {table.stats.valid_rows} rows, "
        f"dropped {len(table.stats.dropped_rows)}")
    return table
