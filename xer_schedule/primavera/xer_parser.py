"""
XER File Parser for Primavera P6 Schedule Data

This module reads Primavera P6 XER exports into plain table maps
(table name -> list of field-name -> string records) and writes them back.

XER Format:
- Tab-delimited text files
- Structure: ERMHDR (header) followed by %T (table), %F (fields), %R (rows)
- Each table represents a different entity (tasks, resources, calendars, etc.)

Parsing is a single forward pass over the input. Structurally odd lines are
skipped rather than rejected, so a damaged export still yields whatever
tables can be recovered. Only I/O errors propagate.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Iterable, Iterator, List, Optional, TextIO, Union

import pandas as pd

from xer_schedule.config.settings import settings

logger = logging.getLogger(__name__)

RawRecord = Dict[str, str]
RawTables = Dict[str, List[RawRecord]]

HEADER_CODE = 'ERMHDR'
TABLE_CODE = '%T'
FIELDS_CODE = '%F'
ROW_CODE = '%R'
END_CODE = '%E'


def _strip_terminator(line: str) -> str:
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line


def _iter_binary_lines(stream: BinaryIO, encoding: str) -> Iterator[str]:
    for raw in stream:
        yield _strip_terminator(raw.decode(encoding, errors='replace'))


def _iter_text_lines(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield _strip_terminator(line)


class XERParser:
    """Parse Primavera P6 XER data into structured tables"""

    def __init__(self, file_path: Union[str, Path], encoding: Optional[str] = None):
        """
        Initialize the parser with an XER file path

        Args:
            file_path: Path to the XER file
            encoding: Text encoding (default: settings.XER_ENCODING)
        """
        self.file_path: Optional[Path] = Path(file_path) if file_path is not None else None
        self.encoding = encoding or settings.XER_ENCODING
        self.tables: RawTables = {}
        self.fields: Dict[str, List[str]] = {}
        self.header: Dict[str, object] = {}
        self.lines_read = 0
        self.skipped_lines = 0
        self._line_source: Optional[Callable[[], Iterator[str]]] = None

    @classmethod
    def from_buffer(cls, data: Union[bytes, bytearray, str],
                    encoding: Optional[str] = None) -> 'XERParser':
        """
        Create a parser over an in-memory XER buffer.

        Args:
            data: Raw bytes (decoded with the parser encoding) or decoded text
            encoding: Text encoding for byte input
        """
        parser = cls(None, encoding=encoding)
        if isinstance(data, str):
            parser._line_source = lambda: _iter_text_lines(io.StringIO(data, newline='\n'))
        else:
            parser._line_source = lambda: _iter_binary_lines(io.BytesIO(bytes(data)), parser.encoding)
        return parser

    @classmethod
    def from_stream(cls, stream: Union[BinaryIO, TextIO],
                    encoding: Optional[str] = None) -> 'XERParser':
        """
        Create a parser over an open binary or text stream.

        The stream is read once, line by line; it is not closed.
        """
        parser = cls(None, encoding=encoding)

        def lines() -> Iterator[str]:
            for line in stream:
                if isinstance(line, bytes):
                    yield _strip_terminator(line.decode(parser.encoding, errors='replace'))
                else:
                    yield _strip_terminator(line)

        parser._line_source = lines
        return parser

    def parse(self) -> RawTables:
        """
        Parse the XER input and return all tables

        Returns:
            Dictionary mapping table names to lists of field-name -> value records
        """
        self.tables = {}
        self.fields = {}
        self.header = {}
        self.lines_read = 0
        self.skipped_lines = 0

        if self._line_source is not None:
            self._parse_lines(self._line_source())
        else:
            with open(self.file_path, 'rb') as f:
                self._parse_lines(_iter_binary_lines(f, self.encoding))

        logger.debug(
            "Parsed %d lines into %d tables (%d lines skipped)",
            self.lines_read, len(self.tables), self.skipped_lines,
        )
        return self.tables

    def _parse_lines(self, lines: Iterable[str]) -> None:
        """Parse all tables from a line iterator"""
        current_table: Optional[str] = None
        current_fields: List[str] = []

        for line in lines:
            self.lines_read += 1
            if self.lines_read == 1 and line.startswith('\ufeff'):
                line = line[1:]

            parts = line.split('\t')
            code = parts[0]

            if code == TABLE_CODE:
                if len(parts) < 2 or not parts[1]:
                    self._skip(line, 'table marker without a name')
                    continue
                # Start new table (a repeated name resets it)
                current_table = parts[1]
                current_fields = []
                self.tables[current_table] = []
                self.fields[current_table] = current_fields

            elif code == FIELDS_CODE:
                current_fields = parts[1:]
                if current_table is not None:
                    self.fields[current_table] = current_fields

            elif code == ROW_CODE:
                if current_table is None:
                    self._skip(line, 'row before any table')
                    continue
                record = {
                    name: value
                    for name, value in zip(current_fields, parts[1:])
                    if name
                }
                self.tables[current_table].append(record)

            elif code == HEADER_CODE:
                self._parse_header(parts)

            # %E and any other prefix are ignored

    def _parse_header(self, parts: List[str]) -> None:
        """Parse the ERMHDR header line"""
        # Header format: ERMHDR\tversion\texport_date\t...
        self.header['raw'] = '\t'.join(parts)
        self.header['data'] = parts[1:]
        if len(parts) > 1:
            self.header['version'] = parts[1]
        if len(parts) > 2:
            self.header['export_date'] = parts[2]

    def _skip(self, line: str, reason: str) -> None:
        self.skipped_lines += 1
        logger.debug("Skipping line %d (%s): %.60r", self.lines_read, reason, line)

    def get_table(self, table_name: str) -> List[RawRecord]:
        """
        Get a specific table by name

        Args:
            table_name: Name of the table to retrieve

        Returns:
            List of records, empty if the table doesn't exist
        """
        return self.tables.get(table_name, [])

    def list_tables(self) -> List[str]:
        """
        Get list of all available table names

        Returns:
            List of table names
        """
        return list(self.tables.keys())

    def to_dataframe(self, table_name: str) -> pd.DataFrame:
        """
        Get a table as a DataFrame with columns in %F order.

        Missing values are filled with empty strings.
        """
        rows = self.get_table(table_name)
        columns = self.fields.get(table_name) or None
        df = pd.DataFrame(rows, columns=columns)
        return df.fillna('')

    def export_table_to_csv(self, table_name: str, output_path: Union[str, Path]) -> None:
        """
        Export a specific table to CSV

        Args:
            table_name: Name of the table to export
            output_path: Path for the output CSV file
        """
        if table_name not in self.tables:
            raise ValueError(f"Table '{table_name}' not found in XER file")

        df = self.to_dataframe(table_name)
        df.to_csv(output_path, index=False)
        logger.info("Exported %d rows to %s", len(df), output_path)

    def export_all_to_csv(self, output_dir: Union[str, Path]) -> List[Path]:
        """
        Export all tables to separate CSV files

        Args:
            output_dir: Directory to save CSV files

        Returns:
            Paths of the written files
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        written = []
        for table_name in self.tables:
            csv_path = output_path / f"{table_name.lower()}.csv"
            df = self.to_dataframe(table_name)
            df.to_csv(csv_path, index=False)
            logger.info("Exported %s: %d rows to %s", table_name, len(df), csv_path)
            written.append(csv_path)
        return written

    def summary(self) -> Dict:
        """
        Get a summary of the XER contents

        Returns:
            Dictionary with summary statistics
        """
        summary = {
            'file_path': str(self.file_path) if self.file_path else None,
            'total_tables': len(self.tables),
            'lines_read': self.lines_read,
            'skipped_lines': self.skipped_lines,
            'tables': {}
        }

        for table_name, rows in self.tables.items():
            summary['tables'][table_name] = {
                'rows': len(rows),
                'columns': len(self.fields.get(table_name, [])),
                'column_names': list(self.fields.get(table_name, [])),
            }

        return summary


def extract_tables(source: Union[str, Path, bytes, bytearray, BinaryIO, TextIO]) -> RawTables:
    """
    Quick utility function to extract the tables of an XER source

    Args:
        source: Path to an XER file, raw bytes, or an open stream

    Returns:
        Dictionary of table names to record lists
    """
    if isinstance(source, (bytes, bytearray)):
        parser = XERParser.from_buffer(source)
    elif isinstance(source, (str, Path)):
        parser = XERParser(source)
    else:
        parser = XERParser.from_stream(source)
    return parser.parse()


def _table_fields(rows: List[RawRecord]) -> List[str]:
    fields: Dict[str, None] = {}
    for row in rows:
        for name in row:
            fields.setdefault(name, None)
    return list(fields)


def write_tables(tables: RawTables, stream: TextIO,
                 fields: Optional[Dict[str, List[str]]] = None,
                 header: Optional[List[str]] = None) -> None:
    """
    Serialize a table map back to XER text.

    Values must not contain tabs or line breaks (XER has no escaping).

    Args:
        tables: Table map as returned by XERParser.parse()
        stream: Text stream to write to
        fields: Optional explicit column order per table
        header: Optional ERMHDR tokens (without the ERMHDR code)
    """
    if header is not None:
        stream.write('\t'.join([HEADER_CODE] + list(header)) + '\n')

    for table_name, rows in tables.items():
        names = (fields or {}).get(table_name) or _table_fields(rows)
        stream.write(f"{TABLE_CODE}\t{table_name}\n")
        stream.write('\t'.join([FIELDS_CODE] + names) + '\n')
        for row in rows:
            values = [row.get(name) for name in names]
            # Absent trailing values stay absent
            while values and values[-1] is None:
                values.pop()
            stream.write('\t'.join([ROW_CODE] + [v if v is not None else '' for v in values]) + '\n')

    stream.write(END_CODE + '\n')


def dump_tables(tables: RawTables, fields: Optional[Dict[str, List[str]]] = None,
                header: Optional[List[str]] = None) -> str:
    """Serialize a table map to an XER string."""
    buffer = io.StringIO()
    write_tables(tables, buffer, fields=fields, header=header)
    return buffer.getvalue()
