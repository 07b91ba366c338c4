"""Trace file reader.

One access per line:

    L 10,1
     S 7ff0005c8,8

operation letter, hexadecimal address (an optional 0x prefix is accepted),
a comma, then the access size in bytes. Blank lines are skipped.
"""
import logging
import re
from typing import Iterator, NamedTuple, Optional

log = logging.getLogger(__name__)

_LINE_RE = re.compile(r'^\s*([A-Za-z])\s+(?:0[xX])?([0-9a-fA-F]+)\s*,\s*(\d+)\s*$')


class TraceFormatError(ValueError):
    def __init__(self, message: str, lineno: Optional[int] = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)


class TraceRecord(NamedTuple):
    op: str
    address: int
    size: int


def parse_trace_line(line: str, lineno: Optional[int] = None) -> Optional[TraceRecord]:
    """Parse one trace line. Returns None for blank lines."""
    if not line.strip():
        return None
    m = _LINE_RE.match(line)
    if m is None:
        raise TraceFormatError(f"cannot parse {line.rstrip()!r}", lineno)
    op = m.group(1).upper()
    if op not in ('L', 'S'):
        raise TraceFormatError(f"unknown operation {op!r}, expected 'L' or 'S'", lineno)
    return TraceRecord(op, int(m.group(2), 16), int(m.group(3)))


def read_trace(path: str) -> Iterator[TraceRecord]:
    """Stream the records of a trace file."""
    count = 0
    with open(path, 'r', encoding='ascii') as fh:
        try:
            for lineno, line in enumerate(fh, start=1):
                record = parse_trace_line(line, lineno)
                if record is not None:
                    count += 1
                    yield record
        except UnicodeDecodeError as e:
            # decoded in chunks, so the failing line is unknown
            raise TraceFormatError(f"not an ASCII text trace: byte {e.object[e.start]:#04x}") from e
    log.debug("read %d records from %s", count, path)
