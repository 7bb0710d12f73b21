"""Parser for the serialized cursor Tracker writes to the query pipe.

Each row is laid out in native byte order as::

    int32 n_columns
    int32 value_type[n_columns]
    int32 end_offset[n_columns]
    bytes values, each NUL-terminated

``end_offset[i]`` is where value ``i`` ends, counted from the start of the
values block, with the terminators of the values before it included.
"""

from __future__ import annotations

import struct

from rofi_tracker.core.errors import CursorFormatError

_INT = struct.Struct("=i")

# Value types as reported per column
VALUE_TYPE_UNBOUND = 0


def _read_ints(buf: bytes, pos: int, count: int) -> tuple[list[int], int]:
    end = pos + _INT.size * count
    if end > len(buf):
        raise CursorFormatError("cursor truncated inside row header")
    values = [_INT.unpack_from(buf, pos + i * _INT.size)[0] for i in range(count)]
    return values, end


def parse_cursor(buf: bytes, n_columns: int) -> list[tuple[str | None, ...]]:
    """Split a cursor buffer into rows of decoded column values.

    Unbound columns (e.g. a missing OPTIONAL) come back as None.
    """
    rows: list[tuple[str | None, ...]] = []
    pos = 0
    while pos < len(buf):
        (count,), pos = _read_ints(buf, pos, 1)
        if count != n_columns:
            raise CursorFormatError(f"expected {n_columns} columns, row has {count}")
        types, pos = _read_ints(buf, pos, count)
        offsets, pos = _read_ints(buf, pos, count)

        values: list[str | None] = []
        consumed = 0
        for value_type, end in zip(types, offsets):
            length = end - consumed
            if length < 0 or pos + length >= len(buf):
                raise CursorFormatError("cursor value runs past end of buffer")
            raw = buf[pos:pos + length]
            if buf[pos + length] != 0:
                raise CursorFormatError("cursor value is not NUL-terminated")
            pos += length + 1
            consumed += length + 1
            if value_type == VALUE_TYPE_UNBOUND:
                values.append(None)
            else:
                values.append(raw.decode("utf-8", errors="replace"))
        rows.append(tuple(values))
    return rows
