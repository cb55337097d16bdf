"""Go literal encoding helpers: raw-literal sanitizing, quoting and byte escaping."""

from __future__ import annotations

from typing import BinaryIO

_RAW_REPLACEMENTS: tuple[tuple[bytes, bytes], ...] = (
    # Order matters: later substitutions introduce backticks of their own.
    (b"`", b'`+"`"+`'),
    # A BOM is valid UTF-8 but the Go compiler rejects it anywhere but the file start.
    (b"\xef\xbb\xbf", b'`+"\\xEF\\xBB\\xBF"+`'),
    # Carriage returns are discarded from raw string values.
    (b"\r", b'`+"\\r"+`'),
    (b"\x00", b'`+"\\x00"+`'),
)

_NAMED_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}

_HEX_ESCAPES = tuple(b"\\x%02x" % value for value in range(256))


def sanitize(data: bytes) -> bytes:
    """Prepare valid UTF-8 bytes for embedding between backticks in Go source."""
    for needle, replacement in _RAW_REPLACEMENTS:
        data = data.replace(needle, replacement)
    return data


def quote_bytes(data: bytes) -> str:
    """Return ``data`` as a double-quoted Go string literal, like ``%q`` on a ``[]byte``."""
    text = data.decode("utf-8", "surrogateescape")
    parts = ['"']
    for char in text:
        escaped = _NAMED_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
            continue
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            # Byte that is not part of a valid UTF-8 sequence.
            parts.append(f"\\x{code - 0xDC00:02x}")
        elif char.isprintable():
            parts.append(char)
        elif code < 0x80:
            parts.append(f"\\x{code:02x}")
        elif code < 0x10000:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def quote_string(value: str) -> str:
    """Return ``value`` as a Go string literal (``strconv.Quote``)."""
    return quote_bytes(value.encode("utf-8", "surrogateescape"))


class StringWriter:
    """File-like sink that writes every byte it receives as a ``\\xNN`` escape."""

    def __init__(self, out: BinaryIO) -> None:
        self._out = out
        self.count = 0

    def write(self, data: bytes) -> int:
        if not data:
            return 0
        view = memoryview(data).cast("B")
        self._out.write(b"".join(_HEX_ESCAPES[value] for value in view))
        self.count += len(view)
        return len(view)

    def flush(self) -> None:
        flush = getattr(self._out, "flush", None)
        if flush is not None:
            flush()


__all__ = ["StringWriter", "quote_bytes", "quote_string", "sanitize"]
