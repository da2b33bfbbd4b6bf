"""Splits the receiver's byte stream into protocol lines."""

import logging
from collections.abc import Iterator

TERMINATOR = b"\r\n"
PROBE_ACK = "R"

_LOGGER = logging.getLogger(__name__)


class LineFramer:
    """Accumulates bytes and yields complete CR LF terminated lines.

    Bytes after the last terminator are kept as the partial remainder and
    prepended to the next feed. Empty lines and probe acknowledgements are
    dropped.
    """

    def __init__(self) -> None:
        self._partial = b""

    @property
    def partial(self) -> bytes:
        return self._partial

    def carry(self, data: bytes) -> None:
        """Append bytes to the remainder without framing them."""
        self._partial += data

    def clear(self) -> None:
        self._partial = b""

    def feed(self, data: bytes) -> Iterator[str]:
        """Add ``data`` and return a lazy iterator over the complete lines.

        Lines not consumed from the iterator stay in the remainder.
        """
        self._partial += data
        return self._lines()

    def _lines(self) -> Iterator[str]:
        while True:
            end = self._partial.find(TERMINATOR)
            if end < 0:
                return
            raw = self._partial[:end]
            self._partial = self._partial[end + len(TERMINATOR) :]
            # latin-1 maps every byte, so a stray byte never aborts framing
            line = raw.decode("latin-1")
            if line == "" or line == PROBE_ACK:
                _LOGGER.debug("Suppressing received %r", line)
                continue
            yield line
