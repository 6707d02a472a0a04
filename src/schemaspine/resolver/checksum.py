"""
Content fingerprints for migration scripts.

Manifesto:
    The checksum recorded in schema history is compared against the one
    computed from the script on every later run, on every machine. It must
    therefore depend on nothing but the script's text:

    - **Line-ending agnostic:** CRLF checkouts match LF checkouts
    - **BOM agnostic:** an editor adding a byte-order mark is not a change
    - **Platform stable:** CRC-32 over UTF-8 bytes, signed 32-bit result

Architecture:
    ::

        resource.read()  ──lines──▶  strip "\\r" "\\n" (+ BOM on line 1)
                                        │
                                        ▼
                                zlib.crc32(line.encode("utf-8"), crc)
                                        │
                                        ▼
                               signed 32-bit int

Examples:
    >>> calc = Crc32ChecksumCalculator()
    >>> calc.calculate_for_text("SELECT 1;\\n") == calc.calculate_for_text("SELECT 1;\\r\\n")
    True

Tags:
    checksum, crc32, fingerprint, integrity, schemaspine
"""

from __future__ import annotations

import zlib
from collections.abc import Iterable

from schemaspine.errors import ResourceReadError
from schemaspine.protocols import LoadableResource

_BOM = "\ufeff"


def _to_signed_32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _strip_line_endings(line: str) -> str:
    return line.replace("\r", "").replace("\n", "")


class Crc32ChecksumCalculator:
    """Default :class:`~schemaspine.protocols.ChecksumCalculator`."""

    def calculate(self, resource: LoadableResource) -> int:
        """Fingerprint ``resource``, closing its stream on every exit path.

        Raises :class:`ResourceReadError` when the content cannot be read or
        decoded.
        """
        try:
            with resource.read() as reader:
                return self._checksum_lines(reader)
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceReadError(
                f"Unable to calculate checksum of {resource.relative_path}: {exc}",
                cause=exc,
            ).with_context(resource=resource.relative_path) from exc

    def calculate_for_text(self, text: str) -> int:
        return self._checksum_lines(text.splitlines(keepends=True))

    def _checksum_lines(self, lines: Iterable[str]) -> int:
        crc = 0
        first = True
        for line in lines:
            line = _strip_line_endings(line)
            if first:
                if line.startswith(_BOM):
                    line = line[len(_BOM):]
                first = False
            crc = zlib.crc32(line.encode("utf-8"), crc)
        return _to_signed_32(crc)
