"""Data blob assembly."""

from __future__ import annotations

from typing import Iterable, Tuple


class BlobAssembler:
    """Concatenates file contents in manifest order."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def append(self, data: bytes) -> Tuple[int, int]:
        """Append ``data`` and return the ``[start, end)`` range it occupies."""

        start = len(self._buffer)
        self._buffer.extend(data)
        return start, len(self._buffer)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


def assemble_blob(chunks: Iterable[bytes]) -> bytes:
    assembler = BlobAssembler()
    for chunk in chunks:
        assembler.append(chunk)
    return assembler.getvalue()
