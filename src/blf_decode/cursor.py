from __future__ import annotations

import struct

from .errors import Malformed


class BudgetCursor:
    """Bounds-checked reader over exactly one object's payload bytes.

    Every decoder must call `finish()` so the cursor is proven to land on the
    declared budget; short or long reads are structural errors.
    """

    def __init__(self, data: bytes | memoryview, object_type: int):
        self.data = memoryview(data)
        self.object_type = object_type
        self.pos = 0

    @property
    def budget(self) -> int:
        return len(self.data)

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def _need(self, n: int) -> None:
        if n < 0 or n > self.remaining:
            raise Malformed(
                f"type {self.object_type} needs {n} bytes at payload offset {self.pos}, "
                f"{self.remaining} left of {self.budget}"
            )

    def unpack(self, fmt: struct.Struct) -> tuple:
        self._need(fmt.size)
        values = fmt.unpack_from(self.data, self.pos)
        self.pos += fmt.size
        return values

    def take(self, n: int) -> bytes:
        self._need(n)
        chunk = bytes(self.data[self.pos:self.pos + n])
        self.pos += n
        return chunk

    def skip(self, n: int) -> None:
        self._need(n)
        self.pos += n

    def finish(self) -> int:
        if self.pos != self.budget:
            raise Malformed(
                f"type {self.object_type} consumed {self.pos} of {self.budget} payload bytes"
            )
        return self.pos
