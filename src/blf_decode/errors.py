from __future__ import annotations

from .const import ERRORS


class BlfError(ValueError):
    code = ""

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = ERRORS[self.code]
        super().__init__(f"{message}: {detail}" if detail else message)


class HeaderError(BlfError):
    code = "E_HEADER"


class FrameError(BlfError):
    pass


class FrameEof(FrameError):
    code = "E_EOF"

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"at offset {position}")


class BadMagic(FrameError):
    code = "E_BAD_MAGIC"

    def __init__(self, position: int, found: bytes):
        self.position = position
        self.found = found
        super().__init__(f"{found!r} at offset {position}")


class Malformed(FrameError):
    code = "E_MALFORMED"


class DecompressError(BlfError):
    pass


class UnknownMethod(DecompressError):
    code = "E_UNKNOWN_METHOD"

    def __init__(self, method: int):
        self.method = method
        super().__init__(f"method {method}")


class DecompressionOverflow(DecompressError):
    code = "E_OVERFLOW"


class CorruptContainer(DecompressError):
    code = "E_CORRUPT_CONTAINER"
