ERRORS = {
  "E_HEADER": "File statistics header unreadable or magic mismatch",
  "E_EOF": "Source exhausted before a complete object",
  "E_BAD_MAGIC": "Object magic mismatch",
  "E_MALFORMED": "Object structure violates its declared size",
  "E_UNKNOWN_METHOD": "Unsupported container compression method",
  "E_OVERFLOW": "Container decompresses past its declared size",
  "E_CORRUPT_CONTAINER": "Container zlib stream invalid or truncated",
}
