"""BLF Export - Parquet output for decoded records."""
from .frames import export_records, records_to_frame

__all__ = ["export_records", "records_to_frame"]
