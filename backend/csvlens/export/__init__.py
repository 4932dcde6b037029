"""
Export module for cleaned data.
"""
from csvlens.export.csv_emitter import emit_csv, normalize_delimiter

__all__ = ["emit_csv", "normalize_delimiter"]
