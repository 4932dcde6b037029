from csvlens.ingest.csv_reader import read_csv_upload, sniff_delimiter

__all__ = ["read_csv_upload", "sniff_delimiter"]
