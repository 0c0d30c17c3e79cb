"""External data source clients."""
from app.api.csv_source_client import CsvSourceClient
from app.api.catalog_csv import parse_venues_csv

__all__ = ["CsvSourceClient", "parse_venues_csv"]
