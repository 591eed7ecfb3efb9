"""
Export Adapters
"""

from .json_exporter import JsonResultExporter, SCHEMA_VERSION
from .csv_exporter import CsvResultExporter

__all__ = [
    "JsonResultExporter",
    "CsvResultExporter",
    "SCHEMA_VERSION",
]
