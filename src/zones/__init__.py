"""
Parsed DNS records and the zone-file loader that fills them.

Public entrypoints: Record, RecordStore, parse_file, parse_directory, load_directories
"""

from .models import Record, to_tag
from .parser import load_directories, parse_directory, parse_file
from .records import RecordStore

__all__ = ["Record", "RecordStore", "load_directories", "parse_directory", "parse_file", "to_tag"]
