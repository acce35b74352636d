"""
photo-dater - Name photo directories after the dates their photos were taken.

Reads the EXIF creation date of every photo in a directory, checks or renames
the directory so it starts with the date range of its contents, renames files
in capture order and sorts them into per-day subdirectories.
"""

__version__ = "1.0.0"
__copyright__ = "MIT License"


# Public API
from .cli import main
from .config import Config
from .date_range import DateRange, RangeForm
from .directory_namer import DirectoryName, DirectoryNamer, NameCheck, NameStatus
from .file_operations import FileOperations
from .organizer import FileOrganizer
from .photo_set import PhotoEntry, PhotoSet
from .timestamps import read_creation_date

__all__ = [ "main", "Config", "DateRange", "RangeForm", "DirectoryName", "DirectoryNamer",
            "NameCheck", "NameStatus", "FileOperations", "FileOrganizer", "PhotoEntry",
            "PhotoSet", "read_creation_date" ]
