"""Reading photo creation dates from embedded EXIF metadata."""

import json
import re
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from .constants import exiftool_available, get_logger
from .errors import MetadataReadError


logger = get_logger()

# exiftool tag names, in priority order
EXIFTOOL_DATE_TAGS = ("DateTimeOriginal", "CreateDate")

EXIF_IFD = 0x8769
# DateTimeOriginal, DateTimeDigitized
PILLOW_DATE_TAGS = (0x9003, 0x9004)

_EXIF_DATETIME = re.compile(
    r'(\d{4})[-:](\d{2})[-:](\d{2})[T ](\d{2}):(\d{2}):(\d{2})', re.ASCII
)


def read_creation_date(path: Path) -> Optional[datetime]:
    """Get the capture timestamp of a photo, or None if it has none.

    Uses exiftool when installed (covers JPEG, TIFF, HEIF, PNG and WebP),
    otherwise Pillow. A file that cannot be opened at all raises
    MetadataReadError; a file without a usable date tag is not an error.
    """
    try:
        with open(path, 'rb') as f:
            f.read(1)
    except OSError as e:
        raise MetadataReadError(path, e)

    if exiftool_available:
        try:
            created = exiftool_creation_date(path)
            if created:
                return created
        except (subprocess.CalledProcessError, json.JSONDecodeError) as e:
            logger.debug(f"exiftool failed for {path}: {e}")

    return pillow_creation_date(path)


def exiftool_creation_date(path: Path) -> Optional[datetime]:
    """Read the creation date tags of a single file with exiftool."""
    result = subprocess.run([
        "exiftool",
        "-q",
        "-json",
        "-d", "%Y-%m-%dT%H:%M:%S",
        *[f"-{tag}" for tag in EXIFTOOL_DATE_TAGS],
        str(path)],
        capture_output=True, text=True, check=True
    )

    try:
        tags = json.loads(result.stdout)[0]
    except IndexError:
        return None
    return canonical_exif_date(tags)


def canonical_exif_date(tags: Dict[str, str]) -> Optional[datetime]:
    """First parsable date among the exiftool date tags, in priority order."""
    for date_field in EXIFTOOL_DATE_TAGS:
        if date_field not in tags:
            continue

        created = parse_exif_datetime(str(tags[date_field]))
        if created:
            return created

    return None


def pillow_creation_date(path: Path) -> Optional[datetime]:
    """Read DateTimeOriginal (or DateTimeDigitized) with Pillow."""
    try:
        with Image.open(path) as img:
            exif = img.getexif()
            exif_ifd = exif.get_ifd(EXIF_IFD)
    except UnidentifiedImageError:
        logger.debug(f"Not an image Pillow can read: {path}")
        return None
    except OSError as e:
        raise MetadataReadError(path, e)

    for tag in PILLOW_DATE_TAGS:
        value = exif_ifd.get(tag) or exif.get(tag)
        if isinstance(value, bytes):
            value = value.decode('ascii', errors='ignore')
        if value:
            created = parse_exif_datetime(value)
            if created:
                return created

    logger.debug(f"No EXIF creation date in {path}")
    return None


def parse_exif_datetime(timestamp_str: str) -> Optional[datetime]:
    """Parse an EXIF (2025:05:06 19:41:34) or ISO 8601 date-time string.

    Sub-seconds and UTC offsets are ignored: the capture date is the local
    calendar date the camera recorded. Placeholder values such as
    "0000:00:00 00:00:00" give None.
    """
    match = _EXIF_DATETIME.match(timestamp_str.strip().strip('\x00'))
    if not match:
        return None
    try:
        return datetime(*(int(part) for part in match.groups()))
    except ValueError:
        return None
