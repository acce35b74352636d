"""
pytest configuration and fixtures for photo-dater tests.
"""

import io
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

import pytest
from PIL import Image
from rich.console import Console

from photo_dater.errors import MetadataReadError


@dataclass
class CliResult:
    """Result from running CLI command."""
    exit_code: int
    output: str
    error: str


@pytest.fixture
def test_config_path(tmp_path):
    """Isolated config path; history and logs land next to it."""
    config_dir = tmp_path / "photo_dater_config"
    config_dir.mkdir()
    return config_dir / "config.yml"


@pytest.fixture
def fake_dates(monkeypatch):
    """Replace the EXIF reader with a file-name -> timestamp mapping.

    Files missing from the mapping (or mapped to None) have no EXIF date.
    Files mapped to an OSError cannot be read.
    """
    dates: Dict[str, Union[datetime, OSError, None]] = {}

    def read_fake_date(path: Path) -> Optional[datetime]:
        value = dates.get(path.name)
        if isinstance(value, OSError):
            raise MetadataReadError(path, value)
        return value

    monkeypatch.setattr("photo_dater.organizer.read_creation_date", read_fake_date)
    return dates


@pytest.fixture
def photo_dir(tmp_path, fake_dates):
    """Create a directory of photo files with fake creation dates.

    Usage: photo_dir("My Photos", {"a.jpg": datetime(...), "b.jpg": None})
    """

    def create(name: str, files: Dict[str, Union[datetime, OSError, None]]) -> Path:
        directory = tmp_path / "photos" / name
        directory.mkdir(parents=True)
        for file_name, taken in files.items():
            (directory / file_name).write_bytes(f"photo {file_name}".encode())
            fake_dates[file_name] = taken
        return directory

    return create


@pytest.fixture
def make_jpeg():
    """Write a small JPEG, with DateTimeOriginal when taken is given."""

    def create(path: Path, taken: Optional[datetime] = None) -> Path:
        img = Image.new("RGB", (8, 8), "white")
        if taken is None:
            img.save(path, "JPEG")
            return path

        exif = Image.Exif()
        exif.get_ifd(0x8769)[0x9003] = taken.strftime("%Y:%m:%d %H:%M:%S")
        img.save(path, "JPEG", exif=exif)
        return path

    return create


@pytest.fixture
def cli_runner(monkeypatch):
    """Create a CLI runner that captures output and uses test config."""

    def run_cli(*args, config_path=None):
        """Run photo-dater CLI with given arguments.

        Args:
            *args: Command line arguments (directory, command, --flags, etc)
            config_path: Optional config path for test isolation

        Returns:
            CliResult with exit_code, output, and error
        """
        from photo_dater.cli import main

        stdout = io.StringIO()
        stderr = io.StringIO()

        # Plain, wide console output so assertions see whole lines
        console = Console(file=stdout, width=200, soft_wrap=True,
                          color_system=None, highlight=False)
        monkeypatch.setattr("photo_dater.constants._console", console)
        monkeypatch.setattr(sys, "stdout", stdout)
        monkeypatch.setattr(sys, "stderr", stderr)

        try:
            exit_code = main([str(a) for a in args], config_path=config_path)
        except SystemExit as e:
            # argparse usage errors and --help
            exit_code = e.code if e.code is not None else 0

        return CliResult(
            exit_code=int(exit_code),
            output=stdout.getvalue(),
            error=stderr.getvalue()
        )

    return run_cli
