import io
import logging
import zipfile
from pathlib import Path

import pytest


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("buildchecks")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream  # Yield the stream to the test function

    # Cleanup after the test
    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture
def write(tmp_path):
    """Write a file below tmp_path, creating parent directories."""

    def _write(relative: str, content: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def make_zip(tmp_path):
    """Create a zip archive from a mapping of entry names to content.

    Names ending in "/" are written as directory entries.
    """

    def _make_zip(entries: dict, name: str = "test.zip") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry_name, content in entries.items():
                if entry_name.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(entry_name), "")
                else:
                    zf.writestr(entry_name, content)
        return path

    return _make_zip
