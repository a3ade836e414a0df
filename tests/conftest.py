from pathlib import Path

import pytest

from tests.helpers import PLAYLIST


@pytest.fixture
def playlist_file(tmp_path: Path) -> Path:
    path = tmp_path / "index.m3u8"
    path.write_text(PLAYLIST, encoding="utf-8")
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"
