from pathlib import Path

import pytest
from pydantic import ValidationError

from m3u8_cli.exceptions import ConfigurationError
from m3u8_cli.models.config import DownloadJob
from m3u8_cli.storage.config_manager import ConfigManager


def _cli_options(**overrides):
    options = {
        "playlist_path": Path("index.m3u8"),
        "base_url": "http://host/",
        "dest": None,
        "workers": None,
        "header": None,
        "resume": False,
        "timeout": None,
        "queue_size": None,
        "dry_run": False,
    }
    options.update(overrides)
    return options


def test_defaults_without_config_file(tmp_path):
    job = ConfigManager(tmp_path / "missing.ini").load_job(_cli_options())

    assert job.workers == 8
    assert job.output_dir == Path("./")
    assert job.headers == ()
    assert job.queue_size == 0
    assert job.resume is False


def test_ini_defaults_are_applied_and_cli_overrides_them(tmp_path):
    config_file = tmp_path / "config.ini"
    config_file.write_text(
        "[DEFAULT]\nworkers = 4\ntimeout = 5.5\ndest = downloads\n", encoding="utf-8"
    )
    manager = ConfigManager(config_file)

    job = manager.load_job(_cli_options())
    assert job.workers == 4
    assert job.timeout == 5.5
    assert job.output_dir == Path("downloads")

    job = manager.load_job(_cli_options(workers=2, dest="elsewhere"))
    assert job.workers == 2
    assert job.output_dir == Path("elsewhere")


def test_header_file_from_cli_is_loaded(tmp_path):
    header_file = tmp_path / "h.json"
    header_file.write_text('{"Authorization": "Bearer X"}', encoding="utf-8")

    job = ConfigManager(tmp_path / "missing.ini").load_job(
        _cli_options(header=str(header_file))
    )

    assert job.headers == (("Authorization", "Bearer X"),)


def test_invalid_ini_value_is_a_configuration_error(tmp_path):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[DEFAULT]\nworkers = many\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(config_file).load_job(_cli_options())


@pytest.mark.parametrize(
    "overrides",
    [
        {"workers": 0},
        {"workers": 65},
        {"timeout": 0},
        {"queue_size": -1},
        {"base_url": "host/segments/"},
        {"base_url": "ftp://host/"},
    ],
)
def test_invalid_settings_are_configuration_errors(tmp_path, overrides):
    with pytest.raises(ConfigurationError, match="validation failed"):
        ConfigManager(tmp_path / "missing.ini").load_job(_cli_options(**overrides))


def test_job_is_immutable():
    job = DownloadJob(playlist_path=Path("index.m3u8"), base_url="http://host/")

    with pytest.raises(ValidationError):
        job.workers = 2


def test_job_strips_whitespace_from_strings():
    job = DownloadJob(playlist_path=Path("index.m3u8"), base_url="  http://host/  ")

    assert job.base_url == "http://host/"
    assert DownloadJob.model_config["frozen"] is True
