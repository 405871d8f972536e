"""
Test loading and saving configuration files.
"""

import os

import pytest

from bender_config.config import default, load, save, serialize
from bender_config.errors import IoError, NotFoundError, ParseError, ValidationError


class TestLoad:
    """Tests for load()."""

    def test_load_nonexistent_path(self):
        with pytest.raises(NotFoundError):
            load("/nonexistent/path")

    def test_not_found_is_file_not_found(self, config_path):
        with pytest.raises(FileNotFoundError):
            load(config_path)

    def test_load_directory_is_io_error(self, temp_dir):
        with pytest.raises(IoError):
            load(temp_dir)

    def test_load_invalid_utf8(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_bytes(b"server:\n  host: \xff\xfe\n")
        with pytest.raises(IoError, match="UTF-8"):
            load(path)

    def test_load_parse_error(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("limits: {upload: 2\n")
        with pytest.raises(ParseError):
            load(path)

    def test_load_not_a_number(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text('limits:\n  max_workers: "not-a-number"\n')
        with pytest.raises(ValidationError):
            load(path)

    def test_load_partial_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("server:\n  port: 7000\n")

        config = load(path)

        assert config.server.port == 7000
        assert config.limits == default().limits


class TestSave:
    """Tests for save()."""

    def test_example_scenario(self, temp_dir):
        config = default()
        assert config.get("max_workers") == 4
        config.set("max_workers", 16)
        path = temp_dir / "bender.cfg"

        save(config, path)
        loaded = load(path)

        assert loaded.get("max_workers") == 16
        expected = default()
        expected.limits.max_workers = 16
        assert loaded == expected

    def test_round_trip(self, custom_config, config_path):
        save(custom_config, config_path)
        assert load(config_path) == custom_config

    def test_round_trip_preserves_unknown_keys(self, config_path):
        config_path.parent.mkdir(parents=True)
        config_path.write_text(
            "render:\n  engine: cycles\nlimits:\n  gpu_memory: 8\n  upload: 5\n"
        )

        config = load(config_path)
        save(config, config_path)
        first = config_path.read_text()
        save(load(config_path), config_path)

        assert config_path.read_text() == first
        assert load(config_path).extra == {
            "limits": {"gpu_memory": 8},
            "render": {"engine": "cycles"},
        }

    def test_writes_serialized_text(self, custom_config, config_path):
        save(custom_config, config_path)
        assert config_path.read_text(encoding="utf-8") == serialize(custom_config)

    def test_creates_parent_directories(self, temp_dir):
        path = temp_dir / "a" / "b" / "config.yaml"
        save(default(), path)
        assert path.exists()

    def test_overwrites_existing_file(self, custom_config, config_path):
        save(default(), config_path)
        save(custom_config, config_path)
        assert load(config_path) == custom_config

    def test_new_file_is_world_readable(self, config_path):
        previous = os.umask(0o022)
        try:
            save(default(), config_path)
        finally:
            os.umask(previous)

        assert config_path.stat().st_mode & 0o777 == 0o644

    def test_no_temporary_files_left(self, custom_config, config_path):
        save(custom_config, config_path)
        save(default(), config_path)
        assert os.listdir(config_path.parent) == ["config.yaml"]

    def test_unwritable_path_is_io_error(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(IoError):
            save(default(), blocker / "config.yaml")

    def test_save_to_directory_is_io_error(self, temp_dir):
        with pytest.raises(IoError):
            save(default(), temp_dir)

    def test_io_error_is_os_error(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        with pytest.raises(OSError):
            save(default(), blocker / "config.yaml")


class TestAtomicity:
    """A crash part way through save must never leave a truncated file."""

    def test_crash_before_rename_keeps_original(self, mocker, custom_config, config_path):
        save(default(), config_path)
        original = config_path.read_bytes()

        mocker.patch("bender_config.utils.file_utils.os.replace",
                     side_effect=OSError("simulated crash"))
        with pytest.raises(IoError, match="simulated crash"):
            save(custom_config, config_path)

        assert config_path.read_bytes() == original
        assert os.listdir(config_path.parent) == ["config.yaml"]

    def test_crash_during_write_keeps_original(self, mocker, custom_config, config_path):
        save(default(), config_path)
        original = config_path.read_bytes()

        mocker.patch("bender_config.utils.file_utils.os.fsync",
                     side_effect=OSError("disk full"))
        with pytest.raises(IoError):
            save(custom_config, config_path)

        assert config_path.read_bytes() == original
        assert load(config_path).is_default()

    def test_interrupt_is_not_converted(self, mocker, config_path):
        mocker.patch("bender_config.utils.file_utils.os.replace",
                     side_effect=KeyboardInterrupt)
        with pytest.raises(KeyboardInterrupt):
            save(default(), config_path)

        assert not config_path.exists()
        assert os.listdir(config_path.parent) == []

    def test_crash_after_temp_write_leaves_complete_file(self, mocker, custom_config,
                                                          config_path):
        """A leftover temporary file, if any, holds complete content."""
        save(default(), config_path)
        written = {}

        def fake_replace(src, dst):
            with open(src, encoding="utf-8") as f:
                written["text"] = f.read()
            raise OSError("killed")

        mocker.patch("bender_config.utils.file_utils.os.replace", side_effect=fake_replace)
        with pytest.raises(IoError):
            save(custom_config, config_path)

        assert written["text"] == serialize(custom_config)
        assert load(config_path).is_default()
