import json
import tempfile
from pathlib import Path

import pytest

from basecolumns.services import ConfigService, DEFAULT_SETTINGS, FileService, ValidationService


def test_config_defaults_when_missing():
    with tempfile.TemporaryDirectory() as tmpdir:
        service = ConfigService(config_path=Path(tmpdir) / "config.json")
        assert service.load() == DEFAULT_SETTINGS


def test_config_stored_values_override_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.json"
        path.write_text(json.dumps({"custom_column_width": 175}), encoding="utf-8")
        config = ConfigService(config_path=path).load()
        assert config["custom_column_width"] == 175
        assert config["min_column_width"] == 100


def test_config_invalid_json_raises():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigService(config_path=path).load()


def test_config_save_and_dot_access():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "nested" / "config.json"
        service = ConfigService(config_path=path)
        service.load()
        service.set("window_width", 1600)
        service.set("ui.color", False)
        assert service.save()
        reloaded = ConfigService(config_path=path)
        reloaded.load()
        assert reloaded.get("window_width") == 1600
        assert reloaded.get("ui.color") is False
        assert reloaded.get("missing.key", "x") == "x"


def test_file_service_round_trip_and_backup():
    with tempfile.TemporaryDirectory() as tmpdir:
        service = FileService(base_dir=Path(tmpdir))
        assert service.read("missing.base") is None
        assert service.backup("missing.base") is None

        assert service.write("views.base", "views:\r\n  - type: table\n")
        assert service.read("views.base") == "views:\r\n  - type: table\n"

        backup = service.backup("views.base")
        assert backup is not None
        assert backup.name == "views.base.bak"
        assert backup.read_text(encoding="utf-8") == "views:\n  - type: table\n"


def test_file_service_backup_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        backups = Path(tmpdir) / "backups"
        service = FileService(base_dir=Path(tmpdir), backup_dir=backups)
        service.write("a.base", "x")
        backup = service.backup("a.base")
        assert backup is not None
        assert backup.parent == backups
        assert backup.name.startswith("a.base_")


def test_validation_extension_and_bounds():
    validator = ValidationService(DEFAULT_SETTINGS)
    assert validator.validate_file_extension("notes/Books.base")
    assert validator.validate_file_extension("Books.BASE")
    assert not validator.validate_file_extension("Books.md")

    assert validator.validate_width(100)
    assert validator.validate_width(300)
    assert not validator.validate_width(99)
    assert not validator.validate_width(301)
    assert validator.invalid_widths({"a": 150, "b": 20}) == {"b": 20}


def test_validation_without_bounds_accepts_any_non_negative_width():
    validator = ValidationService()
    assert validator.validate_width(5000)
    assert not validator.validate_width(-1)


def test_validation_well_formed_yaml():
    validator = ValidationService()
    assert validator.is_well_formed("views:\n  - type: table\n    name: T\n")
    assert not validator.is_well_formed("views:\n  - type: table\n   name: [unclosed\n")
