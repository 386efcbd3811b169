
from logviewer.core.config_validator import ConfigValidator
from logviewer.core.settings import ViewerSettings
from logviewer.core.decoders.models import BinaryEntryPolicy


def test_config_strict_valid(tmp_path):
    config = {
        "viewer": {"threshold_bytes": 52428800, "binary_entries": "concat"},
        "paths": {
            "browse_dir": str(tmp_path),
            "logs_dir": str(tmp_path / "logs")
        }
    }
    errors = ConfigValidator.validate(config)
    assert not errors

    # Should create the logs directory
    assert (tmp_path / "logs").exists()


def test_config_strict_missing_viewer():
    errors = ConfigValidator.validate({"paths": {}})
    assert any("Missing required section: 'viewer'" in e for e in errors)


def test_config_strict_bad_threshold_types():
    for bad in ["50MB", 1.5, True]:
        errors = ConfigValidator.validate({"viewer": {"threshold_bytes": bad}})
        assert any("must be integer" in e for e in errors), bad


def test_config_strict_non_positive_threshold():
    errors = ConfigValidator.validate({"viewer": {"threshold_bytes": 0}})
    assert any("must be positive" in e for e in errors)


def test_config_strict_unknown_binary_policy():
    errors = ConfigValidator.validate({"viewer": {"binary_entries": "skip"}})
    assert any("binary_entries" in e for e in errors)


def test_config_strict_paths_must_be_strings():
    errors = ConfigValidator.validate({"viewer": {}, "paths": {"browse_dir": 42}})
    assert any("'paths.browse_dir' must be a string" in e for e in errors)


def test_settings_from_config_defaults():
    settings = ViewerSettings.from_config({})
    assert settings.threshold_bytes == 52428800
    assert settings.binary_entries == BinaryEntryPolicy.CONCAT
    assert settings.browse_dir is None
