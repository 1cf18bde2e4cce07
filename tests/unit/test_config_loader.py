"""
Tests for configuration loading and validation
"""

import pytest
import yaml

from habitwidget.config.loader import DEFAULT_CONFIG, MAX_CONFIG_SIZE, ConfigLoader
from habitwidget.utils.errors import ConfigurationError


def write_config(tmp_path, data, name="widget.yaml"):
    path = tmp_path / name
    path.write_text(yaml.dump(data) if not isinstance(data, str) else data)
    return path


class TestConfigLoader:
    """Test configuration loader"""

    def test_defaults_without_path(self):
        config = ConfigLoader().load()
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_load_merges_over_defaults(self, config_file, shared_dir):
        config = ConfigLoader().load(str(config_file))
        assert config["store"]["directory"] == str(shared_dir)
        assert config["widget"]["platform"] == "android"
        # Untouched keys keep their defaults
        assert config["widget"]["kind"] == "HabitWidget"
        assert config["widget"]["display_name"] == "Habit Tracker"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = write_config(tmp_path, "")
        assert ConfigLoader().load(str(path)) == DEFAULT_CONFIG

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load(str(tmp_path / "missing.yaml"))

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(ConfigurationError, match="directory"):
            ConfigLoader().load(str(tmp_path))

    def test_invalid_yaml(self, tmp_path):
        path = write_config(tmp_path, "widget: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader().load(str(path))

    def test_too_large(self, tmp_path):
        path = write_config(tmp_path, "# " + "x" * MAX_CONFIG_SIZE)
        with pytest.raises(ConfigurationError, match="too large"):
            ConfigLoader().load(str(path))

    def test_unexpected_extension_warns(self, tmp_path, caplog):
        path = write_config(tmp_path, {"widget": {"platform": "ios"}}, name="widget.conf")
        ConfigLoader().load(str(path))
        assert "unexpected extension" in caplog.text

    def test_unknown_section_warns(self, tmp_path, caplog):
        path = write_config(tmp_path, {"pages": {}})
        ConfigLoader().load(str(path))
        assert "Ignoring unknown configuration section 'pages'" in caplog.text

    @pytest.mark.parametrize(
        "data, message",
        [
            (["not", "a", "mapping"], "must be a dictionary"),
            ({"widget": "ios"}, "Section 'widget' must be a dictionary"),
            ({"widget": {"platform": "windows"}}, "Unknown platform"),
            ({"widget": {"families": []}}, "non-empty list"),
            ({"widget": {"families": ["large"]}}, "Unknown widget family"),
            ({"store": {"suite": "../escape"}}, "Invalid suite name"),
            ({"store": {"suite": 123}}, "must be a string"),
            ({"style": {"text_color": "not-a-color"}}, "Invalid color for 'style.text_color'"),
            ({"style": {"background_color": 42}}, "Invalid color"),
            ({"style": {"headline_size": 0}}, "at least 1"),
            ({"style": {"padding": -1}}, "at least 0"),
            ({"style": {"font": ""}}, "non-empty string"),
            ({"host_app": {"entry_point": "MainActivity"}}, "package/component"),
            ({"host": {"refresh_interval": 0}}, "positive number"),
            ({"host": {"refresh_interval": "soon"}}, "positive number"),
        ],
    )
    def test_invalid_values(self, tmp_path, data, message):
        path = write_config(tmp_path, data)
        with pytest.raises(ConfigurationError, match=message):
            ConfigLoader().load(str(path))

    def test_valid_style(self, tmp_path):
        style = {"text_color": "white", "background_color": "#1C1C1E", "headline_size": 20, "padding": 0}
        path = write_config(tmp_path, {"style": style})
        assert ConfigLoader().load(str(path))["style"] == style

    def test_unknown_style_key_warns(self, tmp_path, caplog):
        path = write_config(tmp_path, {"style": {"shadow": True}})
        ConfigLoader().load(str(path))
        assert "Ignoring unknown style key 'shadow'" in caplog.text
