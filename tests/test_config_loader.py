import json
from pathlib import Path

import pytest

from config.config_loader import DEFAULT_CONFIG, load_config, save_config, validate_config


def write_config(path, overrides):
    path.write_text(json.dumps(overrides), encoding="utf-8")
    return path


class TestLoadConfig:
    def test_defaults_merged(self, tmp_path):
        path = write_config(tmp_path / "config.json", {
            "max_steps": 50, "output_directory": str(tmp_path / "out")
        })
        config = load_config(str(path), verbose=False)
        assert config["max_steps"] == 50
        assert config["symbol_type"] == DEFAULT_CONFIG["symbol_type"]
        assert (tmp_path / "out").is_dir()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "absent.json"))

    def test_summary_printed(self, tmp_path, capsys):
        path = write_config(tmp_path / "config.json", {"output_directory": str(tmp_path / "out")})
        load_config(str(path))
        assert "Loaded config" in capsys.readouterr().out

    def test_shipped_config_is_valid(self):
        with open(Path(__file__).parent.parent / "config" / "runtime_config.json", "r", encoding="utf-8") as f:
            validate_config(json.load(f))


class TestValidateConfig:
    def test_missing_key(self):
        config = DEFAULT_CONFIG.copy()
        del config["max_steps"]
        with pytest.raises(ValueError):
            validate_config(config)

    @pytest.mark.parametrize("key, value", [
        ("max_steps", "many"),
        ("max_steps", True),
        ("trim_blanks", "yes"),
        ("symbol_type", 3),
    ])
    def test_wrong_type(self, key, value):
        config = dict(DEFAULT_CONFIG, **{key: value})
        with pytest.raises(TypeError):
            validate_config(config)

    @pytest.mark.parametrize("key, value", [
        ("symbol_type", "float"),
        ("window_radius", -1),
        ("max_steps", 0),
    ])
    def test_invalid_value(self, key, value):
        with pytest.raises(ValueError):
            validate_config(dict(DEFAULT_CONFIG, **{key: value}))


def test_save_config_round_trip(tmp_path):
    path = tmp_path / "config.json"
    config = dict(DEFAULT_CONFIG, window_radius=3, output_directory=str(tmp_path / "out"))
    save_config(config, str(path))
    assert load_config(str(path), verbose=False)["window_radius"] == 3
