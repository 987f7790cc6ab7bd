import json

import pytest

from mastermind.config import CONFIG, Config


def test_missing_file_gives_defaults(tmp_path):
    cfg = Config.load(str(tmp_path / "nope.json"))
    assert cfg.generator.max_guesses == 11
    assert cfg.generator.max_retries == 3
    assert cfg.generator.random_seed is None
    assert cfg.codec.version == 1
    assert cfg.benchmark.parallel_eval is True


def test_json_overrides_single_fields(tmp_path):
    path = tmp_path / "mastermind_config.json"
    path.write_text(json.dumps({
        "generator": {"random_seed": 7, "debug": True},
        "benchmark": {"games": 5},
    }), encoding="utf-8")
    cfg = Config.load(str(path))
    assert cfg.generator.random_seed == 7
    assert cfg.generator.debug is True
    assert cfg.generator.max_guesses == 11
    assert cfg.benchmark.games == 5
    assert cfg.codec.version == 1


def test_unknown_setting_is_rejected(tmp_path):
    path = tmp_path / "mastermind_config.json"
    path.write_text(json.dumps({"generator": {"max_guess": 3}}), encoding="utf-8")
    with pytest.raises(ValueError):
        Config.load(str(path))


def test_module_config_is_loaded():
    assert isinstance(CONFIG, Config)
