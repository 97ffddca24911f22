import pytest

from simcheck.config import DetectionConfig, load_config
from simcheck.utils.errors import ConfigurationError


def test_defaults_are_valid():
    config = load_config()
    assert isinstance(config, DetectionConfig)
    assert 0.0 <= config.flag_threshold <= 1.0
    assert config.token_threshold_table[0] == (0.8, 0.20)


@pytest.mark.parametrize("overrides", [
    {"flag_threshold": 1.5},
    {"flag_threshold": -0.1},
    {"kgram_size": 0},
    {"window_size": -1},
    {"max_document_length": 0},
    {"algorithms": ["jaccard", "soundex"]},
    {"algorithms": []},
    {"weights": {"jaccard": -1.0}},
    {"weights": {"nope": 1.0}},
    {"token_threshold_table": [[0.4, 0.4], [0.8, 0.2], [0.0, 0.5]]},
    {"token_threshold_table": [[0.8, 1.5], [0.0, 0.5]]},
    {"token_threshold_table": [[0.8, 0.2], [0.4, 0.5]]},
    {"similarity_buckets": [[0.9, "exact"], [0.0, "sort-of"]]},
    {"flag_treshold": 0.9},
    {"kgram": 3},
])
def test_malformed_configuration_is_rejected(overrides):
    with pytest.raises(ConfigurationError):
        load_config(overrides)


def test_overrides_accept_json_style_tables():
    config = load_config({"token_threshold_table": [[0.5, 0.1], [0.0, 0.6]]})
    assert config.token_threshold_table == ((0.5, 0.1), (0.0, 0.6))


def test_config_is_immutable():
    config = load_config()
    with pytest.raises(Exception):
        config.flag_threshold = 0.9


def test_round_trip_of_dumped_config():
    config = load_config(flag_threshold=0.7)
    assert load_config(config.model_dump()) == config
