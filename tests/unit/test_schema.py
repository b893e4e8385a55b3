import copy

import pytest

from campuscoffee.common.errors import ConfigError
from campuscoffee.common.schema import validate_app_config


BASE_CONFIG = {
    "osm": {
        "base_url": "https://api.openstreetmap.org/api/0.6",
        "user_agent": "CampusCoffee/0.0.1",
        "timeout": {"connect": 10, "read": 30},
    },
    "store": {"filename": "pos.json"},
}


def test_validate_app_config_accepts_valid_shape():
    validated = validate_app_config(copy.deepcopy(BASE_CONFIG))
    assert validated["store"]["filename"] == "pos.json"


def test_validate_app_config_rejects_unknown_key_by_default():
    bad = copy.deepcopy(BASE_CONFIG)
    bad["unexpected"] = True
    with pytest.raises(ConfigError):
        validate_app_config(bad)


def test_validate_app_config_allows_unknown_when_enabled():
    okay = copy.deepcopy(BASE_CONFIG)
    okay["osm"]["extra"] = 1
    validate_app_config(okay, allow_unknown=True)


def test_validate_app_config_rejects_missing_osm_keys():
    bad = copy.deepcopy(BASE_CONFIG)
    del bad["osm"]["user_agent"]
    with pytest.raises(ConfigError, match="user_agent"):
        validate_app_config(bad)


@pytest.mark.parametrize("value", [0, -1, "10", True])
def test_validate_app_config_rejects_non_positive_timeouts(value):
    bad = copy.deepcopy(BASE_CONFIG)
    bad["osm"]["timeout"]["read"] = value
    with pytest.raises(ConfigError):
        validate_app_config(bad)


def test_validate_app_config_rejects_non_http_base_url():
    bad = copy.deepcopy(BASE_CONFIG)
    bad["osm"]["base_url"] = "ftp://example.test"
    with pytest.raises(ConfigError):
        validate_app_config(bad)
