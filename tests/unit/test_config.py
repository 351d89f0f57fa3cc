"""Unit tests for settings loading."""

import os
from unittest.mock import patch

import pytest

from images_binding.core.config import BindingSettings, load_settings
from images_binding.core.exceptions import ConfigurationError


def test_defaults():
    settings = BindingSettings()
    assert settings.port == 8787
    assert settings.info_path == "/info"
    assert settings.jpeg_quality == 80


def test_environment_overrides():
    with patch.dict(os.environ, {"IMAGES_BINDING_PORT": "9000", "IMAGES_BINDING_JPEG_QUALITY": "60"}):
        settings = load_settings()
    assert settings.port == 9000
    assert settings.jpeg_quality == 60


def test_explicit_overrides():
    assert load_settings(host="0.0.0.0").host == "0.0.0.0"


@pytest.mark.parametrize("overrides", [{"port": 0}, {"jpeg_quality": 101}, {"port": "abc"}])
def test_invalid_settings_raise_configuration_error(overrides):
    with pytest.raises(ConfigurationError):
        load_settings(**overrides)
