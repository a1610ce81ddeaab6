"""Settings loading tests."""

import dataclasses

import pytest

from app.llm.provider_config import IMAGE_PARAMETERS, Settings, load_settings


def test_defaults_from_empty_environment():
    settings = load_settings({})

    assert settings == Settings()
    assert settings.openrouter_api_key is None
    assert settings.hf_token is None
    assert settings.openrouter_base_url == "https://openrouter.ai/api/v1"
    assert settings.text_model == "deepseek/deepseek-r1-zero:free"
    assert settings.image_space == "black-forest-labs/FLUX.1-dev"
    assert settings.image_endpoint == "/infer"
    assert settings.strict_mode is False


def test_values_read_from_environment():
    settings = load_settings(
        {
            "OPENROUTER_API_KEY": " sk-or-1 ",
            "HF_TOKEN": "hf_abc",
            "SITE_URL": "https://generator.example",
            "TEXT_TIMEOUT_SECONDS": "30",
            "STRICT_MODE": "true",
            "LOG_LEVEL": "debug",
            "PORT": "9000",
        }
    )

    assert settings.openrouter_api_key == "sk-or-1"
    assert settings.hf_token == "hf_abc"
    assert settings.default_headers == {
        "HTTP-Referer": "https://generator.example",
        "X-Title": "AI Content Generator",
    }
    assert settings.text_timeout_seconds == 30.0
    assert settings.strict_mode is True
    assert settings.log_level == "DEBUG"
    assert settings.port == 9000


@pytest.mark.parametrize("raw", ["abc", "0", "-5", ""])
def test_invalid_timeouts_fall_back_to_defaults(raw):
    settings = load_settings({"IMAGE_TIMEOUT_SECONDS": raw})

    assert settings.image_timeout_seconds == Settings().image_timeout_seconds


def test_settings_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Settings().strict_mode = True


def test_image_parameters_are_fixed_constants():
    assert dataclasses.astuple(IMAGE_PARAMETERS) == (0, True, 512, 512, 7.5, 50)
