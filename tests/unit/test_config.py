"""Unit tests for configuration management."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from stripe_gateway.config import Credentials, Mode, Settings, StripeSettings


def test_stripe_settings_default_values():
    """Test that StripeSettings loads with documented defaults."""
    stripe_settings = StripeSettings()

    assert stripe_settings.mode is Mode.TEST
    assert stripe_settings.currency == "usd"
    assert stripe_settings.field_map == {"stripe_id": "id"}
    assert stripe_settings.secret_key == ""


def test_stripe_settings_from_environment():
    """Test that StripeSettings reads STRIPE_* environment variables."""
    env_vars = {
        "STRIPE_MODE": "live",
        "STRIPE_TEST_SECRET": "sk_test_abc",
        "STRIPE_LIVE_SECRET": "sk_live_xyz",
        "STRIPE_CURRENCY": "EUR",
        "STRIPE_FIELD_MAP": '{"stripe_id": "id", "brand": {"source": "brand"}}',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        stripe_settings = StripeSettings()

    assert stripe_settings.mode is Mode.LIVE
    assert stripe_settings.secret_key == "sk_live_xyz"
    assert stripe_settings.currency == "eur"
    assert stripe_settings.field_map == {"stripe_id": "id", "brand": {"source": "brand"}}


@pytest.mark.parametrize("variable", ["STRIPE_MODE", "STRIPE_CURRENCY", "STRIPE_FIELD_MAP"])
def test_empty_environment_values_fall_back_to_defaults(variable):
    """Test that empty STRIPE_* variables are treated as unset."""
    with patch.dict(os.environ, {variable: ""}, clear=False):
        stripe_settings = StripeSettings()

    assert stripe_settings.mode is Mode.TEST
    assert stripe_settings.currency == "usd"
    assert stripe_settings.field_map == {"stripe_id": "id"}


def test_empty_field_map_json_falls_back_to_default():
    with patch.dict(os.environ, {"STRIPE_FIELD_MAP": "{}"}, clear=False):
        stripe_settings = StripeSettings()

    assert stripe_settings.field_map == {"stripe_id": "id"}


def test_blank_values_passed_directly_fall_back_to_defaults():
    stripe_settings = StripeSettings(mode="  ", currency="", field_map={})

    assert stripe_settings.mode is Mode.TEST
    assert stripe_settings.currency == "usd"
    assert stripe_settings.field_map == {"stripe_id": "id"}


def test_secret_key_follows_mode():
    stripe_settings = StripeSettings(mode="Test", test_secret="sk_test_abc", live_secret="sk_live_xyz")

    assert stripe_settings.secret_key == "sk_test_abc"


def test_invalid_mode_rejected():
    with pytest.raises(PydanticValidationError):
        StripeSettings(mode="Staging")


def test_nested_field_map_entry_must_name_one_field():
    with pytest.raises(PydanticValidationError):
        StripeSettings(field_map={"brand": {"source": "brand", "card": "brand"}})


def test_root_settings_defaults():
    settings = Settings()

    assert settings.service_name == "stripe-gateway"
    assert settings.log_level == "INFO"
    assert settings.log_format_json is True
    assert isinstance(settings.stripe, StripeSettings)


def test_credentials_repr_hides_secret():
    credentials = Credentials(mode=Mode.LIVE, secret_key="sk_live_very_secret")

    assert "sk_live_very_secret" not in repr(credentials)
