"""Unit tests for charge result projection."""

from types import SimpleNamespace

from stripe_gateway.formatting import lookup, project_fields


def test_default_field_map(sample_charge):
    assert project_fields(sample_charge, {"stripe_id": "id"}) == {"stripe_id": "ch_test123"}


def test_direct_and_nested_fields(sample_charge):
    result = project_fields(
        sample_charge,
        {"total": "amount", "cardBrand": {"source": "brand"}},
    )

    assert result == {"total": 1050, "cardBrand": "Visa"}


def test_unmapped_fields_are_dropped(sample_charge):
    result = project_fields(sample_charge, {"last4": {"source": "last4"}})

    assert list(result) == ["last4"]
    assert result["last4"] == "4242"


def test_missing_fields_are_none(sample_charge):
    result = project_fields(
        sample_charge,
        {"refunded": "amount_refunded", "country": {"billing_details": "country"}},
    )

    assert result == {"refunded": None, "country": None}


def test_attribute_objects():
    charge = SimpleNamespace(id="ch_attr", amount=500, source=SimpleNamespace(brand="MasterCard"))

    result = project_fields(charge, {"id": "id", "brand": {"source": "brand"}})

    assert result == {"id": "ch_attr", "brand": "MasterCard"}


def test_lookup_prefers_mapping_keys_over_dict_methods():
    """Stripe lists carry an ``items`` key that must not resolve to dict.items."""
    subscription = {"items": {"data": [{"id": "si_1"}]}}

    assert lookup(subscription, "items") == {"data": [{"id": "si_1"}]}
    assert lookup(None, "id") is None
