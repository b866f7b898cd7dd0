"""Field lookup and charge result projection."""

from collections.abc import Mapping
from typing import Any


def lookup(obj: Any, key: str) -> Any:
    """
    Read ``key`` from a provider object.

    Stripe objects are dict subclasses, so mapping access is tried first;
    anything else falls back to attribute access. Missing keys give None.
    """
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def project_fields(
    obj: Any,
    field_map: Mapping[str, str | Mapping[str, str]],
) -> dict[str, Any]:
    """
    Project a provider object onto the configured local field names.

    Args:
        obj: Provider response (e.g. a Stripe charge)
        field_map: local name -> provider field, or local name ->
            {sub_object: field} for one level of nesting

    Returns:
        Dict keyed by local name only; unmapped provider fields are dropped

    Example:
        >>> project_fields(charge, {"total": "amount", "brand": {"source": "brand"}})
        {'total': 1000, 'brand': 'Visa'}
    """
    result: dict[str, Any] = {}
    for local_name, provider_field in field_map.items():
        if isinstance(provider_field, Mapping):
            for sub_object, sub_field in provider_field.items():
                result[local_name] = lookup(lookup(obj, sub_object), sub_field)
        else:
            result[local_name] = lookup(obj, provider_field)
    return result
