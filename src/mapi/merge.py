"""Default service options and the rules for merging them with a definition.

Precedence, applied by :func:`merge_options`:

1. A field the caller set (and did not set to ``None``) overrides the default.
2. Fields named in :data:`CONCATENATED_FIELDS` are never replaced: the default
   list comes first, followed by the caller's entries. Nothing is
   de-duplicated, so a caller endpoint with the same method and path as a
   default one is registered in addition to it.
3. Everything else keeps its default.

When ``defaultEndpoints`` is false the default endpoint list is empty, so only
the caller's endpoints remain.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from mapi.models import EndpointDefinition, ServiceDefinition

DEFAULT_ENDPOINTS: tuple[EndpointDefinition, ...] = (
    EndpointDefinition(method="GET", path="/:id?", requires_auth=True, alias="get"),
    EndpointDefinition(
        method="POST", path="/", has_body=True, requires_auth=True, alias="create"
    ),
    EndpointDefinition(
        method="PUT", path="/:id", has_body=True, requires_auth=True, alias="update"
    ),
    EndpointDefinition(method="DELETE", path="/:id", requires_auth=True, alias="delete"),
)

HEALTH_CHECK = EndpointDefinition(method="GET", path="/info", alias="health")

SERVICE_DEFAULTS: Mapping[str, Any] = {
    "default_endpoints": True,
    "has_health_check": True,
    "health_check": HEALTH_CHECK,
    "endpoints": DEFAULT_ENDPOINTS,
    "services": (),
}

CONCATENATED_FIELDS = ("endpoints",)


def merge_options(
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any],
    concatenate: Collection[str] = (),
) -> dict[str, Any]:
    """Merge *overrides* onto *defaults*.

    Args:
        defaults: Baseline option values.
        overrides: Caller-supplied values. ``None`` values are ignored.
        concatenate: Keys whose values are sequences to join
            (``defaults + overrides``) instead of replace.

    Returns:
        A new dict; neither input is modified.

    Example::

        >>> merge_options({"a": 1, "xs": [1]}, {"a": 2, "xs": [2]}, ("xs",))
        {'a': 2, 'xs': [1, 2]}
    """
    merged = dict(defaults)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in concatenate and key in merged:
            merged[key] = [*merged[key], *value]
        else:
            merged[key] = value
    return merged


def service_options(definition: ServiceDefinition) -> dict[str, Any]:
    """Return the effective options of *definition* after applying defaults."""
    defaults = dict(SERVICE_DEFAULTS)
    if not definition.default_endpoints:
        defaults["endpoints"] = ()

    overrides = {
        name: getattr(definition, name)
        for name in definition.model_fields_set
        if name in SERVICE_DEFAULTS
    }
    options = merge_options(defaults, overrides, CONCATENATED_FIELDS)
    options["endpoints"] = list(options["endpoints"])
    options["services"] = list(options["services"])
    return options
