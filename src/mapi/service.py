"""Service -- a group of endpoints and child services under one base path.

A :class:`Service` is built top-down from a
:class:`~mapi.models.ServiceDefinition`:

1. the default CRUD endpoints (unless ``defaultEndpoints`` is false) followed
   by the definition's own endpoints are compiled under the service base, and
   every endpoint with an alias is bound in :attr:`Service.aliases`;
2. each child definition is normalised (:func:`normalize_service`) and built
   recursively under ``parent base + child base``, then its ``methods`` are
   injected into the child's alias table;
3. the health-check endpoint (``GET /info`` aliased ``health``) is registered
   last, unless ``hasHealthCheck`` is false.

Aliases live in an explicit name -> callable table; callers go through
:attr:`Service.aliases` or :meth:`Service.invoke`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Callable, Optional

from mapi.auth.base import AuthHook
from mapi.client.base import Transport
from mapi.endpoint import Endpoint
from mapi.exceptions import InvalidServiceDefinitionError, UnknownAliasError
from mapi.merge import DEFAULT_ENDPOINTS, HEALTH_CHECK, service_options
from mapi.models import EndpointDefinition, ServiceDefinition
from mapi.output import debug

__all__ = [
    "DEFAULT_ENDPOINTS",
    "HEALTH_CHECK",
    "Service",
    "derive_name",
    "normalize_service",
]

_NON_NAME_CHARS = re.compile(r"[^a-z_]", re.IGNORECASE)


def derive_name(base: str) -> str:
    """Derive a service name from its base path.

    Every character that is not an ASCII letter or underscore is dropped, so
    ``"/v1/user_roles"`` becomes ``"vuser_roles"``.
    """
    return _NON_NAME_CHARS.sub("", base)


def normalize_service(definition: ServiceDefinition) -> ServiceDefinition:
    """Return a copy of *definition* with ``name`` and a rooted ``base`` filled in.

    A missing name is derived from the base (:func:`derive_name`); a missing
    base is ``"/" + name``; a base without a leading ``/`` gets one.

    Raises:
        InvalidServiceDefinitionError: If neither ``name`` nor ``base`` is set.
    """
    name = definition.name
    base = definition.base
    if not name and not base:
        raise InvalidServiceDefinitionError(
            "Cannot register service: a definition needs a 'name' or a 'base'"
        )

    if not name:
        name = derive_name(base)
    if not base:
        base = name
    if not base.startswith("/"):
        base = "/" + base

    return definition.model_copy(update={"name": name, "base": base})


class Service:
    """Compiled service node.

    Args:
        definition: The service definition. Its ``base`` is informational;
            endpoint paths use *base*.
        transport: Transport shared by every endpoint in the subtree.
        base: Effective base path (all ancestors' bases included). Defaults
            to the definition's own base.
        auth: Auth hook for endpoints declared with ``requiresAuth``.

    Attributes:
        name: The service name, if the definition has one.
        base: Effective base path.
        aliases: Alias name -> callable. Post-construction overrides go
            through :meth:`inject_methods`.
        services: Child name -> :class:`Service`.
    """

    def __init__(
        self,
        definition: ServiceDefinition,
        transport: Transport,
        base: Optional[str] = None,
        auth: Optional[AuthHook] = None,
    ) -> None:
        self.name = definition.name
        self.base = base if base is not None else (definition.base or "")
        self._transport = transport
        self._auth = auth
        self._endpoints: list[Endpoint] = []
        self.aliases: dict[str, Callable[..., Any]] = {}
        self.services: dict[str, Service] = {}

        options = service_options(definition)
        self._register_endpoints(options["endpoints"])
        self._register_sub_services(options["services"])
        if options["has_health_check"]:
            self._register_health_check(options["health_check"])

    def __repr__(self) -> str:
        return f"Service(name={self.name!r}, base={self.base!r}, aliases={sorted(self.aliases)!r})"

    @property
    def endpoints(self) -> tuple[Endpoint, ...]:
        """Registered endpoints in registration order."""
        return tuple(self._endpoints)

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def _register_endpoints(self, definitions: Iterable[EndpointDefinition]) -> None:
        for definition in definitions:
            endpoint = Endpoint.from_definition(
                definition, self._transport, base=self.base, auth=self._auth
            )
            self._endpoints.append(endpoint)
            if endpoint.alias:
                self.aliases[endpoint.alias] = endpoint.call

    def _register_sub_services(self, definitions: Iterable[ServiceDefinition]) -> None:
        for definition in definitions:
            child_definition = normalize_service(definition)
            child = Service(
                child_definition,
                self._transport,
                base=self.base + child_definition.base,
                auth=self._auth,
            )
            self.services[child_definition.name] = child
            debug(f"Registered service '{child_definition.name}' at {child.base}")

            if child_definition.methods:
                child.inject_methods(child_definition.methods)

    def _register_health_check(self, definition: EndpointDefinition) -> None:
        self._register_endpoints([definition])

    # ------------------------------------------------------------------ #
    # Aliases
    # ------------------------------------------------------------------ #

    def inject_methods(self, methods: Mapping[str, Callable[..., Any]]) -> None:
        """Add or replace aliases with caller-supplied callables."""
        for alias, method in methods.items():
            if alias in self.aliases:
                debug(f"Overriding alias '{alias}' on {self.base}")
            self.aliases[alias] = method

    def invoke(self, alias: str, data: Any = None) -> Any:
        """Call the alias registered under *alias* with *data*.

        Raises:
            UnknownAliasError: If no alias is registered under that name.
        """
        try:
            method = self.aliases[alias]
        except KeyError:
            raise UnknownAliasError(
                f"No alias '{alias}' on {self.base or '/'}; "
                f"available: {', '.join(sorted(self.aliases)) or '(none)'}"
            ) from None
        return method(data)

    def walk(self, prefix: str = "") -> Iterator[tuple[str, Service]]:
        """Yield ``(dotted name, service)`` for this service and its descendants.

        Args:
            prefix: Dotted name to report for this service.
        """
        yield prefix, self
        for name, child in self.services.items():
            yield from child.walk(f"{prefix}.{name}" if prefix else name)
