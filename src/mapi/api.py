"""Api -- root container compiling top-level service definitions.

Example::

    api = Api(
        {
            "base": "/api",
            "services": [
                {"name": "users", "base": "v1/users", "services": [{"name": "roles"}]},
            ],
        },
        transport,
    )
    api["users"].base                     # "/api/v1/users"
    api["users"].services["roles"].base   # "/api/v1/users/roles"
    api.resolve_alias("users.roles.get")("admin")

Registering a name that already exists keeps the existing service; the
definition's ``methods`` are still injected into it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from mapi.auth.base import AuthHook
from mapi.client.base import Transport
from mapi.exceptions import DefinitionError, UnknownAliasError
from mapi.models import ApiDefinition, ServiceDefinition
from mapi.output import debug
from mapi.service import Service, normalize_service


def _validate(model: type, raw: Any) -> Any:
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise DefinitionError(f"Invalid {model.__name__}: {exc}") from exc


class Api:
    """Root of a compiled service tree.

    Args:
        definition: An :class:`~mapi.models.ApiDefinition` or a mapping in
            the definition-file schema.
        transport: Transport shared by every endpoint.
        auth: Auth hook for endpoints declared with ``requiresAuth``.

    Raises:
        DefinitionError: If *definition* does not validate.
        InvalidServiceDefinitionError: If a service has neither name nor base.
    """

    def __init__(
        self,
        definition: Union[ApiDefinition, Mapping[str, Any]],
        transport: Transport,
        auth: Optional[AuthHook] = None,
    ) -> None:
        definition = _validate(ApiDefinition, definition)
        self.base = definition.base
        self.services: dict[str, Service] = {}
        self._transport = transport
        self._auth = auth

        for service in definition.services:
            self.register_service(service)

    def __repr__(self) -> str:
        return f"Api(base={self.base!r}, services={list(self.services)!r})"

    def __getitem__(self, name: str) -> Service:
        return self.services[name]

    def __contains__(self, name: object) -> bool:
        return name in self.services

    def __iter__(self) -> Iterator[str]:
        return iter(self.services)

    def register_service(
        self, definition: Union[ServiceDefinition, Mapping[str, Any]]
    ) -> Service:
        """Compile a top-level service and register it under its name.

        Returns:
            The service registered under the definition's name, which is the
            pre-existing one when the name was already taken.
        """
        definition = normalize_service(_validate(ServiceDefinition, definition))
        name = definition.name

        if name in self.services:
            debug(f"Service '{name}' is already registered; keeping the existing one")
        else:
            self.services[name] = Service(
                definition,
                self._transport,
                base=self.base + definition.base,
                auth=self._auth,
            )
            debug(f"Registered service '{name}' at {self.services[name].base}")

        if definition.methods:
            self.inject_methods(name, definition.methods)
        return self.services[name]

    def inject_methods(self, name: str, methods: Mapping[str, Callable[..., Any]]) -> None:
        """Add or replace aliases on the top-level service *name*."""
        self[name].inject_methods(methods)

    def walk(self) -> Iterator[tuple[str, Service]]:
        """Yield ``(dotted name, service)`` for every service in the tree."""
        for name, service in self.services.items():
            yield from service.walk(name)

    def resolve_alias(self, target: str) -> Callable[..., Any]:
        """Return the callable for a dotted target such as ``"users.roles.get"``.

        Every segment but the last names a service; the last names an alias.

        Raises:
            UnknownAliasError: If a segment does not exist.
        """
        *path, alias = target.split(".")
        if not path:
            raise UnknownAliasError(
                f"Target '{target}' must name a service and an alias, e.g. 'users.get'"
            )

        services = self.services
        service: Optional[Service] = None
        for segment in path:
            if segment not in services:
                raise UnknownAliasError(
                    f"No service '{segment}' in '{target}'; "
                    f"available: {', '.join(sorted(services)) or '(none)'}"
                )
            service = services[segment]
            services = service.services

        assert service is not None
        if alias not in service.aliases:
            raise UnknownAliasError(
                f"No alias '{alias}' on '{'.'.join(path)}'; "
                f"available: {', '.join(sorted(service.aliases)) or '(none)'}"
            )
        return service.aliases[alias]
