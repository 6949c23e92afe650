"""Endpoint -- path resolution and request dispatch.

An :class:`Endpoint` is compiled once from an
:class:`~mapi.models.EndpointDefinition` and the owning service's base path.
At call time it fills the placeholders of its path template from the caller's
data and hands the request to the injected transport.

Call data conventions:

* a bare scalar fills the only placeholder of a single-parameter endpoint
  (``users.get(42)`` -> ``GET /users/42``);
* a mapping supplies placeholders by slug (``{"user_id": 1, "role": "admin"}``);
* for POST endpoints with a body, a mapping with an explicit ``body`` key
  carries both path values and the body; any other value is wrapped as
  ``{"body": data}``.

Only GET and POST can be dispatched. Other methods may be declared (the
default ``update`` and ``delete`` aliases are PUT and DELETE) but raise
:class:`~mapi.exceptions.UnsupportedMethodError` when called.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from mapi.auth.base import AuthHook
from mapi.client.base import RequestOptions, Transport
from mapi.exceptions import MissingBodyError, MissingParameterError, UnsupportedMethodError
from mapi.models import EndpointDefinition, ParameterSpec
from mapi.template import has_placeholder, parse_template

SUPPORTED_METHODS = ("GET", "POST")


def _is_path_value(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value != ""
    return isinstance(value, (int, float))


@dataclass(frozen=True)
class Endpoint:
    """A single invocable endpoint.

    Attributes:
        method: Upper-case HTTP method.
        template: Full path template, service base included.
        params: Placeholder specs in template order.
        transport: Object executing the request (see :mod:`mapi.client.base`).
        has_body: Whether POST calls must carry a body.
        requires_auth: Whether :attr:`auth` is consulted for request options.
        alias: Name the owning service binds this endpoint under, if any.
        auth: Hook producing credentials for authenticated calls.
    """

    method: str
    template: str
    params: tuple[ParameterSpec, ...]
    transport: Transport = field(repr=False, compare=False)
    has_body: bool = False
    requires_auth: bool = False
    alias: Optional[str] = None
    auth: Optional[AuthHook] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_definition(
        cls,
        definition: EndpointDefinition,
        transport: Transport,
        base: str = "",
        auth: Optional[AuthHook] = None,
    ) -> Endpoint:
        """Compile *definition* under *base*.

        An explicit ``params`` list is used as given. Otherwise, if the full
        template contains a placeholder, the parameters are parsed from it,
        including any placeholders inherited from *base*.
        """
        template = base + definition.path
        if definition.params is not None:
            params = tuple(definition.params)
        elif has_placeholder(template):
            params = tuple(parse_template(template))
        else:
            params = ()

        return cls(
            method=definition.method,
            template=template,
            params=params,
            transport=transport,
            has_body=definition.has_body,
            requires_auth=definition.requires_auth,
            alias=definition.alias,
            auth=auth,
        )

    @property
    def has_params(self) -> bool:
        return bool(self.params)

    # ------------------------------------------------------------------ #
    # Path resolution
    # ------------------------------------------------------------------ #

    def resolve(self, data: Any = None) -> str:
        """Return the template with every placeholder substituted.

        Only strings and numbers fill a placeholder; ``None``, ``""``, booleans
        and containers count as missing. Missing optional parameters become
        empty strings, which can leave a doubled or trailing ``/`` in the
        result (``/users/:id?`` resolves to ``/users/``).

        Args:
            data: Scalar value for a single-parameter template, or a mapping
                of slug to value.

        Returns:
            The resolved path.

        Raises:
            MissingParameterError: If a required parameter has no value.
        """
        if not self.params:
            return self.template

        if len(self.params) == 1:
            param = self.params[0]
            value = data.get(param.slug) if isinstance(data, Mapping) else data
            return self._substitute(self.template, param, value)

        values = data if isinstance(data, Mapping) else {}
        path = self.template
        for param in self.params:
            path = self._substitute(path, param, values.get(param.slug))
        return path

    def _substitute(self, path: str, param: ParameterSpec, value: Any) -> str:
        if _is_path_value(value):
            return path.replace(param.pattern, str(value))
        if not param.required:
            return path.replace(param.pattern, "")
        raise MissingParameterError(param.slug, self.template)

    # ------------------------------------------------------------------ #
    # Invocation
    # ------------------------------------------------------------------ #

    def build_request_options(self) -> RequestOptions:
        """Build transport options, consulting the auth hook when required.

        Without a configured hook the request goes out unauthenticated.
        """
        if self.requires_auth and self.auth is not None:
            return self.auth().as_options()
        return {}

    def call(self, data: Any = None) -> Any:
        """Resolve the request and delegate it to the transport.

        Args:
            data: Call data, see the module docstring for conventions.

        Returns:
            Whatever the transport returns.

        Raises:
            UnsupportedMethodError: If the method is neither GET nor POST.
            MissingParameterError: If a required placeholder has no value.
            MissingBodyError: If a body endpoint is called without data.
        """
        if self.method == "GET":
            return self._get(data)
        if self.method == "POST":
            return self._post(data)
        raise UnsupportedMethodError(
            f"Method {self.method} is not supported ({self.template}); "
            f"supported methods: {', '.join(SUPPORTED_METHODS)}"
        )

    def _get(self, data: Any) -> Any:
        if isinstance(data, (int, float)) and not isinstance(data, bool):
            data = str(data)
        path = self.resolve(data)
        return self.transport.get(path, self.build_request_options())

    def _post(self, data: Any) -> Any:
        if self.has_body:
            if data is None:
                raise MissingBodyError(f"{self.method} {self.template} requires a body")
            if not isinstance(data, Mapping) or data.get("body") is None:
                data = {"body": data}

        path = self.resolve(data)
        body = data["body"] if self.has_body else None
        return self.transport.post(path, body, self.build_request_options())
