"""Canonical Pydantic models shared across all mapi modules.

The models fall into two groups:

**Definition models** -- the declarative API description compiled by
:class:`~mapi.api.Api`:
    :class:`ParameterSpec`, :class:`EndpointDefinition`,
    :class:`ServiceDefinition`, and :class:`ApiDefinition`.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`AuthConfig`, :class:`RequestConfig`, and :class:`Profile`.

Definition models are frozen and accept both the camelCase keys used in
definition files (``hasBody``, ``requiresAuth``, ``defaultEndpoints``) and the
snake_case field names. Derived definitions are produced with
``model_copy(update=...)`` so the caller's input is never modified.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


_DEFINITION_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


# --- Definition models ---


class ParameterSpec(BaseModel):
    """One named placeholder in a path template.

    ``pattern`` is the literal token as it appears in the template (``:id``
    or ``:id?``), ``slug`` is the name without the colon and trailing ``?``.

    Explicit parameter lists in a definition may use bare slugs; ``"id"``
    validates to ``ParameterSpec(slug="id", pattern=":id", required=True)``.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    pattern: str
    required: bool = True

    @model_validator(mode="before")
    @classmethod
    def _fill_pattern(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = {"slug": value}
        if isinstance(value, Mapping) and not value.get("pattern"):
            suffix = "" if value.get("required", True) else "?"
            value = {**value, "pattern": f":{value.get('slug', '')}{suffix}"}
        return value


class EndpointDefinition(BaseModel):
    """Declarative description of a single endpoint.

    Example::

        EndpointDefinition.model_validate(
            {"method": "POST", "endpoint": "/:id/avatar", "hasBody": True, "alias": "upload"}
        )
    """

    model_config = _DEFINITION_CONFIG

    method: str = "GET"
    path: str = Field(default="", alias="endpoint")
    has_params: bool = False
    params: Optional[list[ParameterSpec]] = None
    has_body: bool = False
    requires_auth: bool = False
    alias: Optional[str] = None

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()


class ServiceDefinition(BaseModel):
    """Declarative description of a service and its children.

    ``health_check`` left unset means the built-in ``GET /info`` endpoint;
    ``methods`` maps alias names to callables that replace (or add to) the
    aliases bound on the constructed :class:`~mapi.service.Service`.
    """

    model_config = _DEFINITION_CONFIG

    name: Optional[str] = None
    base: Optional[str] = None
    default_endpoints: bool = True
    has_health_check: bool = True
    health_check: Optional[EndpointDefinition] = None
    endpoints: list[EndpointDefinition] = Field(default_factory=list)
    services: list[ServiceDefinition] = Field(default_factory=list)
    methods: Optional[dict[str, Callable[..., Any]]] = None

    @field_validator("endpoints", "services", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


ServiceDefinition.model_rebuild()


class ApiDefinition(BaseModel):
    """Root of a definition file: a base path plus top-level services."""

    model_config = _DEFINITION_CONFIG

    base: str = ""
    services: list[ServiceDefinition] = Field(default_factory=list)

    @field_validator("services", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# --- Configuration models ---


class AuthConfig(BaseModel):
    """Authentication settings for endpoints declared with ``requiresAuth``.

    Plugins may read extra fields, which are preserved in ``model_extra``.

    Example::

        AuthConfig(type="api_key", header="X-API-Key", source="env:MY_API_KEY")
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Auth type: api_key, bearer, basic")
    source: str = Field(
        default="prompt",
        description="Credential source: env:VAR, file:/path, prompt",
    )
    header: Optional[str] = Field(
        default=None, description="Header or cookie name for api_key auth"
    )
    param_name: Optional[str] = Field(
        default=None, description="Query parameter name for api_key auth"
    )
    location: str = Field(
        default="header", description="Where to send: header, query, cookie"
    )


class RequestConfig(BaseModel):
    """HTTP settings applied by the transports to every call."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class Profile(BaseModel):
    """Per-API profile stored as JSON under the ``profiles/`` config directory.

    A profile points to an API definition (file path or URL) and carries the
    server URL, auth and request settings used by ``mapi call``.

    See Also:
        :func:`~mapi.config.load_profile`: Deserialise a profile by name.
        :func:`~mapi.config.save_profile`: Persist a profile to disk.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    definition: str = Field(description="URL or file path to the API definition")
    base_url: Optional[str] = Field(
        default=None, description="Server URL prefixed to every request path"
    )
    auth: Optional[AuthConfig] = None
    request: RequestConfig = Field(default_factory=RequestConfig)
