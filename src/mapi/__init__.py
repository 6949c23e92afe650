"""mapi -- build callable REST API clients from declarative definitions.

An API definition is a nested tree of *services*, each owning a base path,
a set of *endpoints* and optional child services. :class:`Api` compiles that
tree into objects whose aliases (``get``, ``create``, ``update``, ``delete``,
``health`` and any user-defined name) resolve path placeholders and hand the
request to an injected transport.

Typical usage::

    from mapi import Api
    from mapi.client import HttpxTransport

    with HttpxTransport(base_url="https://example.com") as transport:
        api = Api({"base": "/api", "services": [{"name": "users"}]}, transport)
        response = api["users"].invoke("get", 42)   # GET /api/users/42

Modules:
    api: Root container and top-level service registration.
    service: Service composition, default CRUD endpoints, aliasing.
    endpoint: Path resolution and GET/POST dispatch.
    template: Path-template tokenizer.
    merge: Definition merge precedence rules.
    models: Pydantic models for definitions, profiles and parameters.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting and debug logging.
"""

from mapi.api import Api
from mapi.endpoint import Endpoint
from mapi.service import Service

__version__ = "0.1.0"

__all__ = ["Api", "Endpoint", "Service", "__version__"]
