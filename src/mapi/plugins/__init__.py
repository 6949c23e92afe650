"""Built-in authentication plugins.

Each sub-package implements one :class:`~mapi.auth.base.AuthPlugin`:

* :mod:`mapi.plugins.api_key` -- key in a header, query parameter or cookie.
* :mod:`mapi.plugins.bearer` -- ``Authorization: Bearer <token>``.
* :mod:`mapi.plugins.basic` -- ``Authorization: Basic <base64>``.

:func:`mapi.auth.create_default_manager` registers all of them.
"""
