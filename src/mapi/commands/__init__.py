"""Built-in CLI sub-commands for mapi.

* :mod:`~mapi.commands.call` -- invoke an alias of the compiled API.
* :mod:`~mapi.commands.inspect` -- list services, aliases and paths.
* :mod:`~mapi.commands.profile` -- manage stored profiles.

Shared definition/profile resolution lives in :mod:`~mapi.commands.common`.
"""
