"""Path-template tokenizer.

Endpoint paths mark substitutable segments with placeholder tokens::

    /users/:user_id/posts/:post_id?

Token grammar::

    token      := ":" identifier [ "?" ]
    identifier := ( "A".."Z" | "a".."z" | "_" )+

A trailing ``?`` marks the parameter optional. A ``:`` that is not followed
by an identifier character is ordinary text. :func:`parse_template` walks the
template once, left to right, and emits a
:class:`~mapi.models.ParameterSpec` per token in order of appearance.
Repeated slugs are emitted as many times as they appear.
"""

from __future__ import annotations

from mapi.models import ParameterSpec

PLACEHOLDER_MARKER = ":"
OPTIONAL_MARKER = "?"


def _is_identifier_char(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def has_placeholder(template: str) -> bool:
    """Return ``True`` if *template* may contain placeholder tokens.

    This is the trigger for deriving an endpoint's parameters from its path
    when the definition does not list them explicitly.
    """
    return PLACEHOLDER_MARKER in template


def parse_template(template: str) -> list[ParameterSpec]:
    """Extract the placeholder tokens of *template* in order of appearance.

    Args:
        template: A path such as ``"/users/:id/roles/:role?"``.

    Returns:
        One :class:`~mapi.models.ParameterSpec` per token.

    Example::

        >>> [p.slug for p in parse_template("/:a/:b?/:c")]
        ['a', 'b', 'c']
        >>> [p.required for p in parse_template("/:a/:b?/:c")]
        [True, False, True]
    """
    params: list[ParameterSpec] = []
    length = len(template)
    index = 0

    while index < length:
        if template[index] != PLACEHOLDER_MARKER:
            index += 1
            continue

        end = index + 1
        while end < length and _is_identifier_char(template[end]):
            end += 1

        if end == index + 1:
            # Bare colon, not a token.
            index += 1
            continue

        slug = template[index + 1:end]
        required = True
        if end < length and template[end] == OPTIONAL_MARKER:
            required = False
            end += 1

        params.append(
            ParameterSpec(slug=slug, pattern=template[index:end], required=required)
        )
        index = end

    return params
