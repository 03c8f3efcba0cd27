"""Parsing of inline link specs and interpretation of their field directives."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .constants import (
    DEFAULT_LINK_SCHEME,
    LINK_CLOSE,
    LINK_SEPARATOR,
    SPEC_SEPARATOR,
    SUBMIT_ALL_FIELDS,
)
from .models import Link, ParserState

logger = logging.getLogger(__name__)


def parse_link(
    line: str, position: int, state: ParserState, scheme: str = DEFAULT_LINK_SCHEME
) -> tuple[Link, int] | None:
    """Parse a link spec starting at the ``[`` found at `position`.

    The body between the brackets is split on backticks: ``url``,
    ``label`url`` or ``label`url`fields``. The label defaults to the url, and
    the fields segment is split on ``|`` into raw directive tokens.

    Args:
        line: Line being tokenized.
        position: Index of the opening ``[``.
        state: Parser state whose current style is captured by the link.
        scheme: Prefix prepended to the url.

    Returns:
        tuple[Link, int] | None: The link and the number of characters
            consumed through the closing ``]``. None when there is no closing
            bracket or the url is empty.

    Examples:
        parse_link("[Home`:/page/index.mu]", 0, state)
    """
    end = line.find(LINK_CLOSE, position)
    if end == -1:
        logger.debug("Link spec at column %d is not terminated", position)
        return None

    components = line[position + 1 : end].split(LINK_SEPARATOR)
    label = url = directives = ""
    if len(components) == 1:
        url = components[0]
    elif len(components) == 2:
        label, url = components
    elif len(components) == 3:
        label, url, directives = components

    if not url:
        logger.debug("Link spec at column %d has no url", position)
        return None

    link = Link(
        url=f"{scheme}{url}",
        label=label or url,
        field_directives=tuple(directives.split(SPEC_SEPARATOR)) if directives else (),
        style=state.snapshot(),
    )
    return link, end - position + 1


@dataclass(frozen=True)
class LinkRequest:
    """What activating a link should submit.

    Attributes:
        url: Target address.
        fields: Names of fields whose current values are submitted.
        submit_all: Whether every field on the page is submitted.
        variables: Literal request variables appended to the request.
    """

    url: str
    fields: tuple[str, ...] = ()
    submit_all: bool = False
    variables: dict[str, str] = field(default_factory=dict)


def resolve_link_request(link: Link) -> LinkRequest:
    """Interpret a link's field directives.

    ``*`` requests every field, ``key=value`` adds a request variable, and any
    other token names a field.

    Examples:
        resolve_link_request(link)  # LinkRequest(url=..., fields=("user",), ...)
    """
    fields: list[str] = []
    variables: dict[str, str] = {}
    submit_all = False

    for token in link.field_directives:
        if token == SUBMIT_ALL_FIELDS:
            submit_all = True
        elif "=" in token:
            key, _, value = token.partition("=")
            variables[key] = value
        elif token:
            fields.append(token)

    return LinkRequest(
        url=link.url, fields=tuple(fields), submit_all=submit_all, variables=variables
    )
