from __future__ import annotations

from typing import TypeAlias

from autocontainer.defaults import TOKEN_SUFFIX_SEPARATOR

Token: TypeAlias = str
"""An opaque, stable key naming one dependency identity."""


def display_name(token: Token) -> str:
    """Return the human-readable part of a token.

    Tokens produced by the code generation stage look like
    ``"UserService@app/services.py"``; only the part before the first ``@`` is
    meaningful to a reader.

    Examples:
        >>> display_name("UserService@app/services.py")
        'UserService'
        >>> display_name("Unknown")
        'Unknown'

    """
    return token.split(TOKEN_SUFFIX_SEPARATOR, 1)[0]
