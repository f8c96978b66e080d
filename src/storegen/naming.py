"""Feature name normalization.

normalize() turns free-form input ("My Cool Feature!") into the canonical
camel-case name ("myCoolFeature") used both as identifier prefix and as
package segment. capitalize() gives the display/type form ("MyCoolFeature").
"""

import keyword
import re

from storegen.errors import EmptyNameError, InvalidNameError

_SEPARATORS = re.compile(r"[^a-zA-Z0-9]+")


def normalize(raw: str) -> str:
    """Normalize raw user input into a camel-case feature name.

    Args:
        raw: Free-form name typed by the user

    Returns:
        Canonical name, e.g. "myCoolFeature"

    Raises:
        EmptyNameError: If no letters or digits remain
        InvalidNameError: If the result starts with a digit or is a keyword

    Example:
        >>> normalize("My Cool Feature!")
        'myCoolFeature'
    """
    words = _SEPARATORS.sub(" ", raw).split()
    if not words:
        raise EmptyNameError(raw)

    first, *rest = words
    name = first.lower() + "".join(capitalize(word.lower()) for word in rest)

    if name[0].isdigit():
        raise InvalidNameError(raw, f"{name!r} starts with a digit")
    if keyword.iskeyword(name):
        raise InvalidNameError(raw, f"{name!r} is a Python keyword")
    return name


def capitalize(name: str) -> str:
    """Upper-case only the first character ("orders" -> "Orders")."""
    return name[:1].upper() + name[1:]
