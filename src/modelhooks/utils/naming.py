"""
Naming utilities for modelhooks.
"""

import re


_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


def qualified_name(cls: type) -> str:
    """
    Return ``module.QualName`` for a class, the name used in event channels.
    """
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", cls.__name__)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def is_event_name(name: str) -> bool:
    return bool(_IDENTIFIER_RE.match(name))
