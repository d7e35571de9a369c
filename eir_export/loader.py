"""PyYAML adapter used as the generic decoder for export text.

Every export field is text, so the YAML 1.1 implicit typing in PyYAML's
``SafeLoader`` would silently change values: ``date: 2025-03-17`` becomes a
``datetime.date``, ``time: 10:30`` becomes ``630``, a personal number such as
``0123`` is read as octal, ``1.10`` becomes ``1.1`` and ``True`` comes back as
``true``. :class:`ExportLoader` leaves plain scalars as strings. The only
implicit type kept is a canonical decimal int, whose text ``str(int(...))``
reproduces exactly, plus null.
"""

import re
from typing import Any

import yaml

_REPLACED_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class ExportLoader(yaml.SafeLoader):
    """SafeLoader that resolves only null and canonical decimal ints."""


ExportLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _REPLACED_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# No sign on zero, no leading "+" and no padding, so the int prints back as written.
ExportLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^(?:0|-?[1-9][0-9]*)$"),
    list("-0123456789"),
)


def load_tree(text: str) -> Any:
    """Decode YAML text into a plain value tree; raises ``yaml.YAMLError``."""
    return yaml.load(text, Loader=ExportLoader)
