"""
attributes.py

Parsing of the attribute text found in a tag head, e.g. for
[[image src="a.png" width=20 inline]] the attribute text is
'src="a.png" width=20 inline'.

Supported token forms, tried in this order:
- key='value' or key="value"
- key=value
- 'value' or "value"
- value

Every token gets a 1-based position. Keyed tokens are also stored under their key.
"""

import re
from typing import Any, Dict, List

ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<quoted_key>[^\s=]+)\s*=\s*(?P<quote>['"])(?P<quoted_value>.*?)(?P=quote)"""
    r"""|(?P<key>[^\s=]+)\s*=\s*(?P<value>\S*)"""
    r"""|(?P<bare_quote>['"])(?P<bare_quoted>.*?)(?P=bare_quote)"""
    r"""|(?P<bare>\S+)""",
    re.DOTALL,
)


class Attributes(dict):
    """
    Attributes of a tag, keyed by name and by 1-based position.

    >>> attributes = parse_attributes('id=45 big')
    >>> attributes["id"], attributes[1], attributes[2]
    ('45', {'id': '45'}, 'big')
    """

    def positional(self) -> List[Any]:
        """Values of every token in order of appearance."""
        return [self[key] for key in sorted(k for k in self if isinstance(k, int))]

    def named(self) -> Dict[str, str]:
        """Only the key=value attributes."""
        return {key: value for key, value in self.items() if isinstance(key, str)}

    def __repr__(self):
        return f"Attributes({dict.__repr__(self)})"


def parse_attributes(block: str) -> Attributes:
    """
    Parse the attribute text of a tag.

    Args:
        block (str): Attribute text, without tag name or delimiters

    Returns:
        Attributes: The parsed attributes, empty if the text has none
    """
    attributes = Attributes()
    if not block:
        return attributes

    for position, match in enumerate(ATTRIBUTE_PATTERN.finditer(block), start=1):
        if match.group("quoted_key") is not None:
            key, value = match.group("quoted_key"), match.group("quoted_value")
        elif match.group("key") is not None:
            key, value = match.group("key"), match.group("value")
        else:
            bare = match.group("bare_quoted")
            attributes[position] = bare if bare is not None else match.group("bare")
            continue
        attributes[key] = value
        attributes[position] = {key: value}

    return attributes
