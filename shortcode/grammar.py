"""
grammar.py

Builds the regular expressions used to find tags for a pair of delimiters.
Every character of the delimiters is escaped, so delimiters such as "[", "{%"
or "$(" are matched literally.

With the default delimiters a tag looks like:
- [[name]]
- [[name attr=value "positional"]]
- [[name]]content[[/name]]
"""

import re
from dataclasses import dataclass
from shortcode.exceptions import ConfigurationError


@dataclass(frozen=True)
class TagGrammar:
    start: str
    end: str
    tag_span: re.Pattern
    end_tag: re.Pattern
    name: re.Pattern
    attribute_block: re.Pattern

    @classmethod
    def build(cls, start: str = "[[", end: str = "]]") -> "TagGrammar":
        """
        Compile the matchers for the given delimiters.

        Args:
            start (str): Opening delimiter
            end (str): Closing delimiter

        Returns:
            TagGrammar: The compiled grammar

        Raises:
            ConfigurationError: If a delimiter is not a non-empty string
        """
        for label, delimiter in (("start", start), ("end", end)):
            if not isinstance(delimiter, str):
                raise ConfigurationError(
                    f"The {label} delimiter must be a string, not {type(delimiter).__name__}"
                )
            if not delimiter:
                raise ConfigurationError(f"The {label} delimiter cannot be empty")

        s = re.escape(start)
        e = re.escape(end)
        return cls(
            start=start,
            end=end,
            # Shortest span from a start delimiter to the next end delimiter, on one line
            tag_span=re.compile(s + r".*?" + e),
            end_tag=re.compile(s + r"/"),
            name=re.compile(s + r"/?(.*?)(?:\s|" + e + r")"),
            attribute_block=re.compile(s + r".*?\s(.*?)" + e),
        )

    def is_end_tag(self, span: str) -> bool:
        return self.end_tag.match(span) is not None

    def tag_name(self, span: str) -> str:
        match = self.name.match(span)
        return match.group(1) if match else ""

    def attributes(self, span: str) -> str:
        """The raw attribute text of a tag span, empty when the tag has none."""
        match = self.attribute_block.match(span)
        return match.group(1) if match else ""

    def contents(self, span: str) -> str:
        """The tag head without its delimiters."""
        return span[len(self.start):len(span) - len(self.end)]
