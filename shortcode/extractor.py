"""
extractor.py

Single left-to-right scan of a text for tag spans. Each span becomes a Tag record;
pairing of start and end tags happens later in resolver.py.
"""

from dataclasses import dataclass, field
from typing import Callable, List
from shortcode.attributes import Attributes, parse_attributes
from shortcode.grammar import TagGrammar
from config.logging_config import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Tag:
    """
    A tag found in the text.

    Attributes:
        tag_name: Name of the tag, case-sensitive
        end_tag: True for a closing tag such as [[/name]] (never true once resolved)
        full_match: The source text covered by the tag, closing tag included once paired
        tag_contents: The tag head without delimiters, e.g. 'name a=1'
        start: Offset of the tag in the scanned text
        end: Offset just after the tag (after the closing tag once paired)
        attributes: Parsed attributes of the tag head
        content: Text between the tag and its closing tag, empty if self-closing
        self_closing: False once a closing tag has been paired with this tag
    """
    tag_name: str
    end_tag: bool
    full_match: str
    tag_contents: str
    start: int
    end: int
    attributes: Attributes = field(default_factory=Attributes)
    content: str = ""
    self_closing: bool = True


def extract_tags(text: str, grammar: TagGrammar) -> List[Tag]:
    """
    Find every tag span in the text.

    Args:
        text (str): The text to scan
        grammar (TagGrammar): Matchers for the configured delimiters

    Returns:
        List[Tag]: Tags in order of appearance, end tags included
    """
    tags = []
    for match in grammar.tag_span.finditer(text):
        span = match.group(0)
        end_tag = grammar.is_end_tag(span)
        tags.append(Tag(
            tag_name=grammar.tag_name(span),
            end_tag=end_tag,
            full_match=span,
            tag_contents=grammar.contents(span),
            start=match.start(),
            end=match.end(),
            attributes=Attributes() if end_tag else parse_attributes(grammar.attributes(span)),
        ))
    logger.debug("Found %d tag spans", len(tags))
    return tags


def select_candidates(tags: List[Tag], accepts: Callable[[Tag], bool]) -> List[Tag]:
    """
    Keep only the tags whose name a handler fires for.

    A name is kept when accepts(tag) is true for at least one start tag of that name.
    Every start and end tag of a kept name stays, so closing tags still pair with the
    nearest open tag even when a pattern or predicate accepts only some of them.
    Names no handler accepts are dropped, so an unhandled pair never claims a span
    that contains handled tags.
    """
    names = set()
    for tag in tags:
        if not tag.end_tag and accepts(tag):
            names.add(tag.tag_name)

    return [tag for tag in tags if tag.tag_name in names]
