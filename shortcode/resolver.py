"""
resolver.py

Turns the raw tag list of a scan into the tags that will actually be replaced:
closing tags are folded into their opening tags, then tags nested inside an
already claimed span are discarded. Nested tags are only seen again after the
outer handler has run and the result is scanned again.
"""

from dataclasses import replace
from typing import Callable, List, Optional
from shortcode.extractor import Tag
from config.logging_config import setup_logger

logger = setup_logger(__name__)


def fold_end_tags(text: str, tags: List[Tag]) -> List[Tag]:
    """
    Pair every end tag with the nearest preceding unpaired start tag of the same name.

    Args:
        text (str): The scanned text the tag offsets refer to
        tags (List[Tag]): Tags in order of appearance

    Returns:
        List[Tag]: Start tags only, paired ones extended through their end tag
    """
    tags = list(tags)
    folded = set()

    for index, end_tag in enumerate(tags):
        if not end_tag.end_tag:
            continue
        for candidate in range(index - 1, -1, -1):
            start_tag = tags[candidate]
            if start_tag.end_tag or candidate in folded or start_tag.tag_name != end_tag.tag_name:
                continue
            tags[candidate] = replace(
                start_tag,
                content=text[start_tag.end:end_tag.start],
                full_match=text[start_tag.start:end_tag.end],
                end=end_tag.end,
                self_closing=False,
            )
            folded.add(candidate)
            break
        else:
            logger.debug("Dropping end tag '%s' at %d without a start tag", end_tag.tag_name, end_tag.start)

    return [tag for tag in tags if not tag.end_tag]


def filter_overlapping(tags: List[Tag]) -> List[Tag]:
    """Drop every tag starting inside the span of a tag kept before it."""
    kept = []
    claimed_until = 0
    for tag in tags:
        if kept and tag.start < claimed_until:
            logger.debug("Skipping tag '%s' at %d nested in a claimed span", tag.tag_name, tag.start)
            continue
        kept.append(tag)
        claimed_until = max(claimed_until, tag.end)
    return kept


def resolve_tags(text: str, tags: List[Tag], keep: Optional[Callable[[Tag], bool]] = None) -> List[Tag]:
    """
    Pair end tags, then drop start tags keep() rejects, then drop nested tags.

    Unwanted start tags still take part in pairing, so a closing tag is never
    claimed by a more distant open tag of the same name.
    """
    folded = fold_end_tags(text, tags)
    if keep is not None:
        folded = [tag for tag in folded if keep(tag)]
    return filter_overlapping(folded)
