"""
dispatcher.py

Runs the handlers of one pass concurrently and splices their results into the text.
Results are applied by tag position, whatever order the handlers finish in.
"""

import asyncio
import inspect
from typing import Any, List, Sequence, Tuple
from shortcode.extractor import Tag
from shortcode.registry import Handler
from config.logging_config import setup_logger

logger = setup_logger(__name__)


def to_replacement(result: Any) -> str:
    """Coerce a handler result to text, None meaning an empty replacement."""
    if result is None:
        return ""
    return str(result)


async def invoke_handler(tag: Tag, handler: Handler, params: Sequence[Any]) -> str:
    """Call one handler, awaiting its result if it returned an awaitable."""
    try:
        result = handler(tag, *params)
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        logger.error("Handler for tag '%s' at %d failed: %s", tag.tag_name, tag.start, e)
        raise
    return to_replacement(result)


async def run_handlers(matched: List[Tuple[Tag, Handler]], params: Sequence[Any]) -> List[str]:
    """
    Invoke every handler of a pass concurrently and wait for all of them.

    Args:
        matched: (tag, handler) pairs of the pass
        params: Extra parameters passed to every handler after the tag

    Returns:
        List[str]: Replacements, in the same order as matched

    Raises:
        Exception: The first handler failure; the other handlers are cancelled
    """
    tasks = [asyncio.ensure_future(invoke_handler(tag, handler, params)) for tag, handler in matched]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


def apply_replacements(text: str, replacements: List[Tuple[Tag, str]]) -> str:
    """
    Replace each tag span with its replacement, left to right.

    Args:
        text (str): The text the tag offsets refer to
        replacements: (tag, replacement) pairs of non-overlapping tags

    Returns:
        str: The new text
    """
    parts = []
    position = 0
    for tag, replacement in sorted(replacements, key=lambda item: item[0].start):
        parts.append(text[position:tag.start])
        parts.append(replacement)
        position = tag.end
    parts.append(text[position:])
    return "".join(parts)
