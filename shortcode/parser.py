"""
parser.py

The parser ties the pipeline together. One pass is:
scan -> keep handled tags -> pair and filter -> run handlers -> splice results.
Passes repeat on the new text until a pass leaves the text unchanged, so handlers
can return text containing new tags.

Example:
    parser = create()
    parser.add("HELLO", lambda tag: "HELLO WORLD")
    await parser.parse("say [[HELLO]] now")  # "say HELLO WORLD now"
"""

import asyncio
from typing import Any, List, Optional
from shortcode.dispatcher import apply_replacements, run_handlers
from shortcode.exceptions import ConfigurationError, MaxPassesExceededError
from shortcode.extractor import Tag, extract_tags, select_candidates
from shortcode.grammar import TagGrammar
from shortcode.registry import Handler, HandlerRegistry
from shortcode.resolver import resolve_tags
from config.logging_config import setup_logger
from config.settings import SETTINGS

logger = setup_logger(__name__)

_UNSET = object()


class ShortcodeParser:
    def __init__(self, start: Optional[str] = None, end: Optional[str] = None, max_passes=_UNSET):
        """
        Args:
            start (str): Opening delimiter, defaults to the configured one ("[[")
            end (str): Closing delimiter, defaults to the configured one ("]]")
            max_passes (int | None): Maximum number of text-changing passes per parse,
                None for no limit. Defaults to the configured value.

        Raises:
            ConfigurationError: If a delimiter is empty or max_passes is not a positive integer
        """
        self._grammar = TagGrammar.build(
            SETTINGS.start if start is None else start,
            SETTINGS.end if end is None else end,
        )
        if max_passes is _UNSET:
            max_passes = SETTINGS.max_passes
        if max_passes is not None and (isinstance(max_passes, bool)
                                       or not isinstance(max_passes, int) or max_passes < 1):
            raise ConfigurationError(f"max_passes must be a positive integer or None, not {max_passes!r}")
        self._max_passes = max_passes
        self._registry = HandlerRegistry()

    @property
    def start(self) -> str:
        return self._grammar.start

    @property
    def end(self) -> str:
        return self._grammar.end

    @property
    def max_passes(self) -> Optional[int]:
        return self._max_passes

    @property
    def grammar(self) -> TagGrammar:
        return self._grammar

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def add(self, reference, handler: Handler, throw_on_already_set: bool = True) -> Handler:
        return self._registry.add(reference, handler, throw_on_already_set)

    def has(self, reference) -> bool:
        return self._registry.has(reference)

    def get(self, reference) -> Handler:
        return self._registry.get(reference)

    def delete(self, reference) -> bool:
        return self._registry.delete(reference)

    def _matched_tags(self, text: str):
        """(tag, handler) pairs of one pass, each handler looked up once."""
        handlers = {}

        def accepts(tag: Tag) -> bool:
            handler = self._registry.match(tag)
            if handler is None:
                return False
            handlers[tag.start] = handler
            return True

        tags = select_candidates(extract_tags(text, self._grammar), accepts)
        resolved = resolve_tags(text, tags, keep=lambda tag: tag.start in handlers)
        return [(tag, handlers[tag.start]) for tag in resolved]

    def scan(self, text: str) -> List[Tag]:
        """
        The tags a single pass over the text would replace, without running any handler.

        Args:
            text (str): The text to scan

        Returns:
            List[Tag]: Resolved tags in order of appearance
        """
        return [tag for tag, _ in self._matched_tags(text)]

    async def parse(self, text: str, *params: Any) -> str:
        """
        Replace every handled tag until the text stops changing.

        Args:
            text (str): The text to parse
            *params: Extra arguments passed to every handler after the tag

        Returns:
            str: The fully expanded text

        Raises:
            MaxPassesExceededError: If the text is still changing after max_passes passes
            Exception: Whatever a failing handler raised
        """
        passes = 0
        while True:
            matched = self._matched_tags(text)
            if not matched:
                return text

            logger.debug("Pass %d: running %d handlers", passes + 1, len(matched))
            replacements = await run_handlers(matched, params)
            parsed = apply_replacements(
                text, [(tag, replacement) for (tag, _), replacement in zip(matched, replacements)]
            )
            if parsed == text:
                return text

            passes += 1
            if self._max_passes is not None and passes > self._max_passes:
                logger.warning("Giving up after %d passes, text is still changing", self._max_passes)
                raise MaxPassesExceededError(self._max_passes, parsed)
            text = parsed

    def parse_sync(self, text: str, *params: Any) -> str:
        """Run parse() in a new event loop. Not usable from inside a running loop."""
        return asyncio.run(self.parse(text, *params))


def create(**options) -> ShortcodeParser:
    """
    Create a parser.

    Options:
        start (str): Opening delimiter
        end (str): Closing delimiter
        max_passes (int | None): Pass limit, None for no limit
    """
    return ShortcodeParser(**options)
