"""
registry.py

Storage of the handlers of one parser. A handler is registered under a reference:
- a tag name (str): used for tags with exactly that name
- a compiled pattern (re.Pattern): searched in the tag head
- a predicate (hashable callable): called with the tag head, truthy result means a match

Names always win. Patterns and predicates are tried in registration order and the
first match wins.

Mutating the registry from inside a handler while a parse is running is not supported.
"""

import re
from collections.abc import Hashable
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Union
from shortcode.exceptions import (
    DuplicateTagError, InvalidHandlerError, InvalidReferenceError, TagNotFoundError,
)
from shortcode.extractor import Tag
from config.logging_config import setup_logger

logger = setup_logger(__name__)

Handler = Callable[..., Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class ExactName:
    name: str


@dataclass(frozen=True)
class Pattern:
    pattern: re.Pattern

    def matches(self, tag: Tag) -> bool:
        return self.pattern.search(tag.tag_contents) is not None


@dataclass(frozen=True)
class Predicate:
    predicate: Callable[[str], Any]

    def matches(self, tag: Tag) -> bool:
        return bool(self.predicate(tag.tag_contents))


Reference = Union[ExactName, Pattern, Predicate]


def to_reference(reference) -> Reference:
    """
    Wrap a user supplied reference in its variant.

    Raises:
        InvalidReferenceError: If the reference is not a name, pattern or hashable callable
    """
    if isinstance(reference, str):
        return ExactName(reference)
    if isinstance(reference, re.Pattern):
        return Pattern(reference)
    if callable(reference) and isinstance(reference, Hashable):
        return Predicate(reference)
    raise InvalidReferenceError(reference)


class HandlerRegistry:
    def __init__(self):
        self._names: Dict[str, Handler] = {}
        # Insertion ordered, the order decides which fallback wins
        self._fallbacks: Dict[Reference, Handler] = {}

    def _table(self, reference: Reference) -> Dict:
        if isinstance(reference, ExactName):
            return self._names
        return self._fallbacks

    def _key(self, reference: Reference):
        if isinstance(reference, ExactName):
            return reference.name
        return reference

    def add(self, reference, handler: Handler, throw_on_already_set: bool = True) -> Handler:
        """
        Register a handler.

        Args:
            reference: Tag name, compiled pattern or predicate
            handler: Callable invoked as handler(tag, *params)
            throw_on_already_set (bool): Fail instead of replacing an existing handler

        Returns:
            The registered handler

        Raises:
            InvalidReferenceError: If the reference has an unsupported type
            InvalidHandlerError: If the handler is not callable
            DuplicateTagError: If the reference is taken and throw_on_already_set is true
        """
        ref = to_reference(reference)
        if not callable(handler):
            raise InvalidHandlerError(reference, handler)
        table, key = self._table(ref), self._key(ref)
        if key in table:
            if throw_on_already_set:
                raise DuplicateTagError(reference)
            logger.debug("Replacing handler for %s", ref)
        table[key] = handler
        return handler

    def has(self, reference) -> bool:
        try:
            ref = to_reference(reference)
        except InvalidReferenceError:
            return False
        return self._key(ref) in self._table(ref)

    def get(self, reference) -> Handler:
        if not self.has(reference):
            raise TagNotFoundError(reference)
        ref = to_reference(reference)
        return self._table(ref)[self._key(ref)]

    def delete(self, reference) -> bool:
        if not self.has(reference):
            raise TagNotFoundError(reference)
        ref = to_reference(reference)
        del self._table(ref)[self._key(ref)]
        return True

    def match(self, tag: Tag) -> Optional[Handler]:
        """The handler for a tag, or None if nothing is registered for it."""
        handler = self._names.get(tag.tag_name)
        if handler is not None:
            return handler
        for ref, handler in self._fallbacks.items():
            if ref.matches(tag):
                return handler
        return None

    def accepts(self, tag: Tag) -> bool:
        return self.match(tag) is not None

    def __len__(self):
        return len(self._names) + len(self._fallbacks)
