"""
Asynchronous tag substitution for text.

Handlers are registered on a parser by tag name, pattern or predicate. Parsing
replaces every [[tag]] (or [[tag]]content[[/tag]]) with what its handler returns,
and keeps going until the text stops changing.
"""

from shortcode.attributes import Attributes, parse_attributes
from shortcode.exceptions import (
    ShortcodeError, ConfigurationError, RegistrationError, DuplicateTagError,
    InvalidHandlerError, InvalidReferenceError, TagNotFoundError, MaxPassesExceededError,
)
from shortcode.extractor import Tag
from shortcode.grammar import TagGrammar
from shortcode.parser import ShortcodeParser, create

__all__ = [
    'create', 'ShortcodeParser', 'Tag', 'Attributes', 'parse_attributes', 'TagGrammar',
    'ShortcodeError', 'ConfigurationError', 'RegistrationError', 'DuplicateTagError',
    'InvalidHandlerError', 'InvalidReferenceError', 'TagNotFoundError', 'MaxPassesExceededError',
]
