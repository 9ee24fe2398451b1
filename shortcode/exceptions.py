"""Exceptions raised by the shortcode parser."""


class ShortcodeError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ShortcodeError, ValueError):
    """Invalid parser configuration, raised when the parser is built."""


class RegistrationError(ShortcodeError):
    """A handler could not be registered."""


class DuplicateTagError(RegistrationError, ValueError):
    def __init__(self, reference):
        self.reference = reference
        super().__init__(f"Tag '{describe_reference(reference)}' already exists")


class InvalidHandlerError(RegistrationError, TypeError):
    def __init__(self, reference, handler):
        self.reference = reference
        self.handler = handler
        super().__init__(
            f"Cannot assign a non function as handler method for '{describe_reference(reference)}'"
        )


class InvalidReferenceError(RegistrationError, TypeError):
    def __init__(self, reference):
        self.reference = reference
        super().__init__(
            f"Tag reference must be a name, a compiled pattern or a hashable predicate, "
            f"not {type(reference).__name__}"
        )


class TagNotFoundError(ShortcodeError, LookupError):
    def __init__(self, reference):
        self.reference = reference
        super().__init__(f"Tag '{describe_reference(reference)}' does not exist")


class MaxPassesExceededError(ShortcodeError, RuntimeError):
    """Parsing did not reach a fixed point within the allowed number of passes."""

    def __init__(self, passes: int, text: str):
        self.passes = passes
        self.text = text
        super().__init__(f"Text still changing after {passes} passes")


def describe_reference(reference) -> str:
    """Readable form of a registry reference for error messages."""
    if isinstance(reference, str):
        return reference
    pattern = getattr(reference, "pattern", None)
    if isinstance(pattern, str):
        return f"/{pattern}/"
    return getattr(reference, "__name__", repr(reference))
