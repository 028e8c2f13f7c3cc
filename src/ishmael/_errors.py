"""Ishmael error types."""


class IshmaelError(Exception):
    """Base error for all ishmael failures."""


class InputError(IshmaelError, ValueError):
    """Input of the wrong type, or an option value out of range."""


class PatternError(InputError):
    """Regex or glob pattern could not be compiled."""


class IshmaelVersionError(IshmaelError):
    """Serialized payload has an unsupported format version."""


class IshmaelChecksumError(IshmaelError):
    """Serialized payload failed checksum verification."""
