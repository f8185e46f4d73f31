"""Exceptions raised at the edges of the diff pipeline."""


class DiffInputError(Exception):
    """Raised when the texts handed to a comparison are unusable."""
    pass


class MissingInputError(DiffInputError):
    """Raised when either the old or the new text is empty."""
    pass


class InputTooLargeError(DiffInputError):
    """Raised when the alignment table would exceed the configured budget."""
    pass


class TextLoadError(Exception):
    """Raised when reading a source text fails."""
    pass


class StorageError(Exception):
    """Raised when the session store cannot be written."""
    pass
