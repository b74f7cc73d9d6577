from __future__ import annotations


class NotesError(Exception):
    """Base class for everything the notes pipeline raises on purpose."""


class EmptyInputError(NotesError, ValueError):
    def __init__(self, message: str = "Please enter some text to simplify."):
        super().__init__(message)


class TooShortInputError(NotesError, ValueError):
    def __init__(self, word_count: int, minimum: int):
        self.word_count = word_count
        self.minimum = minimum
        super().__init__(
            f"Text is too short to simplify effectively ({word_count} words). "
            f"Please enter at least {minimum} words."
        )


class RemoteSummaryError(NotesError):
    """The remote summarization service failed or returned an unusable body."""
