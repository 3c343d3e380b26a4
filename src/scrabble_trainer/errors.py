class TrainerError(Exception):
    """Base class for errors raised by the trainer engine."""


class LexiconUnavailable(TrainerError):
    """The word list has not been loaded, or it is empty."""


class BoardFormatError(TrainerError, ValueError):
    """A board string could not be parsed."""
