"""Exceptions raised while loading unit and item definitions."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """A definitions file is missing, unreadable or not valid JSON."""


class DataValidationError(DataError):
    """A definition payload has missing, unknown or mistyped fields."""


class DataReferenceError(DataError):
    """A character definition names a soldier definition that does not exist."""
