from __future__ import annotations


class SearchError(Exception):
    """Base class for every error raised by the search package."""


class InvalidDataset(SearchError, ValueError):
    """The record collection handed to the engine is not usable."""


class InvalidCriteria(SearchError, ValueError):
    """The criteria registry is malformed."""


class InvalidQuery(SearchError, ValueError):
    """The search query is empty, not a mapping, or carries a bad payload."""


class DataFileNotFound(SearchError, FileNotFoundError):
    pass


class DataFileContentInvalid(SearchError, ValueError):
    pass
