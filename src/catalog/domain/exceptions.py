"""Domain-level exceptions.

Client-facing problems (bad sort keys, malformed cursors) derive from
ValidationError; server-side problems (configuration, indexing, storage
mapping) derive from RepositoryError. The CLI layer catches
DomainException uniformly and displays the message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A caller supplied input that violates a rule."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


# --- Ordering ---------------------------------------------------------------


class OrderByError(ValidationError):
    """An OrderBy builder was used incorrectly."""


class InvalidKeyError(OrderByError):
    """The key is not part of the sort vocabulary."""


class DuplicateKeyError(OrderByError):
    """The key was already added."""


class ConflictingKeyError(OrderByError):
    """The key's mirror (same field, opposite direction) was already added."""


# --- Pagination -------------------------------------------------------------


class InvalidCursorError(ValidationError):
    """A pagination cursor could not be interpreted."""


class InvalidPageSizeError(ValidationError):
    """A page size was negative."""


# --- Repository -------------------------------------------------------------


class RepositoryError(DomainException):
    """A repository could not be built or could not answer a query."""


class ConfigurationError(RepositoryError):
    """The service was configured with something it does not support."""


class UnsupportedOrderKeyError(ConfigurationError):
    """A backend has no translation for a sort key."""


class UnsupportedDatasetError(ConfigurationError):
    """The requested bootstrap dataset does not exist."""


class UnimplementedRepositoryError(ConfigurationError):
    """The requested repository backend does not exist."""


class DatasetError(RepositoryError):
    """A bootstrap dataset document is malformed."""


class SearchIndexError(RepositoryError):
    """The text index could not be built or queried."""


class ProductMappingError(RepositoryError):
    """A stored row could not be turned back into a Product."""
