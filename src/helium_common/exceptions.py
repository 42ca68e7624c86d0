"""Failures raised by the document store layer.

``DocumentNotFoundError`` is an expected outcome of a point read and is kept
outside the ``StoreError`` hierarchy. Everything else the store reports is a
``StoreError``: transient ones may succeed on a later, independent attempt
but are never retried here.
"""

from typing import ClassVar


class StoreError(Exception):
    """A store-reported failure, carrying the store's code and message."""

    transient: ClassVar[bool] = False

    def __init__(self, message: str, status_code: int | None = None, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.operation = operation

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"Cosmos error {self.status_code}: {self.message}"


class TransientStoreError(StoreError):
    """Connectivity, throttling or timeout failure."""

    transient: ClassVar[bool] = True


class FatalStoreError(StoreError):
    """Any other store-reported failure, e.g. a malformed query."""


class StoreConfigurationError(StoreError):
    """The collection handle could not be resolved.

    The next call re-attempts resolution, so this is only fatal for the call
    that observed it.
    """

    transient: ClassVar[bool] = True


class DocumentNotFoundError(LookupError):
    """The store holds no document for the given partition key and id."""

    def __init__(self, document_id: str, partition_key: str) -> None:
        super().__init__(f"Document {document_id!r} not found in partition {partition_key!r}")
        self.document_id = document_id
        self.partition_key = partition_key
