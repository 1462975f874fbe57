from __future__ import annotations
from typing import Optional


class AdotError(Exception):
    """Base class for every failure a workflow surfaces to the CLI."""


class ConfigError(AdotError):
    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"{variable} not found in environment")


class RemoteAPIError(AdotError):
    """Geolocation service answered with a non-2xx status or an unusable body."""

    def __init__(self, status: int, body: str, reason: Optional[str] = None):
        self.status = status
        self.body = body
        detail = reason or "API request failed"
        super().__init__(f"{detail} with status {status}: {body}")


class MissingFieldError(AdotError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing {field} field")


class StoreError(AdotError):
    """A document store operation failed."""

    def __init__(
        self, operation: str, collection: str = "", doc_id: str = "", cause: str = ""
    ):
        self.operation = operation
        self.collection = collection
        self.doc_id = doc_id
        target = f" {collection}/{doc_id}" if collection else ""
        msg = f"{operation}{target} failed"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class NotFoundError(StoreError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__("delete", collection, doc_id, "document does not exist")
