"""
Domain exceptions raised by repositories and services.

They subclass ValueError, like the validation errors repositories raised
before, so callers that only care about "bad data" can catch ValueError.
Routers translate each one to the matching HTTP status.
"""


class ServiflexError(ValueError):
    """Base exception for Serviflex domain errors."""


class DocumentNotFoundError(ServiflexError):
    """Raised when a referenced document does not exist (404)."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document not found in {collection}: {document_id}")


class DuplicateEmailError(ServiflexError):
    """Raised when an email is already registered in a user collection (409)."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already registered: {email}")


class SlotValidationError(ServiflexError):
    """Raised when an appointment request does not fit the professional's schedule (400)."""
