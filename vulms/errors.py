class LibraryError(ValueError):
    """Base class for failures reported to the client as ``{"error": ...}``."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AuthRequired(LibraryError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(LibraryError):
    status_code = 401
    default_message = "Invalid credentials"


class AdminRequired(LibraryError):
    status_code = 403
    default_message = "Admin access required"


class ValidationError(LibraryError):
    status_code = 400
    default_message = "Invalid request"


class BorrowLimitExceeded(LibraryError):
    status_code = 400
    default_message = "Maximum borrowing limit reached (3 books)"


class BookUnavailable(LibraryError):
    status_code = 400
    default_message = "Book not available for borrowing"


class DuplicateBorrow(LibraryError):
    status_code = 400
    default_message = "You have already borrowed this book"


class BookNotFound(LibraryError):
    status_code = 404
    default_message = "Book not found"


class TransactionNotFound(LibraryError):
    status_code = 404
    default_message = "Transaction not found or already returned"


class StoreError(LibraryError):
    status_code = 500
    default_message = "Internal server error"
