"""Error taxonomy for account and ledger operations."""


class FinAPIError(Exception):
    """Base exception for all FinAPI errors."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AccountNotFoundError(FinAPIError):
    """Raised when no account exists for the given CPF."""

    default_message = "Customer not found"


class DuplicateAccountError(FinAPIError):
    """Raised when an account with the same CPF already exists."""

    default_message = "Customer already exists!"


class InsufficientFundsError(FinAPIError):
    """Raised when a withdrawal exceeds the current balance."""

    default_message = "Insufficient funds!"


class InvalidInputError(FinAPIError):
    """Raised when request data is malformed."""

    default_message = "Invalid input"


class MissingInputError(InvalidInputError):
    """Raised when a required field is absent."""

    default_message = "Missing required field"
