"""
Domain Errors

Raised by entity factories, value objects and persistence adapters.
Each error carries a stable code that services forward inside Result errors.
"""


class DomainError(Exception):
    code = "DOMAIN_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Input breaks an entity or value object invariant"""

    code = "VALIDATION_ERROR"


class InvalidMovieDataError(DomainValidationError):
    pass


class InvalidMovieSessionDataError(DomainValidationError):
    pass


class InvalidUserDataError(DomainValidationError):
    pass


class InvalidUserRoleError(DomainValidationError):
    pass


class InvalidPasswordError(DomainValidationError):
    pass


class InvalidTokenError(DomainValidationError):
    pass


class TicketAlreadyUsedError(DomainError):
    code = "TICKET_ALREADY_USED"

    def __init__(self, ticket_id):
        super().__init__(f"Ticket with ID {ticket_id} has already been used")
        self.ticket_id = ticket_id


class DuplicateEntryError(DomainError):
    """A unique index rejected the write"""

    code = "DUPLICATE_ENTRY"
