"""
Domain Error Taxonomy

Errors shared by every bounded context. Context-specific errors
(conflicts, lifecycle violations) subclass DomainError in their own
domain package.
"""


class DomainError(Exception):
    """Base class for errors raised by domain and application code"""

    code = 'domain_error'

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError, ValueError):
    """Malformed input: bad dates, non-positive amounts, missing fields"""

    code = 'validation_error'


class InvalidRangeError(ValidationError):
    """Date range whose end is not strictly after its start"""

    code = 'invalid_range'


class NotFoundError(DomainError, LookupError):
    """Referenced object does not exist"""

    code = 'not_found'

    def __init__(self, entity: str, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} {identifier} not found")
