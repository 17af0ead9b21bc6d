"""
Our Corner - Request Boundary Errors

Raised by the corner engine, turned into responses by the views.
"""


class CornerError(Exception):
    """Base class for failures that map to a client-facing response."""

    status = 400
    code = 'error'
    default_message = 'Something went wrong.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotPaired(CornerError):
    """The caller has no couple."""

    status = 400
    code = 'not_paired'
    default_message = 'Connect with your partner first.'


class ItemNotFound(CornerError):
    """The item doesn't exist or belongs to another couple."""

    status = 404
    code = 'not_found'
    default_message = 'Item not found.'


class InvalidRequest(CornerError):
    status = 400
    code = 'validation'
    default_message = 'Invalid request.'
