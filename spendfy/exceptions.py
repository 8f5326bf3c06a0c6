"""Domain exceptions raised by the CRUD and service layers.

Routers translate these into HTTP responses: ``NotFoundError`` becomes 404,
any ``ValueError`` (which every business-rule error is) becomes 400 and
``AuthenticationFailedError`` becomes 401.
"""


class NotFoundError(Exception):
    pass


class BusinessRuleError(ValueError):
    pass


class ConflictError(BusinessRuleError):
    """Uniqueness or budget period overlap violation."""


class DuplicateIdentityError(ConflictError):
    pass


class ForbiddenError(BusinessRuleError):
    """The resource belongs to another user."""


class InvalidRangeError(BusinessRuleError):
    pass


class AuthenticationFailedError(Exception):
    pass
