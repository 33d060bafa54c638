"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CouponStorageError(DomainException):
    """Coupon inventory could not be read from or written to its durable medium"""

    pass


class NotificationValidationError(DomainException):
    """Quote email cannot be attempted: bad address or missing configuration"""

    pass


class AddressValidationError(NotificationValidationError):
    """An email address is empty or not a valid mailbox"""

    pass


class MailConfigurationError(NotificationValidationError):
    """A required mail transport setting is missing"""

    pass


class MailTransportError(DomainException):
    """Mail transport rejected or failed the delivery"""

    pass


class MailDispatchTimeout(DomainException):
    """Mail transport did not complete before the dispatch deadline"""

    pass
