"""
Domain exceptions - Semantic error types for code delivery.

Policy rejections (cooldown, expiry, attempt exhaustion, mismatch) are
returned as results, not raised. These exceptions cover faults on the
delivery channel only.
"""


class MailcodeError(Exception):
    """Base class for mailcode errors."""

    pass


class ChannelError(MailcodeError):
    """Delivery channel could not carry a task."""

    pass


class MalformedTaskError(ChannelError):
    """Payload could not be decoded into a DeliveryTask."""

    pass
