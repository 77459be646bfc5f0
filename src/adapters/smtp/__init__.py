"""SMTP adapters - verification code delivery."""

from .console import ConsoleCodeSender, format_delivery_line

__all__ = ["ConsoleCodeSender", "format_delivery_line"]
