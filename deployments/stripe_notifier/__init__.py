"""Stripe events to SNS CDK constructs."""

from .errors import DomainError, ConfigurationError
from .notifier_construct import (
    StripeEventsToSns,
    STRIPE_PARTNER_SOURCE_PREFIX,
    RULE_DESCRIPTION,
)
from .notifier_stack import StripeNotifierStack, default_message_template
from .config import resolve_notifier_settings

__all__ = [
    "DomainError",
    "ConfigurationError",
    "StripeEventsToSns",
    "STRIPE_PARTNER_SOURCE_PREFIX",
    "RULE_DESCRIPTION",
    "StripeNotifierStack",
    "default_message_template",
    "resolve_notifier_settings",
]
