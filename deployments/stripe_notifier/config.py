"""
Deployment settings for the Stripe notifier application.

Settings are read from CDK context first (cdk.json or `cdk synth -c key=value`)
and fall back to environment variables:

    eventBusName  / STRIPE_EVENT_BUS_NAME   partner event bus name (required)
    eventTypes    / STRIPE_EVENT_TYPES      list or comma-separated string
    envName       / ENV_NAME                environment name, default 'dev'

Missing settings are reported together through ConfigurationError.
"""

import os
from typing import Any, Dict, List, Mapping, Optional, TypedDict

from constructs import Node

from .errors import ConfigurationError


DEFAULT_EVENT_TYPES = [
    'payment_intent.succeeded',
    'customer.created',
]

DEFAULT_ENV_NAME = 'dev'


class NotifierSettings(TypedDict):
    """Resolved settings for StripeNotifierStack."""
    env_name: str
    event_bus_name: str
    event_types: List[str]


def parse_event_types(value: Any) -> List[str]:
    """
    Normalize an event types setting into a list.

    Accepts a list (from cdk.json) or a comma-separated string (from the
    command line or environment). Order is kept and blanks are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(',')
    return [str(item).strip() for item in value if str(item).strip()]


def _lookup(node: Node, environ: Mapping[str, str], context_key: str, env_key: str) -> Optional[Any]:
    value = node.try_get_context(context_key)
    if value is None or value == '':
        value = environ.get(env_key) or None
    return value


def resolve_notifier_settings(
    node: Node,
    environ: Optional[Mapping[str, str]] = None,
) -> NotifierSettings:
    """
    Resolve notifier settings from CDK context and environment variables.

    Args:
        node: Construct node to read context from (usually app.node)
        environ: Environment mapping, defaults to os.environ

    Returns:
        NotifierSettings

    Raises:
        ConfigurationError: If the event bus name is missing or the event
            types resolve to an empty list
    """
    if environ is None:
        environ = os.environ

    errors: List[Dict[str, str]] = []

    event_bus_name = _lookup(node, environ, 'eventBusName', 'STRIPE_EVENT_BUS_NAME')
    if not event_bus_name:
        errors.append({
            'field': 'eventBusName',
            'message': 'eventBusName context or STRIPE_EVENT_BUS_NAME is required'
        })

    raw_event_types = _lookup(node, environ, 'eventTypes', 'STRIPE_EVENT_TYPES')
    if raw_event_types is None:
        event_types = list(DEFAULT_EVENT_TYPES)
    else:
        event_types = parse_event_types(raw_event_types)
        if not event_types:
            errors.append({
                'field': 'eventTypes',
                'message': 'eventTypes must list at least one Stripe event type'
            })

    env_name = _lookup(node, environ, 'envName', 'ENV_NAME') or DEFAULT_ENV_NAME

    if errors:
        raise ConfigurationError('StripeNotifier settings', errors)

    return NotifierSettings(
        env_name=env_name,
        event_bus_name=event_bus_name,
        event_types=event_types,
    )
