"""
Stripe notifier configuration validation.

This module implements validation for the StripeEventsToSns construct inputs.
All checks run before any resource is declared, and every violation is
collected instead of stopping at the first one, so a single `cdk synth`
reports everything that needs fixing.

Validates:
- event_bus is present
- topic is present
- event_types is a non-empty sequence
- message_template is present and callable
- the rendered message template is JSON-like
"""

from collections.abc import Sequence
from typing import Any, Dict, List


def validate_notifier_props(
    event_bus: Any,
    topic: Any,
    event_types: Any,
    message_template: Any,
) -> List[Dict[str, str]]:
    """
    Validate StripeEventsToSns construct properties.

    Produces at most one violation per field, so the number of violations
    equals the number of missing or empty fields.

    Args:
        event_bus: EventBridge bus the Stripe partner delivers to
        topic: SNS topic that receives formatted notifications
        event_types: Stripe event types to relay
        message_template: Callable building the message from EventField

    Returns:
        List of validation errors. Empty list if validation passes.
        Each error is a dict with 'field' and 'message' keys.

    Examples:
        >>> validate_notifier_props(bus, topic, [], template)
        [{'field': 'event_types', 'message': 'event_types must be a non-empty list'}]
    """
    errors: List[Dict[str, str]] = []

    if event_bus is None:
        errors.append({
            'field': 'event_bus',
            'message': 'event_bus is required'
        })

    if topic is None:
        errors.append({
            'field': 'topic',
            'message': 'topic is required'
        })

    # A bare string is a Sequence but is never a list of event types;
    # generators and other unsized iterables are rejected too
    if (
        not isinstance(event_types, Sequence)
        or isinstance(event_types, str)
        or len(event_types) == 0
    ):
        errors.append({
            'field': 'event_types',
            'message': 'event_types must be a non-empty list'
        })

    if message_template is None:
        errors.append({
            'field': 'message_template',
            'message': 'message_template is required'
        })
    elif not callable(message_template):
        errors.append({
            'field': 'message_template',
            'message': 'message_template must be callable'
        })

    return errors


def validate_message_payload(payload: Any, path: str = '$') -> List[Dict[str, str]]:
    """
    Check that a rendered message template is JSON-like.

    EventField tokens are strings, so they pass as leaves. Dict keys must be
    strings because they become JSON object keys in the input template.

    Args:
        payload: Value returned by the message template
        path: Location of payload inside the rendered message

    Returns:
        List of validation errors, one per offending leaf.
    """
    if payload is None or isinstance(payload, (str, bool, int, float)):
        return []

    errors: List[Dict[str, str]] = []

    if isinstance(payload, dict):
        for key, value in payload.items():
            if not isinstance(key, str):
                errors.append({
                    'field': 'message_template',
                    'message': f'message_template key {key!r} at {path} must be a string'
                })
                continue
            errors.extend(validate_message_payload(value, f'{path}.{key}'))
        return errors

    if isinstance(payload, (list, tuple)):
        for index, item in enumerate(payload):
            errors.extend(validate_message_payload(item, f'{path}[{index}]'))
        return errors

    errors.append({
        'field': 'message_template',
        'message': (
            f'message_template returned a non-serializable '
            f'{type(payload).__name__} at {path}'
        )
    })
    return errors
