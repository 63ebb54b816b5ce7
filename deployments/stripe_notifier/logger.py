"""
Structured logging utility for construct synthesis.

This module provides a centralized logging utility that writes one JSON object
per line while constructs are being composed. Every entry carries the construct
path as its correlation ID so log lines from several notifier instances in one
`cdk synth` run can be told apart.

Follows steering rules:
- Log composition lifecycle with correlation ID
- Log validation errors with context (no sensitive data)
- Use consistent log format

Configuration:
- STRIPE_NOTIFIER_LOGGING: set to 'false', '0' or 'off' to silence output
"""

import json
import os
import time
from datetime import datetime, timezone
from typing import Dict, Any, List


# Sensitive field names that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'token',
    'secret',
    'apikey',
    'api_key',
    'authorization',
    'credentials',
    'privatekey',
    'private_key',
    'webhooksecret',
    'webhook_secret',
    'signingsecret',
    'signing_secret',
}

LOGGING_ENV_VAR = 'STRIPE_NOTIFIER_LOGGING'


def logging_enabled() -> bool:
    """Return False when STRIPE_NOTIFIER_LOGGING switches logging off."""
    value = os.environ.get(LOGGING_ENV_VAR, 'true')
    return value.strip().lower() not in {'false', '0', 'off', 'no'}


class StructuredLogger:
    """
    Structured logger for construct composition.

    Usage:
        logger = StructuredLogger(correlation_id='Stack/Notifier', operation='stripe-events-to-sns')
        logger.log_composition_start(event_type_count=2)
        # ... declare resources ...
        logger.log_composition_complete(rule_id='StripeEventRule')
    """

    def __init__(self, correlation_id: str, operation: str):
        """
        Initialize the structured logger.

        Args:
            correlation_id: Construct path used to correlate log lines
            operation: Operation name (e.g., 'stripe-events-to-sns')
        """
        self.correlation_id = correlation_id
        self.operation = operation
        self.start_time = time.time()
        self.enabled = logging_enabled()

    def _sanitize_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Remove sensitive fields from log data.

        Args:
            data: Dictionary that may contain sensitive fields

        Returns:
            Sanitized dictionary with sensitive fields redacted
        """
        if not isinstance(data, dict):
            return data

        sanitized = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_FIELDS:
                sanitized[key] = '[REDACTED]'
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_data(value)
            elif isinstance(value, list):
                sanitized[key] = [
                    self._sanitize_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                sanitized[key] = value

        return sanitized

    def _log(self, event: str, **kwargs: Any) -> None:
        """
        Internal method to write structured log entry.

        Args:
            event: Event type/name
            **kwargs: Additional fields to include in log entry
        """
        if not self.enabled:
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'correlationId': self.correlation_id,
            'operation': self.operation,
            'event': event,
            **self._sanitize_data(kwargs)
        }

        # default=str keeps unresolved CDK tokens printable
        print(json.dumps(log_entry, default=str))

    def _elapsed_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)

    def log_composition_start(self, **additional_fields: Any) -> None:
        """
        Log composition start event.

        This should be called before validation runs.
        """
        self._log('composition_start', **additional_fields)

    def log_composition_complete(self, **additional_fields: Any) -> None:
        """
        Log composition completion event with elapsed time.

        Example:
            logger.log_composition_complete(
                eventTypes=['payment_intent.succeeded'],
                targetCount=1
            )
        """
        self._log(
            'composition_complete',
            elapsedMs=self._elapsed_ms(),
            **additional_fields
        )

    def log_validation_error(
        self,
        errors: List[Dict[str, str]],
        **additional_fields: Any
    ) -> None:
        """
        Log validation error event.

        Args:
            errors: Validation error details
            **additional_fields: Additional fields to include in log
        """
        self._log(
            'validation_error',
            errors=errors,
            elapsedMs=self._elapsed_ms(),
            **additional_fields
        )

    def log_info(self, message: str, **additional_fields: Any) -> None:
        """
        Log informational event.

        Example:
            logger.log_info(message='rule_declared', ruleId='StripeEventRule')
        """
        self._log('info', message=message, **additional_fields)


def create_logger(scope: Any, operation: str) -> StructuredLogger:
    """
    Create a structured logger for a construct.

    Args:
        scope: Construct whose node path becomes the correlation ID
        operation: Operation name

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(scope.node.path, operation)
