"""
Error classes for the Stripe events notifier.

These error classes provide explicit, typed exceptions raised while a construct
or stack is being composed. Nothing here is raised at event-delivery time: every
failure surfaces during `cdk synth`, before a single resource is provisioned.
"""

from typing import Dict, Any, List


class DomainError(Exception):
    """
    Base class for all notifier errors.
    
    Carries a stable error code, a human-readable message and structured
    details for callers that want to inspect the failure programmatically.
    """
    
    def __init__(self, code: str, message: str, details: Dict[str, Any] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class ConfigurationError(DomainError):
    """
    Raised when required configuration is missing or malformed.
    
    The message lists every violation, one per line, and details['errors']
    holds the same violations as {'field', 'message'} dicts.
    """
    
    def __init__(self, component: str, errors: List[Dict[str, str]]):
        lines = '\n  - '.join(error['message'] for error in errors)
        super().__init__(
            'CONFIGURATION_ERROR',
            f'{component} validation failed:\n  - {lines}',
            {'errors': list(errors)}
        )
        self.component = component
    
    @property
    def errors(self) -> List[Dict[str, str]]:
        return self.details['errors']
