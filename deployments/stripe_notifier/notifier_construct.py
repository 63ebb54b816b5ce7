"""
Stripe events to SNS construct.

This module defines a construct that relays Stripe events, delivered through
the Stripe partner event source on an EventBridge bus, to an SNS topic.

Architecture:
- EventBridge rule matching source prefix 'aws.partner/stripe.com'
- Detail-type allow-list taken verbatim from the caller (order preserved)
- SNS topic resource policy statement scoped to this rule via aws:SourceArn
- SNS target with an input transformer built from a caller template

The message template runs once, at synthesis time. It receives the
aws_events.EventField helper and returns the message shape; EventField paths
become InputPathsMap entries that EventBridge resolves for every delivered
event.

Follows steering rules:
- Infrastructure definition only (no business logic)
- Fail fast on invalid input, reporting every violation at once
- Least privilege IAM permissions

Usage Example:
    from aws_cdk import Stack, aws_events as events, aws_sns as sns
    from stripe_notifier import StripeEventsToSns

    StripeEventsToSns(
        self,
        'PaymentNotifier',
        event_bus=partner_bus,
        topic=topic,
        event_types=['payment_intent.succeeded', 'customer.created'],
        message_template=lambda field: {
            'message': f"Stripe Event: {field.from_path('$.detail-type')}",
            'data': field.from_path('$.detail'),
        },
    )
"""

from typing import Any, Callable, Optional, Sequence, Type

from aws_cdk import (
    aws_events as events,
    aws_events_targets as targets,
    aws_iam as iam,
    aws_sns as sns,
)
from constructs import Construct

from .errors import ConfigurationError
from .logger import create_logger
from .validation import validate_notifier_props, validate_message_payload


STRIPE_PARTNER_SOURCE_PREFIX = 'aws.partner/stripe.com'
EVENTBRIDGE_SERVICE_PRINCIPAL = 'events.amazonaws.com'
SNS_PUBLISH_ACTION = 'sns:Publish'
RULE_DESCRIPTION = 'Generic rule to relay Stripe events to SNS'

MessageTemplate = Callable[[Type[events.EventField]], Any]


def _normalize_message(value: Any) -> Any:
    """Convert tuples to lists; jsii only marshals lists as JSON arrays."""
    if isinstance(value, dict):
        return {key: _normalize_message(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_message(item) for item in value]
    return value


class StripeEventsToSns(Construct):
    """
    Construct that relays Stripe partner events to an SNS topic.

    Validation happens before anything is declared. If the configuration is
    invalid, or the message template fails, no child resources are added.

    Attributes:
        rule: EventBridge rule filtering Stripe events
        event_pattern: Pattern the rule matches
        publish_statement: Statement added to the topic resource policy
        target_input: Input transformer sent to the SNS target
        message: Value returned by the message template
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        event_bus: Optional[events.IEventBus] = None,
        topic: Optional[sns.ITopic] = None,
        event_types: Optional[Sequence[str]] = None,
        message_template: Optional[MessageTemplate] = None,
        **kwargs
    ) -> None:
        """
        Initialize the Stripe events to SNS construct.

        Args:
            scope: CDK construct scope
            construct_id: Unique construct identifier
            event_bus: EventBridge bus receiving the Stripe partner events
            topic: SNS topic that receives formatted notifications
            event_types: Stripe event types to relay (e.g. 'customer.created')
            message_template: Callable that receives EventField and returns
                the message structure

        Raises:
            ConfigurationError: If any required property is missing or the
                template returns a non-serializable value
        """
        super().__init__(scope, construct_id, **kwargs)

        self.logger = create_logger(self, operation='stripe-events-to-sns')
        self.logger.log_composition_start(constructId=construct_id)

        errors = validate_notifier_props(event_bus, topic, event_types, message_template)
        if errors:
            self.logger.log_validation_error(errors)
            raise ConfigurationError('StripeEventsToSns', errors)

        self.event_bus = event_bus
        self.topic = topic
        self.event_types = list(event_types)

        # Render before declaring resources so a bad template leaves no partial tree
        self.message = self._render_message(message_template)
        self.target_input = events.RuleTargetInput.from_object(self.message)

        self.event_pattern = self._build_event_pattern()
        self.rule = self._create_rule()
        self.publish_statement = self._grant_publish()
        self._bind_target()

        self.logger.log_composition_complete(
            eventTypes=self.event_types,
            ruleId=self.rule.node.id,
            targetCount=1
        )

    def _render_message(self, message_template: MessageTemplate) -> Any:
        """
        Invoke the message template exactly once with the EventField helper.

        Exceptions raised by the template propagate unchanged.
        """
        message = message_template(events.EventField)

        errors = validate_message_payload(message)
        if errors:
            self.logger.log_validation_error(errors)
            raise ConfigurationError('StripeEventsToSns', errors)

        return _normalize_message(message)

    def _build_event_pattern(self) -> events.EventPattern:
        return events.EventPattern(
            # Prefix match: partner sources look like aws.partner/stripe.com/<account>/<id>
            source=events.Match.prefix(STRIPE_PARTNER_SOURCE_PREFIX),
            detail_type=list(self.event_types),
        )

    def _create_rule(self) -> events.Rule:
        """Create the rule on the configured bus."""
        rule = events.Rule(
            self,
            'StripeEventRule',
            event_bus=self.event_bus,
            event_pattern=self.event_pattern,
            description=RULE_DESCRIPTION,
        )

        self.logger.log_info(
            message='rule_declared',
            ruleId=rule.node.id,
            sourcePrefix=STRIPE_PARTNER_SOURCE_PREFIX
        )
        return rule

    def _grant_publish(self) -> iam.PolicyStatement:
        """
        Allow EventBridge to publish to the topic on behalf of this rule only.

        The aws:SourceArn condition pins the grant to this rule so no other
        rule can ride on the events.amazonaws.com principal.
        """
        statement = iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            principals=[iam.ServicePrincipal(EVENTBRIDGE_SERVICE_PRINCIPAL)],
            actions=[SNS_PUBLISH_ACTION],
            resources=[self.topic.topic_arn],
            conditions={
                'StringEquals': {
                    'aws:SourceArn': self.rule.rule_arn,
                },
            },
        )

        self.topic.add_to_resource_policy(statement)

        self.logger.log_info(
            message='publish_grant_declared',
            principal=EVENTBRIDGE_SERVICE_PRINCIPAL,
            action=SNS_PUBLISH_ACTION
        )
        return statement

    def _bind_target(self) -> None:
        self.rule.add_target(
            targets.SnsTopic(
                self.topic,
                message=self.target_input,
            )
        )
