"""
Stripe Notifier CDK Stack.

This module defines the deployable stack that relays Stripe partner events to
an SNS topic.

Stack naming convention: stripe-notifier-<env>-stack

Architecture:
- Existing Stripe partner event bus, imported by name
- SNS topic for Stripe notifications
- StripeEventsToSns construct (rule, topic policy grant, SNS target)
- CloudFormation outputs for the topic and rule

Usage Example:
    from aws_cdk import App
    from stripe_notifier.notifier_stack import StripeNotifierStack

    app = App()
    StripeNotifierStack(
        app,
        'stripe-notifier-dev-stack',
        event_bus_name='aws.partner/stripe.com/ed_test_123',
        event_types=['payment_intent.succeeded'],
        env_name='dev',
    )
    app.synth()
"""

from typing import Any, Dict, Optional, Sequence

from aws_cdk import (
    aws_events as events,
    aws_sns as sns,
    Stack,
    CfnOutput,
    Tags,
)
from constructs import Construct

from .notifier_construct import MessageTemplate, StripeEventsToSns


def default_message_template(event_field) -> Dict[str, Any]:
    """Message with the event type in the text and the Stripe payload as data."""
    return {
        'message': f"Stripe Event: {event_field.from_path('$.detail-type')}",
        'data': event_field.from_path('$.detail'),
    }


class StripeNotifierStack(Stack):
    """
    Main CDK stack for the Stripe notifier.

    Attributes:
        event_bus: Imported Stripe partner event bus
        topic: SNS topic receiving Stripe notifications
        notifier: StripeEventsToSns construct
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        event_bus_name: str,
        event_types: Sequence[str],
        env_name: str = 'dev',
        message_template: Optional[MessageTemplate] = None,
        **kwargs
    ) -> None:
        """
        Initialize Stripe Notifier Stack.

        Args:
            scope: CDK app scope
            construct_id: Stack identifier
            event_bus_name: Name of the Stripe partner event bus
            event_types: Stripe event types to relay
            env_name: Environment name (dev, staging, prod, etc.)
            message_template: Optional template, defaults to default_message_template
            **kwargs: Additional stack properties (env, description, etc.)
        """
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = env_name

        Tags.of(self).add('Service', 'stripe-notifier')
        Tags.of(self).add('Environment', env_name)
        Tags.of(self).add('ManagedBy', 'CDK')

        # The partner bus is created by the Stripe integration, not by this stack
        self.event_bus = events.EventBus.from_event_bus_name(
            self,
            'StripeEventBus',
            event_bus_name,
        )

        self.topic = sns.Topic(
            self,
            'StripeNotificationsTopic',
            display_name=f'Stripe notifications ({env_name})',
        )

        self.notifier = StripeEventsToSns(
            self,
            'StripeNotifier',
            event_bus=self.event_bus,
            topic=self.topic,
            event_types=event_types,
            message_template=message_template or default_message_template,
        )

        CfnOutput(
            self,
            'TopicArn',
            value=self.topic.topic_arn,
            description='Stripe notifications SNS topic ARN',
            export_name=f'{construct_id}-topic-arn',
        )

        CfnOutput(
            self,
            'RuleArn',
            value=self.notifier.rule.rule_arn,
            description='Stripe event relay rule ARN',
            export_name=f'{construct_id}-rule-arn',
        )

        CfnOutput(
            self,
            'RuleName',
            value=self.notifier.rule.rule_name,
            description='Stripe event relay rule name',
            export_name=f'{construct_id}-rule-name',
        )
