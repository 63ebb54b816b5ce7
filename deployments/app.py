#!/usr/bin/env python3
"""
CDK Application Entry Point.

This is the main entry point for the CDK application. It resolves the
notifier settings and creates the Stripe notifier stack.

Usage:
    # Synthesize CloudFormation templates
    cdk synth -c eventBusName=aws.partner/stripe.com/ed_test_123

    # Relay a custom set of Stripe events
    cdk deploy -c eventBusName=aws.partner/stripe.com/ed_test_123 \
        -c eventTypes=invoice.payment_succeeded,charge.dispute.created

Environment Configuration:
    - CDK_DEFAULT_ACCOUNT: AWS account ID
    - CDK_DEFAULT_REGION: AWS region
    - STRIPE_EVENT_BUS_NAME: partner event bus name (if not given as context)
    - STRIPE_EVENT_TYPES: comma-separated Stripe event types
    - ENV_NAME: environment name, default 'dev'
    - STRIPE_NOTIFIER_LOGGING: 'false' to silence synthesis logs

Follows steering rules:
- Explicit over implicit (all configurations declared)
- Environment-specific naming
- Stack naming convention: stripe-notifier-<env>-stack
"""

import os
from aws_cdk import App, Environment

from stripe_notifier.config import resolve_notifier_settings
from stripe_notifier.notifier_stack import StripeNotifierStack


app = App()

account = os.environ.get('CDK_DEFAULT_ACCOUNT')
region = os.environ.get('CDK_DEFAULT_REGION')

env = None
if account and region:
    env = Environment(account=account, region=region)

settings = resolve_notifier_settings(app.node)

StripeNotifierStack(
    app,
    f"stripe-notifier-{settings['env_name']}-stack",
    event_bus_name=settings['event_bus_name'],
    event_types=settings['event_types'],
    env_name=settings['env_name'],
    env=env,
    description=f"Stripe events to SNS notifier - {settings['env_name']}",
)

app.synth()
