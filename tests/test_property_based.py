"""
Property-based tests for the Stripe notifier.
Uses Hypothesis to generate test cases and verify properties hold across all inputs.
"""

from hypothesis import given, strategies as st, settings, HealthCheck
from aws_cdk import App, Stack
from aws_cdk import aws_events as events
from aws_cdk import aws_sns as sns
from aws_cdk.assertions import Template

from stripe_notifier import StripeEventsToSns
from stripe_notifier.validation import validate_notifier_props, validate_message_payload


# Stripe event type names: lowercase segments joined by dots
stripe_event_type = st.from_regex(r'[a-z][a-z_]{0,15}(\.[a-z][a-z_]{0,15}){0,2}', fullmatch=True)

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.floats(allow_nan=False) | st.text(),
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(), children, max_size=4),
    max_leaves=20,
)


def _template(event_field):
    return {'data': event_field.from_path('$.detail')}


class TestValidatorProperties:
    """Property-based tests for property validation."""

    @given(
        missing_bus=st.booleans(),
        missing_topic=st.booleans(),
        missing_types=st.booleans(),
        missing_template=st.booleans(),
        event_types=st.lists(stripe_event_type, min_size=1, max_size=5),
    )
    @settings(max_examples=100)
    def test_violation_count_equals_missing_fields(
        self, missing_bus, missing_topic, missing_types, missing_template, event_types
    ):
        """
        Property: The number of violations equals the number of missing fields.
        """
        errors = validate_notifier_props(
            None if missing_bus else object(),
            None if missing_topic else object(),
            [] if missing_types else event_types,
            None if missing_template else _template,
        )

        expected = sum([missing_bus, missing_topic, missing_types, missing_template])
        assert len(errors) == expected
        assert len({e['field'] for e in errors}) == expected

    @given(json_values)
    @settings(max_examples=100)
    def test_json_values_are_serializable(self, payload):
        """
        Property: Any JSON-like value is an acceptable template result.
        """
        assert validate_message_payload(payload) == []


class TestRuleProperties:
    """Property-based tests over synthesized rules."""

    @given(st.lists(stripe_event_type, min_size=1, max_size=6))
    @settings(max_examples=10, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_detail_types_match_input_exactly(self, event_types):
        """
        Property: The rule's detail-type list equals the input, same order,
        no deduplication, and exactly one target is attached.
        """
        app = App()
        stack = Stack(app, 'PropertyStack')
        StripeEventsToSns(
            stack,
            'Notifier',
            event_bus=events.EventBus(stack, 'Bus'),
            topic=sns.Topic(stack, 'Topic'),
            event_types=event_types,
            message_template=_template,
        )

        rules = Template.from_stack(stack).find_resources('AWS::Events::Rule')
        assert len(rules) == 1
        properties = next(iter(rules.values()))['Properties']
        assert properties['EventPattern']['detail-type'] == event_types
        assert len(properties['Targets']) == 1
