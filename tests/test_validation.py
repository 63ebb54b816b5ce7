"""
Unit tests for validation functions.
Tests notifier property validation and message template payload checks.
"""

import pytest

from stripe_notifier.validation import validate_notifier_props, validate_message_payload


def _template(event_field):
    return {'data': event_field.from_path('$.detail')}


class TestNotifierPropsValidation:
    """Test StripeEventsToSns property validation."""

    def setup_method(self):
        """Setup for each test."""
        self.event_bus = object()
        self.topic = object()
        self.event_types = ['payment_intent.succeeded', 'customer.created']

    def test_valid_props(self):
        """Test validation passes when all fields are present."""
        errors = validate_notifier_props(self.event_bus, self.topic, self.event_types, _template)
        assert errors == []

    def test_missing_event_bus(self):
        """Test validation fails when event_bus is missing."""
        errors = validate_notifier_props(None, self.topic, self.event_types, _template)
        assert errors == [{'field': 'event_bus', 'message': 'event_bus is required'}]

    def test_missing_topic(self):
        """Test validation fails when topic is missing."""
        errors = validate_notifier_props(self.event_bus, None, self.event_types, _template)
        assert errors == [{'field': 'topic', 'message': 'topic is required'}]

    def test_missing_event_types(self):
        """Test validation fails when event_types is missing."""
        errors = validate_notifier_props(self.event_bus, self.topic, None, _template)
        assert [e['field'] for e in errors] == ['event_types']

    def test_empty_event_types(self):
        """Test validation fails when event_types is empty."""
        errors = validate_notifier_props(self.event_bus, self.topic, [], _template)
        assert len(errors) == 1
        assert errors[0]['field'] == 'event_types'
        assert 'non-empty' in errors[0]['message']

    def test_event_types_as_bare_string(self):
        """Test a single string is not accepted as a list of event types."""
        errors = validate_notifier_props(self.event_bus, self.topic, 'customer.created', _template)
        assert [e['field'] for e in errors] == ['event_types']

    def test_event_types_as_tuple(self):
        """Test any non-empty sequence is accepted."""
        errors = validate_notifier_props(self.event_bus, self.topic, ('customer.created',), _template)
        assert errors == []

    def test_event_types_as_generator(self):
        """Test an unsized iterable is reported as an event_types violation."""
        event_types = (name for name in ['customer.created'])
        errors = validate_notifier_props(self.event_bus, self.topic, event_types, _template)
        assert [e['field'] for e in errors] == ['event_types']

    def test_missing_message_template(self):
        """Test validation fails when message_template is missing."""
        errors = validate_notifier_props(self.event_bus, self.topic, self.event_types, None)
        assert errors == [{'field': 'message_template', 'message': 'message_template is required'}]

    def test_message_template_not_callable(self):
        """Test validation fails when message_template is not callable."""
        errors = validate_notifier_props(self.event_bus, self.topic, self.event_types, {'data': 'x'})
        assert errors == [{'field': 'message_template', 'message': 'message_template must be callable'}]

    def test_all_fields_missing_reports_every_violation(self):
        """Test every missing field is reported, in declaration order."""
        errors = validate_notifier_props(None, None, [], None)
        assert [e['field'] for e in errors] == [
            'event_bus',
            'topic',
            'event_types',
            'message_template',
        ]


class TestMessagePayloadValidation:
    """Test rendered message template validation."""

    @pytest.mark.parametrize('payload', [
        None,
        'Stripe Event',
        42,
        1.5,
        True,
        ['a', 1, None],
        ('a', 'b'),
        {'message': 'hello', 'data': {'nested': [1, 2, {'deep': False}]}},
    ])
    def test_json_like_payloads_pass(self, payload):
        """Test JSON-like values are accepted."""
        assert validate_message_payload(payload) == []

    def test_set_is_rejected(self):
        """Test a set is reported with its location."""
        errors = validate_message_payload({'data': {'ids': {1, 2}}})
        assert len(errors) == 1
        assert errors[0]['field'] == 'message_template'
        assert '$.data.ids' in errors[0]['message']
        assert 'set' in errors[0]['message']

    def test_non_string_key_is_rejected(self):
        """Test dict keys must be strings."""
        errors = validate_message_payload({1: 'one'})
        assert len(errors) == 1
        assert 'must be a string' in errors[0]['message']

    def test_list_index_in_path(self):
        """Test list positions appear in the reported path."""
        errors = validate_message_payload({'items': ['ok', object()]})
        assert len(errors) == 1
        assert '$.items[1]' in errors[0]['message']

    def test_every_offending_leaf_is_reported(self):
        """Test violations are accumulated, not stopped at the first."""
        errors = validate_message_payload({'a': {1}, 'b': [object(), 'fine'], 'c': 'fine'})
        assert len(errors) == 2
