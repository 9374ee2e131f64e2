import pytest

from relay.api.validation import RequestValidator
from relay.core.errors import RequestValidationError
from relay.core.messages import ChatMessage
from tests.fixtures.fake_providers import make_registry


@pytest.fixture
def validator():
    return RequestValidator(("relay-chat", "relay-fast"), make_registry())


def _body(**overrides):
    body = {"model": "relay-chat", "messages": [{"role": "user", "content": "Hi"}]}
    body.update(overrides)
    return body


@pytest.mark.unit
class TestRequestValidator:
    def test_valid_request_is_normalized(self, validator):
        request = validator.validate_body(_body(stream=True))

        assert request.model == "relay-chat"
        assert request.messages == (ChatMessage(role="user", content="Hi"),)
        assert request.stream is True
        assert request.pinned is None
        assert not request.is_pinned

    def test_stream_defaults_to_false(self, validator):
        assert validator.validate_body(_body()).stream is False

    def test_provider_pins_catalog_position(self, validator):
        request = validator.validate_body(_body(provider="  Open-Router! "))

        assert request.is_pinned
        entry, index = request.pinned
        assert entry.id == "openrouter"
        assert index == 2

    def test_blank_provider_is_ignored(self, validator):
        assert validator.validate_body(_body(provider="   ")).pinned is None

    @pytest.mark.parametrize(
        "body, field, message",
        [
            ([], "body", "Request body must be a JSON object"),
            ({"messages": []}, "model", "Missing required field: 'model'"),
            ({"model": "relay-chat"}, "messages", "Missing required field: 'messages'"),
            ({"model": "relay-chat", "messages": "hi"}, "messages", "Missing required field: 'messages'"),
            (_body(messages=["hi"]), "messages", "Each message must be an object"),
            (_body(messages=[{"role": "user"}]), "messages", "Each message must include role and content"),
            (
                _body(messages=[{"role": "tool", "content": "x"}]),
                "messages",
                "Invalid role: tool",
            ),
            (_body(model="gpt-4"), "model", "Model not available: gpt-4"),
            (_body(provider="anthropic"), "provider", "Unknown provider: anthropic"),
        ],
    )
    def test_rejections(self, validator, body, field, message):
        with pytest.raises(RequestValidationError) as exc_info:
            validator.validate_body(body)

        assert exc_info.value.field == field
        assert exc_info.value.message == message
        assert exc_info.value.status_code == 400

    def test_message_shape_is_checked_before_allow_list(self, validator):
        body = _body(model="gpt-4", messages=[{"role": "tool", "content": "x"}])

        with pytest.raises(RequestValidationError, match="Invalid role: tool"):
            validator.validate_body(body)

    def test_model_is_checked_before_provider(self, validator):
        with pytest.raises(RequestValidationError, match="Model not available"):
            validator.validate_body(_body(model="gpt-4", provider="nope"))

    def test_invalid_json_body(self, validator):
        with pytest.raises(RequestValidationError, match="Invalid JSON body"):
            validator.validate(b"{not json")

    def test_deeply_nested_body_is_invalid_json(self, validator):
        with pytest.raises(RequestValidationError, match="Invalid JSON body"):
            validator.validate(b"[" * 200000)

    def test_raw_body_is_parsed(self, validator):
        request = validator.validate(b'{"model": "relay-fast", "messages": []}')
        assert request.model == "relay-fast"
        assert request.messages == ()
