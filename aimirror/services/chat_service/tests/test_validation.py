"""Tests for chat request validation."""
import pytest

from aimirror.services.chat_service.validation import (
    MissingUserMessageError,
    RequestValidationError,
    validate_request,
)
from aimirror.shared.models import Role


def _messages(n, role="user"):
    return [{"role": role, "content": f"message {i}"} for i in range(n)]


class TestValidRequests:
    @pytest.mark.parametrize("count", [1, 2, 19, 20])
    def test_accepts_one_to_twenty(self, count):
        conversation = validate_request({"messages": _messages(count)})

        assert len(conversation) == count
        assert isinstance(conversation, tuple)

    def test_preserves_order_and_roles(self):
        conversation = validate_request({"messages": [
            {"role": "system", "content": "context"},
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "reply"},
            {"role": "user", "content": "second"},
        ]})

        assert [m.role for m in conversation] == [Role.SYSTEM, Role.USER, Role.ASSISTANT, Role.USER]
        assert [m.content for m in conversation] == ["context", "first", "reply", "second"]

    def test_content_at_limit(self):
        conversation = validate_request({"messages": [{"role": "user", "content": "x" * 4000}]})
        assert len(conversation[0].content) == 4000

    def test_unknown_top_level_keys_ignored(self):
        conversation = validate_request({"messages": _messages(1), "client": "web"})
        assert len(conversation) == 1


class TestStructuralFailures:
    def test_missing_messages_key(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request({})

        assert exc_info.value.error == "Invalid request"
        assert "messages" in exc_info.value.details

    def test_empty_list(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request({"messages": []})
        assert "messages" in exc_info.value.details

    def test_more_than_twenty(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request({"messages": _messages(21)})
        assert "messages" in exc_info.value.details

    @pytest.mark.parametrize("payload", [None, [], "text", 42])
    def test_non_object_body(self, payload):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request(payload)
        assert "body" in exc_info.value.details

    def test_reports_every_violation(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request({"messages": [
                {"role": "robot", "content": "hi"},
                {"role": "user", "content": ""},
                {"role": "user", "content": "x" * 4001},
                {"role": "user"},
                {"role": "user", "content": 7},
            ]})

        details = exc_info.value.details
        assert set(details) == {
            "messages.0.role",
            "messages.1.content",
            "messages.2.content",
            "messages.3.content",
            "messages.4.content",
        }
        assert all(isinstance(reasons, list) and reasons for reasons in details.values())

    def test_error_dict_includes_details(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request({})

        body = exc_info.value.to_dict()
        assert body["error"] == "Invalid request"
        assert body["details"]["messages"]


class TestMissingUserMessage:
    def test_no_user_turn(self):
        with pytest.raises(MissingUserMessageError) as exc_info:
            validate_request({"messages": [
                {"role": "assistant", "content": "hello"},
                {"role": "system", "content": "context"},
            ]})

        assert exc_info.value.to_dict() == {"error": "Missing user message"}

    def test_structural_errors_take_precedence(self):
        with pytest.raises(RequestValidationError) as exc_info:
            validate_request({"messages": _messages(21, role="assistant")})

        assert not isinstance(exc_info.value, MissingUserMessageError)
