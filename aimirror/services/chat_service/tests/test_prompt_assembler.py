"""Tests for prompt assembly."""
from aimirror.services.chat_service.prompt_assembler import assemble_messages
from aimirror.services.chat_service.prompts import SYSTEM_PROMPT
from aimirror.shared.models import Message, Role


CONVERSATION = (
    Message(Role.USER, "I feel insecure."),
    Message(Role.ASSISTANT, "What triggered it?"),
    Message(Role.USER, "A meeting."),
)


def test_instruction_then_digest_then_conversation():
    messages = assemble_messages(CONVERSATION, digest="DIGEST")

    assert messages == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "system", "content": "DIGEST"},
        {"role": "user", "content": "I feel insecure."},
        {"role": "assistant", "content": "What triggered it?"},
        {"role": "user", "content": "A meeting."},
    ]


def test_without_digest():
    messages = assemble_messages(CONVERSATION)

    assert len(messages) == 4
    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert messages[1]["role"] == "user"


def test_system_turns_from_client_keep_their_position():
    conversation = (Message(Role.SYSTEM, "client note"), Message(Role.USER, "hi"))

    messages = assemble_messages(conversation, digest="D")

    assert [m["content"] for m in messages[2:]] == ["client note", "hi"]


def test_conversation_not_modified():
    conversation = list(CONVERSATION)

    assemble_messages(conversation, digest="D")

    assert conversation == list(CONVERSATION)
