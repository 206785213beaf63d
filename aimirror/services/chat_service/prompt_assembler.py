"""Assembles the message sequence sent to the completion service.

Instruction and digest come first so the model reads them as framing,
not as content to classify.
"""
from typing import Dict, List, Optional, Sequence

from aimirror.services.llm_service import ChatMessage
from aimirror.shared.models import Message, Role
from .prompts import SYSTEM_PROMPT

# Our roles -> chat-completions roles.
ROLE_MAP: Dict[Role, str] = {
    Role.USER: "user",
    Role.ASSISTANT: "assistant",
    Role.SYSTEM: "system",
}


def to_chat_message(message: Message) -> ChatMessage:
    return {"role": ROLE_MAP[message.role], "content": message.content}


def assemble_messages(
    conversation: Sequence[Message],
    digest: Optional[str] = None,
    system_prompt: str = SYSTEM_PROMPT,
) -> List[ChatMessage]:
    """Build [instruction, digest?, *conversation] in that order.

    Args:
        conversation: Validated conversation, chronological
        digest: Session digest text; omitted when None
        system_prompt: Fixed behavioral contract

    Returns:
        New list of chat messages; the conversation is not modified
    """
    messages: List[ChatMessage] = [{"role": "system", "content": system_prompt}]
    if digest is not None:
        messages.append({"role": "system", "content": digest})
    messages.extend(to_chat_message(m) for m in conversation)
    return messages
