"""Session digest - short-range continuity without persistent memory.

Built from the current request's messages only and discarded when the
request returns. Nothing here is stored.
"""
from typing import Sequence

from aimirror.shared.models import Message, Role
from .prompts import DIGEST_TEMPLATE, DIGEST_THEME_LIMIT, DIGEST_USER_TURNS


def recent_user_themes(
    conversation: Sequence[Message],
    turns: int = DIGEST_USER_TURNS,
    limit: int = DIGEST_THEME_LIMIT,
) -> str:
    """Join the last `turns` user messages with spaces, cut to `limit` chars."""
    user_contents = [m.content for m in conversation if m.role is Role.USER]
    recent = user_contents[-turns:] if turns > 0 else []
    return " ".join(recent)[:limit]


def build_session_digest(conversation: Sequence[Message]) -> str:
    """Render the session-only summary sent as a second system message.

    An empty conversation, or one without user turns, still yields the
    template with an empty theme.
    """
    return DIGEST_TEMPLATE.format(themes=recent_user_themes(conversation))
