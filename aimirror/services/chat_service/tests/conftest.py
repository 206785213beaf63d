import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

from aimirror.services.llm_service import CompletionGateway, CompletionParams


@dataclass
class GatewayCall:
    messages: List[Dict[str, str]]
    params: CompletionParams


class FakeGateway(CompletionGateway):
    """
    Deterministic stand-in for the completion service.

    Returns `next_raw` verbatim, or raises `next_error` if set. Every call
    is recorded so tests can assert the model was (or was not) reached.
    """

    def __init__(self) -> None:
        self.calls: List[GatewayCall] = []
        self.next_raw: Optional[str] = None
        self.next_error: Optional[Exception] = None

    def set_reply(self, payload: Dict[str, Any]) -> None:
        self.next_raw = json.dumps(payload)

    def set_raw(self, raw: Optional[str]) -> None:
        self.next_raw = raw

    def set_error(self, error: Exception) -> None:
        self.next_error = error

    async def submit(self, messages, params):
        self.calls.append(GatewayCall(messages=list(messages), params=params))
        if self.next_error is not None:
            raise self.next_error
        return self.next_raw


@pytest.fixture
def gateway() -> FakeGateway:
    fake = FakeGateway()
    fake.set_reply({
        "bucket": "URGE_LOOP",
        "crisis": False,
        "response": "That pull toward the phone is an urge.\n\nWrite your next step in one short sentence.",
    })
    return fake
