"""Chat endpoint backed by a real AsyncOpenAI client.

A local HTTP/1.1 keep-alive server stands in for the OpenAI API so the
client's connection handling runs exactly as in production, across the
separate event loops Flask uses for each async view.
"""
import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from aimirror.services.chat_service.config import ChatServiceConfig
from aimirror.services.chat_service.handler import create_app
from aimirror.services.llm_service import LLMConfig, OpenAICompletionGateway


REPLY = {
    "bucket": "URGE_LOOP",
    "crisis": False,
    "response": "That is an urge to check.\n\nWrite your next step in one short sentence.",
}


class CompletionsHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    requests = []

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        CompletionsHandler.requests.append((self.path, json.loads(self.rfile.read(length))))

        body = json.dumps({
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": int(time.time()),
            "model": "gpt-4.1-mini",
            "choices": [{
                "index": 0,
                "message": {"role": "assistant", "content": json.dumps(REPLY)},
                "finish_reason": "stop",
            }],
            "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30},
        }).encode()

        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def completions_server(monkeypatch):
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")

    CompletionsHandler.requests = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), CompletionsHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/v1"
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def client(completions_server):
    gateway = OpenAICompletionGateway(
        LLMConfig(api_key="sk-test", base_url=completions_server, timeout_seconds=10.0)
    )
    app = create_app(config=ChatServiceConfig(openai_api_key="sk-test"), gateway=gateway)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


class TestConsecutiveRequests:
    def test_every_request_succeeds(self, client):
        statuses = []
        for _ in range(3):
            response = client.post(
                '/chat',
                json={'messages': [{'role': 'user', 'content': 'I feel like checking my phone again.'}]},
            )
            statuses.append(response.status_code)
            assert json.loads(response.data) == REPLY

        assert statuses == [200, 200, 200]
        assert len(CompletionsHandler.requests) == 3

    def test_request_sent_to_completions_endpoint(self, client):
        client.post('/chat', json={'messages': [{'role': 'user', 'content': 'I am frozen'}]})

        path, sent = CompletionsHandler.requests[0]
        assert path == "/v1/chat/completions"
        assert sent["model"] == "gpt-4.1-mini"
        assert sent["response_format"] == {"type": "json_object"}
        assert sent["max_tokens"] == 700
        assert sent["messages"][-1] == {"role": "user", "content": "I am frozen"}
