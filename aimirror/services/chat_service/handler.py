"""Chat Service HTTP handler.

Single classification endpoint plus health/readiness probes. The page
that renders replies is a separate client and calls POST /chat.

Run locally:
    flask --app "aimirror.services.chat_service.handler:create_app()" run
"""
import logging
from typing import Optional

from flask import Flask, jsonify, request

from aimirror.services.llm_service import CompletionGateway, create_gateway
from aimirror.services.safety_service import CrisisScanner
from .config import ChatServiceConfig
from .pipeline import ChatPipeline
from .prompts import PROMPT_VERSION, SERVER_ERROR_MESSAGE

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ChatServiceConfig] = None,
    gateway: Optional[CompletionGateway] = None,
) -> Flask:
    """Create the Flask app.

    Args:
        config: Service configuration; read from the environment if omitted
        gateway: Completion gateway; the OpenAI gateway if omitted

    Raises:
        ValueError: If no gateway is given and OPENAI_API_KEY is not set
    """
    config = config or ChatServiceConfig.from_env()
    if gateway is None:
        gateway = create_gateway(config.llm_config())

    pipeline = ChatPipeline(
        gateway=gateway,
        scanner=CrisisScanner(),
        params=config.params,
        include_digest=config.include_digest,
    )

    app = Flask(__name__)
    app.extensions["chat_pipeline"] = pipeline

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "service": "chat-service",
            "prompt_version": PROMPT_VERSION,
        }), 200

    @app.route("/ready", methods=["GET"])
    def ready():
        """Readiness check."""
        if app.extensions.get("chat_pipeline") is None:
            return jsonify({"status": "not_ready"}), 503
        return jsonify({"status": "ready"}), 200

    @app.route("/chat", methods=["POST"])
    async def chat():
        """Classify a conversation and reply.

        Request Body:
            {"messages": [{"role": "user", "content": "..."}, ...]}

        Response:
            {"bucket": "URGE_LOOP", "crisis": false, "response": "..."}
        """
        # Parsed whatever the Content-Type; unparseable bodies become None
        # and fail validation with a 400
        payload = request.get_json(force=True, silent=True)

        try:
            result = await pipeline.handle(payload)
        except Exception as e:
            logger.error(
                "CHAT_REQUEST_ERROR",
                extra={"error_type": type(e).__name__},
                exc_info=True,
            )
            return jsonify({
                "error": "Internal server error",
                "message": SERVER_ERROR_MESSAGE,
            }), 500

        return jsonify(result.body), result.status_code

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    service_config = ChatServiceConfig.from_env()
    create_app(service_config).run(host="0.0.0.0", port=service_config.port, debug=False)
