"""AI Mirror services.

Service layout:
- safety_service: deterministic crisis gate, runs before any LLM call
- llm_service: completion gateway abstraction over the LLM provider
- chat_service: request validation, prompt assembly, reply validation and
  the HTTP endpoint that sequences them
"""
