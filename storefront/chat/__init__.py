"""
Conversation layer.

Responsibilities:
- Turn shopper queries into intents through the two LLM prompt contracts.
- Keep the caller-owned conversation history.
"""
