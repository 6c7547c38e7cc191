"""
LLM integration layer.

Responsibilities:
- Hold Groq API configuration and credentials.
- Send chat completions to Groq with a bounded timeout.
- Surface transport failures to callers so they can fall back.
"""
