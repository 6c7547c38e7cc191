from __future__ import annotations

import logging

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


def chat_completion(
    messages: list[dict[str, str]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    temperature: float = 0.3,
    json_mode: bool = False,
) -> str:
    """
    Send one chat completion request to Groq and return the reply text.

    Errors from the SDK (timeouts, HTTP errors, auth) propagate; callers
    decide how to degrade.
    """
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    response = client.chat.completions.create(
        model=config.model,
        messages=messages,
        max_tokens=config.max_tokens,
        temperature=temperature,
        **kwargs,
    )
    content = response.choices[0].message.content or ""
    logger.debug("Groq reply: %s", content)
    return content
