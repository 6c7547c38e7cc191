from unittest.mock import patch

import pytest

from storefront.llm.config import LLMConfig
from storefront.llm.groq_client import chat_completion

ENABLED_CONFIG = LLMConfig(api_key="test-key", enabled=True)
MESSAGES = [{"role": "user", "content": "summer tshirts"}]


@patch("storefront.llm.groq_client.Groq")
def test_chat_completion_returns_content(mock_groq_cls, groq_response):
    mock_groq_cls.return_value.chat.completions.create.return_value = groq_response("Men T-Shirt")

    assert chat_completion(MESSAGES, config=ENABLED_CONFIG) == "Men T-Shirt"
    mock_groq_cls.assert_called_once_with(api_key="test-key", timeout=ENABLED_CONFIG.timeout)


@patch("storefront.llm.groq_client.Groq")
def test_json_mode_requests_json_object(mock_groq_cls, groq_response):
    create = mock_groq_cls.return_value.chat.completions.create
    create.return_value = groq_response("{}")

    chat_completion(MESSAGES, config=ENABLED_CONFIG, json_mode=True)

    assert create.call_args.kwargs["response_format"] == {"type": "json_object"}
    assert create.call_args.kwargs["model"] == ENABLED_CONFIG.model


@patch("storefront.llm.groq_client.Groq")
def test_plain_mode_sends_no_response_format(mock_groq_cls, groq_response):
    create = mock_groq_cls.return_value.chat.completions.create
    create.return_value = groq_response("Men Shoes")

    chat_completion(MESSAGES, config=ENABLED_CONFIG, temperature=0.5)

    assert "response_format" not in create.call_args.kwargs
    assert create.call_args.kwargs["temperature"] == 0.5


@patch("storefront.llm.groq_client.Groq")
def test_none_content_becomes_empty_string(mock_groq_cls, groq_response):
    mock_groq_cls.return_value.chat.completions.create.return_value = groq_response(None)

    assert chat_completion(MESSAGES, config=ENABLED_CONFIG) == ""


@patch("storefront.llm.groq_client.Groq")
def test_api_errors_propagate(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    with pytest.raises(Exception, match="API timeout"):
        chat_completion(MESSAGES, config=ENABLED_CONFIG)
