from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = ""
    model: str = "llama-3.3-70b-versatile"
    timeout: float = 10.0
    max_tokens: int = 256
    enabled: bool = True

    @classmethod
    def from_env(cls) -> "LLMConfig":
        return cls(
            api_key=os.getenv("GROQ_API_KEY", ""),
            model=os.getenv("GROQ_MODEL", cls.model),
            timeout=float(os.getenv("GROQ_TIMEOUT", cls.timeout)),
        )

    @property
    def is_usable(self) -> bool:
        return self.enabled and bool(self.api_key)


DEFAULT_LLM_CONFIG = LLMConfig()
