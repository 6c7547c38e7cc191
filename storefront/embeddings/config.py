from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmbeddingConfig:
    model_name: str = "all-MiniLM-L6-v2"
    dimension: int = 384
    batch_size: int = 64
    # None lets sentence-transformers pick cuda/mps/cpu
    device: str | None = None


DEFAULT_EMBEDDING_CONFIG = EmbeddingConfig()
