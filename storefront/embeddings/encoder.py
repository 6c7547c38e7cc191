from __future__ import annotations

import numpy as np

from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig

_models: dict[str, object] = {}


def _get_model(config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG):
    model = _models.get(config.model_name)
    if model is None:
        from sentence_transformers import SentenceTransformer

        model = SentenceTransformer(config.model_name, device=config.device)
        _models[config.model_name] = model
    return model


def encode_text(text: str, config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> np.ndarray:
    """Encode a single string into a 1-D normalised embedding vector."""
    model = _get_model(config)
    return np.asarray(model.encode(text, show_progress_bar=False, normalize_embeddings=True))


def encode_batch(texts: list[str], config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG) -> np.ndarray:
    """Encode a list of strings into a 2-D array of shape (N, dim)."""
    if not texts:
        return np.zeros((0, config.dimension))
    model = _get_model(config)
    return np.asarray(model.encode(
        texts,
        show_progress_bar=False,
        batch_size=config.batch_size,
        normalize_embeddings=True,
    ))
