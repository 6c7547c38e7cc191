"""
Embeddings layer.

Responsibilities:
- Load a lightweight sentence-transformer model on first use.
- Build a descriptive text for each catalog item.
- Encode texts into mean-pooled, L2-normalised vectors.
"""
