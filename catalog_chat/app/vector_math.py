"""Vector helpers used for product retrieval."""
from typing import List, Sequence

import numpy as np

COSINE_EPSILON = 1e-8
HASH_NORM_EPSILON = 1e-6


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity over the overlapping prefix of two vectors.

    Vectors of different lengths (e.g. a provider vector against a hash
    fallback vector) are truncated to the shorter one. All-zero input gives
    0.0 rather than a division error.
    """
    n = min(len(a), len(b))
    va = np.asarray(a[:n], dtype=np.float64)
    vb = np.asarray(b[:n], dtype=np.float64)
    dot = float(np.dot(va, vb))
    norm = float(np.sqrt(np.dot(va, va)) * np.sqrt(np.dot(vb, vb)))
    return dot / (norm + COSINE_EPSILON)


def hash_embed(text: str, dim: int = 32) -> List[float]:
    """
    Deterministic character-bucket embedding.

    Each character adds 1.0 to bucket ``ord(ch) % dim``; the result is L2
    normalised. Only used locally as a retrieval fallback.
    """
    vec = np.zeros(dim, dtype=np.float64)
    for ch in text:
        vec[ord(ch) % dim] += 1.0
    norm = float(np.sqrt(np.dot(vec, vec))) + HASH_NORM_EPSILON
    return (vec / norm).tolist()
