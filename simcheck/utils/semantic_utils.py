"""
Semantic similarity with sentence embeddings.

The engine treats the embedder as an external collaborator: anything that maps
a list of texts to a list of vectors. The default loads a SentenceTransformer
MiniLM model on first use; sentence-transformers is an optional install.
"""

import logging
from functools import lru_cache
from typing import Callable, List, Sequence

import numpy as np

from simcheck.utils.errors import AlgorithmUnavailable

logger = logging.getLogger("simcheck.semantic")

Embedder = Callable[[List[str]], Sequence[Sequence[float]]]


@lru_cache(maxsize=2)
def get_encoder(model_name: str):
    """Lazy load a SentenceTransformer model, once per model name."""
    logger.info(f"Loading SentenceTransformer model '{model_name}'...")
    from sentence_transformers import SentenceTransformer
    model = SentenceTransformer(model_name)
    logger.info("Model loaded successfully")
    return model


class SentenceTransformerEmbedder:
    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name

    def __call__(self, texts: List[str]) -> Sequence[Sequence[float]]:
        try:
            encoder = get_encoder(self.model_name)
        except ImportError as e:
            raise AlgorithmUnavailable(
                "semantic", "sentence-transformers not installed (pip install simcheck[semantic])"
            ) from e
        return encoder.encode(texts, convert_to_numpy=True, show_progress_bar=False)


def cosine_of(vec_a, vec_b) -> float:
    a = np.asarray(vec_a, dtype=float)
    b = np.asarray(vec_b, dtype=float)
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:
        return 0.0
    return float(np.dot(a, b) / norm)


def semantic_similarity(text_a: str, text_b: str, embedder: Embedder) -> float:
    """Cosine of the two embeddings, clamped to [0, 1]."""
    if not text_a.strip() or not text_b.strip():
        raise AlgorithmUnavailable("semantic", "empty document has no embedding")
    try:
        embeddings = embedder([text_a, text_b])
    except AlgorithmUnavailable:
        raise
    except Exception as e:
        logger.warning(f"Embedding failed: {e}")
        raise AlgorithmUnavailable("semantic", f"embedding failed: {e}") from e
    if embeddings is None or len(embeddings) != 2:
        raise AlgorithmUnavailable("semantic", "embedder returned no vectors")
    return min(max(cosine_of(embeddings[0], embeddings[1]), 0.0), 1.0)
