"""Embedding layer mapping a context of token indices to a summed vector."""

import numpy as np

from tinynn import random as rng


class Embedding:
    """Token embedding layer.

    Each input row holds ``context_len`` token indices; the output row is
    the sum of their embedding vectors. Contexts shorter than the context
    length are padded with ``padinx`` (-1 when no pad token is used),
    whose embedding is zero and receives no gradient.
    """

    def __init__(self, embedding_dim, context_len, padinx=-1):
        if embedding_dim < 1:
            raise ValueError("embedding_dim must be at least 1")
        if context_len < 1:
            raise ValueError("context_len must be at least 1")
        self.embedding_dim = embedding_dim
        self.context_len = context_len
        self.output_dim = embedding_dim
        self.padinx = padinx
        self.vocab_size = 0
        self.batch_size = 0
        self.weights = None
        self.h = None

    def initialize(self, vocab_size, batch_size):
        """Allocate the output and draw weights uniformly from [-0.5, 0.5]."""
        if vocab_size < 1:
            raise ValueError("vocab_size must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.vocab_size = vocab_size
        self.batch_size = batch_size
        self.h = np.zeros((batch_size, self.output_dim))
        self.weights = np.array(
            [
                [rng.uniform(-0.5, 0.5) for _ in range(self.embedding_dim)]
                for _ in range(vocab_size)
            ]
        )
        if 0 <= self.padinx < vocab_size:
            self.weights[self.padinx] = 0.0

    def reset(self):
        """Reset the hidden state between sequences; an embedding keeps none."""

    def _indices(self, x):
        if self.weights is None:
            raise RuntimeError("layer must be initialized before use")
        idx = np.asarray(x, dtype=float).astype(int)
        if idx.shape != (self.batch_size, self.context_len):
            raise ValueError(
                f"input must have shape ({self.batch_size}, {self.context_len}), "
                f"got {idx.shape}"
            )
        if np.any(idx < 0) or np.any(idx >= self.vocab_size):
            raise ValueError(f"token indices must lie in [0, {self.vocab_size})")
        return idx

    def forward(self, x):
        """Return, for each context row of indices, the sum of their embeddings."""
        idx = self._indices(x)
        self.h = self.weights[idx].sum(axis=1)
        return self.h

    def backward(self, dy, x, compute_dx=True):
        """Return (weight gradient, input gradient) for output gradient dy.

        Every non-pad token in a context receives dy / context_len in its
        embedding row. The input gradient, returned only when compute_dx
        is true and None otherwise, gives each context position the sum
        of its row of dy divided by context_len.
        """
        idx = self._indices(x)
        grad_y = np.asarray(dy, dtype=float)
        if grad_y.shape != (self.batch_size, self.output_dim):
            raise ValueError(
                f"gradient must have shape ({self.batch_size}, {self.output_dim}), "
                f"got {grad_y.shape}"
            )
        share = grad_y / self.context_len
        g_weights = np.zeros_like(self.weights)
        for row, contexts in zip(share, idx):
            for token in contexts:
                if token != self.padinx:
                    g_weights[token] += row
        if not compute_dx:
            return g_weights, None
        per_row = share.sum(axis=1, keepdims=True)
        dx = np.repeat(per_row, self.context_len, axis=1)
        return g_weights, dx