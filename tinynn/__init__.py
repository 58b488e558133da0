"""Neural network building blocks: dense, embedding and LSTM layers, AdamW, CTC, losses and numeric helpers."""

__version__ = "0.1.0"
__all__ = [
    "random",
    "arrays",
    "activation",
    "loss",
    "normalize",
    "alignseq",
    "beamsearch",
    "ctc",
    "adamw",
    "dense",
    "embedding",
    "lstm",
]