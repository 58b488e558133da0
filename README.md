# tinynn

Small, readable neural network building blocks written with NumPy.

## What is inside

- `tinynn.random`: a seedable Lehmer generator. You can use a `LehmerRandom` instance or the shared generator through `seed`, `random`, `uniform` and `normal`. The layers draw their initial weights from the shared generator, so `seed()` makes initialisation reproducible.
- `tinynn.arrays`: `vector_norm`, `matrix_norm`, `clip_gradients`, `cosine_similarity`, `onehot_encode` and `onehot_decode`.
- `tinynn.activation`: the `Activation` enum (`NONE`, `SIGMOID`, `RELU`, `SOFTMAX`, looked up by name with `Activation.from_name`). It also holds the functions `sigmoid`, `relu`, `softmax`, `d_sigmoid`, `d_relu`, `d_softmax`, `d_tanh` and `d_tanh_x`.
- `tinynn.loss`: `cross_entropy_loss`, `sparse_cross_entropy_loss` and `mean_square_error`, with their gradients `d_cross_entropy_loss`, `d_sparse_cross_entropy_loss` and `d_mean_square_error`.
- `tinynn.normalize`: `mean_sdev` gives the per-column mean and population standard deviation. `normalize` returns a normalised copy. Both can leave out a trailing bias column.
- `tinynn.alignseq`: `align_sequences(p, t, blank)` performs Needleman–Wunsch alignment. It returns an `Alignment` with the aligned `p` and `t` and the edit `distance`.
- `tinynn.beamsearch`: `beam_search(probabilities, beam_width)` takes a T×C probability matrix. It returns up to `beam_width` `(sequence, score)` pairs, where the score is the negative log probability and the lowest comes first.
- `tinynn.ctc`: the `CTC` class (Connectionist Temporal Classification). Call `loss(yp, yt)` first, then `gradient()`. The module also has a scalar `logsumexp`.
- `tinynn.adamw`: `adamw_update(w, g, m, v, learning_rate, weight_decay, update_step)`.
  - It clips the gradients and returns new `(weights, m, v)`.
  - It raises `GradientExplosionError` if a second moment is negative.
- `tinynn.dense`, `tinynn.embedding`, `tinynn.lstm`: the `Dense`, `Embedding` and `LSTM` layers.
  - Each layer is created, then set up with `initialize(...)`.
  - `forward(x)` runs the layer. `backward(dy, x, compute_dx)` returns the weight gradient or gradients and the input gradient; the input gradient is `None` when `compute_dx` is false.
  - Weights live in the layer's `weights` attribute. `LSTM.weights` and the gradients from `LSTM.backward` are lists of eight matrices, in the order Wf, Wi, Wc, Wo, Uf, Ui, Uc, Uo.

## Installation

```
pip install .
```

## Example

Train a single softmax layer with AdamW:

```python
import numpy as np
from tinynn import random as rng
from tinynn.arrays import onehot_encode
from tinynn.dense import Dense
from tinynn.loss import cross_entropy_loss, d_cross_entropy_loss
from tinynn.adamw import adamw_update

rng.seed(42)

layer = Dense(3, "softmax")
layer.initialize(input_dim=5, batch_size=4)   # input_dim includes the bias column

data = np.random.default_rng(0)
x = np.hstack([data.random((4, 4)), np.ones((4, 1))])
yt = onehot_encode([0, 1, 2, 0], 3)

m = np.zeros_like(layer.weights)
v = np.zeros_like(layer.weights)
for step in range(1, 101):
    yp = layer.forward(x)
    loss = cross_entropy_loss(yp, yt)
    grad, _ = layer.backward(d_cross_entropy_loss(yp, yt), x, compute_dx=False)
    layer.weights, m, v = adamw_update(layer.weights, grad, m, v, 0.01, 0.0, step)
```

## What it does not do

These are building blocks only. The package has no multi-layer model container and no training or prediction loop. It also has no batching or shuffling of datasets, no saving or loading of weights, and no command-line programs. To build a network, you chain the layers' `forward` and `backward` calls yourself and apply `adamw_update` to each weight matrix.

## Running the tests

```
pip install .[test]
pytest
```