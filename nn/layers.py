# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Neural network layers — Neuron, Layer and MLP built from scalar operators."""
from __future__ import annotations

import logging
from typing import Sequence

from ..value import Value
from . import functional as F
from . import init
from .module import Module, ModuleList, ParameterList
from .parameter import Parameter

logger = logging.getLogger(__name__)


# ──────────────────────── Neuron ──────────────────────────────────────

class Neuron(Module):
    """A single unit: tanh(w · x + b).

    Weights and bias are drawn from U[-1, 1).  With ``nonlin=False`` the
    unit is linear.
    """

    def __init__(self, in_features: int, nonlin: bool = True):
        super().__init__()
        if in_features <= 0:
            raise ValueError(f"in_features must be positive, got {in_features}")
        self.in_features = in_features
        self.nonlin = nonlin
        self.weight = ParameterList(
            init.uniform_(Parameter(), -1.0, 1.0) for _ in range(in_features))
        self.bias = init.uniform_(Parameter(), -1.0, 1.0)

    def forward(self, x: Sequence[Value | float]) -> Value:
        out = F.linear(x, list(self.weight), self.bias)
        return F.tanh(out) if self.nonlin else out

    def __repr__(self) -> str:
        kind = 'Tanh' if self.nonlin else 'Linear'
        return f"{kind}Neuron(in_features={self.in_features})"


# ──────────────────────── Layer ───────────────────────────────────────

class Layer(Module):
    """``out_features`` independent neurons over the same input."""

    def __init__(self, in_features: int, out_features: int,
                 nonlin: bool = True):
        super().__init__()
        if out_features <= 0:
            raise ValueError(f"out_features must be positive, got {out_features}")
        self.in_features = in_features
        self.out_features = out_features
        self.neurons = ModuleList(
            Neuron(in_features, nonlin=nonlin) for _ in range(out_features))

    def forward(self, x: Sequence[Value | float]) -> list[Value]:
        return [n(x) for n in self.neurons]

    def __repr__(self) -> str:
        return (f"Layer(in_features={self.in_features}, "
                f"out_features={self.out_features})")


# ──────────────────────── MLP ─────────────────────────────────────────

class MLP(Module):
    """Multilayer perceptron: a chain of :class:`Layer` s.

    ``MLP(3, [4, 4, 1])`` maps 3 inputs through two hidden layers of 4
    tanh units to one output.  The last layer is linear when
    ``linear_output=True``.
    """

    def __init__(self, in_features: int, out_features: Sequence[int],
                 linear_output: bool = False):
        super().__init__()
        sizes = [in_features] + list(out_features)
        if len(sizes) < 2:
            raise ValueError("MLP needs at least one layer")
        n_layers = len(sizes) - 1
        self.sizes = sizes
        self.layers = ModuleList(
            Layer(sizes[i], sizes[i + 1],
                  nonlin=not (linear_output and i == n_layers - 1))
            for i in range(n_layers))
        logger.debug("MLP sizes=%s parameters=%d", sizes,
                     len(list(self.parameters())))

    def forward(self, x: Sequence[Value | float]) -> list[Value]:
        for layer in self.layers:
            x = layer(x)
        return x

    def __repr__(self) -> str:
        return f"MLP of [{', '.join(repr(l) for l in self.layers)}]"
