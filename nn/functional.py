# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""nn.functional — stateless building blocks for layers and losses."""
from __future__ import annotations

from typing import Sequence

from .. import value as _v
from ..value import Value


def tanh(input: Value) -> Value:
    return _v.tanh(input)


def linear(input: Sequence[Value | float], weight: Sequence[Value],
           bias: Value | None = None) -> Value:
    """Weighted sum ``sum(w_i * x_i) + b``."""
    if len(input) != len(weight):
        raise ValueError(
            f"linear: expected {len(weight)} inputs, got {len(input)}")
    out = _v.sum(w * x for w, x in zip(weight, input))
    if bias is not None:
        out = out + bias
    return out


def mse_loss(input: Sequence[Value], target: Sequence[Value | float],
             reduction: str = 'mean') -> Value:
    """Squared error between predictions and targets.

    ``reduction`` is ``'mean'`` or ``'sum'``.
    """
    if reduction not in ('mean', 'sum'):
        raise ValueError(f"unknown reduction: {reduction!r}")
    if len(input) != len(target):
        raise ValueError(
            f"mse_loss: {len(input)} predictions vs {len(target)} targets")
    if not input:
        raise ValueError("mse_loss: empty input")
    total = _v.sum((p - t) ** 2 for p, t in zip(input, target))
    if reduction == 'mean':
        return total / len(input)
    return total
