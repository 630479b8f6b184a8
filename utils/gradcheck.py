# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""scalargrad.utils.gradcheck — finite-difference gradient checking.

Compares the gradients produced by :func:`scalargrad.autograd.backward`
against central differences::

    def f(x, w, b):
        return (x * w + b).tanh()

    gradcheck(f, [leaf(2.0), leaf(-3.0), leaf(6.88)])

*fn* receives the input leaves and must rebuild its graph on every call,
since perturbing an input's ``data`` does not recompute existing nodes.
"""
from __future__ import annotations

import math
from typing import Callable, Sequence

from ..value import Value


class GradcheckError(RuntimeError):
    """Analytic and numerical gradients disagree."""


def numerical_grad(fn: Callable[..., Value], inputs: Sequence[Value],
                   index: int, eps: float = 1e-3) -> float:
    """Central difference of ``fn(*inputs)`` with respect to ``inputs[index]``.

    The perturbed input is restored before returning.
    """
    x = inputs[index]
    orig = x.data
    try:
        x.data = orig + eps
        hi = fn(*inputs).data
        x.data = orig - eps
        lo = fn(*inputs).data
    finally:
        x.data = orig
    return (hi - lo) / (2.0 * eps)


def gradcheck(fn: Callable[..., Value], inputs: Sequence[Value],
              eps: float = 1e-3, atol: float = 1e-4,
              raise_exception: bool = True) -> bool:
    """Check analytic gradients of *fn* at *inputs* against central differences.

    Zeroes every input's ``grad``, runs one backward pass and compares
    each resulting gradient with :func:`numerical_grad`.
    """
    for x in inputs:
        x.grad = 0.0
    out = fn(*inputs)
    out.backward()
    analytic = [x.grad for x in inputs]

    for i, x in enumerate(inputs):
        numeric = numerical_grad(fn, inputs, i, eps)
        if not math.isclose(analytic[i], numeric, rel_tol=0.0, abs_tol=atol):
            if raise_exception:
                name = x.label or f"input {i}"
                raise GradcheckError(
                    f"gradient mismatch for {name}: analytic={analytic[i]!r} "
                    f"numerical={numeric!r} (atol={atol})")
            return False
    return True
