# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""nn.utils — gradient clipping and other utilities."""
from __future__ import annotations

import math
from typing import Iterable

from ..value import Value


def clip_grad_norm_(parameters: Iterable[Value], max_norm: float,
                    norm_type: float = 2.0) -> float:
    """Clip gradient norm of an iterable of parameters.

    Returns the total norm before clipping.
    """
    params = list(parameters)
    if not params:
        return 0.0

    if norm_type == float('inf'):
        total_norm = max(abs(p.grad) for p in params)
    elif norm_type == 2.0:
        total_norm = math.sqrt(math.fsum(p.grad * p.grad for p in params))
    else:
        total_norm = math.fsum(abs(p.grad) ** norm_type for p in params)
        total_norm = float(total_norm ** (1.0 / norm_type))

    clip_coef = max_norm / (total_norm + 1e-6)
    if clip_coef < 1.0:
        for p in params:
            p.grad = p.grad * clip_coef

    return total_norm
