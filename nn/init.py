# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""nn.init — parameter initialization routines.

All routines overwrite ``data`` in place and leave ``grad`` untouched.
Randomness comes from NumPy's global RNG; see :func:`scalargrad.manual_seed`.
"""
from __future__ import annotations

import numpy as np

from ..value import Value


def uniform_(value: Value, a: float = 0.0, b: float = 1.0) -> Value:
    """Fill *value* with a draw from U[a, b)."""
    value.data = np.random.uniform(a, b)
    return value


def normal_(value: Value, mean: float = 0.0, std: float = 1.0) -> Value:
    value.data = np.random.normal(mean, std)
    return value


def zeros_(value: Value) -> Value:
    value.data = 0.0
    return value


def constant_(value: Value, val: float) -> Value:
    value.data = val
    return value
