# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""
Scalargrad — reverse-mode automatic differentiation over scalar values.

Graphs are built eagerly from :class:`Value` nodes; ``backward`` replays
each node's gradient rule in reverse topological order.

Usage::

    import scalargrad as sg
    import scalargrad.nn as nn
    import scalargrad.optim as optim

    a = sg.leaf(-2.0, 'a')
    b = sg.leaf(3.0, 'b')
    f = (a * b) * (a + b)
    f.backward()
    a.grad, b.grad          # (-3.0, -8.0)
"""
from __future__ import annotations

import logging

import numpy as np

__version__ = "0.1.0"
__author__ = "Pictofeed, LLC"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# ── Core node class & operators ──
from .value import (
    Value,
    leaf,
    neg, add, sub, mul, div, pow,
    tanh, exp,
    sum, from_list,
)

# ── Autograd ──
from .autograd import (
    Op,
    GradFn,
    topological_sort,
    backward,
    detect_anomaly,
    is_anomaly_enabled,
    set_detect_anomaly,
)


def manual_seed(seed: int) -> None:
    """Seed the RNG used by :mod:`scalargrad.nn.init`."""
    np.random.seed(seed)


# ── Sub-packages ──
from . import nn
from . import optim
from . import utils

__all__ = [
    "__version__",
    "__author__",

    # Value
    'Value', 'leaf',
    'neg', 'add', 'sub', 'mul', 'div', 'pow', 'tanh', 'exp',
    'sum', 'from_list',
    # Autograd
    'Op', 'GradFn', 'topological_sort', 'backward',
    'detect_anomaly', 'is_anomaly_enabled', 'set_detect_anomaly',
    # Utility
    'manual_seed',
    # Sub-packages
    'nn', 'optim', 'utils',
]
