# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""scalargrad.nn — Neural network module API (mirrors torch.nn)."""
from __future__ import annotations

# Module base class & containers
from .module import Module, ModuleList, ParameterList

# Parameter
from .parameter import Parameter

# Layers
from .layers import Neuron, Layer, MLP

# Functional API (accessible as nn.functional or F)
from . import functional

# Initialization routines
from . import init

# Utils (nn.utils.clip_grad_norm_)
from . import utils

__all__ = [
    'Module', 'ModuleList', 'ParameterList',
    'Parameter',
    'Neuron', 'Layer', 'MLP',
    'functional', 'init', 'utils',
]
