# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""scalargrad.optim — Optimizers."""
from __future__ import annotations

from .optimizer import Optimizer, SGD, AdamW

__all__ = ['Optimizer', 'SGD', 'AdamW']
