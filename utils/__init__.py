# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""scalargrad.utils — Utility modules."""
from __future__ import annotations

# Rebinds ``gradcheck`` from the submodule to the function
from .gradcheck import GradcheckError, gradcheck, numerical_grad

__all__ = ['gradcheck', 'GradcheckError', 'numerical_grad']
