# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""nn.Parameter — learnable scalar leaf."""
from __future__ import annotations

from ..value import Value


class Parameter(Value):
    """A leaf :class:`Value` that is automatically registered as a module parameter."""

    def __init__(self, data: Value | float = 0.0, label: str = ''):
        if isinstance(data, Value):
            label = label or data.label
            data = data.data
        super().__init__(data, label)

    def __repr__(self) -> str:
        return f"Parameter containing:\n{super().__repr__()}"
