# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Optimizer base class with SGD and AdamW implementations.

Optimizers only read ``grad`` and overwrite ``data`` on leaf parameters;
they never touch the graph.
"""
from __future__ import annotations

import logging
import math

from ..value import Value

logger = logging.getLogger(__name__)


class Optimizer:
    """Base class for all optimizers."""

    def __init__(self, params, defaults: dict):
        self.defaults = defaults
        self.param_groups: list[dict] = []
        self.state: dict[int, dict] = {}

        params = list(params)
        if len(params) == 0:
            raise ValueError("optimizer got an empty parameter list")
        if isinstance(params[0], dict):
            for group in params:
                pg = {**defaults, **group}
                pg['params'] = list(pg['params'])
                self.param_groups.append(pg)
        else:
            self.param_groups.append({**defaults, 'params': params})

        for group in self.param_groups:
            if group['lr'] < 0.0:
                raise ValueError(f"Invalid learning rate: {group['lr']}")
            for p in group['params']:
                if not isinstance(p, Value) or not p.is_leaf:
                    raise ValueError(
                        f"optimizer can only update leaf Values, got {p!r}")

    def zero_grad(self):
        for group in self.param_groups:
            for p in group['params']:
                p.grad = 0.0

    def step(self):
        raise NotImplementedError

    def state_dict(self) -> dict:
        return {
            'state': self.state,
            'param_groups': [
                {k: v for k, v in g.items() if k != 'params'}
                for g in self.param_groups
            ],
        }

    def load_state_dict(self, state_dict: dict):
        self.state = state_dict.get('state', {})
        for group, saved in zip(self.param_groups,
                                state_dict.get('param_groups', [])):
            group.update(saved)


class SGD(Optimizer):
    """Stochastic gradient descent: ``data -= lr * grad``.

    Optional heavy-ball momentum and L2 weight decay.
    """

    def __init__(self, params, lr: float = 0.01, momentum: float = 0.0,
                 weight_decay: float = 0.0):
        defaults = dict(lr=lr, momentum=momentum, weight_decay=weight_decay)
        super().__init__(params, defaults)

    def step(self):
        for group in self.param_groups:
            lr = group['lr']
            momentum = group['momentum']
            wd = group['weight_decay']

            for p in group['params']:
                g = p.grad
                if wd != 0:
                    g = g + wd * p.data
                if momentum != 0:
                    st = self.state.get(id(p))
                    if st is None:
                        st = self.state[id(p)] = {'momentum_buffer': g}
                    else:
                        st['momentum_buffer'] = momentum * st['momentum_buffer'] + g
                    g = st['momentum_buffer']
                p.data = p.data - lr * g
        logger.debug("SGD step over %d group(s)", len(self.param_groups))


class AdamW(Optimizer):
    """AdamW optimizer — decoupled weight decay regularization."""

    def __init__(self, params, lr: float = 1e-3,
                 betas: tuple[float, float] = (0.9, 0.999),
                 eps: float = 1e-8,
                 weight_decay: float = 0.01):
        defaults = dict(lr=lr, betas=betas, eps=eps,
                        weight_decay=weight_decay)
        super().__init__(params, defaults)

    def step(self):
        for group in self.param_groups:
            lr = group['lr']
            beta1, beta2 = group['betas']
            eps = group['eps']
            wd = group['weight_decay']

            for p in group['params']:
                pid = id(p)
                if pid not in self.state:
                    self.state[pid] = {'step': 0, 'm': 0.0, 'v': 0.0}
                st = self.state[pid]
                st['step'] += 1
                t = st['step']
                grad = p.grad

                # Decoupled weight decay
                data = p.data
                if wd != 0:
                    data *= (1.0 - lr * wd)
                st['m'] = beta1 * st['m'] + (1.0 - beta1) * grad
                st['v'] = beta2 * st['v'] + (1.0 - beta2) * grad * grad
                bc1 = 1.0 - beta1 ** t
                bc2 = 1.0 - beta2 ** t
                denom = math.sqrt(st['v'] / bc2) + eps
                p.data = data - (lr / bc1) * (st['m'] / denom)
        logger.debug("AdamW step over %d group(s)", len(self.param_groups))
