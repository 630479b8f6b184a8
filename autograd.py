# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Autograd engine — reverse-mode automatic differentiation over scalars.

Every :class:`~scalargrad.value.Value` produced by an operator carries a
:class:`GradFn` bound at construction.  :func:`backward` orders the DAG
with :func:`topological_sort` and replays those rules from the terminal
node back to the leaves, accumulating into each predecessor's ``grad``.
"""
from __future__ import annotations

import enum
import functools
import logging
import math
import os
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .value import Value

logger = logging.getLogger(__name__)


# ──────────────────────── Anomaly detection ───────────────────────────

ANOMALY_ENV_VAR = 'SCALARGRAD_DETECT_ANOMALY'


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').strip().lower() in ('1', 'true', 'yes', 'on')


def default_anomaly_mode() -> bool:
    """Anomaly-detection default taken from ``SCALARGRAD_DETECT_ANOMALY``."""
    return _env_flag(ANOMALY_ENV_VAR)


_anomaly_enabled: bool = default_anomaly_mode()


def is_anomaly_enabled() -> bool:
    return _anomaly_enabled


def set_detect_anomaly(mode: bool) -> None:
    global _anomaly_enabled
    _anomaly_enabled = bool(mode)


class detect_anomaly:
    """Context manager / decorator that reports non-finite gradients.

    While active, :func:`backward` logs a warning for every rule that
    writes ``nan`` or ``inf`` into a predecessor.  Values still propagate
    unchanged.
    """

    def __init__(self, mode: bool = True):
        self._mode = mode

    def __enter__(self):
        self._prev = _anomaly_enabled
        set_detect_anomaly(self._mode)
        return self

    def __exit__(self, *args):
        set_detect_anomaly(self._prev)

    def __call__(self, fn):
        @functools.wraps(fn)
        def wrapper(*a, **kw):
            with self:
                return fn(*a, **kw)
        return wrapper


# ──────────────────────── Operation tags ──────────────────────────────

class Op(enum.Enum):
    """Operation that produced a node."""
    NONE = 'none'
    NEG = 'neg'
    ADD = 'add'
    MUL = 'mul'
    POW = 'pow'
    TANH = 'tanh'
    EXP = 'exp'

    def __repr__(self) -> str:
        return f"Op.{self.name}"


def _power(base: float, exponent: float) -> float:
    # IEEE semantics: 0 ** -1 -> inf, (-8) ** 0.5 -> nan, no exceptions
    with np.errstate(all='ignore'):
        return float(np.power(np.float64(base), np.float64(exponent)))


# ──────────────────────── GradFn base class ───────────────────────────

class GradFn:
    """Base class for per-node gradient rules.

    ``apply(out)`` reads ``out.grad`` / ``out.data`` and adds the local
    contribution into each of ``out.prev``.  Subclasses set ``op`` and
    ``arity``.
    """
    __slots__ = ('name',)

    op: Op = Op.NONE
    arity: int = 0

    def __init__(self, name: str = 'GradFn'):
        self.name = name

    def _check(self, out: 'Value') -> tuple['Value', ...]:
        prev = out._prev
        if out._op is not self.op:
            raise RuntimeError(
                f"{self.name} bound to a node tagged {out._op!r}")
        if len(prev) != self.arity:
            raise RuntimeError(
                f"{self.name} expects {self.arity} predecessor(s), "
                f"node has {len(prev)}")
        return prev

    def apply(self, out: 'Value') -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.name}>"


# ──────────────────────── Concrete GradFn nodes ───────────────────────

class NegBackward(GradFn):
    __slots__ = ()
    op = Op.NEG
    arity = 1

    def __init__(self):
        super().__init__('NegBackward')

    def apply(self, out):
        (a,) = self._check(out)
        a._grad += -1.0 * out._grad


class AddBackward(GradFn):
    __slots__ = ()
    op = Op.ADD
    arity = 2

    def __init__(self):
        super().__init__('AddBackward')

    def apply(self, out):
        a, b = self._check(out)
        a._grad += out._grad
        b._grad += out._grad


class MulBackward(GradFn):
    __slots__ = ()
    op = Op.MUL
    arity = 2

    def __init__(self):
        super().__init__('MulBackward')

    def apply(self, out):
        a, b = self._check(out)
        # a and b may be the same node (x * x): both slots contribute
        a._grad += b._data * out._grad
        b._grad += a._data * out._grad


class PowBackward(GradFn):
    """d(a^k)/da = k * a^(k-1).  The exponent is a constant of the rule."""
    __slots__ = ('exponent',)
    op = Op.POW
    arity = 1

    def __init__(self, exponent: float):
        super().__init__('PowBackward')
        self.exponent = exponent

    def apply(self, out):
        (a,) = self._check(out)
        k = self.exponent
        a._grad += k * _power(a._data, k - 1.0) * out._grad


class TanhBackward(GradFn):
    __slots__ = ()
    op = Op.TANH
    arity = 1

    def __init__(self):
        super().__init__('TanhBackward')

    def apply(self, out):
        (a,) = self._check(out)
        a._grad += (1.0 - out._data * out._data) * out._grad


class ExpBackward(GradFn):
    __slots__ = ()
    op = Op.EXP
    arity = 1

    def __init__(self):
        super().__init__('ExpBackward')

    def apply(self, out):
        (a,) = self._check(out)
        a._grad += out._data * out._grad


# ──────────────────────── Topological backward ────────────────────────

def topological_sort(root: 'Value') -> list['Value']:
    """Return every node reachable from *root*, predecessors first.

    Depth-first post-order over ``prev`` (left to right).  A single
    ``id()``-keyed visited set spans the whole traversal, so a node shared
    by several consumers is emitted exactly once.  Uses an explicit stack
    instead of recursion so deep chains do not hit the recursion limit.
    """
    visited: set[int] = set()
    order: list['Value'] = []
    stack: list[tuple['Value', bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        nid = id(node)
        if expanded:
            if nid not in visited:
                visited.add(nid)
                order.append(node)
            continue
        if nid in visited:
            continue
        stack.append((node, True))
        # Reversed push so the leftmost predecessor is emitted first
        for p in reversed(node._prev):
            if id(p) not in visited:
                stack.append((p, False))
    return order


def _report_anomaly(node: 'Value', was_finite: list[bool]) -> None:
    # Only gradients this rule turned non-finite; a * a reports once
    seen: set[int] = set()
    for p, ok in zip(node._prev, was_finite):
        if not ok or id(p) in seen or math.isfinite(p._grad):
            continue
        seen.add(id(p))
        logger.warning(
            "%s of node %r produced non-finite gradient %r in "
            "predecessor %r", node._grad_fn, node._label or node._op,
            p._grad, p._label or p._op)


def backward(root: 'Value') -> None:
    """Run the backward pass from *root*.

    Seeds ``root.grad = 1.0`` and replays each node's rule in reverse
    topological order.  Gradients accumulate; callers zero them between
    independent passes.
    """
    root._grad = 1.0
    order = topological_sort(root)
    check = _anomaly_enabled
    logger.debug("backward: replaying %d node(s) from %r",
                 len(order), root._label or root._op)

    for node in reversed(order):
        gfn = node._grad_fn
        if gfn is None:
            continue
        if check:
            was_finite = [math.isfinite(p._grad) for p in node._prev]
            gfn.apply(node)
            _report_anomaly(node, was_finite)
        else:
            gfn.apply(node)
