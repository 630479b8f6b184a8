# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Scalargrad — Scalar Autodiff Engine                                 ║
# ║  Copyright © 2026 Pictofeed, LLC. All rights reserved.               ║
# ╚══════════════════════════════════════════════════════════════════════╝
"""Core scalar :class:`Value` node and the operator set that builds the graph."""
from __future__ import annotations

import numbers
import numpy as np
from typing import Any, Iterable, Sequence

from . import autograd as _ag
from .autograd import Op


class Value:
    """A scalar node in the computation graph.

    Holds a float64 value, an accumulated gradient, an optional debug
    label, the predecessors that produced it and the gradient rule bound
    at construction.  Equality and hashing are by identity: two nodes
    with equal ``data`` are still distinct nodes.
    """

    __slots__ = (
        '_data', '_grad', '_label', '_prev', '_op', '_grad_fn', '__weakref__',
    )

    # ------------------------------------------------------------------ #
    #  Construction                                                      #
    # ------------------------------------------------------------------ #

    def __init__(self, data: Any, label: str = ''):
        if not isinstance(data, numbers.Real):
            raise TypeError(
                f"Value only accepts real numbers, but got {type(data).__name__}")
        self._data: float = float(data)
        self._grad: float = 0.0
        self._label: str = str(label)
        self._prev: tuple[Value, ...] = ()
        self._op: Op = Op.NONE
        self._grad_fn: _ag.GradFn | None = None

    @staticmethod
    def _wrap(data: float, prev: tuple['Value', ...],
              grad_fn: _ag.GradFn) -> 'Value':
        v = Value.__new__(Value)
        v._data = data
        v._grad = 0.0
        v._label = ''
        v._prev = prev
        v._op = grad_fn.op
        v._grad_fn = grad_fn
        return v

    # ------------------------------------------------------------------ #
    #  Properties                                                        #
    # ------------------------------------------------------------------ #

    @property
    def data(self) -> float:
        return self._data

    @data.setter
    def data(self, value: float):
        self._data = float(value)

    @property
    def grad(self) -> float:
        return self._grad

    @grad.setter
    def grad(self, value: float):
        self._grad = float(value)

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str):
        self._label = str(value)

    @property
    def prev(self) -> tuple['Value', ...]:
        """Predecessors in operand order (immutable)."""
        return self._prev

    @property
    def op(self) -> Op:
        return self._op

    @property
    def grad_fn(self) -> _ag.GradFn | None:
        return self._grad_fn

    @property
    def is_leaf(self) -> bool:
        return self._grad_fn is None

    # ------------------------------------------------------------------ #
    #  Basic info methods                                                #
    # ------------------------------------------------------------------ #

    def item(self) -> float:
        return self._data

    def __float__(self) -> float:
        return self._data

    def __repr__(self) -> str:
        parts = [f"data={self._data:.4f}", f"grad={self._grad:.4f}"]
        if self._label:
            parts.append(f"label={self._label!r}")
        if self._grad_fn is not None:
            parts.append(f"grad_fn={self._grad_fn}")
        return f"Value({', '.join(parts)})"

    # ------------------------------------------------------------------ #
    #  Arithmetic operators                                              #
    # ------------------------------------------------------------------ #

    def __neg__(self):
        return neg(self)

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return add(self, other)

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return add(other, self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return sub(self, other)

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return sub(other, self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return mul(self, other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return mul(other, self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return div(self, other)

    def __rtruediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return div(other, self)

    def __pow__(self, exponent):
        # Only constant exponents; Value ** Value is not differentiated.
        if not isinstance(exponent, numbers.Real):
            return NotImplemented
        return pow(self, exponent)

    # ------------------------------------------------------------------ #
    #  Math methods                                                      #
    # ------------------------------------------------------------------ #

    def pow(self, exponent: float) -> 'Value':
        return pow(self, exponent)

    def tanh(self) -> 'Value':
        return tanh(self)

    def exp(self) -> 'Value':
        return exp(self)

    # ---- Autograd methods ----

    def backward(self) -> None:
        _ag.backward(self)

    def zero_grad(self) -> None:
        self._grad = 0.0

    def detach(self) -> 'Value':
        """Return a new leaf holding the same value."""
        return Value(self._data, self._label)


# ====================================================================
# Operand promotion
# ====================================================================

def _is_operand(x) -> bool:
    return isinstance(x, (Value, numbers.Real))


def _ensure_value(x) -> Value:
    if isinstance(x, Value):
        return x
    return Value(x)


# ====================================================================
# Primitive operators: each binds exactly one GradFn
# ====================================================================

def leaf(data: float, label: str = '') -> Value:
    """Create a node with no predecessors and no gradient rule."""
    return Value(data, label)


def neg(a) -> Value:
    a = _ensure_value(a)
    return Value._wrap(-a._data, (a,), _ag.NegBackward())


def add(a, b) -> Value:
    a = _ensure_value(a)
    b = _ensure_value(b)
    return Value._wrap(a._data + b._data, (a, b), _ag.AddBackward())


def mul(a, b) -> Value:
    a = _ensure_value(a)
    b = _ensure_value(b)
    return Value._wrap(a._data * b._data, (a, b), _ag.MulBackward())


def pow(a, exponent: float) -> Value:
    """Raise *a* to a constant real *exponent*.

    The exponent is stored on the rule, not as a predecessor, so no
    gradient is ever computed for it.
    """
    if not isinstance(exponent, numbers.Real):
        raise TypeError(
            f"pow exponent must be a real number, got {type(exponent).__name__}")
    a = _ensure_value(a)
    k = float(exponent)
    return Value._wrap(_ag._power(a._data, k), (a,), _ag.PowBackward(k))


def tanh(a) -> Value:
    a = _ensure_value(a)
    # np.tanh saturates to +-1; (e^2x - 1) / (e^2x + 1) is inf/inf = nan past x ~ 355
    with np.errstate(all='ignore'):
        result = float(np.tanh(a._data))
    return Value._wrap(result, (a,), _ag.TanhBackward())


def exp(a) -> Value:
    a = _ensure_value(a)
    with np.errstate(all='ignore'):
        result = float(np.exp(a._data))
    return Value._wrap(result, (a,), _ag.ExpBackward())


# ====================================================================
# Composite operators (no rule of their own)
# ====================================================================

def sub(a, b) -> Value:
    return add(a, neg(b))


def div(a, b) -> Value:
    return mul(a, pow(b, -1.0))


def sum(values: Iterable, start: float = 0.0) -> Value:
    """Left fold of :func:`add` over *values*, starting from a leaf."""
    acc = Value(start)
    for v in values:
        acc = add(acc, v)
    return acc


def from_list(values: Sequence[float],
              labels: Sequence[str] | None = None) -> list[Value]:
    """Create one leaf per element of *values*."""
    if labels is None:
        return [Value(v) for v in values]
    if len(labels) != len(values):
        raise ValueError(
            f"got {len(values)} values but {len(labels)} labels")
    return [Value(v, lbl) for v, lbl in zip(values, labels)]
