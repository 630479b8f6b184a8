"""Tests for Value construction, operators and forward evaluation."""
import math

import pytest

import scalargrad as sg
from scalargrad import Op, Value


def test_leaf_construction():
    """Leaves hold a float, a zero gradient and no rule."""
    a = sg.leaf(3, 'a')
    assert isinstance(a.data, float)
    assert a.data == 3.0
    assert a.grad == 0.0
    assert a.label == 'a'
    assert a.prev == ()
    assert a.op is Op.NONE
    assert a.grad_fn is None
    assert a.is_leaf

    b = Value(1.5)
    assert b.label == ''
    assert float(b) == 1.5
    assert b.item() == 1.5


def test_rejects_non_real_data():
    with pytest.raises(TypeError):
        Value("1.0")
    with pytest.raises(TypeError):
        Value(None)
    with pytest.raises(TypeError):
        Value(1 + 2j)


def test_mutators():
    """Setters coerce to float/str and never create nodes."""
    a = sg.leaf(1.0)
    a.data = 4
    a.grad = 2
    a.label = 'w'
    assert a.data == 4.0 and isinstance(a.data, float)
    assert a.grad == 2.0
    assert a.label == 'w'
    assert a.prev == ()
    a.zero_grad()
    assert a.grad == 0.0


def test_identity_not_value():
    """Equal values are still distinct nodes."""
    a = sg.leaf(2.0)
    b = sg.leaf(2.0)
    assert a is not b
    assert a != b
    assert len({a, b}) == 2


def test_forward_values():
    """Forward values match direct float evaluation."""
    a = sg.leaf(-2.0)
    b = sg.leaf(3.0)
    assert (-a).data == 2.0
    assert (a + b).data == 1.0
    assert (a - b).data == -5.0
    assert (a * b).data == -6.0
    assert (a / b).data == pytest.approx(-2.0 / 3.0)
    assert (b ** 2).data == 9.0
    assert (b ** 0.5).data == pytest.approx(math.sqrt(3.0))
    assert a.tanh().data == pytest.approx(math.tanh(-2.0))
    assert a.exp().data == pytest.approx(math.exp(-2.0))
    e2x = math.exp(2 * 0.7)
    assert sg.tanh(0.7).data == pytest.approx((e2x - 1) / (e2x + 1))


def test_composite_expression_forward():
    x = sg.leaf(1.5)
    y = sg.leaf(-0.25)
    z = (x * y + 3.0) / (x - y) ** 2 - (y * 2.0).exp()
    expected = (1.5 * -0.25 + 3.0) / (1.5 + 0.25) ** 2 - math.exp(-0.5)
    assert z.data == pytest.approx(expected)


def test_scalar_promotion_is_symmetric():
    """node op scalar and scalar op node route through the same primitives."""
    a = sg.leaf(5.0)
    for out in (a + 2, 2 + a, a * 2, 2 * a):
        assert out.op in (Op.ADD, Op.MUL)
        assert len(out.prev) == 2
        assert any(p is a for p in out.prev)
        other = [p for p in out.prev if p is not a][0]
        assert other.is_leaf and other.data == 2.0

    assert (a + 2).data == (2 + a).data == 7.0
    assert (a * 2).data == (2 * a).data == 10.0
    assert (a - 2).data == 3.0
    assert (2 - a).data == -3.0
    assert (a / 2).data == 2.5
    assert (10 / a).data == pytest.approx(2.0)


def test_sub_and_div_are_compositions():
    """sub is add(a, neg(b)); div is mul(a, pow(b, -1))."""
    a = sg.leaf(6.0)
    b = sg.leaf(3.0)
    s = a - b
    assert s.op is Op.ADD
    assert s.prev[0] is a
    assert s.prev[1].op is Op.NEG and s.prev[1].prev[0] is b

    d = a / b
    assert d.op is Op.MUL
    assert d.prev[0] is a
    assert d.prev[1].op is Op.POW and d.prev[1].prev == (b,)
    assert d.prev[1].grad_fn.exponent == -1.0


def test_self_application_keeps_two_slots():
    a = sg.leaf(3.0)
    s = a + a
    m = a * a
    assert s.prev[0] is a and s.prev[1] is a
    assert m.prev[0] is a and m.prev[1] is a


def test_pow_exponent_is_a_constant():
    """The exponent never becomes a predecessor and must be a real number."""
    a = sg.leaf(2.0)
    p = a ** 3
    assert p.prev == (a,)
    assert p.data == 8.0
    with pytest.raises(TypeError):
        a ** sg.leaf(2.0)
    with pytest.raises(TypeError):
        2 ** a
    with pytest.raises(TypeError):
        sg.pow(a, sg.leaf(2.0))


def test_unsupported_operand_types():
    a = sg.leaf(1.0)
    with pytest.raises(TypeError):
        a + "x"
    with pytest.raises(TypeError):
        [1] * a
    with pytest.raises(TypeError):
        sg.add(a, None)


def test_ieee_propagation_instead_of_errors():
    """Invalid arithmetic yields inf/nan rather than raising."""
    zero = sg.leaf(0.0)
    assert (1.0 / zero).data == math.inf
    assert math.isnan((sg.leaf(-8.0) ** 0.5).data)
    assert sg.leaf(1000.0).exp().data == math.inf
    assert sg.leaf(1000.0).tanh().data == 1.0
    assert math.isnan((sg.leaf(math.inf) - math.inf).data)


def test_sum_and_from_list():
    xs = sg.from_list([1.0, 2.0, 3.5], labels=['a', 'b', 'c'])
    assert [x.label for x in xs] == ['a', 'b', 'c']
    assert all(x.is_leaf for x in xs)
    total = sg.sum(xs)
    assert total.data == 6.5
    assert total.op is Op.ADD

    empty = sg.sum([])
    assert empty.is_leaf and empty.data == 0.0

    with pytest.raises(ValueError):
        sg.from_list([1.0, 2.0], labels=['only-one'])


def test_detach_returns_fresh_leaf():
    a = sg.leaf(2.0, 'a')
    b = (a * 3).detach()
    assert b.is_leaf
    assert b.data == 6.0
    assert b.prev == ()


def test_repr():
    a = sg.leaf(2.0, 'a')
    assert repr(a) == "Value(data=2.0000, grad=0.0000, label='a')"
    out = a * a
    assert "grad_fn=<MulBackward>" in repr(out)


def test_tanh_saturates_instead_of_nan():
    """Large inputs give +-1 where the exp-ratio form would give nan."""
    assert sg.leaf(400.0).tanh().data == 1.0
    assert sg.leaf(-400.0).tanh().data == -1.0
    e2x = sg.leaf(400.0 * 2.0).exp()
    assert math.isnan(((e2x - 1.0) / (e2x + 1.0)).data)
