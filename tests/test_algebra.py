import itertools

import pytest

from sqalgebra.algebra import NormalOrdered, Product, Sum, add, multiply
from sqalgebra.base import Base, load_json
from sqalgebra.operators import F, Fd
from sqalgebra.scalar import Scalar, Zero
from sqalgebra.tensor import KroneckerDelta


def test_scalar():
    assert Scalar.factory(2.0) == Scalar(2.0)
    assert Scalar.factory(0.0) == Zero()
    assert Scalar.factory(1e-14) == Zero()
    assert repr(Scalar(2.0)) == "2"
    assert repr(Scalar(-0.5)) == "-0.5"
    assert repr(Zero()) == "0"
    assert Zero() == Zero()
    assert Zero() != Scalar(0.0)


def test_mul_operators():
    a, b = Fd("p"), F("q")
    mul = a * b
    assert isinstance(mul, Product)
    assert mul.coefficient == 1.0
    assert mul.children == (a, b)
    assert mul == Product(a, b)
    assert mul == multiply(a, b)
    assert mul != b * a
    assert repr(mul) == "Fd(p) * F(q)"


def test_mul_products():
    a, b, c, d = Fd("p"), F("q"), Fd("r"), F("s")

    assert (a * b) * c == Product(a, b, c)
    assert c * (a * b) == Product(c, a, b)
    assert (2.0 * a * b) * (3.0 * c * d) == Product(a, b, c, d, coefficient=6.0)
    assert multiply(Product(a, b, coefficient=2.0), Product(c, coefficient=-1.0)) == Product(
        a, b, c, coefficient=-2.0
    )


def test_mul_scalar():
    a, b = Fd("p"), F("q")

    assert 2 * a == Product(a, coefficient=2.0)
    assert a * 2 == Product(a, coefficient=2.0)
    assert Scalar(3.0) * (a * b) == Product(a, b, coefficient=3.0)
    assert (a * b) * 0.5 == Product(a, b, coefficient=0.5)
    assert Scalar(2.0) * Scalar(3.0) == Scalar(6.0)
    assert -(a * b) == Product(a, b, coefficient=-1.0)

    # The scalar never reorders the operators
    assert (a * 2 * b).children == (a, b)


def test_mul_zero():
    a, b = Fd("p"), F("q")

    assert Zero() * a == Zero()
    assert a * Zero() == Zero()
    assert (a * b) * Zero() == Zero()
    assert Zero() * (a * b) == Zero()
    assert 0 * a == Zero()
    assert 0.0 * (a * b) == Zero()
    assert (a * b) * 0 * a == Zero()
    assert Product.factory(a, b, coefficient=0.0) == Zero()
    assert Product.factory(a, Zero(), b) == Zero()


def test_mul_sum():
    a, b, c = Fd("p"), F("q"), Fd("r")

    assert (a + b) * c == Sum(a * c, b * c)
    assert c * (a + b) == Sum(c * a, c * b)
    assert 2 * (a + b) == Sum(2 * a, 2 * b)
    assert (a + b) * (b + c) == Sum(a * b, a * c, b * b, b * c)
    assert Sum() * a == Sum()


@pytest.mark.parametrize(
    "ops",
    [
        (Fd("p"), F("q"), Fd("r")),
        (Fd("i", "inactive"), Fd("t", "active"), F("a", "virtual")),
        (F("p"), F("p"), F("p")),
    ],
)
def test_mul_associative(ops):
    a, b, c = ops
    assert (a * b) * c == a * (b * c)
    assert (a * b) * c == Product(a, b, c)
    assert ((a * b) * c) * a == a * (b * (c * a))
    assert (2 * a) * (b * (3 * c)) == Product(a, b, c, coefficient=6.0)
    assert not any(isinstance(child, Product) for child in ((a * b) * (c * a)).children)


def test_add():
    a, b, c = Fd("p"), F("q"), Fd("r")

    add_ = a + b
    assert isinstance(add_, Sum)
    assert add_.children == (a, b)
    assert add_ == add(a, b)
    assert add_ != b + a
    assert repr(add_) == "Fd(p) + F(q)"

    assert a + Zero() == a
    assert Zero() + a == a
    assert (a * b) + 0 == a * b
    assert Zero() + Zero() == Zero()

    assert (a + b) + c == Sum(a, b, c)
    assert a + (b + c) == Sum(a, b, c)
    assert (a + b) + (c + a) == Sum(a, b, c, a)
    assert (a + b) + Zero() == Sum(a, b)
    assert a - b == Sum(a, Product(b, coefficient=-1.0))


def test_add_associative():
    ops = [Fd("p"), F("q"), Fd("r"), F("s")]
    for a, b, c in itertools.permutations(ops, 3):
        assert (a + b) + c == a + (b + c)
        assert not any(isinstance(child, Sum) for child in ((a + b) + (c + a)).children)


def test_sum_factory():
    a, b = Fd("p"), F("q")

    assert Sum.factory() == Sum()
    assert Sum.factory(Zero(), Zero()) == Sum()
    assert Sum.factory(a) == Sum(a)
    assert Sum.factory(a, Zero(), Sum(b, Sum(a)), Zero()) == Sum(a, b, a)
    assert Sum.factory(Sum(a, Zero())) == Sum(a)
    assert not any(isinstance(child, Zero) for child in Sum.factory(a, 0, b, 0.0).children)
    assert repr(Sum()) == "0"


def test_normal_ordered():
    a, b, c = Fd("p"), F("q"), Fd("r")

    block = NormalOrdered(a, b)
    assert block.children == (a, b)
    assert block != NormalOrdered(b, a)
    assert repr(block) == "{Fd(p) F(q)}"

    assert NormalOrdered.factory(a, b) == block
    assert NormalOrdered.factory(NormalOrdered(a), b) == block
    assert NormalOrdered.factory(a * b, c) == NormalOrdered(a, b, c)
    assert NormalOrdered.factory(2 * a, b) == Product(block, coefficient=2.0)
    assert NormalOrdered.factory(a, Zero()) == Zero()
    with pytest.raises(TypeError):
        NormalOrdered.factory(a + b)

    # Blocks are kept separate and in order inside products
    assert block * NormalOrdered(c) == Product(block, NormalOrdered(c))
    assert block * c == Product(block, c)


def test_product_copy():
    a, b = Fd("p"), F("q")
    product = Product(a, b, coefficient=2.0)
    assert product.copy() == product
    assert product.copy(coefficient=-1.0) == Product(a, b, coefficient=-1.0)
    assert product.copy(b, a) == Product(b, a, coefficient=2.0)
    assert product.coefficient == 2.0
    assert len(product) == 2
    assert product.factors == (a, b)


def test_repr():
    p, q = Fd("p").index, F("q").index
    expr = 2 * Fd("p") * F("q") + (-1) * KroneckerDelta(p, q)
    assert repr(expr) == "2 * Fd(p) * F(q) + -1 * delta(p,q)"
    assert repr(0.5 * NormalOrdered(Fd("p"), F("q"))) == "0.5 * {Fd(p) F(q)}"
    assert repr(Product(coefficient=3.0)) == "3"


def test_tree():
    a, b = Fd("p"), F("q")
    expr = 2 * NormalOrdered(a, b) + a * b

    assert list(expr.search(NormalOrdered)) == [NormalOrdered(a, b)]
    assert list(expr.search(Fd("p").__class__)) == [a, a]
    assert expr.find(Product) == Product(NormalOrdered(a, b), coefficient=2.0)
    assert expr.find(Zero) is None
    assert len(list(expr.search(None, depth=1))) == 3
    assert expr.apply(lambda x: x, Base) == expr

    swapped = expr.apply(lambda x: x.copy(*reversed(x.children)), NormalOrdered)
    assert swapped == 2 * NormalOrdered(b, a) + a * b

    tree = expr.tree_repr()
    assert tree.splitlines()[0] == "Sum"
    assert "Product [2.0]" in tree
    assert "Fd(p)" in tree


def test_json():
    p, q = Fd("p").index, F("q").index
    expr = NormalOrdered(Fd("p"), F("q")) + (-1) * KroneckerDelta(p, q) * NormalOrdered(F("r"))

    json = expr.as_json()
    assert json["_type"] == "Sum"
    assert load_json(json) == expr
    assert Sum.from_json(json) == expr


def test_invalid_operands():
    with pytest.raises(TypeError):
        multiply(Fd("p"), "q")
    with pytest.raises(TypeError):
        add(1j, Fd("p"))
    with pytest.raises(TypeError):
        Product(Fd("p"), "q")
