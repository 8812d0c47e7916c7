"""Contractions and Wick's theorem."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqalgebra.algebra import NormalOrdered, Product, Sum, multiply
from sqalgebra.exceptions import UnsupportedExpressionError
from sqalgebra.log import get_logger
from sqalgebra.operators import AnnihilationOperator, CreationOperator, ElementaryOperator
from sqalgebra.scalar import Scalar, Zero
from sqalgebra.tensor import Eta, Gamma, KroneckerDelta, Tensor

if TYPE_CHECKING:
    from sqalgebra.base import Base

logger = get_logger(__name__)


def contraction(op1: ElementaryOperator, op2: ElementaryOperator) -> Base:
    """Contract two elementary operators.

    The rules correspond to normal ordering with respect to a multi-reference vacuum, in which
    inactive orbitals are occupied, virtual orbitals are empty, and active orbitals are partially
    occupied. The contraction is not symmetric in its arguments.

    Args:
        op1: Left operator.
        op2: Right operator.

    Returns:
        `Zero`, a `KroneckerDelta`, or a one-particle (`Gamma`) or one-hole (`Eta`) density
        matrix element.
    """
    if not isinstance(op1, ElementaryOperator) or not isinstance(op2, ElementaryOperator):
        raise UnsupportedExpressionError(
            f"Contractions are defined between elementary operators only, got "
            f"{type(op1).__name__} and {type(op2).__name__}."
        )

    if isinstance(op1, CreationOperator) and isinstance(op2, AnnihilationOperator):
        if (op2.is_inactive or op2.is_general) and (op1.is_inactive or op1.is_general):
            return KroneckerDelta(op1.index, op2.index)
        if op2.is_active and op1.is_active:
            return Gamma((op1.index,), (op2.index,))

    elif isinstance(op1, AnnihilationOperator) and isinstance(op2, CreationOperator):
        if (op2.is_virtual or op2.is_general) and (op1.is_virtual or op1.is_general):
            return KroneckerDelta(op1.index, op2.index)
        if op2.is_active and op1.is_active:
            return Eta((op1.index,), (op2.index,))

    return Zero()


def _expand_operators(operators: tuple[ElementaryOperator, ...]) -> Sum:
    """Apply Wick's theorem to a string of elementary operators.

    Args:
        operators: Operator string.

    Returns:
        Sum of the normal-ordered string and all contracted terms.
    """
    n = len(operators)
    if n == 0:
        return Sum()

    terms: list[Base] = [multiply(1.0, NormalOrdered(*operators))]

    for i in range(n - 1):
        for j in range(i + 1, n):
            contracted = contraction(operators[i], operators[j])
            sign = (-1) ** ((j - i + 1) % 2)
            coefficient = multiply(sign, contracted)

            # Operators before i are left uncontracted, since their pairs were already
            # enumerated for a smaller i
            remaining = operators[i + 1 : j] + operators[j + 1 :]
            preceding = operators[:i]

            term = coefficient
            if preceding:
                term = multiply(term, NormalOrdered(*preceding))
            if remaining:
                term = multiply(term, _expand_operators(remaining))
            terms.append(term)

    return Sum.factory(*terms)


def _wick_product(product: Product) -> Base:
    """Apply Wick's theorem to a product.

    Args:
        product: Product of elementary operators, optionally with scalar-valued factors.

    Returns:
        Expanded expression.
    """
    if not product.children:
        return Sum()

    prefactors: list[Base] = []
    operators: list[ElementaryOperator] = []
    for child in product.children:
        if isinstance(child, ElementaryOperator):
            operators.append(child)
        else:
            prefactors.append(child)

    if not operators:
        # Already resolved, provided nothing still hides operators
        for child in prefactors:
            if not isinstance(child, (Tensor, Scalar, NormalOrdered)):
                raise UnsupportedExpressionError(
                    f"Cannot apply Wick's theorem to a product containing "
                    f"{type(child).__name__}."
                )
        return product

    for child in prefactors:
        if not isinstance(child, (Tensor, Scalar)):
            raise UnsupportedExpressionError(
                f"Cannot apply Wick's theorem to a product mixing elementary operators with "
                f"{type(child).__name__}."
            )

    prefactor = Product.factory(*prefactors, coefficient=product.coefficient)
    if isinstance(prefactor, Zero):
        return Sum()

    logger.debug("Applying Wick's theorem to a string of %d operators.", len(operators))
    expansion = _expand_operators(tuple(operators))
    logger.debug("Wick's theorem produced %d terms.", len(expansion))

    return multiply(prefactor, expansion)


def wick(expr: Base) -> Base:
    """Apply Wick's theorem to an expression.

    Args:
        expr: Elementary operator, normal-ordered block, product or sum.

    Returns:
        Expression in which every operator product is replaced by the sum of its normal-ordered
        form and all of its contractions.

    Raises:
        UnsupportedExpressionError: If the expression, or any term of it, is of a type for which
            Wick's theorem is not defined.
    """
    if isinstance(expr, (ElementaryOperator, NormalOrdered)):
        return expr
    if isinstance(expr, Sum):
        return Sum.factory(*(wick(term) for term in expr.children))
    if isinstance(expr, Product):
        return _wick_product(expr)
    raise UnsupportedExpressionError(
        f"Wick's theorem is not defined for expressions of type {type(expr).__name__}."
    )
