"""Classes and rules for algebraic operations."""

from __future__ import annotations

from functools import reduce
from numbers import Number
from typing import TYPE_CHECKING

from sqalgebra.base import Base, load_json
from sqalgebra.printing import format_coefficient, format_number
from sqalgebra.scalar import Scalar, Zero, sympy_number

if TYPE_CHECKING:
    from typing import Any, Iterable, Optional

    from sqalgebra.types import SerialisedField, _AlgebraicJSON, _ProductJSON


def _as_expression(obj: Base | float) -> Base:
    """Promote a number to a scalar expression.

    Args:
        obj: Expression or number.

    Returns:
        Expression.
    """
    if isinstance(obj, Base):
        return obj
    if isinstance(obj, Number) and not isinstance(obj, complex):
        return Scalar.factory(float(obj))  # type: ignore[arg-type]
    raise TypeError(f"Cannot use object of type {type(obj).__name__} in an expression.")


def _split_factors(obj: Base) -> tuple[float, tuple[Base, ...]]:
    """Split an expression into a coefficient and an ordered sequence of factors.

    Args:
        obj: Expression other than `Zero` or `Sum`.

    Returns:
        Coefficient and factors.
    """
    if isinstance(obj, Scalar):
        return obj.value, ()
    if isinstance(obj, Product):
        return obj.coefficient, obj.children
    return 1.0, (obj,)


def _compose_product(coefficient: float, factors: tuple[Base, ...]) -> Base:
    """Build a product from an already folded coefficient and flat factors.

    Args:
        coefficient: Folded coefficient.
        factors: Factors, none of which is a `Zero`, `Scalar`, `Product` or `Sum`.

    Returns:
        `Zero` if the coefficient vanishes, a `Scalar` if there are no factors, otherwise a
        `Product`.
    """
    from sqalgebra import ZERO_TOLERANCE

    if abs(coefficient) < ZERO_TOLERANCE:
        return Zero()
    if not factors:
        return Scalar(coefficient)
    return Product(*factors, coefficient=coefficient)


def multiply(left: Base | float, right: Base | float) -> Base:
    """Multiply two expressions, keeping the order of their factors.

    Args:
        left: Left operand.
        right: Right operand.

    Returns:
        Normalised product. `Zero` absorbs the product, numbers and scalars fold into a single
        coefficient, products are concatenated rather than nested, and sums are distributed over
        term by term.
    """
    left = _as_expression(left)
    right = _as_expression(right)

    if isinstance(left, Zero) or isinstance(right, Zero):
        return Zero()

    if isinstance(left, Sum):
        return Sum.factory(*(multiply(term, right) for term in left.children))
    if isinstance(right, Sum):
        return Sum.factory(*(multiply(left, term) for term in right.children))

    left_coefficient, left_factors = _split_factors(left)
    right_coefficient, right_factors = _split_factors(right)

    return _compose_product(left_coefficient * right_coefficient, left_factors + right_factors)


def add(left: Base | float, right: Base | float) -> Base:
    """Add two expressions.

    Args:
        left: Left operand.
        right: Right operand.

    Returns:
        Normalised sum. `Zero` vanishes from the sum, and sums are concatenated rather than
        nested.
    """
    left = _as_expression(left)
    right = _as_expression(right)

    if isinstance(right, Zero):
        return left
    if isinstance(left, Zero):
        return right

    return Sum.factory(left, right)


def _repr_brackets(obj: Base) -> str:
    """Helper function to add brackets to a string representation when needed.

    Args:
        obj: Object to represent.

    Returns:
        String representation.
    """
    if isinstance(obj, Sum):
        return f"({obj})"
    return repr(obj)


def _latex_brackets(obj: Base) -> str:
    """Helper function to add brackets to a LaTeX representation when needed.

    Args:
        obj: Object to represent.

    Returns:
        LaTeX representation.
    """
    if isinstance(obj, Sum):
        return f"\\left({obj.as_latex()}\\right)"
    return obj.as_latex()


class Algebraic(Base):
    """Base class for algebraic operations.

    Args:
        children: Children to operate on.
    """

    __slots__ = ("_hash", "_children")

    _children: tuple[Base, ...]

    def __init__(self, *children: Base):
        """Initialise the operation."""
        for child in children:
            if not isinstance(child, Base):
                raise TypeError(
                    f"Children of {self.__class__.__name__} must be expressions, got "
                    f"{type(child).__name__}."
                )
        self._hash = None
        self._children = children

    def copy(self, *children: Base) -> Algebraic:
        """Return a copy of the object with optionally updated children."""
        if not children:
            children = self.children
        return self.__class__(*children)

    def as_json(self) -> _AlgebraicJSON:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
            "children": tuple(child.as_json() for child in self.children),
        }

    @classmethod
    def from_json(cls, data: _AlgebraicJSON) -> Algebraic:
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        children = [load_json(child) for child in data["children"]]
        return cls(*children)


class NormalOrdered(Algebraic):
    """Class for a normal-ordered block of operators.

    The order of the children is significant and is never changed by the algebra.

    Args:
        children: Operators in the block.
    """

    __slots__ = ()

    _score = 4

    @classmethod
    def factory(cls: type[NormalOrdered], *children: Base) -> Base:
        """Factory method to create a new object.

        Nested normal-ordered blocks and products are spliced into the block, with their
        coefficients pulled out in front of it.

        Args:
            children: Operators in the block.

        Returns:
            Algebraic object. In general, `factory` methods may return objects of a different type
            to the class they are called on.
        """
        if not issubclass(cls, NormalOrdered):
            raise TypeError(f"cls must be a subclass of NormalOrdered, got {cls}")

        coefficient = 1.0
        operators: list[Base] = []
        for child in children:
            if isinstance(child, Zero):
                return Zero()
            elif isinstance(child, Scalar):
                coefficient *= child.value
            elif isinstance(child, Product):
                coefficient *= child.coefficient
                operators.extend(child.children)
            elif isinstance(child, NormalOrdered):
                operators.extend(child.children)
            elif isinstance(child, Sum):
                raise TypeError("Sums cannot be placed inside a normal-ordered block.")
            else:
                operators.append(child)

        block = cls(*operators)
        if coefficient == 1.0:
            return block
        return multiply(coefficient, block)

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        body = " ".join(child.as_latex() for child in self.children)
        return f"\\lbrace {body} \\rbrace"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Returns:
            Object in sympy format.
        """
        import sympy
        from sympy.physics.secondquant import NO

        return NO(sympy.Mul(*(child.as_sympy() for child in self.children)))

    def __repr__(self) -> str:
        """Return a string representation."""
        return "{" + " ".join(map(_repr_brackets, self.children)) + "}"


class Product(Algebraic):
    """Class for an ordered product with a single coefficient.

    Args:
        children: Factors of the product.
        coefficient: Coefficient of the product.
    """

    __slots__ = ("_coefficient",)

    _score = 5

    def __init__(self, *children: Base, coefficient: float = 1.0):
        """Initialise the product."""
        super().__init__(*children)
        self._coefficient = float(coefficient)

    @classmethod
    def factory(cls: type[Product], *children: Base | float, coefficient: float = 1.0) -> Base:
        """Factory method to create a new object.

        Args:
            children: Factors of the product.
            coefficient: Coefficient of the product.

        Returns:
            Algebraic object. In general, `factory` methods may return objects of a different type
            to the class they are called on.
        """
        if not issubclass(cls, Product):
            raise TypeError(f"cls must be a subclass of Product, got {cls}")
        return reduce(multiply, children, Scalar.factory(coefficient))

    @property
    def coefficient(self) -> float:
        """Get the coefficient of the product."""
        return self._coefficient

    @property
    def factors(self) -> tuple[Base, ...]:
        """Get the factors of the product."""
        return self.children

    def __len__(self) -> int:
        """Get the number of factors."""
        return len(self.children)

    def copy(self, *children: Base, coefficient: Optional[float] = None) -> Product:
        """Return a copy of the object with optionally updated attributes.

        Args:
            children: New factors.
            coefficient: New coefficient.

        Returns:
            Copy of the object.
        """
        if not children:
            children = self.children
        if coefficient is None:
            coefficient = self.coefficient
        return self.__class__(*children, coefficient=coefficient)

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        if not self.children:
            return format_number(self.coefficient)
        body = " ".join(map(_latex_brackets, self.children))
        return format_coefficient(self.coefficient, latex=True) + body

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Returns:
            Object in sympy format.
        """
        import sympy

        factors = (child.as_sympy() for child in self.children)
        return sympy_number(self.coefficient) * sympy.Mul(*factors)

    def as_json(self) -> _ProductJSON:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
            "coefficient": self.coefficient,
            "children": tuple(child.as_json() for child in self.children),
        }

    @classmethod
    def from_json(cls, data: _ProductJSON) -> Product:  # type: ignore[override]
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        children = [load_json(child) for child in data["children"]]
        return cls(*children, coefficient=data["coefficient"])

    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation."""
        yield self._score
        yield self.__class__.__name__
        yield self.coefficient
        yield len(self.children)
        yield from self.children

    def __repr__(self) -> str:
        """Return a string representation.

        Returns:
            String representation.
        """
        if not self.children:
            return format_number(self.coefficient)
        body = " * ".join(map(_repr_brackets, self.children))
        return format_coefficient(self.coefficient) + body


class Sum(Algebraic):
    """Class for a sum.

    The order of the terms does not change the value of the sum, but is preserved for
    deterministic rendering.

    Args:
        children: Terms of the sum.
    """

    __slots__ = ()

    _score = 6

    @classmethod
    def factory(cls: type[Sum], *children: Base | float) -> Sum:
        """Factory method to create a new object.

        Args:
            children: Terms of the sum.

        Returns:
            Sum with nested sums flattened and zero terms removed.
        """
        if not issubclass(cls, Sum):
            raise TypeError(f"cls must be a subclass of Sum, got {cls}")

        terms: list[Base] = []
        for child in map(_as_expression, children):
            if isinstance(child, Zero):
                continue
            elif isinstance(child, Sum):
                terms.extend(Sum.factory(*child.children).children)
            else:
                terms.append(child)

        return cls(*terms)

    @property
    def terms(self) -> tuple[Base, ...]:
        """Get the terms of the sum."""
        return self.children

    def __len__(self) -> int:
        """Get the number of terms."""
        return len(self.children)

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        if not self.children:
            return "0"
        out = ""
        for i, child in enumerate(self.children):
            body = child.as_latex()
            if i == 0:
                out = body
            elif body.startswith("-"):
                out += f" - {body[1:]}"
            else:
                out += f" + {body}"
        return out

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Returns:
            Object in sympy format.
        """
        import sympy

        return sympy.Add(*(child.as_sympy() for child in self.children))

    def __repr__(self) -> str:
        """Return a string representation.

        Returns:
            String representation.
        """
        if not self.children:
            return "0"
        return " + ".join(map(_repr_brackets, self.children))
