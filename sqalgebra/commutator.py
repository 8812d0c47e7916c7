"""Classes for commutators and anticommutators."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from sqalgebra.algebra import Algebraic, add, multiply
from sqalgebra.operators import ElementaryOperator
from sqalgebra.scalar import Zero
from sqalgebra.tensor import KroneckerDelta

if TYPE_CHECKING:
    from typing import Any

    from sqalgebra.base import Base


class _Bracket(Algebraic):
    """Base class for brackets of two expressions.

    Args:
        left: Left expression.
        right: Right expression.
    """

    __slots__ = ()

    _score = 7

    _delimiters: tuple[str, str]
    _latex_delimiters: tuple[str, str]

    def __init__(self, left: Base, right: Base):
        """Initialise the bracket."""
        super().__init__(left, right)

    @classmethod
    def factory(cls: type[_Bracket], left: Base, right: Base) -> Base:
        """Factory method to create a new object.

        A bracket with `Zero` on either side vanishes.

        Args:
            left: Left expression.
            right: Right expression.

        Returns:
            Bracket, or `Zero`.
        """
        if not issubclass(cls, _Bracket):
            raise TypeError(f"cls must be a subclass of _Bracket, got {cls}")
        if isinstance(left, Zero) or isinstance(right, Zero):
            return Zero()
        return cls(left, right)

    @property
    def left(self) -> Base:
        """Get the left expression."""
        return self.children[0]

    @property
    def right(self) -> Base:
        """Get the right expression."""
        return self.children[1]

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        opening, closing = self._latex_delimiters
        return f"{opening}{self.left.as_latex()}, {self.right.as_latex()}{closing}"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object, written out in full."""
        return self.expand().as_sympy()

    @abstractmethod
    def expand(self) -> Base:
        """Write the bracket out as a sum of products.

        Returns:
            Expanded expression.
        """
        pass

    def __repr__(self) -> str:
        """Return a string representation."""
        opening, closing = self._delimiters
        return f"{opening}{self.left!r}, {self.right!r}{closing}"


class Commutator(_Bracket):
    """Class for the commutator `[A, B] = AB - BA`.

    Args:
        left: Left expression.
        right: Right expression.
    """

    __slots__ = ()

    _delimiters = ("[", "]")
    _latex_delimiters = ("\\left[", "\\right]")

    def expand(self) -> Base:
        """Write the commutator out as a sum of products.

        Returns:
            Expanded expression.
        """
        return add(
            multiply(self.left, self.right),
            multiply(-1.0, multiply(self.right, self.left)),
        )


class AntiCommutator(_Bracket):
    """Class for the anticommutator `{A, B} = AB + BA`.

    Args:
        left: Left expression.
        right: Right expression.
    """

    __slots__ = ()

    _delimiters = ("[", "]+")
    _latex_delimiters = ("\\left[", "\\right]_{+}")

    def expand(self) -> Base:
        """Write the anticommutator out.

        Two elementary operators are reduced with the canonical anticommutation relations.
        Otherwise, the anticommutator is written out as a sum of products.

        Returns:
            Expanded expression.
        """
        left, right = self.left, self.right
        if isinstance(left, ElementaryOperator) and isinstance(right, ElementaryOperator):
            if type(left) is type(right):
                return Zero()
            return KroneckerDelta.factory(left.index, right.index)
        return add(multiply(left, right), multiply(right, left))
