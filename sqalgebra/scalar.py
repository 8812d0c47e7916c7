"""Classes for scalars."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqalgebra.base import Base
from sqalgebra.printing import format_number

if TYPE_CHECKING:
    from typing import Any, Iterable, Optional

    from sqalgebra.types import SerialisedField, _BaseJSON, _ScalarJSON


def sympy_number(value: float) -> Any:
    """Convert a coefficient to a sympy number, keeping integral values exact.

    Args:
        value: The coefficient.

    Returns:
        Sympy `Integer` or `Float`.
    """
    import sympy

    if float(value).is_integer():
        return sympy.Integer(int(value))
    return sympy.Float(value)


class Zero(Base):
    """Class for the additive identity.

    `Zero` absorbs every multiplication and vanishes from every addition.
    """

    __slots__ = ("_hash", "_children")

    _score = 0

    def __init__(self) -> None:
        """Initialise the object."""
        self._hash = None
        self._children = None

    @classmethod
    def factory(cls: type[Zero]) -> Zero:
        """Factory method to create a new object.

        Returns:
            Zero.
        """
        return cls()

    def copy(self) -> Zero:
        """Return a copy of the object."""
        return Zero()

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        return "0"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object."""
        import sympy

        return sympy.S.Zero

    def as_json(self) -> _BaseJSON:
        """Return a JSON representation of the object."""
        return self._json_header()

    @classmethod
    def from_json(cls, data: _BaseJSON) -> Zero:
        """Return an object loaded from a JSON representation."""
        return cls()

    def __repr__(self) -> str:
        """Return a string representation."""
        return "0"


class Scalar(Base):
    """Class for a scalar.

    Args:
        value: Value of the scalar.
    """

    __slots__ = ("_value", "_hash", "_children")

    _score = 1

    def __init__(self, value: float = 1.0):
        """Initialise the scalar."""
        self._value = float(value)
        self._hash = None
        self._children = None

    @classmethod
    def factory(cls: type[Scalar], value: float) -> Scalar | Zero:
        """Factory method to create a new object.

        Args:
            value: Value of the scalar.

        Returns:
            Algebraic object. In general, `factory` methods may return objects of a different type
            to the class they are called on.
        """
        from sqalgebra import ZERO_TOLERANCE

        if not issubclass(cls, Scalar):
            raise TypeError(f"cls must be a subclass of Scalar, got {cls}")

        if abs(value) < ZERO_TOLERANCE:
            return Zero()

        return cls(value)

    @property
    def value(self) -> float:
        """Get the value of the scalar."""
        return self._value

    def copy(self, value: Optional[float] = None) -> Scalar:
        """Return a copy of the object with optionally updated attributes.

        Args:
            value: New value.

        Returns:
            Copy of the object.
        """
        if value is None:
            value = self.value
        return Scalar(value)

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        return format_number(self.value)

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Returns:
            Object in sympy format.
        """
        return sympy_number(self.value)

    def as_json(self) -> _ScalarJSON:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
            "value": self.value,
        }

    @classmethod
    def from_json(cls, data: _ScalarJSON) -> Scalar:
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        return cls(data["value"])

    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation."""
        yield from super()._hashable_fields()
        yield self.value

    def __repr__(self) -> str:
        """Return a string representation.

        Returns:
            String representation.
        """
        return format_number(self.value)
