"""Classes for scalar-valued tensors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqalgebra.base import Base
from sqalgebra.index import OrbitalIndex
from sqalgebra.printing import format_indices
from sqalgebra.scalar import Zero

if TYPE_CHECKING:
    from typing import Any, Iterable, Optional, Sequence

    from sqalgebra.operators import ElementaryOperator
    from sqalgebra.types import SerialisedField, _TensorJSON


def _check_indices(indices: Sequence[OrbitalIndex], label: str) -> tuple[OrbitalIndex, ...]:
    """Check that a sequence holds orbital indices only.

    Args:
        indices: Indices to check.
        label: Which side of the tensor the indices belong to, for error messages.

    Returns:
        Tuple of indices.
    """
    indices = tuple(indices)
    for index in indices:
        if not isinstance(index, OrbitalIndex):
            raise ValueError(
                f"{label.capitalize()} indices must be OrbitalIndex objects, got "
                f"{type(index).__name__}."
            )
    return indices


class Tensor(Base):
    """Base class for a scalar-valued tensor with upper and lower indices.

    Args:
        symbol: Symbol of the tensor.
        upper: Upper indices of the tensor.
        lower: Lower indices of the tensor.
    """

    __slots__ = ("_symbol", "_upper", "_lower", "_hash", "_children")

    _score = 3

    def __init__(
        self,
        symbol: str,
        upper: Sequence[OrbitalIndex],
        lower: Sequence[OrbitalIndex],
    ):
        """Initialise the tensor."""
        self._symbol = str(symbol)
        self._upper = _check_indices(upper, "upper")
        self._lower = _check_indices(lower, "lower")
        self._hash = None
        self._children = None

    @property
    def symbol(self) -> str:
        """Get the symbol of the tensor."""
        return self._symbol

    @property
    def upper(self) -> tuple[OrbitalIndex, ...]:
        """Get the upper indices of the tensor."""
        return self._upper

    @property
    def lower(self) -> tuple[OrbitalIndex, ...]:
        """Get the lower indices of the tensor."""
        return self._lower

    @property
    def indices(self) -> tuple[OrbitalIndex, ...]:
        """Get the upper indices followed by the lower indices."""
        return self._upper + self._lower

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        return f"{self.symbol}^{{{format_indices(self.upper)}}}_{{{format_indices(self.lower)}}}"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Returns:
            Object in sympy format.
        """
        from sympy.physics.secondquant import AntiSymmetricTensor as _AntiSymmetricTensor

        return _AntiSymmetricTensor(
            self.symbol,
            tuple(index.as_sympy() for index in self.upper),
            tuple(index.as_sympy() for index in self.lower),
        )

    def as_json(self) -> _TensorJSON:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
            "symbol": self.symbol,
            "upper": tuple(index.as_json() for index in self.upper),
            "lower": tuple(index.as_json() for index in self.lower),
        }

    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation."""
        yield from super()._hashable_fields()
        yield self.symbol
        yield self.upper
        yield self.lower

    def __repr__(self) -> str:
        """Return a string representation."""
        upper = format_indices(self.upper, ",")
        lower = format_indices(self.lower, ",")
        return f"{self.symbol}({upper};{lower})"


class AntiSymmetricTensor(Tensor):
    """Class for a tensor antisymmetric within its upper and within its lower indices.

    Args:
        symbol: Symbol of the tensor.
        upper: Upper indices of the tensor.
        lower: Lower indices of the tensor.
    """

    __slots__ = ()

    @classmethod
    def factory(
        cls: type[AntiSymmetricTensor],
        symbol: str,
        upper: Sequence[OrbitalIndex],
        lower: Sequence[OrbitalIndex],
    ) -> Base:
        """Factory method to create a new object.

        A repeated index within the upper or within the lower indices makes the tensor vanish.

        Args:
            symbol: Symbol of the tensor.
            upper: Upper indices of the tensor.
            lower: Lower indices of the tensor.

        Returns:
            Tensor, or `Zero`.
        """
        if len(set(upper)) != len(tuple(upper)) or len(set(lower)) != len(tuple(lower)):
            return Zero()
        return cls(symbol, upper, lower)

    def copy(
        self,
        symbol: Optional[str] = None,
        upper: Optional[Sequence[OrbitalIndex]] = None,
        lower: Optional[Sequence[OrbitalIndex]] = None,
    ) -> AntiSymmetricTensor:
        """Return a copy of the object with optionally updated attributes."""
        if symbol is None:
            symbol = self.symbol
        if upper is None:
            upper = self.upper
        if lower is None:
            lower = self.lower
        return self.__class__(symbol, upper, lower)

    @classmethod
    def from_json(cls, data: _TensorJSON) -> AntiSymmetricTensor:
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        return cls(
            data["symbol"],
            [OrbitalIndex.from_json(index) for index in data["upper"]],
            [OrbitalIndex.from_json(index) for index in data["lower"]],
        )


class KroneckerDelta(Tensor):
    """Class for a Kronecker delta function.

    Args:
        upper: First index.
        lower: Second index.
    """

    __slots__ = ()

    def __init__(self, upper: OrbitalIndex, lower: OrbitalIndex):
        """Initialise the tensor."""
        if not isinstance(upper, OrbitalIndex) or not isinstance(lower, OrbitalIndex):
            raise ValueError("Kronecker delta must have two orbital indices.")
        Tensor.__init__(self, "delta", (upper,), (lower,))

    @classmethod
    def factory(cls: type[KroneckerDelta], upper: OrbitalIndex, lower: OrbitalIndex) -> Base:
        """Factory method to create a new object.

        Indices restricted to two different orbital classes can never coincide, in which case the
        delta vanishes. General indices overlap with every class.

        Args:
            upper: First index.
            lower: Second index.

        Returns:
            Kronecker delta, or `Zero`.
        """
        if not (upper.is_general or lower.is_general):
            if upper.orbital_class is not lower.orbital_class:
                return Zero()
        return cls(upper, lower)

    @classmethod
    def from_operators(cls, op1: ElementaryOperator, op2: ElementaryOperator) -> KroneckerDelta:
        """Construct a Kronecker delta from the indices of two operators.

        Args:
            op1: Operator providing the first index.
            op2: Operator providing the second index.

        Returns:
            Kronecker delta.
        """
        return cls(op1.index, op2.index)

    @property
    def first(self) -> OrbitalIndex:
        """Get the first index."""
        return self.upper[0]

    @property
    def second(self) -> OrbitalIndex:
        """Get the second index."""
        return self.lower[0]

    def copy(
        self,
        upper: Optional[OrbitalIndex] = None,
        lower: Optional[OrbitalIndex] = None,
    ) -> KroneckerDelta:
        """Return a copy of the object with optionally updated attributes."""
        if upper is None:
            upper = self.first
        if lower is None:
            lower = self.second
        return KroneckerDelta(upper, lower)

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        return f"\\delta_{{{self.first.name}{self.second.name}}}"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object."""
        import sympy

        return sympy.KroneckerDelta(self.first.as_sympy(), self.second.as_sympy())

    @classmethod
    def from_json(cls, data: _TensorJSON) -> KroneckerDelta:
        """Return an object loaded from a JSON representation."""
        return cls(
            OrbitalIndex.from_json(data["upper"][0]),
            OrbitalIndex.from_json(data["lower"][0]),
        )

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"delta({self.first.name},{self.second.name})"


class _DensityTensor(Tensor):
    """Base class for reduced density matrix elements."""

    __slots__ = ()

    _name: str
    _latex_symbol: str

    def __init__(self, upper: Sequence[OrbitalIndex], lower: Sequence[OrbitalIndex]):
        """Initialise the tensor."""
        upper = tuple(upper)
        lower = tuple(lower)
        if not upper or len(upper) != len(lower):
            raise ValueError(
                f"{self.__class__.__name__} must have the same non-zero number of upper and "
                "lower indices."
            )
        Tensor.__init__(self, self._name, upper, lower)

    @classmethod
    def factory(
        cls: type[_DensityTensor],
        upper: Sequence[OrbitalIndex],
        lower: Sequence[OrbitalIndex],
    ) -> _DensityTensor:
        """Factory method to create a new object.

        Args:
            upper: Upper indices of the tensor.
            lower: Lower indices of the tensor.

        Returns:
            Density tensor.
        """
        return cls(upper, lower)

    @property
    def order(self) -> int:
        """Get the number of particles (or holes) the density matrix describes."""
        return len(self.upper)

    def copy(
        self,
        upper: Optional[Sequence[OrbitalIndex]] = None,
        lower: Optional[Sequence[OrbitalIndex]] = None,
    ) -> _DensityTensor:
        """Return a copy of the object with optionally updated attributes."""
        if upper is None:
            upper = self.upper
        if lower is None:
            lower = self.lower
        return self.__class__(upper, lower)

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        upper = format_indices(self.upper)
        lower = format_indices(self.lower)
        return f"{self._latex_symbol}^{{{upper}}}_{{{lower}}}"

    @classmethod
    def from_json(cls, data: _TensorJSON) -> _DensityTensor:
        """Return an object loaded from a JSON representation."""
        return cls(
            [OrbitalIndex.from_json(index) for index in data["upper"]],
            [OrbitalIndex.from_json(index) for index in data["lower"]],
        )


class Gamma(_DensityTensor):
    """Class for an element of the n-particle reduced density matrix.

    Args:
        upper: Upper (creation) indices of the tensor.
        lower: Lower (annihilation) indices of the tensor.
    """

    __slots__ = ()

    _name = "gamma"
    _latex_symbol = "\\gamma"


class Eta(_DensityTensor):
    """Class for an element of the n-hole reduced density matrix.

    Args:
        upper: Upper (annihilation) indices of the tensor.
        lower: Lower (creation) indices of the tensor.
    """

    __slots__ = ()

    _name = "eta"
    _latex_symbol = "\\eta"
