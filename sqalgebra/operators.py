"""Classes for elementary fermionic operators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqalgebra.base import Base
from sqalgebra.index import OrbitalClass, OrbitalIndex

if TYPE_CHECKING:
    from typing import Any, Iterable, Optional

    from sqalgebra.types import SerialisedField, _OperatorJSON


class ElementaryOperator(Base):
    """Base class for a fermionic creation or annihilation operator.

    Args:
        index: The orbital index the operator acts on.
    """

    __slots__ = ("_index", "_hash", "_children")

    _score = 2

    def __init__(self, index: OrbitalIndex):
        """Initialise the operator."""
        if not isinstance(index, OrbitalIndex):
            raise TypeError(f"index must be an OrbitalIndex, got {type(index).__name__}")
        self._index = index
        self._hash = None
        self._children = None

    @classmethod
    def factory(
        cls: type[ElementaryOperator],
        name: str,
        orbital_class: Optional[OrbitalClass | str] = None,
    ) -> ElementaryOperator:
        """Factory method to create a new object.

        Args:
            name: Name of the orbital index.
            orbital_class: Orbital class of the index. Defaults to a general orbital.

        Returns:
            Elementary operator.

        Raises:
            InvalidClassError: If the orbital class is not known.
        """
        if cls is ElementaryOperator or not issubclass(cls, ElementaryOperator):
            raise TypeError(f"cls must be a concrete subclass of ElementaryOperator, got {cls}")
        return cls(OrbitalIndex(name, orbital_class))

    @property
    def index(self) -> OrbitalIndex:
        """Get the orbital index of the operator."""
        return self._index

    @property
    def name(self) -> str:
        """Get the name of the orbital index of the operator."""
        return self._index.name

    @property
    def orbital_class(self) -> OrbitalClass:
        """Get the orbital class of the operator."""
        return self._index.orbital_class

    @property
    def is_general(self) -> bool:
        """Get whether the operator acts on a general orbital."""
        return self._index.is_general

    @property
    def is_inactive(self) -> bool:
        """Get whether the operator acts on an inactive orbital."""
        return self._index.is_inactive

    @property
    def is_active(self) -> bool:
        """Get whether the operator acts on an active orbital."""
        return self._index.is_active

    @property
    def is_virtual(self) -> bool:
        """Get whether the operator acts on a virtual orbital."""
        return self._index.is_virtual

    @property
    def is_hole(self) -> bool:
        """Get whether the operator acts on an orbital that can hold a hole."""
        return self.is_inactive or self.is_active

    @property
    def is_particle(self) -> bool:
        """Get whether the operator acts on an orbital that can hold a particle."""
        return self.is_active or self.is_virtual

    def copy(self, index: Optional[OrbitalIndex] = None) -> ElementaryOperator:
        """Return a copy of the object with optionally updated attributes.

        Args:
            index: New orbital index.

        Returns:
            Copy of the object.
        """
        if index is None:
            index = self.index
        return self.__class__(index)

    def as_json(self) -> _OperatorJSON:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
            "index": self.index.as_json(),
        }

    @classmethod
    def from_json(cls, data: _OperatorJSON) -> ElementaryOperator:
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        return cls(OrbitalIndex.from_json(data["index"]))

    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation."""
        yield from super()._hashable_fields()
        yield self.index


class CreationOperator(ElementaryOperator):
    """Class for a fermionic creation operator."""

    __slots__ = ()

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        return f"a^{{\\dagger}}_{{{self.name}}}"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object."""
        from sympy.physics.secondquant import Fd as _Fd

        return _Fd(self.index.as_sympy())

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"Fd({self.name})"


class AnnihilationOperator(ElementaryOperator):
    """Class for a fermionic annihilation operator."""

    __slots__ = ()

    def as_latex(self) -> str:
        """Return a LaTeX representation of the object."""
        return f"a_{{{self.name}}}"

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object."""
        from sympy.physics.secondquant import F as _F

        return _F(self.index.as_sympy())

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"F({self.name})"


def Fd(name: str, orbital_class: Optional[OrbitalClass | str] = None) -> CreationOperator:
    """Shorthand constructor of a creation operator.

    Args:
        name: Name of the orbital index.
        orbital_class: Orbital class of the index. Defaults to a general orbital.

    Returns:
        Creation operator.
    """
    return CreationOperator(OrbitalIndex(name, orbital_class))


def F(name: str, orbital_class: Optional[OrbitalClass | str] = None) -> AnnihilationOperator:
    """Shorthand constructor of an annihilation operator.

    Args:
        name: Name of the orbital index.
        orbital_class: Orbital class of the index. Defaults to a general orbital.

    Returns:
        Annihilation operator.
    """
    return AnnihilationOperator(OrbitalIndex(name, orbital_class))
