"""Orbital indices."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqalgebra.base import Serialisable
from sqalgebra.exceptions import InvalidClassError

if TYPE_CHECKING:
    from typing import Any, Iterable, Optional

    from sqalgebra.types import SerialisedField, _OrbitalIndexJSON


class OrbitalClass(Enum):
    """Enum for the occupation regime of a spin-orbital."""

    GENERAL = "general"
    """Any orbital."""

    INACTIVE = "inactive"
    """Doubly occupied in every reference determinant."""

    ACTIVE = "active"
    """Partially occupied in the reference."""

    VIRTUAL = "virtual"
    """Unoccupied in every reference determinant."""

    @property
    def rank(self) -> int:
        """Get the position of the class in the enumeration, used to order indices."""
        return list(OrbitalClass).index(self)

    @classmethod
    def parse(cls, value: OrbitalClass | str) -> OrbitalClass:
        """Convert a value to an orbital class.

        Args:
            value: Orbital class, or its string value.

        Returns:
            Orbital class.

        Raises:
            InvalidClassError: If the value is not a known orbital class.
        """
        if isinstance(value, OrbitalClass):
            return value
        try:
            return cls(value)
        except ValueError:
            known = ", ".join(repr(member.value) for member in cls)
            raise InvalidClassError(
                f"Unknown orbital class {value!r}, expected one of {known}."
            ) from None


def from_list(
    names: list[str],
    orbital_classes: list[OrbitalClass | str] | OrbitalClass | str | None = None,
) -> list[OrbitalIndex]:
    """Construct a list of indices from lists of names and orbital classes.

    Args:
        names: List of names.
        orbital_classes: List of orbital classes. Can be a single value for all indices.

    Returns:
        List of indices.
    """
    if orbital_classes is None:
        from sqalgebra import DEFAULT_ORBITAL_CLASS

        orbital_classes = [DEFAULT_ORBITAL_CLASS] * len(names)
    elif isinstance(orbital_classes, (str, OrbitalClass)):
        orbital_classes = [orbital_classes] * len(names)
    if len(orbital_classes) != len(names):
        raise ValueError("Number of orbital classes must match the number of names.")
    return [OrbitalIndex(name, cls) for name, cls in zip(names, orbital_classes)]


class OrbitalIndex(Serialisable):
    """Class for orbital indices.

    Args:
        name: The name of the index.
        orbital_class: The orbital class of the index.
    """

    __slots__ = ("_name", "_orbital_class", "_hash")

    _name: str
    _orbital_class: OrbitalClass

    def __init__(self, name: str, orbital_class: Optional[OrbitalClass | str] = None):
        """Initialise the object."""
        if orbital_class is None:
            from sqalgebra import DEFAULT_ORBITAL_CLASS

            orbital_class = DEFAULT_ORBITAL_CLASS
        self._name = str(name)
        self._orbital_class = OrbitalClass.parse(orbital_class)
        self._hash = None

    @property
    def name(self) -> str:
        """Get the name of the index."""
        return self._name

    @property
    def orbital_class(self) -> OrbitalClass:
        """Get the orbital class of the index."""
        return self._orbital_class

    @property
    def is_general(self) -> bool:
        """Get whether the index labels a general orbital."""
        return self._orbital_class is OrbitalClass.GENERAL

    @property
    def is_inactive(self) -> bool:
        """Get whether the index labels an inactive orbital."""
        return self._orbital_class is OrbitalClass.INACTIVE

    @property
    def is_active(self) -> bool:
        """Get whether the index labels an active orbital."""
        return self._orbital_class is OrbitalClass.ACTIVE

    @property
    def is_virtual(self) -> bool:
        """Get whether the index labels a virtual orbital."""
        return self._orbital_class is OrbitalClass.VIRTUAL

    def copy(
        self,
        name: Optional[str] = None,
        orbital_class: Optional[OrbitalClass | str] = None,
    ) -> OrbitalIndex:
        """Return a copy of the object with some properties changed."""
        if name is None:
            name = self._name
        if orbital_class is None:
            orbital_class = self._orbital_class
        return OrbitalIndex(name, orbital_class)

    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Inactive indices are flagged as below the Fermi level and virtual indices as above it,
        following the conventions of `sympy.physics.secondquant`.

        Returns:
            Object in sympy format.
        """
        import sympy

        if self.is_inactive:
            return sympy.Symbol(self._name, below_fermi=True)
        if self.is_virtual:
            return sympy.Symbol(self._name, above_fermi=True)
        return sympy.Symbol(self._name)

    def as_json(self) -> _OrbitalIndexJSON:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
            "name": self._name,
            "orbital_class": self._orbital_class.value,
        }

    @classmethod
    def from_json(cls, data: _OrbitalIndexJSON) -> OrbitalIndex:
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        return cls(data["name"], data["orbital_class"])

    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation."""
        yield self.__class__.__name__
        yield self._orbital_class.rank
        yield self._name

    def __repr__(self) -> str:
        """Return a string representation of the object."""
        return self._name
