"""Base classes."""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from enum import Enum
from numbers import Number
from typing import TYPE_CHECKING, Callable, Optional, TypeVar, cast

if TYPE_CHECKING:
    from typing import Any, Iterable

    from sqalgebra.types import SerialisedField, _BaseJSON

T = TypeVar("T", bound="Base")
TypeOrFilter = Optional[type[T] | tuple[type[T], ...] | Callable[["Base"], bool]]


def load_json(data: Any) -> Any:
    """Return an object loaded from a JSON representation of any serialisable type.

    Args:
        data: Object in JSON format, as returned by `as_json`.

    Returns:
        Object loaded from JSON representation.
    """
    module = importlib.import_module(data["_module"])
    cls = getattr(module, data["_type"])
    if not (isinstance(cls, type) and issubclass(cls, Serialisable)):
        raise TypeError(f"{data['_module']}.{data['_type']} is not a serialisable type.")
    return cls.from_json(data)


class Serialisable(ABC):
    """Base class for serialisable objects."""

    _hash: Optional[int]

    @abstractmethod
    def as_json(self) -> Any:
        """Return a JSON representation of the object.

        Returns:
            Object in JSON format.
        """
        pass

    @classmethod
    @abstractmethod
    def from_json(cls, data: Any) -> Serialisable:
        """Return an object loaded from a JSON representation.

        Returns:
            Object loaded from JSON representation.
        """
        pass

    def _json_header(self) -> _BaseJSON:
        """Return the fields identifying the type in a JSON representation."""
        return {
            "_type": self.__class__.__name__,
            "_module": self.__class__.__module__,
        }

    def __hash__(self) -> int:
        """Return the hash of the object.

        Returns:
            The integer hash of the object.

        Note:
            By default, all `Serialisable` objects are hashable. Subclasses of `Serialisable`
            should implement the `_hashable_fields` method to define the fields in the hashable
            representation. The hash is computed lazily and stored in the `_hash` attribute.
        """
        if self._hash is None:
            self._hash = hash(self._hashable())
        return self._hash

    def _hashable(self) -> tuple[SerialisedField, ...]:
        """Return a hashable representation."""
        return tuple(self._hashable_fields())

    @abstractmethod
    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation."""
        pass

    def __eq__(self, other: Any) -> bool:
        """Check if two objects are equal."""
        if self is other:
            return True
        if not isinstance(other, Serialisable):
            return False
        if self._hash is not None and other._hash is not None:
            if self._hash != other._hash:
                return False
        return self._hashable() == other._hashable()

    def __lt__(self, other: Serialisable) -> bool:
        """Check if an object precedes another."""
        if self is other:
            return False
        for a, b in zip(self._hashable_fields(), other._hashable_fields()):
            if a != b:
                return bool(a < b)
        return len(self._hashable()) < len(other._hashable())


class Traversal(Enum):
    """Enum for traversal."""

    PREORDER = 0
    """Pre-order traversal (node before children)."""

    POSTORDER = 1
    """Post-order traversal (children before node)."""


def _matches_filter(node: Base, type_filter: TypeOrFilter[Base]) -> bool:
    """Check if a node matches a type filter.

    Args:
        node: Node to check.
        type_filter: Type filter to check against.

    Returns:
        Whether the node matches the type filter.
    """
    if type_filter is None:
        return True
    if isinstance(type_filter, tuple) or isinstance(type_filter, type):
        return isinstance(node, type_filter)
    return type_filter(node)  # type: ignore


class Base(Serialisable):
    """Base class for nodes of a second-quantised expression tree.

    Nodes are immutable. Normalisation happens in the `factory` methods and in the arithmetic
    operators, which dispatch to `sqalgebra.algebra.multiply` and `sqalgebra.algebra.add`. The
    plain constructors store their arguments as given.
    """

    _score: int
    _children: Optional[tuple[Base, ...]]

    @classmethod
    @abstractmethod
    def factory(cls: type[Base], *args: Any, **kwargs: Any) -> Base:
        """Factory method to create a new object.

        Args:
            args: Positional arguments to pass to the constructor.
            kwargs: Keyword arguments to pass to the constructor.

        Returns:
            Algebraic object. In general, `factory` methods may return objects of a different type
            to the class they are called on.
        """
        pass

    @property
    def is_leaf(self) -> bool:
        """Get whether the object is a leaf in a tree."""
        return not bool(self.children)

    @property
    def children(self) -> tuple[Base, ...]:
        """Get the children of the node."""
        return self._children or ()

    def _search(
        self,
        level: int,
        type_filter: TypeOrFilter[T],
        order: Traversal,
    ) -> Iterable[tuple[T, int]]:
        """Depth-first search through the tree.

        Args:
            level: Current level in the tree.
            type_filter: Type to filter by.
            order: Order to traverse the tree.

        Yields:
            Elements of the `_children` tuple, recursively, along with their level in the tree.
        """
        if order == Traversal.PREORDER and _matches_filter(self, type_filter):
            yield cast(T, self), level
        for child in self.children:
            yield from child._search(level + 1, type_filter, order)
        if order == Traversal.POSTORDER and _matches_filter(self, type_filter):
            yield cast(T, self), level

    def search(
        self,
        type_filter: TypeOrFilter[T],
        order: Traversal = Traversal.PREORDER,
        depth: Optional[int] = None,
    ) -> Iterable[T]:
        """Depth-first search through the tree.

        Args:
            type_filter: Type to filter by.
            order: Order to traverse the tree.
            depth: Maximum (relative) depth to search to.

        Yields:
            Elements of the `_children` tuple, recursively.
        """
        for node, level in self._search(0, type_filter, order):
            if depth is not None and level > depth:
                continue
            yield node

    def find(
        self,
        type_filter: TypeOrFilter[T],
        order: Traversal = Traversal.PREORDER,
        depth: Optional[int] = None,
    ) -> Optional[T]:
        """Find the first node matching a type filter.

        Args:
            type_filter: Type to filter by.
            order: Order to traverse the tree.
            depth: Maximum (relative) depth to search to.

        Returns:
            First node matching the type filter, recursively.
        """
        for node in self.search(type_filter=type_filter, order=order, depth=depth):
            return node
        return None

    def apply(
        self,
        function: Callable[[T], Base],
        type_filter: TypeOrFilter[T],
    ) -> Base:
        """Apply a function to nodes.

        Args:
            function: Function to apply.
            type_filter: Type of node to apply to.

        Returns:
            Object after applying function (if applicable).
        """
        node = self
        if node.children:
            children = tuple(child.apply(function, type_filter) for child in node.children)
            node = node.copy(*children)
        if _matches_filter(node, type_filter):
            return function(cast(T, node))
        return node

    def _hashable_fields(self) -> Iterable[SerialisedField]:
        """Yield fields of the hashable representation.

        The default fields are the score of the node type, which orders the node types
        (`Zero` < `Scalar` < operators < tensors < `NormalOrdered` < `Product` < `Sum` <
        commutators), the name of the class, the number of children and the children
        themselves. Subclasses holding data beyond their children extend this.
        """
        yield self._score
        yield self.__class__.__name__
        yield len(self.children)
        yield from self.children

    @abstractmethod
    def copy(self, *args: Any, **kwargs: Any) -> Base:
        """Return a copy of the object with optionally updated attributes."""
        pass

    @abstractmethod
    def as_latex(self) -> str:
        """Return a LaTeX representation of the object.

        Returns:
            LaTeX string.
        """
        pass

    @abstractmethod
    def as_sympy(self) -> Any:
        """Return a sympy representation of the object.

        Returns:
            Object in sympy format.
        """
        pass

    @abstractmethod
    def __repr__(self) -> str:
        """Return a string representation.

        Returns:
            String representation.
        """
        pass

    def tree_repr(
        self,
        connectors: tuple[str, str, str, str] = ("─", "│", "├", "└"),
        indent: int = 4,
    ) -> str:
        """Return a string representation of the tree structure.

        Args:
            connectors: Characters to use for drawing the tree structure. The characters are, in
                order: (0) horizontal connection, (1) vertical connection, (2) vertical connection
                with horizontal branch, (3) vertical terminus with horizontal branch.
            indent: Number of spaces to use for indentation.

        Returns:
            String representation of the tree structure.
        """
        # Minimum indent of 2 to fit the connectors
        indent = max(indent, 2)
        lines: list[str] = []

        def to_str(node: Base) -> str:
            if node.children:
                coefficient = getattr(node, "coefficient", None)
                if coefficient is not None:
                    return f"{node.__class__.__name__} [{coefficient}]"
                return node.__class__.__name__
            return repr(node)

        def walk(node: Base, prefix: str, is_last: bool) -> None:
            connector = connectors[3 if is_last else 2] + connectors[0] * (indent - 2) + " "
            lines.append(f"{prefix}{connector}{to_str(node)}")
            spacing = (connectors[1] if not is_last else " ") + " " * (indent - 1)
            for i, child in enumerate(node.children):
                walk(child, f"{prefix}{spacing}", i == len(node.children) - 1)

        lines.append(to_str(self))
        for i, child in enumerate(self.children):
            walk(child, "", i == len(self.children) - 1)

        return "\n".join(lines)

    def __hash__(self) -> int:
        """Return the hash of the object."""
        return super().__hash__()

    def __add__(self, other: Base | float) -> Base:
        """Add two objects."""
        from sqalgebra.algebra import add

        if not isinstance(other, (Base, Number)):
            return NotImplemented
        return add(self, other)

    def __radd__(self, other: Base | float) -> Base:
        """Add two objects."""
        from sqalgebra.algebra import add

        if not isinstance(other, (Base, Number)):
            return NotImplemented
        return add(other, self)

    def __sub__(self, other: Base | float) -> Base:
        """Subtract two objects."""
        return self + (-1.0 * other)

    def __rsub__(self, other: Base | float) -> Base:
        """Subtract two objects."""
        return other + (-1.0 * self)

    def __mul__(self, other: Base | float) -> Base:
        """Multiply two objects, keeping the order of the factors."""
        from sqalgebra.algebra import multiply

        if not isinstance(other, (Base, Number)):
            return NotImplemented
        return multiply(self, other)

    def __rmul__(self, other: Base | float) -> Base:
        """Multiply two objects, keeping the order of the factors."""
        from sqalgebra.algebra import multiply

        if not isinstance(other, (Base, Number)):
            return NotImplemented
        return multiply(other, self)

    def __neg__(self) -> Base:
        """Negate the object."""
        return -1.0 * self
