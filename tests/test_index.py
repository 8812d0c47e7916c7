import pytest

from sqalgebra.exceptions import InvalidClassError
from sqalgebra.index import OrbitalClass, OrbitalIndex, from_list


def test_index():
    index = OrbitalIndex("p")
    assert index.name == "p"
    assert index.orbital_class is OrbitalClass.GENERAL
    assert index.is_general
    assert not index.is_inactive
    assert not index.is_active
    assert not index.is_virtual
    assert repr(index) == "p"

    assert index == OrbitalIndex("p", "general")
    assert index == OrbitalIndex("p", OrbitalClass.GENERAL)
    assert index != OrbitalIndex("q")
    assert index != OrbitalIndex("p", "active")

    assert index._hash is None  # Will be set after first call
    assert hash(index) == hash(OrbitalIndex("p"))
    assert index._hash is not None
    assert hash(index) == index._hash
    assert index._hashable() == (OrbitalIndex.__name__, OrbitalClass.GENERAL.rank, "p")


@pytest.mark.parametrize(
    "orbital_class, predicate",
    [
        ("general", "is_general"),
        ("inactive", "is_inactive"),
        ("active", "is_active"),
        ("virtual", "is_virtual"),
    ],
)
def test_index_classes(orbital_class, predicate):
    index = OrbitalIndex("x", orbital_class)
    assert index.orbital_class.value == orbital_class
    for name in ("is_general", "is_inactive", "is_active", "is_virtual"):
        assert getattr(index, name) == (name == predicate)


@pytest.mark.parametrize("orbital_class", ["occupied", "", "Active", "core", 1])
def test_index_invalid_class(orbital_class):
    with pytest.raises(InvalidClassError):
        OrbitalIndex("p", orbital_class)

    with pytest.raises(ValueError):
        OrbitalIndex("p", orbital_class)


def test_index_copy():
    index = OrbitalIndex("p", "active")
    assert index.copy() == index
    assert index.copy(name="q") == OrbitalIndex("q", "active")
    assert index.copy(orbital_class="virtual") == OrbitalIndex("p", "virtual")

    with pytest.raises(InvalidClassError):
        index.copy(orbital_class="unknown")


def test_index_ordering():
    a = OrbitalIndex("a", "virtual")
    i = OrbitalIndex("i", "inactive")
    p = OrbitalIndex("p")
    q = OrbitalIndex("q")
    assert sorted([q, a, p, i]) == [p, q, i, a]

    t = OrbitalIndex("t", "active")
    assert sorted([t, a, p, i]) == [p, i, t, a]
    assert [cls.rank for cls in OrbitalClass] == [0, 1, 2, 3]


def test_index_json():
    index = OrbitalIndex("t", "active")
    json = index.as_json()
    assert json["orbital_class"] == "active"
    index_from_json = OrbitalIndex.from_json(json)
    assert index == index_from_json
    assert hash(index) == hash(index_from_json)


def test_from_list():
    assert from_list(["p", "q"]) == [OrbitalIndex("p"), OrbitalIndex("q")]
    assert from_list(["i", "j"], "inactive") == [
        OrbitalIndex("i", "inactive"),
        OrbitalIndex("j", "inactive"),
    ]
    assert from_list(["i", "a"], ["inactive", OrbitalClass.VIRTUAL]) == [
        OrbitalIndex("i", "inactive"),
        OrbitalIndex("a", "virtual"),
    ]

    with pytest.raises(ValueError):
        from_list(["p", "q"], ["general"])

    with pytest.raises(InvalidClassError):
        from_list(["p"], "bogus")
