"""
*********************************************************************
sqalgebra: Symbolic algebra for second-quantised fermionic operators
*********************************************************************

The `sqalgebra` package represents strings of fermionic creation and annihilation operators,
labelled by orbital class, and reduces them with Wick's theorem into normal-ordered blocks
multiplied by Kronecker deltas and reduced density matrix elements.


Installation
------------

        pip install .

"""  # noqa: D205, D212, D415

from __future__ import annotations

__version__ = "0.1.0"

DEFAULT_ORBITAL_CLASS = "general"
ZERO_TOLERANCE = 1e-12
