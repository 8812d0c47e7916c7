"""Printing tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqalgebra.base import Base
    from sqalgebra.index import OrbitalIndex


def format_number(value: float) -> str:
    """Format a number without redundant trailing zeros.

    Args:
        value: The number to format.

    Returns:
        String representation of the number.
    """
    body = str(float(value))
    if "e" in body:
        return body
    while body.endswith("0") and "." in body:
        body = body[:-1]
    return body.rstrip(".")


def format_coefficient(value: float, latex: bool = False) -> str:
    """Format the coefficient in front of a product.

    Unit coefficients are dropped, and a coefficient of minus one is reduced to its sign.

    Args:
        value: The coefficient.
        latex: Whether the coefficient precedes a LaTeX product. Otherwise, it precedes a plain
            text product and is followed by a multiplication sign.

    Returns:
        String representation of the coefficient, possibly empty.
    """
    if value == 1.0:
        return ""
    if value == -1.0:
        return "-" if latex else "-1 * "
    body = format_number(value)
    return f"{body} " if latex else f"{body} * "


def format_indices(indices: tuple[OrbitalIndex, ...], separator: str = "") -> str:
    """Join the names of a sequence of indices.

    Args:
        indices: The indices.
        separator: String placed between consecutive names.

    Returns:
        Joined index names.
    """
    return separator.join(index.name for index in indices)


def latex(expr: Base, multiline: bool = False) -> str:
    """Render an expression as LaTeX.

    Args:
        expr: The expression to render.
        multiline: Whether to place each term of a top-level sum on its own line, in a form
            suitable for an `align` environment.

    Returns:
        LaTeX string.
    """
    from sqalgebra.algebra import Sum

    if not multiline or not isinstance(expr, Sum) or not expr.children:
        return expr.as_latex()

    lines = []
    for i, term in enumerate(expr.children):
        body = term.as_latex()
        if i == 0:
            lines.append(f"&{body}")
        elif body.startswith("-"):
            lines.append(f"&- {body[1:]}")
        else:
            lines.append(f"&+ {body}")

    return " \\\\\n".join(lines)
