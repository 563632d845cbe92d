"""Downstream conversion of expression trees."""

from mathbox.solve.sympy_bridge import node_to_sympy

__all__ = ["node_to_sympy"]
