"""Expression rendering utilities."""

from mathbox.render.sexpr import to_sexpr
from mathbox.render.text import render_node

__all__ = ["render_node", "to_sexpr"]
