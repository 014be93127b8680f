"""Scanner, syntax tree, scope resolver and tree-walking interpreter for a small scripting language."""

__version__ = "0.0.1"