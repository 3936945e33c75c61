"""
Emitter extensions.

Each extension writes additional elements into the generated output.
"""

from .property_path import BeanPropertyPathExtension

__all__ = ["BeanPropertyPathExtension"]
