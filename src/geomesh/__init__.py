"""
geomesh

A Python package for generating and importing unstructured triangle meshes
for geophysical simulation.
"""

from . import io
from . import meshgen
from . import trimesh

__all__ = [
    "io",
    "meshgen",
    "trimesh",
]
