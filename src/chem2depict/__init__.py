# src/chem2depict/__init__.py

"""
chem2depict

A small toolkit for:
- Recognising chemical-structure input (SMILES, InChI, molfile, CML, names, file paths)
- Loading it into an RDKit Mol with 2D coordinates
- Exporting the depiction as SVG / PDF
"""

from .core import StructureController, LoadResult
from .model import Model
from .exceptions import StructureError, StructureParseError, LayoutError
from .config import (
    DepictConfig,
    Coloring,
    BLACK,
    WHITE,
    CPK,
    DEFAULT_DEPICT_CONFIG,
    COLOR_DEPICT_CONFIG,
    INVERTED_DEPICT_CONFIG,
    STRICT_INPUT_CONFIG,
)

__all__ = [
    "StructureController",
    "LoadResult",
    "Model",
    "StructureError",
    "StructureParseError",
    "LayoutError",
    "DepictConfig",
    "Coloring",
    "BLACK",
    "WHITE",
    "CPK",
    "DEFAULT_DEPICT_CONFIG",
    "COLOR_DEPICT_CONFIG",
    "INVERTED_DEPICT_CONFIG",
    "STRICT_INPUT_CONFIG",
]

__version__ = "0.1.0"
