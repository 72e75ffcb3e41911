"""
chem2depict.render

Drawing and export of a structure:
- SVG text from RDKit's MolDraw2DSVG;
- PDF by converting that SVG with svglib and writing it with reportlab.

Canvas size follows the 2D bounding box of the (already rotated) structure.
"""

import io
import logging
from pathlib import Path
from typing import Tuple, Union

from rdkit import Chem
from rdkit.Chem.Draw import rdMolDraw2D
from reportlab.graphics import renderPDF
from svglib.svglib import svg2rlg

from .config import Coloring, DepictConfig, DEFAULT_DEPICT_CONFIG
from .utils import bounds_2d

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

PDF_EXTENSION = ".pdf"
SVG_EXTENSION = ".svg"

# room around the structure, in coordinate units
MARGIN = 1.0


def ensure_extension(path: PathLike, extension: str) -> Path:
    """Append extension unless the file name already ends with it."""
    path = Path(path)
    if path.name.endswith(extension):
        return path
    return path.with_name(path.name + extension)


def image_size(mol: Chem.Mol, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Tuple[int, int]:
    width, height = bounds_2d(mol)
    w = int((width + 2 * MARGIN) * config.export_scale)
    h = int((height + 2 * MARGIN) * config.export_scale)
    return max(w, config.min_image_size), max(h, config.min_image_size)


def _apply_coloring(opts, coloring: Coloring) -> None:
    opts.setBackgroundColour(coloring.background + (1.0,))
    if coloring.foreground is None:
        return
    if coloring.foreground == (0.0, 0.0, 0.0):
        opts.useBWAtomPalette()
    else:
        opts.setAtomPalette({-1: coloring.foreground})


def render_svg(mol: Chem.Mol, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> str:
    """Draw mol (using its current coordinates) to SVG text."""
    width, height = image_size(mol, config)
    drawer = rdMolDraw2D.MolDraw2DSVG(width, height)
    _apply_coloring(drawer.drawOptions(), config.coloring)
    rdMolDraw2D.PrepareAndDrawMolecule(drawer, mol, kekulize=config.kekulize)
    drawer.FinishDrawing()
    return drawer.GetDrawingText()


def write_svg(mol: Chem.Mol, path: PathLike, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Path:
    path = ensure_extension(path, SVG_EXTENSION)
    svg = render_svg(mol, config)
    with open(path, "w", encoding="utf-8") as f:
        f.write(svg)
    logger.info("Wrote %s", path)
    return path


def write_pdf(mol: Chem.Mol, path: PathLike, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Path:
    path = ensure_extension(path, PDF_EXTENSION)
    svg = render_svg(mol, config)
    drawing = svg2rlg(io.BytesIO(svg.encode("utf-8")))
    if drawing is None:
        raise OSError(f"could not convert drawing for {path}")
    renderPDF.drawToFile(drawing, str(path))
    logger.info("Wrote %s", path)
    return path
