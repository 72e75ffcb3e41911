# src/chem2depict/config.py
from dataclasses import dataclass
from typing import Optional, Tuple

RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class Coloring:
    """
    Colour scheme used when drawing a structure.

    foreground=None keeps RDKit's per-element palette (CPK style).
    """

    name: str
    background: RGB = (1.0, 1.0, 1.0)
    foreground: Optional[RGB] = (0.0, 0.0, 0.0)


BLACK = Coloring("black")
WHITE = Coloring("white", background=(0.0, 0.0, 0.0), foreground=(1.0, 1.0, 1.0))
CPK = Coloring("cpk", foreground=None)


@dataclass(frozen=True)
class DepictConfig:
    """
    Controls how raw input is turned into a depicted structure.

    Every field has one meaning only; the dispatcher never guesses.
    """

    # ========== Parsing ==========
    sanitize: bool = True
    strict_molfile_parsing: bool = True
    remove_hydrogens: bool = True
    accept_inchi_warnings: bool = True
    resolve_names: bool = True   # chemical-name fallback after SMILES

    # ========== Layout ==========
    prefer_coordgen: bool = False

    # ========== Rendering / export ==========
    coloring: Coloring = BLACK
    export_scale: float = 100.0
    min_image_size: int = 200
    kekulize: bool = True


# ---------- Presets ----------

DEFAULT_DEPICT_CONFIG = DepictConfig()
# black on white, names resolved, InChI warnings accepted

COLOR_DEPICT_CONFIG = DepictConfig(coloring=CPK)

INVERTED_DEPICT_CONFIG = DepictConfig(coloring=WHITE)

STRICT_INPUT_CONFIG = DepictConfig(
    resolve_names=False,
    accept_inchi_warnings=False,
)
