"""
chem2depict.utils

Thin adapters over the structure engines (RDKit, Open Babel for CML) and the
name translator (OPSIN):

- one parse function per notation (SMILES, InChI, molfile, CML), each
  raising StructureParseError on malformed input instead of returning None;
- chemical name -> SMILES translation (returns None when a name is not understood);
- 2D layout (compute_coordinates) and the pure 2D rotation used for previews/exports.

No format sniffing happens here; that is the dispatcher's job (core.py).

Usage:
    from chem2depict.utils import parse_smiles, compute_coordinates
    mol = parse_smiles("c1ccccc1")
    compute_coordinates(mol)
"""

import logging
import math
import os
import subprocess
import tempfile
from typing import IO, List, Optional, Tuple, Union

import numpy as np
from openbabel import openbabel as ob
from openbabel import pybel
from py2opsin import py2opsin
from rdkit import Chem
from rdkit import RDLogger
from rdkit.Chem import rdDepictor
from rdkit.Chem import rdinchi
from rdkit.Geometry import Point3D

from .config import DepictConfig, DEFAULT_DEPICT_CONFIG
from .exceptions import StructureParseError, LayoutError

# -------------------------
# RDKit and Open Babel print parse errors straight to stderr; messages go through our exceptions instead
RDLogger.DisableLog('rdApp.*')
ob.obErrorLog.StopLogging()

logger = logging.getLogger(__name__)

TextSource = Union[str, IO[str]]

# InChI API return codes (inchi_Ret_OKAY / inchi_Ret_WARNING)
INCHI_OKAY = 0
INCHI_WARNING = 1


# -------------------------
# Internal helpers
# -------------------------
def _read_text(source: TextSource) -> str:
    if hasattr(source, "read"):
        return source.read()
    return source

def _sanitize(mol: Chem.Mol, config: DepictConfig, notation: str) -> Chem.Mol:
    if not config.sanitize:
        return mol
    try:
        Chem.SanitizeMol(mol)
    except (Chem.rdchem.MolSanitizeException, ValueError, RuntimeError) as e:
        raise StructureParseError(f"{notation} sanitization failed: {e}") from e
    return mol

def _normalize_molblock(text: str) -> str:
    """
    Re-pad the three header lines in front of the counts line.

    Dispatch trims its input, which eats an empty title line; RDKit needs the
    counts line to be the fourth line of the block.
    """
    lines = text.splitlines()
    for idx, line in enumerate(lines):
        if "V2000" in line or "V3000" in line:
            header = lines[max(0, idx - 3):idx]
            header = [""] * (3 - len(header)) + header
            return "\n".join(header + lines[idx:]) + "\n"
    return text


# -------------------------
# Parsers
# -------------------------
def parse_smiles(smiles: str, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Chem.Mol:
    """
    Parse SMILES without sanitizing, then sanitize separately so the
    sanitization message can be reported.
    """
    mol = Chem.MolFromSmiles(smiles, sanitize=False)
    if mol is None:
        raise StructureParseError(f"could not parse SMILES '{smiles}'")
    return _sanitize(mol, config, "SMILES")


def parse_inchi(inchi: str, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Chem.Mol:
    """
    Convert an InChI to a Mol. Only the OK status (and WARNING, unless the
    config says otherwise) counts as success.
    """
    try:
        mol, retcode, message, _log = rdinchi.InchiToMol(
            inchi, config.sanitize, config.remove_hydrogens
        )
    except ValueError as e:
        raise StructureParseError(str(e)) from e

    accepted = {INCHI_OKAY}
    if config.accept_inchi_warnings:
        accepted.add(INCHI_WARNING)

    if retcode not in accepted:
        raise StructureParseError(message or f"InChI conversion returned status {retcode}")
    if retcode == INCHI_WARNING:
        logger.warning("InChI conversion warning: %s", message)
    if mol is None:
        raise StructureParseError(message or "InChI conversion produced no structure")
    return mol


def parse_molfile(source: TextSource, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Chem.Mol:
    """Read an MDL molfile from text or an open text stream."""
    text = _normalize_molblock(_read_text(source))
    try:
        mol = Chem.MolFromMolBlock(
            text,
            sanitize=config.sanitize,
            removeHs=config.remove_hydrogens,
            strictParsing=config.strict_molfile_parsing,
        )
    except (RuntimeError, ValueError) as e:
        raise StructureParseError(f"molfile: {e}") from e
    if mol is None:
        raise StructureParseError("could not parse molfile")
    if mol.GetNumAtoms() == 0:
        raise StructureParseError("molfile contains no atoms")
    return mol


def _read_cml_molblocks(text: str) -> List[str]:
    """Read every molecule of a CML document with Open Babel, one molblock each."""
    conv = ob.OBConversion()
    conv.SetInFormat("cml")
    blocks = []
    obmol = ob.OBMol()
    more = conv.ReadString(obmol, text)
    while more:
        blocks.append(pybel.Molecule(obmol).write("mol"))
        obmol = ob.OBMol()
        more = conv.Read(obmol)
    return blocks


def parse_cml(source: TextSource, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> Chem.Mol:
    """
    Read every molecule of a CML document into one combined Mol.

    Open Babel reads the CML; each molecule goes to RDKit as a molblock and the
    fragments are combined. If any molecule comes without coordinates the
    result has no conformer, so layout happens later for the whole structure.
    """
    blocks = _read_cml_molblocks(_read_text(source))
    if not blocks:
        raise StructureParseError("no molecules in CML input")

    combined = None
    has_coordinates = True
    for block in blocks:
        mol = Chem.MolFromMolBlock(block, sanitize=False, removeHs=False)
        if mol is None:
            raise StructureParseError("could not convert CML molecule")
        if mol.GetNumAtoms() and not np.any(mol.GetConformer().GetPositions()):
            has_coordinates = False
        combined = mol if combined is None else Chem.CombineMols(combined, mol)

    if combined.GetNumAtoms() == 0:
        raise StructureParseError("CML input contains no atoms")
    if not has_coordinates:
        combined.RemoveAllConformers()

    mol = _sanitize(combined, config, "CML")
    if config.sanitize and config.remove_hydrogens:
        mol = Chem.RemoveHs(mol)
    return mol


def name_to_smiles(name: str) -> Optional[str]:
    """
    Translate a chemical name to SMILES with OPSIN.

    Returns None when the name cannot be interpreted. A missing Java runtime
    is logged and treated the same way, as is OPSIN exiting with an error
    (py2opsin reports that as a TypeError).
    """
    # py2opsin writes the name to tmp_fpath and leaves it there when Java fails
    with tempfile.TemporaryDirectory(prefix="chem2depict-") as tmp:
        try:
            smiles = py2opsin(name, tmp_fpath=os.path.join(tmp, "opsin_input.txt"))
        except (OSError, subprocess.SubprocessError, TypeError) as e:
            logger.warning("OPSIN failed for %r: %s", name, e)
            return None
    if not smiles:
        return None
    return smiles


# -------------------------
# Layout / geometry
# -------------------------
def compute_coordinates(mol: Chem.Mol, config: DepictConfig = DEFAULT_DEPICT_CONFIG) -> None:
    """Generate 2D coordinates in place."""
    rdDepictor.SetPreferCoordGen(config.prefer_coordgen)
    try:
        rdDepictor.Compute2DCoords(mol)
    except (RuntimeError, ValueError) as e:
        raise LayoutError(str(e)) from e


def center_2d(mol: Chem.Mol) -> Tuple[float, float]:
    pos = mol.GetConformer().GetPositions()
    cx, cy = pos[:, :2].mean(axis=0)
    return float(cx), float(cy)


def bounds_2d(mol: Chem.Mol) -> Tuple[float, float]:
    """Width and height of the 2D bounding box of the first conformer."""
    if mol.GetNumAtoms() == 0 or mol.GetNumConformers() == 0:
        return 0.0, 0.0
    pos = mol.GetConformer().GetPositions()
    span = pos[:, :2].max(axis=0) - pos[:, :2].min(axis=0)
    return float(span[0]), float(span[1])


def rotate_2d(mol: Chem.Mol, theta: float) -> Chem.Mol:
    """
    Return a copy of mol rotated by theta radians about its 2D centre.

    The input is never modified. A copy without coordinates gets a layout first.
    """
    cpy = Chem.Mol(mol)
    if cpy.GetNumAtoms() == 0:
        return cpy
    if cpy.GetNumConformers() == 0:
        rdDepictor.Compute2DCoords(cpy)

    conf = cpy.GetConformer()
    pos = conf.GetPositions()
    center = np.array(center_2d(cpy))
    c, s = math.cos(theta), math.sin(theta)
    rot = np.array([[c, -s], [s, c]])
    xy = (pos[:, :2] - center) @ rot.T + center
    for i, (x, y) in enumerate(xy):
        conf.SetAtomPosition(i, Point3D(float(x), float(y), float(pos[i, 2])))
    return cpy
