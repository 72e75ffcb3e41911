# src/chem2depict/model.py
import math
from dataclasses import dataclass

from rdkit import Chem
from rdkit.Chem import rdMolDescriptors

from .utils import rotate_2d


@dataclass(frozen=True)
class Model:
    """
    The currently loaded structure. Only holds the RDKit Mol; every
    derived view (rotation, summary) is computed on a copy.
    """

    mol: Chem.Mol

    @classmethod
    def create(cls, mol: Chem.Mol) -> "Model":
        return cls(mol)

    @property
    def atom_count(self) -> int:
        return self.mol.GetNumAtoms()

    @property
    def bond_count(self) -> int:
        return self.mol.GetNumBonds()

    @property
    def is_empty(self) -> bool:
        return self.atom_count == 0

    @property
    def formula(self) -> str:
        return rdMolDescriptors.CalcMolFormula(self.mol)

    @property
    def smiles(self) -> str:
        return Chem.MolToSmiles(self.mol)

    def rotated_by_degree(self, theta: float) -> Chem.Mol:
        return self.rotated_by_radians(math.radians(theta))

    def rotated_by_radians(self, theta: float) -> Chem.Mol:
        return rotate_2d(self.mol, theta)

    def summary(self) -> str:
        return f"{self.formula} ({self.atom_count} atoms, {self.bond_count} bonds) {self.smiles}"
