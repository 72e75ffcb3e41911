"""
chem2depict.core

StructureController holds the current structure and turns arbitrary text into it.

load_content / dispatch sniff the input and try exactly one route, in order:
  1. contains "InChI"            -> InChI
  2. contains "V2000"            -> molfile
  3. contains "<cml"             -> CML
  4. starts with "~" or exists   -> file, read as CML, then as molfile
  5. anything else               -> SMILES, then chemical name -> SMILES

Every parse/layout/IO failure is caught here and turned into a failed
LoadResult; the previous structure is kept. Empty input clears it.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, List, Optional

from rdkit import Chem

from .config import DepictConfig, DEFAULT_DEPICT_CONFIG
from .exceptions import LayoutError, StructureParseError
from .model import Model
from .render import PathLike, write_pdf, write_svg
from .utils import (
    compute_coordinates,
    name_to_smiles,
    parse_cml,
    parse_inchi,
    parse_molfile,
    parse_smiles,
)

logger = logging.getLogger(__name__)

LOADED = "loaded"
CLEARED = "cleared"
FAILED = "failed"

NAME_NOT_INTERPRETED = "Chemical name could not be interpreted"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one dispatch; consumed by the caller, never stored."""

    status: str
    model: Optional[Model] = None
    reason: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def loaded(cls, model: Model, source: str) -> "LoadResult":
        return cls(LOADED, model=model, source=source)

    @classmethod
    def cleared(cls) -> "LoadResult":
        return cls(CLEARED)

    @classmethod
    def failed(cls, reason: Optional[str], source: Optional[str] = None) -> "LoadResult":
        return cls(FAILED, reason=reason, source=source)

    @property
    def ok(self) -> bool:
        return self.status != FAILED

    def __bool__(self) -> bool:
        return self.ok


def _is_path(content: str) -> bool:
    return content.startswith("~") or os.path.exists(content)


def _expand_home(content: str) -> str:
    if content.startswith("~"):
        return os.path.expanduser("~") + content[1:]
    return content


class StructureController:
    """
    Manipulation of the model and marshalling of input/output.

    Views are zero-argument callables, called in registration order after
    every successful change (including a clear). They read self.model.
    """

    def __init__(
        self,
        model: Optional[Model] = None,
        config: DepictConfig = DEFAULT_DEPICT_CONFIG,
        name_resolver: Optional[Callable[[str], Optional[str]]] = None,
    ):
        self.model = model
        self.config = config
        self.name_resolver = name_resolver or name_to_smiles
        self.views: List[Callable[[], None]] = []
        self.error_listeners: List[Callable[[str], None]] = []
        self.last_error: Optional[str] = None

        # (route, predicate, loader); first matching predicate wins
        self.rules = [
            ("inchi", lambda c: "InChI" in c, self._load_inchi),
            ("molfile", lambda c: "V2000" in c, self._load_molfile),
            ("cml", lambda c: "<cml" in c, self._load_cml),
            ("path", _is_path, self._load_path),
            ("smiles", lambda c: True, self._load_smiles_or_name),
        ]

    # ---------- dispatch ----------

    def load_content(self, content: str) -> bool:
        return self.dispatch(content).ok

    def dispatch(self, content: str) -> LoadResult:
        content = content.strip()
        if not content:
            self._set_model(None)
            return LoadResult.cleared()

        result = LoadResult.failed(None)
        for route, matches, load in self.rules:
            if matches(content):
                logger.debug("Dispatching input as %s", route)
                result = load(content)
                break

        if result.ok:
            self._set_model(result.model)
        elif result.reason:
            self.report_error(result.reason)
        return result

    # ---------- routes ----------

    def _load_inchi(self, content: str) -> LoadResult:
        try:
            mol = parse_inchi(content, self.config)
        except StructureParseError as e:
            return LoadResult.failed(f"Could not load InChI input: {e}", "inchi")
        return self._load_linear_notation(mol, "inchi")

    def _load_molfile(self, content: str) -> LoadResult:
        try:
            mol = parse_molfile(content, self.config)
        except StructureParseError as e:
            return LoadResult.failed(f"Could not load molfile input: {e}", "molfile")
        return LoadResult.loaded(Model.create(mol), "molfile")

    def _load_cml(self, content: str) -> LoadResult:
        try:
            mol = parse_cml(content, self.config)
        except StructureParseError as e:
            return LoadResult.failed(f"Could not load CML input: {e}", "cml")
        return LoadResult.loaded(Model.create(mol), "cml")

    def _load_path(self, content: str) -> LoadResult:
        path = _expand_home(content)
        errors = []
        for route, label, parse in (("cml", "CML", parse_cml), ("molfile", "molfile", parse_molfile)):
            try:
                with open(path, encoding="utf-8") as handle:
                    mol = parse(handle, self.config)
            except (OSError, UnicodeDecodeError, StructureParseError) as e:
                logger.debug("%s is not %s: %s", path, label, e)
                errors.append(f"{label} ({e})")
                continue
            return LoadResult.loaded(Model.create(mol), route)
        return LoadResult.failed(f"Could not load {path} as {' or '.join(errors)}", "path")

    def _load_smiles_or_name(self, content: str) -> LoadResult:
        try:
            mol = parse_smiles(content, self.config)
        except StructureParseError as e:
            if not self.config.resolve_names:
                return LoadResult.failed(f"Could not load SMILES input: {e}", "smiles")
            logger.debug("Not SMILES (%s), trying as a chemical name", e)
            return self._load_name(content)
        return self._load_linear_notation(mol, "smiles")

    def _load_name(self, name: str) -> LoadResult:
        # the translator reads one name per line and would join the results
        if "\n" in name:
            return LoadResult.failed(NAME_NOT_INTERPRETED, "name")
        smiles = self.name_resolver(name)
        if smiles is None:
            return LoadResult.failed(NAME_NOT_INTERPRETED, "name")
        try:
            mol = parse_smiles(smiles, self.config)
        except StructureParseError as e:
            return LoadResult.failed(f"Could not load SMILES input: {e}", "name")
        return self._load_linear_notation(mol, "name")

    def _load_linear_notation(self, mol: Chem.Mol, source: str) -> LoadResult:
        # linear notations carry no coordinates; no layout, no structure
        try:
            compute_coordinates(mol, self.config)
        except LayoutError as e:
            return LoadResult.failed(f"Could not layout {source} input: {e}", source)
        return LoadResult.loaded(Model.create(mol), source)

    # ---------- export ----------

    def export_to_pdf(self, path: PathLike, theta: float = 0.0):
        return self._export(path, theta, write_pdf, "PDF")

    def export_to_svg(self, path: PathLike, theta: float = 0.0):
        return self._export(path, theta, write_svg, "SVG")

    def _export(self, path, theta, writer, label):
        if self.model is None or self.model.is_empty:
            return None
        mol = self.model.rotated_by_degree(theta)
        try:
            return writer(mol, path, self.config)
        except OSError as e:
            self.report_error(f"Could not save {label}: {e}")
            return None

    # ---------- notification ----------

    def add_view(self, view: Callable[[], None]) -> None:
        self.views.append(view)

    def add_error_listener(self, listener: Callable[[str], None]) -> None:
        self.error_listeners.append(listener)

    def fire_model_changed(self) -> None:
        for view in self.views:
            view()

    def report_error(self, message: str) -> None:
        logger.error(message)
        self.last_error = message
        for listener in self.error_listeners:
            listener(message)

    def _set_model(self, model: Optional[Model]) -> None:
        self.model = model
        self.last_error = None
        self.fire_model_changed()
