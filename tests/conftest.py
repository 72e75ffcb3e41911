import pytest
from rdkit import Chem
from rdkit.Chem import AllChem

from chem2depict import StructureController

NAMES = {
    "benzene": "c1ccccc1",
    "ethanol": "CCO",
}

ETHANOL_CML = """<?xml version="1.0" encoding="UTF-8"?>
<cml xmlns="http://www.xml-cml.org/schema">
  <molecule id="m1" title="ethanol">
    <atomArray>
      <atom id="a1" elementType="C" x2="0.0" y2="0.0"/>
      <atom id="a2" elementType="C" x2="1.3" y2="0.75"/>
      <atom id="a3" elementType="O" x2="2.6" y2="0.0"/>
    </atomArray>
    <bondArray>
      <bond atomRefs2="a1 a2" order="1"/>
      <bond atomRefs2="a2 a3" order="1"/>
    </bondArray>
  </molecule>
</cml>
"""


# hydrogenCount is the total, explicit H atoms included
METHANE_CML = """<cml xmlns="http://www.xml-cml.org/schema">
  <molecule id="methane">
    <atomArray>
      <atom id="a1" elementType="C" hydrogenCount="4" x2="0.0" y2="0.0"/>
      <atom id="a2" elementType="H" x2="1.0" y2="0.0"/>
      <atom id="a3" elementType="H" x2="-1.0" y2="0.0"/>
      <atom id="a4" elementType="H" x2="0.0" y2="1.0"/>
      <atom id="a5" elementType="H" x2="0.0" y2="-1.0"/>
    </atomArray>
    <bondArray>
      <bond atomRefs2="a1 a2" order="1"/>
      <bond atomRefs2="a1 a3" order="1"/>
      <bond atomRefs2="a1 a4" order="1"/>
      <bond atomRefs2="a1 a5" order="1"/>
    </bondArray>
  </molecule>
</cml>
"""

# second molecule has no coordinates
MIXED_CML = """<cml>
  <molecule id="ethanol">
    <atomArray>
      <atom id="a1" elementType="C" x2="0.0" y2="0.0"/>
      <atom id="a2" elementType="C" x2="1.3" y2="0.75"/>
      <atom id="a3" elementType="O" hydrogenCount="1" x2="2.6" y2="0.0"/>
      <atom id="a4" elementType="H" x2="3.4" y2="0.5"/>
    </atomArray>
    <bondArray>
      <bond atomRefs2="a1 a2" order="1"/>
      <bond atomRefs2="a2 a3" order="1"/>
      <bond atomRefs2="a3 a4" order="1"/>
    </bondArray>
  </molecule>
  <molecule id="ion">
    <atomArray><atom id="b1" elementType="Na" formalCharge="1"/></atomArray>
  </molecule>
</cml>
"""


class DictResolver:
    """Name translator backed by a dict; records every name it was asked for."""

    def __init__(self, names=None):
        self.names = dict(NAMES if names is None else names)
        self.calls = []

    def __call__(self, name):
        self.calls.append(name)
        return self.names.get(name)


@pytest.fixture
def resolver():
    return DictResolver()


@pytest.fixture
def controller(resolver):
    return StructureController(name_resolver=resolver)


@pytest.fixture
def benzene_molblock():
    mol = Chem.MolFromSmiles("c1ccccc1")
    AllChem.Compute2DCoords(mol)
    return Chem.MolToMolBlock(mol)


@pytest.fixture
def ethanol_cml():
    return ETHANOL_CML


@pytest.fixture
def molfile_path(tmp_path, benzene_molblock):
    path = tmp_path / "benzene.mol"
    path.write_text(benzene_molblock)
    return path


@pytest.fixture
def cml_path(tmp_path, ethanol_cml):
    path = tmp_path / "ethanol.cml"
    path.write_text(ethanol_cml)
    return path


@pytest.fixture
def methane_cml():
    return METHANE_CML


@pytest.fixture
def methane_cml_path(tmp_path, methane_cml):
    path = tmp_path / "methane.cml"
    path.write_text(methane_cml)
    return path


@pytest.fixture
def mixed_cml():
    return MIXED_CML
