import json
from importlib import resources


def load_elements():
    """Load per-element records from the package data directory"""
    data_path = resources.files('molcontacts.data')
    elements_file = data_path / 'elements.json'
    with elements_file.open('r') as f:
        data = json.load(f)

    return {element: data[element] for element in data if not element.startswith('_')}


class MolecularData:
    """Element lookup tables shared by the structure view and the detectors."""

    def __init__(self):
        elements = load_elements()
        self.s2n = {sym: rec['number'] for sym, rec in elements.items()}
        self.n2s = {n: sym for sym, n in self.s2n.items()}
        self.vdw = {sym: rec['vdw_radius'] for sym, rec in elements.items()}
        self.valence_electrons = {sym: rec['valence_electrons'] for sym, rec in elements.items()}

    def vdw_by_number(self, number: int, default: float = 2.0) -> float:
        sym = self.n2s.get(number)
        return self.vdw.get(sym, default) if sym else default


DATA = MolecularData()
