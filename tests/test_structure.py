"""Tests for the structure view over a molecular graph."""

import networkx as nx
import numpy as np
import pytest
from builders import assemble, ring

from molcontacts import build_structure
from molcontacts.structure import Structure


@pytest.fixture
def water():
    atoms = [("O", (0.0, 0.0, 0.0)), ("H", (0.96, 0.0, 0.0)), ("H", (-0.24, 0.93, 0.0))]
    return build_structure(atoms, [(0, 1), (0, 2)])


class TestAtomQueries:
    def test_arrays(self, water):
        assert water.symbols == ["O", "H", "H"]
        assert water.numbers.tolist() == [8, 1, 1]
        assert water.positions.shape == (3, 3)
        assert len(water) == 3

    def test_neighbors(self, water):
        assert water.neighbors(0) == [1, 2]
        assert water.heavy_neighbors(0) == []
        assert water.hydrogen_count(0) == 2
        assert water.total_coordination(0) == 2

    def test_defaults(self, water):
        assert water.residue_name(0) == "UNL"
        assert water.atom_name(1) == "H1"
        assert water.formal_charges.tolist() == [0, 0, 0]
        assert water.residue_ids.tolist() == [0, 0, 0]

    def test_implicit_hydrogens(self):
        s = build_structure([{"symbol": "C", "position": (0, 0, 0), "implicit_h": 4}])
        assert s.hydrogen_count(0) == 4
        assert s.explicit_h_count(0) == 0
        assert s.valence(0) == pytest.approx(4.0)

    def test_bond_order(self):
        s = build_structure([("C", (0, 0, 0)), ("O", (1.2, 0, 0))], [(0, 1, 2.0)])
        assert s.bond_order(0, 1) == 2.0
        assert s.valence(1) == pytest.approx(2.0)

    def test_vdw(self, water):
        assert water.vdw_radius(0) == pytest.approx(1.52)
        assert water.max_vdw_radius() == pytest.approx(1.52)


class TestResidues:
    def test_component_residues(self):
        s = build_structure([("C", (0, 0, 0)), ("C", (1.5, 0, 0)), ("O", (5, 0, 0))], [(0, 1)])
        assert s.residue_ids.tolist() == [0, 0, 1]
        assert s.residues() == {0: [0, 1], 1: [2]}

    def test_explicit_residue_and_chain(self):
        atoms = [
            {"symbol": "C", "position": (0, 0, 0), "residue_index": 1, "chain": "A"},
            {"symbol": "C", "position": (3, 0, 0), "residue_index": 1, "chain": "B"},
            {"symbol": "C", "position": (6, 0, 0), "residue_index": 1, "chain": "A"},
        ]
        s = build_structure(atoms)
        assert s.residue_ids[0] == s.residue_ids[2]
        assert s.residue_ids[0] != s.residue_ids[1]

    def test_models_split_residues(self):
        atoms = [
            {"symbol": "C", "position": (0, 0, 0), "residue_index": 1, "model_index": 0},
            {"symbol": "C", "position": (3, 0, 0), "residue_index": 1, "model_index": 1},
        ]
        s = build_structure(atoms)
        assert s.residue_ids[0] != s.residue_ids[1]

    def test_polymer_classification(self):
        atoms = [
            {"symbol": "C", "position": (0, 0, 0), "resname": "ala", "atom_name": "CA"},
            {"symbol": "C", "position": (1.5, 0, 0), "resname": "ALA", "atom_name": "CB"},
            {"symbol": "O", "position": (9, 0, 0), "resname": "HOH"},
        ]
        s = build_structure(atoms, [(0, 1)])
        assert s.is_amino_acid(0)
        assert s.is_backbone(0)
        assert s.is_sidechain(1)
        assert not s.is_backbone(1)
        assert s.is_water(2)
        assert not s.is_polymer(2)


class TestRings:
    def test_benzene_perceived(self):
        s = build_structure(*ring())
        assert s.aromatic_rings() == [(0, 1, 2, 3, 4, 5)]
        assert s.is_aromatic(3)
        assert s.rings_containing(0) == [(0, 1, 2, 3, 4, 5)]

    def test_saturated_ring_rejected(self):
        atoms, bonds = ring()
        for a in atoms:
            a["implicit_h"] = 2
        bonds = [(i, j) for i, j, _ in bonds]
        s = build_structure(atoms, bonds)
        assert s.aromatic_rings() == []

    def test_two_rings(self):
        s = build_structure(*assemble(ring(), ring(center=(0, 0, 3.8))))
        assert len(s.aromatic_rings()) == 2

    def test_supplied_rings_override(self):
        atoms, bonds = ring()
        s = build_structure(atoms, bonds, aromatic_rings=[(5, 4, 3, 2, 1, 0)])
        assert s.aromatic_rings() == [(0, 1, 2, 3, 4, 5)]


class TestSelections:
    def test_index_selection(self, water):
        bits = water.atom_set([0, 2])
        assert list(bits) == [0, 2]

    def test_predicate_selection(self, water):
        bits = water.atom_set(lambda d: d["symbol"] == "H")
        assert list(bits) == [1, 2]

    def test_spatial_hash(self, water):
        idx, _ = water.spatial_hash(2.0).within(0.0, 0.0, 0.0, 1.0)
        assert idx.tolist() == [0, 1, 2]


class TestValidation:
    def test_unknown_symbol(self):
        with pytest.raises(ValueError, match="Unknown element"):
            build_structure([("Xx", (0, 0, 0))])

    def test_non_contiguous_nodes(self):
        G = nx.Graph()
        G.add_node(0, symbol="C", position=(0, 0, 0))
        G.add_node(2, symbol="C", position=(1, 0, 0))
        with pytest.raises(ValueError):
            Structure(G)

    def test_positions_from_graph(self):
        G = nx.Graph()
        G.add_node(0, symbol="C", position=np.array([1.0, 2.0, 3.0]))
        assert Structure(G).positions[0].tolist() == [1.0, 2.0, 3.0]
