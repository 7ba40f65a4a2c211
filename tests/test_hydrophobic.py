"""Tests for hydrophobic contact detection."""

import pytest
from builders import contact_types

from molcontacts import ContactParams
from molcontacts.interactions import ContactType

HYD = int(ContactType.HYDROPHOBIC)


def methane(position, **attrs):
    return {"symbol": "C", "position": position, "implicit_h": 4, **attrs}


@pytest.mark.parametrize("dist, expected", [(3.8, [HYD]), (4.0, [HYD]), (4.2, [])])
def test_distance_cutoff(dist, expected):
    assert contact_types([methane((0, 0, 0)), methane((dist, 0, 0))]) == expected


def test_fluorine_pair_ignored():
    assert contact_types([("F", (0, 0, 0)), ("F", (3.0, 0, 0))]) == []


def test_carbon_fluorine():
    assert contact_types([methane((0, 0, 0)), ("F", (3.5, 0, 0))]) == [HYD]


def test_polar_carbon_excluded():
    atoms = [
        methane((0, 0, 0)),
        {"symbol": "C", "position": (3.8, 0, 0), "implicit_h": 3},
        {"symbol": "O", "position": (5.2, 0, 0), "implicit_h": 1},
    ]
    assert contact_types(atoms, [(1, 2)]) == []


def test_same_residue_ignored():
    atoms = [methane((0, 0, 0), residue_index=5), methane((3.8, 0, 0), residue_index=5)]
    assert contact_types(atoms) == []


def test_disabled():
    atoms = [methane((0, 0, 0)), methane((3.8, 0, 0))]
    assert contact_types(atoms, params=ContactParams(hydrophobic=False)) == []


class TestModels:
    def test_cross_model_ignored(self):
        atoms = [methane((0, 0, 0), model_index=0), methane((3.8, 0, 0), model_index=1)]
        assert contact_types(atoms) == []

    def test_master_model_kept(self):
        atoms = [methane((0, 0, 0), model_index=0), methane((3.8, 0, 0), model_index=1)]
        assert contact_types(atoms, params=ContactParams(master_model_index=0)) == [HYD]

    def test_master_model_both_outside(self):
        atoms = [methane((0, 0, 0), model_index=1), methane((3.8, 0, 0), model_index=2)]
        assert contact_types(atoms, params=ContactParams(master_model_index=0)) == []

    def test_altlocs(self):
        atoms = [methane((0, 0, 0), altloc="A"), methane((3.8, 0, 0), altloc="B")]
        assert contact_types(atoms) == []
        atoms[1]["altloc"] = ""
        assert contact_types(atoms) == [HYD]
