"""Tests for hydrogen bond detection and classification."""

import numpy as np
import pytest
from builders import contact_types, detect, hbond_pair, rotate_z

from molcontacts import ContactParams, build_structure
from molcontacts.interactions import ContactType
from molcontacts.interactions.hydrogen_bonds import check_hbond_geometry, classify_hbond

HB = int(ContactType.HYDROGEN_BOND)


def _as_dicts(atoms):
    out = []
    for atom in atoms:
        if isinstance(atom, dict):
            out.append(dict(atom))
        else:
            out.append({"symbol": atom[0], "position": tuple(atom[1])})
    return out


def methanol_pair(donor_angle):
    """Methanol O (implicit H) donating to a carbonyl O 2.8 A along +x.

    ``donor_angle`` is C-O...O at the donor.
    """
    methyl = 1.43 * rotate_z(np.array([1.0, 0.0, 0.0]), donor_angle)
    acceptor = np.array([2.8, 0.0, 0.0])
    carbonyl = acceptor + 1.23 * rotate_z(np.array([-1.0, 0.0, 0.0]), 120.0)
    atoms = [
        {"symbol": "O", "position": (0.0, 0.0, 0.0), "implicit_h": 1},
        {"symbol": "C", "position": tuple(methyl), "implicit_h": 3},
        ("O", acceptor),
        {"symbol": "C", "position": tuple(carbonyl), "implicit_h": 2},
    ]
    return atoms, [(0, 1), (2, 3, 2.0)]


def amide_donor(tilt):
    """Amide N donating to a water-like O at 120 degrees, tilted out of the amide plane."""
    t = np.radians(tilt)
    direction = np.array([0.5, -0.866 * np.cos(t), 0.866 * np.sin(t)])
    atoms = [
        {"symbol": "N", "position": (0.0, 0.0, 0.0), "implicit_h": 2},
        {"symbol": "C", "position": (-1.33, 0.0, 0.0), "implicit_h": 1},
        ("O", (-2.0, 1.05, 0.0)),
        {"symbol": "O", "position": tuple(2.9 * direction), "implicit_h": 2},
    ]
    return atoms, [(0, 1), (1, 2, 2.0)]


class TestDetection:
    def test_linear_hydroxyl_to_carbonyl(self):
        s, frozen, data = detect(*hbond_pair())
        assert [int(t) for t in data.types] == [HB]
        assert frozen.contact_store.count == 1
        dist = np.linalg.norm(data.position2[0] - data.position1[0])
        assert dist == pytest.approx(2.8)

    def test_too_far(self):
        assert contact_types(*hbond_pair(d_da=3.6)) == []

    def test_bent_donor_rejected(self):
        assert contact_types(*hbond_pair(don_angle=120.0)) == []

    def test_acceptor_angle_below_ideal_rejected(self):
        assert contact_types(*hbond_pair(acc_angle=60.0)) == []

    def test_acceptor_angle_above_ideal_accepted(self):
        assert contact_types(*hbond_pair(acc_angle=160.0)) == [HB]

    def test_sulfur_cutoff(self):
        atoms, bonds = hbond_pair(d_da=3.9)
        assert contact_types(atoms, bonds) == []
        atoms[0] = ("S", atoms[0][1])
        assert contact_types(atoms, bonds) == [HB]

    def test_family_disabled(self):
        assert contact_types(*hbond_pair(), params=ContactParams(hydrogen_bond=False)) == []


class TestImplicitHydrogenDonor:
    def test_tetrahedral_angle_accepted(self):
        assert contact_types(*methanol_pair(109.5)) == [HB]

    def test_linear_angle_rejected(self):
        assert contact_types(*methanol_pair(170.0)) == []


class TestTrigonalDonorPlane:
    def test_in_plane(self):
        assert contact_types(*amide_donor(0.0)) == [HB]

    def test_out_of_plane_rejected(self):
        assert contact_types(*amide_donor(90.0)) == []

    def test_plane_limit_relaxed(self):
        params = ContactParams(max_hbond_don_plane_angle=90.0)
        assert contact_types(*amide_donor(90.0), params=params) == [HB]


class TestClassification:
    @pytest.fixture
    def structure(self):
        atoms = [
            {"symbol": "N", "position": (0, 0, 0), "resname": "ALA", "atom_name": "N", "residue_index": 1},
            {"symbol": "O", "position": (3, 0, 0), "resname": "GLY", "atom_name": "O", "residue_index": 2},
            {"symbol": "O", "position": (6, 0, 0), "resname": "HOH", "residue_index": 3},
            {"symbol": "O", "position": (9, 0, 0), "resname": "ASP", "atom_name": "OD1", "residue_index": 4},
        ]
        return build_structure(atoms)

    def test_weak_first(self, structure):
        assert classify_hbond(structure, True, 0, 2) == ContactType.WEAK_HYDROGEN_BOND

    def test_water(self, structure):
        assert classify_hbond(structure, False, 2, 1) == ContactType.WATER_HYDROGEN_BOND

    def test_backbone(self, structure):
        assert classify_hbond(structure, False, 0, 1) == ContactType.BACKBONE_HYDROGEN_BOND

    def test_regular(self, structure):
        assert classify_hbond(structure, False, 0, 3) == ContactType.HYDROGEN_BOND

    def test_water_contacts_follow_switch(self):
        atoms, bonds = hbond_pair()
        atoms = _as_dicts(atoms)
        atoms[0]["resname"] = "HOH"
        atoms[1]["resname"] = "HOH"
        assert contact_types(atoms, bonds) == []
        params = ContactParams(water_hydrogen_bond=True)
        assert contact_types(atoms, bonds, params) == [int(ContactType.WATER_HYDROGEN_BOND)]


def test_check_geometry_direct():
    s = build_structure(*hbond_pair())
    params = ContactParams()
    assert check_hbond_geometry(s, 0, 2, params)
    assert not check_hbond_geometry(s, 0, 2, ContactParams(max_hbond_don_angle=2.0))
