"""Tests for contact table formatting."""

import pytest
from builders import detect, hbond_pair

from molcontacts import contact_type_name, format_contact_table
from molcontacts.interactions import ContactType


def test_empty_table():
    s, frozen, data = detect(*hbond_pair(d_da=5.0))
    text = format_contact_table(s, frozen.features, data)
    assert "# Molecular Contacts" in text
    assert "No contacts detected." in text


def test_hbond_row():
    s, frozen, data = detect(*hbond_pair())
    text = format_contact_table(s, frozen.features, data)
    assert "1 contact(s) detected:" in text
    row = [line for line in text.splitlines() if "hydrogen bond" in line]
    assert len(row) == 1
    assert "UNL:O0" in row[0]
    assert "UNL:O2" in row[0]
    assert row[0].rstrip().endswith("2.80 A")


def test_debug_shows_contact_ids():
    s, frozen, data = detect(*hbond_pair())
    assert "(contact 0)" in format_contact_table(s, frozen.features, data, debug=True)
    assert "(contact" not in format_contact_table(s, frozen.features, data)


def test_multi_atom_site():
    atoms = [
        {"symbol": "C", "position": (-1.52, 0, 0), "implicit_h": 3},
        ("C", (0, 0, 0)),
        ("O", (0.63, 1.08, 0)),
        ("O", (0.63, -1.08, 0)),
        {"symbol": "N", "position": (4.63, 0, 0), "implicit_h": 4, "formal_charge": 1},
    ]
    s, frozen, data = detect(atoms, [(0, 1), (1, 2, 1.5), (1, 3, 1.5)])
    text = format_contact_table(s, frozen.features, data)
    assert "UNL:[O2,O3]" in text
    assert "ionic interaction" in text


@pytest.mark.parametrize(
    "contact_type, name",
    [
        (ContactType.HYDROGEN_BOND, "hydrogen bond"),
        (ContactType.WATER_HYDROGEN_BOND, "hydrogen bond"),
        (ContactType.BACKBONE_HYDROGEN_BOND, "hydrogen bond"),
        (ContactType.WEAK_HYDROGEN_BOND, "weak hydrogen bond"),
        (ContactType.PI_STACKING, "pi-pi stacking"),
        (ContactType.UNKNOWN, "unknown contact"),
    ],
)
def test_contact_type_names(contact_type, name):
    assert contact_type_name(contact_type) == name
    assert contact_type_name(int(contact_type)) == name
