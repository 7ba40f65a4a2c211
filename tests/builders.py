"""Builders for small synthetic structures shared by the test modules."""

from __future__ import annotations

import numpy as np

from molcontacts import ContactParams, build_structure
from molcontacts.interactions import calculate_contacts, get_contact_data


def assemble(*fragments):
    """Concatenate (atoms, bonds) fragments, offsetting bond indices."""
    atoms: list = []
    bonds: list = []
    for frag_atoms, frag_bonds in fragments:
        offset = len(atoms)
        atoms.extend(frag_atoms)
        bonds.extend((i + offset, j + offset, *rest) for i, j, *rest in frag_bonds)
    return atoms, bonds


def ring(center=(0.0, 0.0, 0.0), u=(1.0, 0.0, 0.0), v=(0.0, 1.0, 0.0), radius=1.39, **attrs):
    """Benzene carbons (implicit H) around ``center`` in the plane spanned by ``u`` and ``v``."""
    c = np.asarray(center, dtype=float)
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    atoms = []
    for k in range(6):
        t = 2 * np.pi * k / 6
        pos = c + radius * (np.cos(t) * u + np.sin(t) * v)
        atoms.append({"symbol": "C", "position": tuple(pos), "implicit_h": 1, **attrs})
    bonds = [(k, (k + 1) % 6, 1.5) for k in range(6)]
    return atoms, bonds


def rotate_z(vec, degrees):
    t = np.radians(degrees)
    c, s = np.cos(t), np.sin(t)
    x, y, z = vec
    return np.array([c * x - s * y, s * x + c * y, z])


def hbond_pair(d_da=2.8, don_angle=175.0, acc_angle=110.0):
    """Hydroxyl donor with explicit H and a carbonyl acceptor.

    Atoms: 0 donor O, 1 H, 2 acceptor O, 3 carbonyl C. ``don_angle`` is
    O-H...O at the hydrogen, ``acc_angle`` is C=O...O at the acceptor.
    """
    t = np.radians(don_angle)
    hydrogen = np.zeros(3)
    donor = 0.96 * np.array([np.cos(t), np.sin(t), 0.0])
    acceptor = np.array([donor[0] + np.sqrt(d_da**2 - donor[1] ** 2), 0.0, 0.0])

    to_donor = (donor - acceptor) / np.linalg.norm(donor - acceptor)
    carbon = acceptor + 1.23 * rotate_z(to_donor, acc_angle)

    atoms = [
        ("O", donor),
        ("H", hydrogen),
        ("O", acceptor),
        {"symbol": "C", "position": tuple(carbon), "implicit_h": 2},
    ]
    bonds = [(0, 1), (2, 3, 2.0)]
    return atoms, bonds


def detect(atoms, bonds=(), params=None):
    """Structure, frozen contacts and active contact data for a fragment."""
    params = params or ContactParams()
    s = build_structure(atoms, list(bonds))
    frozen = calculate_contacts(s, params)
    return s, frozen, get_contact_data(frozen, s, params)


def contact_types(atoms, bonds=(), params=None):
    """Active contact types, in contact id order."""
    _, _, data = detect(atoms, bonds, params)
    return [int(t) for t in data.types]
