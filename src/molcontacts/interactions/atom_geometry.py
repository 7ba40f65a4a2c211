"""Atom geometry from a simple valence model, and bonded-neighbour angles."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from molcontacts import constants as el
from molcontacts import geometry as geom
from molcontacts.data_loader import DATA

if TYPE_CHECKING:
    from molcontacts.structure import Structure


class AtomGeometry(IntEnum):
    SPHERICAL = 0
    TERMINAL = 1
    LINEAR = 2
    TRIGONAL = 3
    TETRAHEDRAL = 4
    OCTAHEDRAL = 5
    UNKNOWN = 6


IDEAL_ANGLES = {
    AtomGeometry.LINEAR: 180.0,
    AtomGeometry.TRIGONAL: 120.0,
    AtomGeometry.TETRAHEDRAL: 109.4721,
    AtomGeometry.OCTAHEDRAL: 90.0,
}

DEFAULT_IDEAL_ANGLE = 120.0

_STERIC_TO_GEOMETRY = {
    0: AtomGeometry.SPHERICAL,
    1: AtomGeometry.TERMINAL,
    2: AtomGeometry.LINEAR,
    3: AtomGeometry.TRIGONAL,
    4: AtomGeometry.TETRAHEDRAL,
    6: AtomGeometry.OCTAHEDRAL,
}


def lone_pair_count(s: Structure, a: int) -> int:
    """Lone pairs left after bonding and formal charge."""
    ve = DATA.valence_electrons.get(s.symbols[a])
    if ve is None or el.is_metal(int(s.numbers[a])):
        return 0
    free = ve - int(s.formal_charges[a]) - int(round(s.valence(a)))
    return max(0, free) // 2


def is_conjugated(s: Structure, a: int) -> bool:
    """Lone pair can delocalise into a neighbouring pi system.

    True for a singly bonded atom next to a multiple bond or aromatic atom,
    and for three-coordinate aromatic atoms (pyrrole type).
    """
    if any(s.bond_order(a, b) > 1.2 for b in s.neighbors(a)):
        return False
    if s.is_aromatic(a):
        return s.total_coordination(a) >= 3
    for b in s.neighbors(a):
        if s.is_aromatic(b):
            return True
        if any(s.bond_order(b, c) > 1.2 for c in s.neighbors(b) if c != a):
            return True
    return False


def assign_geometry(s: Structure, a: int) -> AtomGeometry:
    """Electron-domain geometry (bonded atoms plus lone pairs).

    Lone pairs next to a pi system are taken as delocalised, which makes
    amide and aniline nitrogens or phenol oxygens trigonal.
    """
    coordination = s.total_coordination(a)
    if coordination == 0:
        return AtomGeometry.SPHERICAL
    lone_pairs = lone_pair_count(s, a)
    steric = coordination + lone_pairs
    if lone_pairs and coordination > 1 and is_conjugated(s, a):
        steric -= 1
    return _STERIC_TO_GEOMETRY.get(steric, AtomGeometry.UNKNOWN)


def ideal_angle(geometry: AtomGeometry) -> float:
    return IDEAL_ANGLES.get(geometry, DEFAULT_IDEAL_ANGLE)


def calc_angles(s: Structure, a1: int, a2: int) -> list[float | None]:
    """Angles X-a1...a2 for every heavy atom X bonded to a1 (degrees).

    An entry is None when a vector is degenerate (coincident atoms).
    """
    pos = s.positions
    d1 = pos[a2] - pos[a1]
    return [geom.angle_between(pos[x] - pos[a1], d1) for x in s.heavy_neighbors(a1)]


def calc_plane_angle(s: Structure, a1: int, a2: int) -> float | None:
    """Out-of-plane angle of a1...a2 relative to the plane at a1 (degrees).

    The plane is spanned by two heavy neighbours of a1, or by one neighbour
    and a heavy atom bonded to it. Returns None when no plane is defined.
    """
    pos = s.positions
    heavy = s.heavy_neighbors(a1)
    vectors = [pos[x] - pos[a1] for x in heavy[:2]]
    if len(vectors) == 1:
        for x in s.heavy_neighbors(heavy[0]):
            if x != a1:
                vectors.append(pos[x] - pos[a1])
                break
    if len(vectors) != 2:
        return None
    cross = np.cross(vectors[0], vectors[1])
    to_partner = pos[a2] - pos[a1]
    ang = geom.angle_between(cross, to_partner)
    if ang is None:
        return None
    return abs(90.0 - ang)
