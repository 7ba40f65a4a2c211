"""Halogen bond donors/acceptors and halogen bond detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from molcontacts import constants as el

from . import functional_groups as fg
from .atom_geometry import calc_angles
from .contact import ContactType
from .features import FeatureCollector, FeatureGroup, FeatureState, FeatureType

if TYPE_CHECKING:
    from molcontacts.config_classes import ContactParams
    from molcontacts.structure import Structure

    from .contact import Contacts

logger = logging.getLogger(__name__)

OPTIMAL_HALOGEN_ANGLE = 165.0
"""C-X...Y, slightly bent from linear along the sigma hole."""

OPTIMAL_ACCEPTOR_ANGLE = 120.0
"""R-Y...X, towards the acceptor lone pair."""

_ACCEPTOR_ELEMENTS = (el.N, el.O, el.S)
_ACCEPTOR_PARTNERS = (el.C, el.N, el.P, el.S)


def add_halogen_donors(s: Structure, collector: FeatureCollector) -> None:
    """Cl, Br, I and At bonded to a single carbon."""
    n = 0
    for a in range(len(s)):
        if s.numbers[a] in el.HALOGEN_BOND_ELEMENTS and fg.is_halocarbon(s, a):
            state = FeatureState(FeatureType.HALOGEN_DONOR, FeatureGroup.HALOCARBON, [a])
            if collector.add(state) is not None:
                n += 1
    logger.debug("Halogen donors: %d", n)


def add_halogen_acceptors(s: Structure, collector: FeatureCollector) -> None:
    """N, O and S bonded to C, N, P or S."""
    n = 0
    for a in range(len(s)):
        if s.numbers[a] not in _ACCEPTOR_ELEMENTS:
            continue
        if any(s.numbers[b] in _ACCEPTOR_PARTNERS for b in s.neighbors(a)):
            if collector.add(FeatureState(FeatureType.HALOGEN_ACCEPTOR, FeatureGroup.NONE, [a])) is not None:
                n += 1
    logger.debug("Halogen acceptors: %d", n)


def check_halogen_geometry(s: Structure, halogen: int, acceptor: int, params: ContactParams) -> bool:
    """One reference bond on the halogen near 165 degrees, an acceptor bond near 120."""
    tol = params.max_halogen_bond_angle
    halogen_angles = calc_angles(s, halogen, acceptor)
    if len(halogen_angles) != 1 or halogen_angles[0] is None:
        return False
    if OPTIMAL_HALOGEN_ANGLE - halogen_angles[0] > tol:
        return False
    acceptor_angles = calc_angles(s, acceptor, halogen)
    if None in acceptor_angles:
        return False
    return any(OPTIMAL_ACCEPTOR_ANGLE - a <= tol for a in acceptor_angles)


def add_halogen_bonds(s: Structure, contacts: Contacts, params: ContactParams) -> None:
    if not params.halogen_bond:
        return
    f = contacts.features
    relevant = f.of_type(FeatureType.HALOGEN_DONOR, FeatureType.HALOGEN_ACCEPTOR)

    n_pairs = 0
    n_found = 0
    for i, j, dist in contacts.candidates(s, relevant, params.max_halogen_bond_dist, params.master_model_index):
        ti, tj = f.types[i], f.types[j]
        if ti == FeatureType.HALOGEN_DONOR and tj == FeatureType.HALOGEN_ACCEPTOR:
            halogen, acceptor = f.atom_sets[i][0], f.atom_sets[j][0]
        elif tj == FeatureType.HALOGEN_DONOR and ti == FeatureType.HALOGEN_ACCEPTOR:
            halogen, acceptor = f.atom_sets[j][0], f.atom_sets[i][0]
        else:
            continue
        n_pairs += 1
        if not check_halogen_geometry(s, halogen, acceptor, params):
            continue
        contacts.add(i, j, ContactType.HALOGEN_BOND)
        n_found += 1
        logger.debug("  halogen bond: X=%d Y=%d dist=%.2f", halogen, acceptor, dist)

    logger.debug("Halogen bonds: %d detected from %d pairs", n_found, n_pairs)
