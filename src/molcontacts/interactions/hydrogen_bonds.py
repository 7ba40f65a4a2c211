"""Hydrogen bond donors, acceptors and weak donors; hydrogen bond detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from molcontacts import constants as el
from molcontacts import geometry as geom

from .atom_geometry import (
    AtomGeometry,
    assign_geometry,
    calc_angles,
    calc_plane_angle,
    ideal_angle,
    is_conjugated,
    lone_pair_count,
)
from .contact import ContactType
from .features import FeatureCollector, FeatureGroup, FeatureState, FeatureType

if TYPE_CHECKING:
    from molcontacts.config_classes import ContactParams
    from molcontacts.structure import Structure

    from .contact import Contacts
    from .features import Features

logger = logging.getLogger(__name__)


def is_histidine_nitrogen(s: Structure, a: int) -> bool:
    """Ring nitrogen of histidine, protonation state unknown."""
    return s.residue_name(a) == "HIS" and s.atom_name(a) in el.HISTIDINE_RING_NITROGENS


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


def add_hydrogen_donors(s: Structure, collector: FeatureCollector) -> None:
    """N, O and S carrying hydrogen, plus histidine ring nitrogens."""
    n = 0
    for a in range(len(s)):
        num = s.numbers[a]
        if is_histidine_nitrogen(s, a) or (num in (el.N, el.O, el.S) and s.hydrogen_count(a) > 0):
            if collector.add(FeatureState(FeatureType.HYDROGEN_DONOR, FeatureGroup.NONE, [a])) is not None:
                n += 1
    logger.debug("Hydrogen donors: %d", n)


def add_weak_hydrogen_donors(s: Structure, collector: FeatureCollector) -> None:
    """C-H next to N/O or in an aromatic ring containing N/O."""
    n = 0
    for a in range(len(s)):
        if s.numbers[a] != el.C or s.hydrogen_count(a) == 0:
            continue
        polar = any(s.numbers[b] in (el.N, el.O) for b in s.neighbors(a))
        if not polar:
            polar = any(s.numbers[r] in (el.N, el.O) for ring in s.rings_containing(a) for r in ring)
        if polar and collector.add(FeatureState(FeatureType.WEAK_HYDROGEN_DONOR, FeatureGroup.NONE, [a])) is not None:
            n += 1
    logger.debug("Weak hydrogen donors: %d", n)


def _is_nitrogen_acceptor(s: Structure, a: int) -> bool:
    if is_histidine_nitrogen(s, a):
        return True
    if s.formal_charges[a] > 0 or lone_pair_count(s, a) == 0:
        return False
    # amide, aniline and pyrrole nitrogens donate their lone pair to the pi system
    return not (s.total_coordination(a) >= 3 and is_conjugated(s, a))


def add_hydrogen_acceptors(s: Structure, collector: FeatureCollector) -> None:
    """All oxygens, nitrogens with an available lone pair, divalent sulfur."""
    n = 0
    for a in range(len(s)):
        num = s.numbers[a]
        if num == el.O:
            ok = True
        elif num == el.N:
            ok = _is_nitrogen_acceptor(s, a)
        elif num == el.S:
            ok = s.total_coordination(a) <= 2 or s.formal_charges[a] < 0
        else:
            ok = False
        if ok and collector.add(FeatureState(FeatureType.HYDROGEN_ACCEPTOR, FeatureGroup.NONE, [a])) is not None:
            n += 1
    logger.debug("Hydrogen acceptors: %d", n)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def _donor_ok(s: Structure, donor: int, acceptor: int, params: ContactParams) -> bool:
    pos = s.positions
    geometry = assign_geometry(s, donor)
    hydrogens = [h for h in s.neighbors(donor) if s.numbers[h] == el.H]
    if hydrogens:
        # D-H...A linearity through any explicit hydrogen
        linear = False
        for h in hydrogens:
            ang = geom.angle(pos[donor], pos[h], pos[acceptor])
            if ang is not None and 180.0 - ang <= params.max_hbond_don_angle:
                linear = True
                break
        if not linear:
            return False
    else:
        ideal = ideal_angle(geometry)
        for ang in calc_angles(s, donor, acceptor):
            if ang is None or abs(ideal - ang) > params.max_hbond_don_angle:
                return False

    if geometry == AtomGeometry.TRIGONAL:
        plane = calc_plane_angle(s, donor, acceptor)
        if plane is not None and plane > params.max_hbond_don_plane_angle:
            return False
    return True


def _acceptor_ok(s: Structure, acceptor: int, donor: int, params: ContactParams) -> bool:
    geometry = assign_geometry(s, acceptor)
    ideal = ideal_angle(geometry)
    for ang in calc_angles(s, acceptor, donor):
        if ang is None or ideal - ang > params.max_hbond_acc_angle:
            return False
    if geometry == AtomGeometry.TRIGONAL:
        plane = calc_plane_angle(s, acceptor, donor)
        if plane is not None and plane > params.max_hbond_acc_plane_angle:
            return False
    return True


def check_hbond_geometry(s: Structure, donor: int, acceptor: int, params: ContactParams) -> bool:
    """Angular criteria on both sides of a donor/acceptor atom pair."""
    return _donor_ok(s, donor, acceptor, params) and _acceptor_ok(s, acceptor, donor, params)


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


_DONOR_TYPES = (FeatureType.HYDROGEN_DONOR, FeatureType.WEAK_HYDROGEN_DONOR)


def _donor_acceptor(f: Features, i: int, j: int) -> tuple[int, int] | None:
    """Order a feature pair as (donor, acceptor), or None if not one."""
    ti, tj = f.types[i], f.types[j]
    if ti in _DONOR_TYPES and tj == FeatureType.HYDROGEN_ACCEPTOR:
        return i, j
    if tj in _DONOR_TYPES and ti == FeatureType.HYDROGEN_ACCEPTOR:
        return j, i
    return None


def classify_hbond(s: Structure, weak: bool, donor: int, acceptor: int) -> ContactType:
    if weak:
        return ContactType.WEAK_HYDROGEN_BOND
    if s.is_water(donor) or s.is_water(acceptor):
        return ContactType.WATER_HYDROGEN_BOND
    if s.is_backbone(donor) and s.is_backbone(acceptor):
        return ContactType.BACKBONE_HYDROGEN_BOND
    return ContactType.HYDROGEN_BOND


def add_hydrogen_bonds(s: Structure, contacts: Contacts, params: ContactParams) -> None:
    """Donor/acceptor pairs within distance and angular tolerances."""
    enabled = params.enabled_types() & {
        ContactType.HYDROGEN_BOND,
        ContactType.WEAK_HYDROGEN_BOND,
        ContactType.WATER_HYDROGEN_BOND,
        ContactType.BACKBONE_HYDROGEN_BOND,
    }
    if not enabled:
        return

    f = contacts.features
    radius = max(params.max_hbond_dist, params.max_hbond_sulfur_dist)
    relevant = f.of_type(FeatureType.HYDROGEN_DONOR, FeatureType.WEAK_HYDROGEN_DONOR, FeatureType.HYDROGEN_ACCEPTOR)

    n_pairs = 0
    n_found = 0
    for i, j, dist in contacts.candidates(s, relevant, radius, params.master_model_index):
        pair = _donor_acceptor(f, i, j)
        if pair is None:
            continue
        n_pairs += 1
        don_f, acc_f = pair
        donor = f.atom_sets[don_f][0]
        acceptor = f.atom_sets[acc_f][0]

        sulfur = s.numbers[donor] == el.S or s.numbers[acceptor] == el.S
        if dist > (params.max_hbond_sulfur_dist if sulfur else params.max_hbond_dist):
            continue

        weak = f.types[don_f] == FeatureType.WEAK_HYDROGEN_DONOR
        contact_type = classify_hbond(s, weak, donor, acceptor)
        if contact_type not in enabled:
            continue
        if not check_hbond_geometry(s, donor, acceptor, params):
            continue

        contacts.add(i, j, contact_type)
        n_found += 1
        logger.debug("  hbond: D=%d A=%d dist=%.2f type=%s", donor, acceptor, dist, contact_type.name)

    logger.debug("H-bonds: %d detected from %d pairs", n_found, n_pairs)
