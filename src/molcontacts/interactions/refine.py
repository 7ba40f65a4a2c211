"""Refinement passes over frozen contacts.

Every pass only clears bits in ``frozen.contact_set`` and walks the
adjacency list of the features it cares about. Passes are idempotent:
running one twice clears nothing the second time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from molcontacts import constants as el
from molcontacts import geometry as geom

from .contact import ContactType
from .features import FeatureType

if TYPE_CHECKING:
    from molcontacts.config_classes import ContactParams
    from molcontacts.structure import Structure

    from .contact import FrozenContacts

logger = logging.getLogger(__name__)


def _active_of_type(frozen: FrozenContacts, feature: int, contact_type: ContactType) -> list[int]:
    """Active contacts of one type touching ``feature``, ascending ids."""
    types = frozen.contact_store.type
    return [
        int(k)
        for k in frozen.adjacency_list.edges_of(feature)
        if types[k] == contact_type and frozen.contact_set.is_set(int(k))
    ]


def _keep_nearest_per_residue(
    s: Structure,
    frozen: FrozenContacts,
    feature: int,
    contact_type: ContactType,
) -> int:
    """Among ``feature``'s contacts of one type, keep the nearest per partner residue.

    Ties go to the lower partner feature id. Returns the number cleared.
    """
    features = frozen.features
    best: dict[int, tuple[float, int, int]] = {}
    cleared = 0
    for k in _active_of_type(frozen, feature, contact_type):
        partner = frozen.partner(k, feature)
        residue = int(s.residue_ids[features.atom_sets[partner][0]])
        rank = (frozen.contact_distance(k), partner, k)
        current = best.get(residue)
        if current is None:
            best[residue] = rank
        elif rank < current:
            frozen.contact_set.clear(current[2])
            best[residue] = rank
            cleared += 1
        else:
            frozen.contact_set.clear(k)
            cleared += 1
    return cleared


# ---------------------------------------------------------------------------
# Line of sight
# ---------------------------------------------------------------------------


def _excluded_atoms(s: Structure, atoms: tuple[int, ...]) -> set[int]:
    """Feature atoms and everything bonded to them."""
    excluded = set(atoms)
    for a in atoms:
        excluded.update(s.neighbors(a))
    return excluded


def refine_line_of_sight(s: Structure, frozen: FrozenContacts, params: ContactParams) -> None:
    """Clear contacts with a heavy atom sitting between the two feature centers."""
    store = frozen.contact_store
    features = frozen.features
    active = frozen.active_contacts()
    if not len(active) or not len(s):
        return

    factor = params.line_of_sight_dist_factor
    atom_hash = s.spatial_hash(params.max_cutoff())
    max_block = s.max_vdw_radius() * factor
    pos = s.positions

    cleared = 0
    for k in active.tolist():
        f1, f2 = int(store.index1[k]), int(store.index2[k])
        c1, c2 = features.centers[f1], features.centers[f2]
        d = float(np.linalg.norm(c2 - c1))
        mid = (c1 + c2) / 2.0
        excluded = _excluded_atoms(s, features.atom_sets[f1]) | _excluded_atoms(s, features.atom_sets[f2])

        idx, _ = atom_hash.within(*mid, d / 2.0 + max_block)
        for a in idx.tolist():
            if s.numbers[a] == el.H or a in excluded:
                continue
            p = pos[a]
            if np.linalg.norm(p - c1) >= d or np.linalg.norm(p - c2) >= d:
                continue
            dist, t = geom.point_segment_distance(p, c1, c2)
            if 0.0 < t < 1.0 and dist < s.vdw_radius(a) * factor:
                frozen.contact_set.clear(k)
                cleared += 1
                logger.debug("  line of sight: contact %d blocked by atom %d", k, a)
                break

    logger.debug("Line of sight: cleared %d of %d", cleared, len(active))


# ---------------------------------------------------------------------------
# Redundancy and competition
# ---------------------------------------------------------------------------


def refine_hydrophobic_contacts(s: Structure, frozen: FrozenContacts, params: ContactParams) -> None:
    """Keep one hydrophobic contact per (atom, partner residue), the shortest."""
    cleared = 0
    for i in frozen.features.of_type(FeatureType.HYDROPHOBIC).tolist():
        cleared += _keep_nearest_per_residue(s, frozen, i, ContactType.HYDROPHOBIC)
    logger.debug("Hydrophobic refinement: cleared %d", cleared)


def refine_salt_bridges(s: Structure, frozen: FrozenContacts, params: ContactParams) -> None:
    """Count each charge once against a partner residue, nearest partner wins."""
    if not params.refine_salt_bridges:
        return
    cleared = 0
    charged = frozen.features.of_type(FeatureType.POSITIVE_CHARGE, FeatureType.NEGATIVE_CHARGE)
    for i in charged.tolist():
        cleared += _keep_nearest_per_residue(s, frozen, i, ContactType.IONIC_INTERACTION)
    logger.debug("Salt bridge refinement: cleared %d", cleared)


def refine_pi_stacking(s: Structure, frozen: FrozenContacts, params: ContactParams) -> None:
    """Keep one pi-stacking contact per ring pair, the shortest.

    Distinct ring pairs are independent, so two rings of one residue can each
    stack on the same partner ring. Ties go to the lower contact id.
    """
    store = frozen.contact_store
    features = frozen.features
    best: dict[tuple[int, int], tuple[float, int]] = {}
    cleared = 0
    for i in features.of_type(FeatureType.AROMATIC_RING).tolist():
        for k in _active_of_type(frozen, i, ContactType.PI_STACKING):
            f1, f2 = int(store.index1[k]), int(store.index2[k])
            if f1 != i:
                # handled once, from index1
                continue
            key = (min(f1, f2), max(f1, f2))
            rank = (frozen.contact_distance(k), k)
            current = best.get(key)
            if current is None:
                best[key] = rank
            elif rank < current:
                frozen.contact_set.clear(current[1])
                best[key] = rank
                cleared += 1
            else:
                frozen.contact_set.clear(k)
                cleared += 1
    logger.debug("Pi-stacking refinement: cleared %d", cleared)


def refine_metal_coordination(s: Structure, frozen: FrozenContacts, params: ContactParams) -> None:
    """Keep at most ``max_metal_coordination`` contacts per metal, nearest first.

    Ties go to the lower partner feature id.
    """
    limit = params.max_metal_coordination
    cleared = 0
    metals = frozen.features.of_type(FeatureType.TRANSITION_METAL, FeatureType.IONIC_TYPE_METAL)
    for i in metals.tolist():
        ranked = sorted(
            (frozen.contact_distance(k), frozen.partner(k, i), k)
            for k in _active_of_type(frozen, i, ContactType.METAL_COORDINATION)
        )
        for _, _, k in ranked[limit:]:
            frozen.contact_set.clear(k)
            cleared += 1
    logger.debug("Metal coordination refinement: cleared %d", cleared)
