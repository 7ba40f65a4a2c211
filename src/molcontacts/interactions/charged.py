"""Charge and aromatic ring features; ionic, cation-pi and pi-stacking detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from molcontacts import constants as el
from molcontacts import geometry as geom

from . import functional_groups as fg
from .contact import ContactType
from .features import FeatureCollector, FeatureGroup, FeatureState, FeatureType

if TYPE_CHECKING:
    from molcontacts.config_classes import ContactParams
    from molcontacts.structure import Structure

    from .contact import Contacts

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


def _is_ligand(s: Structure, a: int) -> bool:
    return not s.is_polymer(a)


def add_positive_charges(s: Structure, collector: FeatureCollector) -> None:
    """Basic side chains, cationic groups in ligands and positively charged atoms."""
    before = collector.count(FeatureType.POSITIVE_CHARGE)
    for atoms in s.residues().values():
        resname = s.residue_name(atoms[0])
        if resname in el.POSITIVE_RESIDUES:
            state = FeatureState(FeatureType.POSITIVE_CHARGE)
            for a in atoms:
                if s.numbers[a] == el.N and s.is_sidechain(a):
                    state.add_atom(a)
            collector.add(state)
            continue
        if not _is_ligand(s, atoms[0]):
            continue

        grouped: set[int] = set()
        for a in atoms:
            if fg.is_guanidine(s, a):
                group = FeatureGroup.GUANIDINE
            elif fg.is_acetamidine(s, a):
                group = FeatureGroup.ACETAMIDINE
            else:
                continue
            state = FeatureState(FeatureType.POSITIVE_CHARGE, group)
            for b in s.neighbors(a):
                if s.numbers[b] == el.N:
                    state.add_atom(b)
            collector.add(state)
            grouped.update(state.atoms)

        for a in atoms:
            if a in grouped:
                continue
            if fg.is_quaternary_amine(s, a):
                group = FeatureGroup.QUATERNARY_AMINE
            elif fg.is_tertiary_amine(s, a, 4):
                group = FeatureGroup.TERTIARY_AMINE
            elif fg.is_sulfonium(s, a):
                group = FeatureGroup.SULFONIUM
            elif s.formal_charges[a] > 0:
                group = FeatureGroup.NONE
            else:
                continue
            collector.add(FeatureState(FeatureType.POSITIVE_CHARGE, group, [a]))
    logger.debug("Positive charges: %d", collector.count(FeatureType.POSITIVE_CHARGE) - before)


def add_negative_charges(s: Structure, collector: FeatureCollector) -> None:
    """Acidic side chains, nucleic acid phosphates, anionic groups in ligands."""
    before = collector.count(FeatureType.NEGATIVE_CHARGE)
    for atoms in s.residues().values():
        resname = s.residue_name(atoms[0])
        if resname in el.NEGATIVE_RESIDUES:
            state = FeatureState(FeatureType.NEGATIVE_CHARGE)
            for a in atoms:
                if s.numbers[a] == el.O and s.is_sidechain(a):
                    state.add_atom(a)
            collector.add(state)
            continue
        if s.is_nucleic(atoms[0]):
            for a in atoms:
                if fg.is_phosphate(s, a):
                    _add_oxygen_group(s, collector, a, FeatureGroup.PHOSPHATE)
            continue
        if not _is_ligand(s, atoms[0]):
            continue

        grouped: set[int] = set()
        for a in atoms:
            if fg.is_sulfonic_acid(s, a):
                group = FeatureGroup.SULFONIC_ACID
            elif fg.is_phosphate(s, a):
                group = FeatureGroup.PHOSPHATE
            elif fg.is_sulfate(s, a):
                group = FeatureGroup.SULFATE
            elif fg.is_carboxylate(s, a):
                group = FeatureGroup.CARBOXYLATE
            else:
                continue
            grouped.update(_add_oxygen_group(s, collector, a, group))

        for a in atoms:
            if a not in grouped and s.formal_charges[a] < 0:
                collector.add(FeatureState(FeatureType.NEGATIVE_CHARGE, FeatureGroup.NONE, [a]))
    logger.debug("Negative charges: %d", collector.count(FeatureType.NEGATIVE_CHARGE) - before)


def _add_oxygen_group(s: Structure, collector: FeatureCollector, center: int, group: FeatureGroup) -> list[int]:
    state = FeatureState(FeatureType.NEGATIVE_CHARGE, group)
    for b in s.neighbors(center):
        if s.numbers[b] == el.O:
            state.add_atom(b)
    collector.add(state)
    return state.atoms


def add_aromatic_rings(s: Structure, collector: FeatureCollector) -> None:
    for ring in s.aromatic_rings():
        collector.add(FeatureState(FeatureType.AROMATIC_RING, FeatureGroup.NONE, list(ring)))
    logger.debug("Aromatic rings: %d", collector.count(FeatureType.AROMATIC_RING))


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------


def _is_ionic(ti: int, tj: int) -> bool:
    return {ti, tj} == {FeatureType.POSITIVE_CHARGE, FeatureType.NEGATIVE_CHARGE}


def _is_cation_pi(ti: int, tj: int) -> bool:
    return {ti, tj} == {FeatureType.POSITIVE_CHARGE, FeatureType.AROMATIC_RING}


def _stacking_offset(contacts: Contacts, i: int, j: int) -> float:
    """Smaller of the two centroid offsets, each measured in the other ring's plane."""
    f = contacts.features
    c = f.centers
    return min(
        geom.lateral_offset(c[j], c[i], f.normals[i]),
        geom.lateral_offset(c[i], c[j], f.normals[j]),
    )


def _check_pi_stacking(contacts: Contacts, i: int, j: int, dist: float, params: ContactParams) -> bool:
    f = contacts.features
    if dist > params.max_pi_stacking_dist or not (f.has_normal(i) and f.has_normal(j)):
        return False
    ang = geom.angle_between(f.normals[i], f.normals[j])
    if ang is None:
        return False
    ang = min(ang, 180.0 - ang)
    parallel = ang <= params.max_pi_stacking_angle
    t_shaped = abs(90.0 - ang) <= params.max_pi_stacking_angle
    if not (parallel or t_shaped):
        return False
    return _stacking_offset(contacts, i, j) <= params.max_pi_stacking_offset


def _check_cation_pi(contacts: Contacts, ring: int, cation: int, dist: float, params: ContactParams) -> bool:
    f = contacts.features
    if dist > params.max_cation_pi_dist or not f.has_normal(ring):
        return False
    offset = geom.lateral_offset(f.centers[cation], f.centers[ring], f.normals[ring])
    return offset <= params.max_cation_pi_offset


def add_charged_contacts(s: Structure, contacts: Contacts, params: ContactParams) -> None:
    """Ionic interactions, cation-pi and pi-stacking between charge and ring features."""
    f = contacts.features
    radius = max(params.max_ionic_dist, params.max_pi_stacking_dist, params.max_cation_pi_dist)
    relevant = f.of_type(FeatureType.POSITIVE_CHARGE, FeatureType.NEGATIVE_CHARGE, FeatureType.AROMATIC_RING)

    n_pairs = 0
    added = {ContactType.IONIC_INTERACTION: 0, ContactType.CATION_PI: 0, ContactType.PI_STACKING: 0}
    for i, j, dist in contacts.candidates(s, relevant, radius, params.master_model_index):
        ti, tj = int(f.types[i]), int(f.types[j])
        n_pairs += 1
        if _is_ionic(ti, tj):
            if not params.ionic_interaction or dist > params.max_ionic_dist:
                continue
            if set(f.atom_sets[i]) & set(f.atom_sets[j]):
                continue
            contact_type = ContactType.IONIC_INTERACTION
        elif ti == tj == FeatureType.AROMATIC_RING:
            if not params.pi_stacking or not _check_pi_stacking(contacts, i, j, dist, params):
                continue
            contact_type = ContactType.PI_STACKING
        elif _is_cation_pi(ti, tj):
            ring, cation = (i, j) if ti == FeatureType.AROMATIC_RING else (j, i)
            if not params.cation_pi or not _check_cation_pi(contacts, ring, cation, dist, params):
                continue
            contact_type = ContactType.CATION_PI
        else:
            continue
        contacts.add(i, j, contact_type)
        added[contact_type] += 1

    logger.debug(
        "Charged: %d ionic, %d cation-pi, %d pi-stacking from %d pairs",
        added[ContactType.IONIC_INTERACTION],
        added[ContactType.CATION_PI],
        added[ContactType.PI_STACKING],
        n_pairs,
    )
