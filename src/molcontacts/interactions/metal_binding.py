"""Metal and metal-binding features; metal coordination detection.

Binding roles follow residue context:

* ligands and water: N is a dative partner; O, S and halogens are both
  dative and ionic-type partners
* amino acids: side-chain O of acidic, hydroxyl and amide residues and
  backbone O (both roles), Cys/Met S (both roles), His ring N (dative)
* nucleotides: backbone O and base O2/O4/O6 (both roles), base N3/N4/N7
  (dative)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from molcontacts import constants as el

from .contact import ContactType
from .features import FeatureCollector, FeatureGroup, FeatureState, FeatureType

if TYPE_CHECKING:
    from molcontacts.config_classes import ContactParams
    from molcontacts.structure import Structure

    from .contact import Contacts

logger = logging.getLogger(__name__)


def add_metals(s: Structure, collector: FeatureCollector) -> None:
    n = 0
    for a in range(len(s)):
        num = int(s.numbers[a])
        if el.is_transition_metal(num) or num in (el.ZN, el.CD):
            ftype = FeatureType.TRANSITION_METAL
        elif num in el.IONIC_TYPE_METALS:
            ftype = FeatureType.IONIC_TYPE_METAL
        else:
            continue
        if collector.add(FeatureState(ftype, FeatureGroup.NONE, [a])) is not None:
            n += 1
    logger.debug("Metals: %d", n)


def metal_binding_roles(s: Structure, a: int) -> tuple[bool, bool]:
    """(dative, ionic) partner roles of an atom."""
    num = s.numbers[a]
    resname = s.residue_name(a)
    if s.is_amino_acid(a):
        if num == el.O:
            if resname in el.METAL_BINDING_OXYGEN_RESIDUES and s.is_sidechain(a):
                return True, True
            if s.is_backbone(a):
                return True, True
        elif num == el.S and resname in ("CYS", "MET"):
            return True, True
        elif num == el.N and resname == "HIS" and s.is_sidechain(a):
            return True, False
        return False, False
    if s.is_nucleic(a):
        name = s.atom_name(a)
        if num == el.O and s.is_backbone(a):
            return True, True
        if name in el.METAL_BINDING_BASE_NITROGENS:
            return True, False
        if name in el.METAL_BINDING_BASE_OXYGENS:
            return True, True
        return False, False
    if num in el.HALOGENS or num in (el.O, el.S):
        return True, True
    if num == el.N:
        return True, False
    return False, False


def add_metal_binding(s: Structure, collector: FeatureCollector) -> None:
    n_dative = 0
    n_ionic = 0
    for a in range(len(s)):
        dative, ionic = metal_binding_roles(s, a)
        if dative and collector.add(FeatureState(FeatureType.DATIVE_BOND_PARTNER, FeatureGroup.NONE, [a])) is not None:
            n_dative += 1
        if ionic and collector.add(FeatureState(FeatureType.IONIC_TYPE_PARTNER, FeatureGroup.NONE, [a])) is not None:
            n_ionic += 1
    logger.debug("Metal binding: %d dative, %d ionic-type partners", n_dative, n_ionic)


def _is_metal_complex(ti: int, tj: int) -> bool:
    if ti == FeatureType.TRANSITION_METAL:
        return tj in (FeatureType.DATIVE_BOND_PARTNER, FeatureType.TRANSITION_METAL)
    if ti == FeatureType.IONIC_TYPE_METAL:
        return tj == FeatureType.IONIC_TYPE_PARTNER
    return False


def add_metal_complexation(s: Structure, contacts: Contacts, params: ContactParams) -> None:
    """Metal/partner pairs within ``max_metal_dist``; geometry is pruned later."""
    if not params.metal_coordination:
        return
    f = contacts.features
    relevant = f.of_type(
        FeatureType.TRANSITION_METAL,
        FeatureType.IONIC_TYPE_METAL,
        FeatureType.DATIVE_BOND_PARTNER,
        FeatureType.IONIC_TYPE_PARTNER,
    )

    n_pairs = 0
    n_found = 0
    for i, j, _ in contacts.candidates(s, relevant, params.max_metal_dist, params.master_model_index):
        n_pairs += 1
        ti, tj = int(f.types[i]), int(f.types[j])
        if not (_is_metal_complex(ti, tj) or _is_metal_complex(tj, ti)):
            continue
        contacts.add(i, j, ContactType.METAL_COORDINATION)
        n_found += 1

    logger.debug("Metal coordination: %d detected from %d pairs", n_found, n_pairs)
