"""Hydrophobic atom features and contact detection."""

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

_NONPOLAR = (el.C, el.H, el.S)


def is_hydrophobic_atom(s: Structure, a: int) -> bool:
    """Carbon or sulfur without polar neighbours, or fluorine."""
    num = s.numbers[a]
    if num == el.F:
        return True
    if num not in (el.C, el.S):
        return False
    return all(s.numbers[b] in _NONPOLAR for b in s.neighbors(a))


def add_hydrophobic(s: Structure, collector: FeatureCollector) -> None:
    n = 0
    for a in range(len(s)):
        if is_hydrophobic_atom(s, a):
            if collector.add(FeatureState(FeatureType.HYDROPHOBIC, FeatureGroup.NONE, [a])) is not None:
                n += 1
    logger.debug("Hydrophobic atoms: %d", n)


def add_hydrophobic_contacts(s: Structure, contacts: Contacts, params: ContactParams) -> None:
    if not params.hydrophobic:
        return
    f = contacts.features
    relevant = f.of_type(FeatureType.HYDROPHOBIC)

    n_pairs = 0
    n_found = 0
    for i, j, _ in contacts.candidates(s, relevant, params.max_hydrophobic_dist, params.master_model_index):
        if f.types[j] != FeatureType.HYDROPHOBIC:
            continue
        n_pairs += 1
        if s.numbers[f.atom_sets[i][0]] == el.F and s.numbers[f.atom_sets[j][0]] == el.F:
            continue
        contacts.add(i, j, ContactType.HYDROPHOBIC)
        n_found += 1

    logger.debug("Hydrophobic: %d detected from %d pairs", n_found, n_pairs)
