"""Contact types, pipeline contexts and consumer-facing contact data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Iterator, Sequence

import numpy as np

from molcontacts.adjacency import AdjacencyList, create_adjacency_list
from molcontacts.bitarray import BitArray
from molcontacts.contact_store import ContactStore
from molcontacts.spatial_hash import SpatialHash

if TYPE_CHECKING:
    from molcontacts.config_classes import ContactParams
    from molcontacts.structure import Selection, Structure

    from .features import Features

logger = logging.getLogger(__name__)


class ContactType(IntEnum):
    UNKNOWN = 0
    IONIC_INTERACTION = 1
    CATION_PI = 2
    PI_STACKING = 3
    HYDROGEN_BOND = 4
    HALOGEN_BOND = 5
    HYDROPHOBIC = 6
    METAL_COORDINATION = 7
    WEAK_HYDROGEN_BOND = 8
    WATER_HYDROGEN_BOND = 9
    BACKBONE_HYDROGEN_BOND = 10


CONTACT_TYPE_NAMES = {
    ContactType.UNKNOWN: "unknown contact",
    ContactType.IONIC_INTERACTION: "ionic interaction",
    ContactType.CATION_PI: "cation-pi interaction",
    ContactType.PI_STACKING: "pi-pi stacking",
    ContactType.HYDROGEN_BOND: "hydrogen bond",
    ContactType.HALOGEN_BOND: "halogen bond",
    ContactType.HYDROPHOBIC: "hydrophobic contact",
    ContactType.METAL_COORDINATION: "metal coordination",
    ContactType.WEAK_HYDROGEN_BOND: "weak hydrogen bond",
    ContactType.WATER_HYDROGEN_BOND: "hydrogen bond",
    ContactType.BACKBONE_HYDROGEN_BOND: "hydrogen bond",
}


def contact_type_name(contact_type: int) -> str:
    return CONTACT_TYPE_NAMES.get(ContactType(int(contact_type)), "unknown contact")


class ContactStage(IntEnum):
    """Lifecycle of one ``calculate_contacts`` call. Stages only advance."""

    EMPTY = 0
    FEATURES_BUILT = 1
    CONTACTS_POPULATED = 2
    FROZEN = 3
    REFINED = 4
    DONE = 5


# ---------------------------------------------------------------------------
# Validity filters
# ---------------------------------------------------------------------------


def is_master_contact(model1: int, model2: int, master_index: int) -> bool:
    """Exactly one side belongs to the master model."""
    return (model1 == master_index) != (model2 == master_index)


def invalid_atom_contact(s: Structure, a1: int, a2: int, master_index: int) -> bool:
    """Reject same-residue, cross-model (unless master) and mismatched-altloc pairs."""
    if s.residue_ids[a1] == s.residue_ids[a2]:
        return True
    m1, m2 = int(s.model_indices[a1]), int(s.model_indices[a2])
    if m1 != m2 and not (master_index >= 0 and is_master_contact(m1, m2, master_index)):
        return True
    alt1, alt2 = s.altlocs[a1], s.altlocs[a2]
    return bool(alt1 and alt2 and alt1 != alt2)


# ---------------------------------------------------------------------------
# Pipeline contexts
# ---------------------------------------------------------------------------


@dataclass
class Contacts:
    """Mutable context owned by one pipeline call while detectors run."""

    features: Features
    spatial_hash: SpatialHash
    contact_store: ContactStore
    feature_set: BitArray

    def add(self, i: int, j: int, contact_type: ContactType) -> int:
        """Record an accepted contact between features ``i`` and ``j``."""
        self.feature_set.set_bits(i, j)
        return self.contact_store.add_contact(i, j, contact_type)

    def candidates(
        self,
        s: Structure,
        feature_ids: Sequence[int],
        radius: float,
        master_index: int = -1,
    ) -> Iterator[tuple[int, int, float]]:
        """Yield ``(i, j, distance)`` for valid pairs with ``j > i`` within ``radius``.

        Residue, model and altloc filters are checked on the first atom of
        each feature. Callers still apply type compatibility and geometry.
        """
        features = self.features
        centers = features.centers
        for i in feature_ids:
            i = int(i)
            a1 = features.atom_sets[i][0]
            idx, dist_sq = self.spatial_hash.within(*centers[i], radius)
            for j, d2 in zip(idx.tolist(), dist_sq.tolist()):
                if j <= i:
                    continue
                if invalid_atom_contact(s, a1, features.atom_sets[j][0], master_index):
                    continue
                yield i, j, float(np.sqrt(d2))


@dataclass(frozen=True)
class FrozenContacts:
    """Detector output with adjacency and the active contact set."""

    features: Features
    spatial_hash: SpatialHash
    contact_store: ContactStore
    feature_set: BitArray
    contact_set: BitArray
    adjacency_list: AdjacencyList

    def active_contacts(self) -> np.ndarray:
        return self.contact_set.indices()

    def contact_distance(self, k: int) -> float:
        """Distance between the feature centers of contact ``k``."""
        store = self.contact_store
        c = self.features.centers
        return float(np.linalg.norm(c[store.index1[k]] - c[store.index2[k]]))

    def partner(self, k: int, feature: int) -> int:
        """The other feature of contact ``k``."""
        store = self.contact_store
        i = int(store.index1[k])
        return int(store.index2[k]) if i == feature else i


def create_contacts(features: Features, params: ContactParams) -> Contacts:
    """Fresh context with a spatial hash over the feature centers."""
    spatial_hash = SpatialHash(features.centers, params.max_cutoff())
    return Contacts(
        features=features,
        spatial_hash=spatial_hash,
        contact_store=ContactStore(),
        feature_set=BitArray(len(features)),
    )


def create_frozen_contacts(contacts: Contacts) -> FrozenContacts:
    """Freeze a populated context: adjacency list plus an all-active contact set."""
    store = contacts.contact_store
    adjacency = create_adjacency_list(store.index1, store.index2, store.count, len(contacts.features))
    return FrozenContacts(
        features=contacts.features,
        spatial_hash=contacts.spatial_hash,
        contact_store=store,
        feature_set=contacts.feature_set,
        contact_set=BitArray(store.count, set_all=True),
        adjacency_list=adjacency,
    )


# ---------------------------------------------------------------------------
# Consumer data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContactData:
    """Active contacts as endpoint positions and types.

    Attributes
    ----------
    position1, position2 : np.ndarray
        (n, 3) feature centers of each contact.
    types : np.ndarray
        ``ContactType`` values.
    contact_ids : np.ndarray
        Ids into the contact store.
    feature1, feature2 : np.ndarray
        Feature ids of each endpoint.
    """

    position1: np.ndarray
    position2: np.ndarray
    types: np.ndarray
    contact_ids: np.ndarray
    feature1: np.ndarray
    feature2: np.ndarray

    def __len__(self) -> int:
        return len(self.contact_ids)


def _is_selection_pair(filter_sele: object) -> bool:
    if not isinstance(filter_sele, tuple) or len(filter_sele) != 2:
        return False
    return all(callable(s) or not isinstance(s, (int, np.integer)) for s in filter_sele)


def _feature_mask(features: Features, atoms: BitArray) -> np.ndarray:
    """Features with at least one atom in ``atoms``."""
    return np.array([any(atoms.is_set(a) for a in aset) for aset in features.atom_sets], dtype=bool)


def get_contact_data(
    frozen: FrozenContacts,
    structure: Structure,
    params: ContactParams,
    filter_sele: Selection | tuple[Selection, Selection] | None = None,
) -> ContactData:
    """Collect active contacts of enabled types.

    Parameters
    ----------
    filter_sele : selection or pair of selections, optional
        A single selection keeps contacts with either endpoint in it; a
        ``(sele1, sele2)`` tuple keeps contacts with one endpoint in each.
    """
    store = frozen.contact_store
    enabled = np.array(sorted(int(t) for t in params.enabled_types()), dtype=np.int8)
    ids = frozen.active_contacts()
    ids = ids[np.isin(store.type[ids], enabled)]

    if filter_sele is not None and len(ids):
        i1 = store.index1[ids]
        i2 = store.index2[ids]
        if _is_selection_pair(filter_sele):
            m1 = _feature_mask(frozen.features, structure.atom_set(filter_sele[0]))
            m2 = _feature_mask(frozen.features, structure.atom_set(filter_sele[1]))
            keep = (m1[i1] & m2[i2]) | (m2[i1] & m1[i2])
        else:
            m = _feature_mask(frozen.features, structure.atom_set(filter_sele))
            keep = m[i1] | m[i2]
        ids = ids[keep]

    f1 = store.index1[ids].astype(np.int64)
    f2 = store.index2[ids].astype(np.int64)
    centers = frozen.features.centers
    return ContactData(
        position1=centers[f1].reshape(-1, 3),
        position2=centers[f2].reshape(-1, 3),
        types=store.type[ids].copy(),
        contact_ids=ids,
        feature1=f1,
        feature2=f2,
    )
