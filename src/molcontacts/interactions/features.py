"""Feature data model: chemical roles attached to one or more atoms."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np

from molcontacts import geometry as geom

if TYPE_CHECKING:
    from molcontacts.structure import Structure

logger = logging.getLogger(__name__)


class FeatureType(IntEnum):
    UNKNOWN = 0
    POSITIVE_CHARGE = 1
    NEGATIVE_CHARGE = 2
    AROMATIC_RING = 3
    HYDROGEN_DONOR = 4
    HYDROGEN_ACCEPTOR = 5
    HALOGEN_DONOR = 6
    HALOGEN_ACCEPTOR = 7
    HYDROPHOBIC = 8
    WEAK_HYDROGEN_DONOR = 9
    IONIC_TYPE_PARTNER = 10
    DATIVE_BOND_PARTNER = 11
    TRANSITION_METAL = 12
    IONIC_TYPE_METAL = 13


class FeatureGroup(IntEnum):
    NONE = 0
    QUATERNARY_AMINE = 1
    TERTIARY_AMINE = 2
    SULFONIUM = 3
    SULFONIC_ACID = 4
    SULFATE = 5
    PHOSPHATE = 6
    HALOCARBON = 7
    GUANIDINE = 8
    ACETAMIDINE = 9
    CARBOXYLATE = 10


@dataclass
class FeatureState:
    """A feature under construction."""

    type: FeatureType
    group: FeatureGroup = FeatureGroup.NONE
    atoms: list[int] = field(default_factory=list)

    def add_atom(self, index: int) -> None:
        if index not in self.atoms:
            self.atoms.append(index)


@dataclass(frozen=True)
class Features:
    """Columnar, immutable feature collection.

    Attributes
    ----------
    types, groups : np.ndarray
        ``FeatureType`` / ``FeatureGroup`` values.
    centers : np.ndarray
        (n, 3) centroid of each feature's atoms.
    atom_sets : tuple[tuple[int, ...], ...]
        Atom indices per feature, in insertion order.
    normals : np.ndarray
        (n, 3) plane normal for aromatic rings, zeros otherwise (or for
        degenerate rings).
    charges : np.ndarray
        +1 / -1 for charge features, 0 otherwise.
    """

    types: np.ndarray
    groups: np.ndarray
    centers: np.ndarray
    atom_sets: tuple[tuple[int, ...], ...]
    normals: np.ndarray
    charges: np.ndarray

    def __len__(self) -> int:
        return len(self.types)

    @property
    def x(self) -> np.ndarray:
        return self.centers[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.centers[:, 1]

    @property
    def z(self) -> np.ndarray:
        return self.centers[:, 2]

    def of_type(self, *types: FeatureType) -> np.ndarray:
        """Feature ids whose type is any of ``types``."""
        return np.flatnonzero(np.isin(self.types, [int(t) for t in types]))

    def has_normal(self, i: int) -> bool:
        return bool(np.any(self.normals[i]))


class FeatureCollector:
    """Accumulates features; rejects a repeated (type, atom set)."""

    def __init__(self, structure: Structure) -> None:
        self._structure = structure
        self._types: list[int] = []
        self._groups: list[int] = []
        self._atom_sets: list[tuple[int, ...]] = []
        self._seen: set[tuple[int, frozenset[int]]] = set()

    def __len__(self) -> int:
        return len(self._types)

    def add(self, state: FeatureState) -> int | None:
        """Append a feature; returns its id, or None if empty or duplicate."""
        if not state.atoms:
            return None
        key = (int(state.type), frozenset(state.atoms))
        if key in self._seen:
            return None
        self._seen.add(key)
        self._types.append(int(state.type))
        self._groups.append(int(state.group))
        self._atom_sets.append(tuple(state.atoms))
        return len(self._types) - 1

    def count(self, feature_type: FeatureType) -> int:
        return sum(1 for t in self._types if t == feature_type)

    def build(self) -> Features:
        pos = self._structure.positions
        n = len(self._types)
        types = np.array(self._types, dtype=np.int8)
        centers = np.zeros((n, 3))
        normals = np.zeros((n, 3))
        for k, atoms in enumerate(self._atom_sets):
            pts = pos[list(atoms)]
            centers[k] = pts.mean(axis=0)
            if types[k] == FeatureType.AROMATIC_RING:
                normal = geom.plane_normal(pts)
                if normal is not None:
                    normals[k] = normal

        charges = np.zeros(n, dtype=np.int8)
        charges[types == FeatureType.POSITIVE_CHARGE] = 1
        charges[types == FeatureType.NEGATIVE_CHARGE] = -1

        return Features(
            types=types,
            groups=np.array(self._groups, dtype=np.int8),
            centers=centers,
            atom_sets=tuple(self._atom_sets),
            normals=normals,
            charges=charges,
        )
