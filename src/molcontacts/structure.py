"""Read-only structure view consumed by feature perception and detectors.

Wraps a ``networkx.Graph`` whose nodes are atoms ``0..n-1``.

Node attributes
---------------
symbol : str (required)
position : (x, y, z) (required)
formal_charge : int, default 0
implicit_h : int, default 0
    Hydrogens not present as nodes.
resname : str, default "UNL"
residue_index : int, default connected-component index
chain : str, default ""
atom_name : str, default symbol + index
model_index : int, default 0
altloc : str, default ""

Edge attributes
---------------
bond_order : float, default 1.0

Graph attributes
----------------
aromatic_rings : list of atom-index tuples, optional
    Overrides ring perception.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence, Union

import networkx as nx
import numpy as np

from . import constants as el
from . import geometry as geom
from .bitarray import BitArray
from .data_loader import DATA
from .spatial_hash import SpatialHash

logger = logging.getLogger(__name__)

Selection = Union[Iterable[int], Callable[[dict], bool]]

_RING_PLANARITY_TOL = 0.15


class Structure:
    """Atom-level queries over a molecular graph.

    Parameters
    ----------
    G : nx.Graph
        Molecular graph with node ids ``0..n-1``.
    """

    def __init__(self, G: nx.Graph) -> None:
        n = G.number_of_nodes()
        if sorted(G.nodes()) != list(range(n)):
            raise ValueError("Structure graph nodes must be the integers 0..n-1")

        self.graph = G
        self.n_atoms = n

        symbols = [G.nodes[i]["symbol"] for i in range(n)]
        unknown = sorted({s for s in symbols if s not in DATA.s2n})
        if unknown:
            raise ValueError(f"Unknown element symbol(s): {', '.join(unknown)}")

        self.symbols = symbols
        self.numbers = np.array([DATA.s2n[s] for s in symbols], dtype=np.int32)
        self.positions = np.array([G.nodes[i]["position"] for i in range(n)], dtype=float).reshape(-1, 3)
        self.formal_charges = np.array([int(G.nodes[i].get("formal_charge", 0)) for i in range(n)], dtype=np.int32)
        self.implicit_h = np.array([int(G.nodes[i].get("implicit_h", 0)) for i in range(n)], dtype=np.int32)
        self.model_indices = np.array([int(G.nodes[i].get("model_index", 0)) for i in range(n)], dtype=np.int32)
        self.altlocs = [str(G.nodes[i].get("altloc", "") or "") for i in range(n)]
        self.resnames = [str(G.nodes[i].get("resname", "UNL")).upper() for i in range(n)]
        self.atom_names = [str(G.nodes[i].get("atom_name", f"{symbols[i]}{i}")).upper() for i in range(n)]
        self.residue_ids = self._assign_residue_ids()

        self._neighbors = [sorted(G.neighbors(i)) for i in range(n)]
        self._residue_atoms: dict[int, list[int]] | None = None
        self._rings: list[tuple[int, ...]] | None = None
        self._aromatic_atoms: set[int] | None = None

    def _assign_residue_ids(self) -> np.ndarray:
        """Global residue id per atom from (model, chain, residue_index)."""
        G = self.graph
        component = {}
        for ci, comp in enumerate(sorted(nx.connected_components(G), key=min)):
            for a in comp:
                component[a] = ci

        keys: dict[tuple[Any, ...], int] = {}
        ids = np.zeros(self.n_atoms, dtype=np.int32)
        for i in range(self.n_atoms):
            d = G.nodes[i]
            res = d["residue_index"] if "residue_index" in d else ("component", component[i])
            key = (int(self.model_indices[i]), str(d.get("chain", "")), res)
            ids[i] = keys.setdefault(key, len(keys))
        return ids

    # ------------------------------------------------------------------
    # Per-atom properties
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.n_atoms

    def neighbors(self, i: int) -> list[int]:
        return self._neighbors[i]

    def heavy_neighbors(self, i: int) -> list[int]:
        return [j for j in self._neighbors[i] if self.numbers[j] != el.H]

    def bond_order(self, i: int, j: int) -> float:
        return float(self.graph.edges[i, j].get("bond_order", 1.0))

    def bond_to_element_count(self, i: int, number: int) -> int:
        return sum(1 for j in self._neighbors[i] if self.numbers[j] == number)

    def explicit_h_count(self, i: int) -> int:
        return self.bond_to_element_count(i, el.H)

    def hydrogen_count(self, i: int) -> int:
        """Explicit plus implicit hydrogens."""
        return self.explicit_h_count(i) + int(self.implicit_h[i])

    def bond_count(self, i: int) -> int:
        return len(self._neighbors[i])

    def total_coordination(self, i: int) -> int:
        return len(self._neighbors[i]) + int(self.implicit_h[i])

    def valence(self, i: int) -> float:
        """Sum of bond orders including implicit hydrogens."""
        return sum(self.bond_order(i, j) for j in self._neighbors[i]) + float(self.implicit_h[i])

    def vdw_radius(self, i: int) -> float:
        return DATA.vdw_by_number(int(self.numbers[i]))

    def residue_name(self, i: int) -> str:
        return self.resnames[i]

    def atom_name(self, i: int) -> str:
        return self.atom_names[i]

    def is_water(self, i: int) -> bool:
        return self.resnames[i] in el.WATER_NAMES

    def is_amino_acid(self, i: int) -> bool:
        return self.resnames[i] in el.AMINO_ACIDS

    def is_nucleic(self, i: int) -> bool:
        return self.resnames[i] in el.NUCLEIC_ACIDS

    def is_polymer(self, i: int) -> bool:
        return self.is_amino_acid(i) or self.is_nucleic(i)

    def is_backbone(self, i: int) -> bool:
        if self.is_amino_acid(i):
            return self.atom_names[i] in el.PROTEIN_BACKBONE_ATOMS
        if self.is_nucleic(i):
            return self.atom_names[i] in el.NUCLEIC_BACKBONE_ATOMS
        return False

    def is_sidechain(self, i: int) -> bool:
        return self.is_polymer(i) and not self.is_backbone(i)

    # ------------------------------------------------------------------
    # Residues and rings
    # ------------------------------------------------------------------

    def residues(self) -> dict[int, list[int]]:
        """Residue id -> atom indices, both ascending."""
        if self._residue_atoms is None:
            atoms: dict[int, list[int]] = {}
            for i, r in enumerate(self.residue_ids.tolist()):
                atoms.setdefault(r, []).append(i)
            self._residue_atoms = dict(sorted(atoms.items()))
        return self._residue_atoms

    def aromatic_rings(self) -> list[tuple[int, ...]]:
        """Aromatic rings as sorted atom tuples."""
        if self._rings is None:
            supplied = self.graph.graph.get("aromatic_rings")
            if supplied:
                self._rings = [tuple(sorted(int(a) for a in r)) for r in supplied]
            else:
                self._rings = self._perceive_rings()
            self._aromatic_atoms = {a for r in self._rings for a in r}
            logger.debug("Aromatic rings: %d", len(self._rings))
        return self._rings

    def is_aromatic(self, i: int) -> bool:
        self.aromatic_rings()
        return i in self._aromatic_atoms

    def rings_containing(self, i: int) -> list[tuple[int, ...]]:
        return [r for r in self.aromatic_rings() if i in r]

    def _perceive_rings(self) -> list[tuple[int, ...]]:
        """Planar 5/6 rings of three-coordinate carbons and heteroatoms."""
        heavy = self.graph.subgraph([i for i in range(self.n_atoms) if self.numbers[i] != el.H])
        rings = []
        for cyc in nx.minimum_cycle_basis(heavy):
            if len(cyc) not in (5, 6):
                continue
            if any(self.numbers[a] == el.C and self.total_coordination(a) != 3 for a in cyc):
                continue
            if any(self.numbers[a] not in (el.C, el.N, el.O, el.S) for a in cyc):
                continue
            if geom.max_plane_deviation(self.positions[list(cyc)]) >= _RING_PLANARITY_TOL:
                continue
            rings.append(tuple(sorted(cyc)))
        return sorted(rings)

    # ------------------------------------------------------------------
    # Selections and spatial queries
    # ------------------------------------------------------------------

    def atom_set(self, selection: Selection) -> BitArray:
        """Atoms matching a selection.

        A selection is either an iterable of atom indices or a predicate
        called with each node's attribute dict.
        """
        bits = BitArray(self.n_atoms)
        if callable(selection):
            for i in range(self.n_atoms):
                if selection(self.graph.nodes[i]):
                    bits.set(i)
        else:
            for i in selection:
                bits.set(int(i))
        return bits

    def spatial_hash(self, cell_size: float) -> SpatialHash:
        return SpatialHash(self.positions, cell_size)

    def max_vdw_radius(self) -> float:
        return max((DATA.vdw_by_number(n) for n in set(self.numbers.tolist())), default=0.0)


def build_structure(
    atoms: Sequence[Union[tuple[str, Sequence[float]], dict]],
    bonds: Sequence[Sequence[Any]] | None = None,
    aromatic_rings: Sequence[Sequence[int]] | None = None,
) -> Structure:
    """Build a :class:`Structure` from atom records.

    Parameters
    ----------
    atoms : sequence
        ``(symbol, (x, y, z))`` tuples or dicts of node attributes (which
        must include ``symbol`` and ``position``).
    bonds : sequence, optional
        ``(i, j)`` or ``(i, j, bond_order)``.
    aromatic_rings : sequence, optional
        Rings to use instead of perception.
    """
    G = nx.Graph()
    for i, atom in enumerate(atoms):
        if isinstance(atom, dict):
            attrs = dict(atom)
        else:
            symbol, position = atom
            attrs = {"symbol": symbol, "position": position}
        attrs["position"] = tuple(float(c) for c in attrs["position"])
        G.add_node(i, **attrs)
    for bond in bonds or []:
        i, j = int(bond[0]), int(bond[1])
        order = float(bond[2]) if len(bond) > 2 else 1.0
        G.add_edge(i, j, bond_order=order)
    if aromatic_rings:
        G.graph["aromatic_rings"] = [tuple(r) for r in aromatic_rings]
    return Structure(G)
