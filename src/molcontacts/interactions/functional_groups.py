"""Charged functional-group predicates on single atoms."""

from __future__ import annotations

from typing import TYPE_CHECKING

from molcontacts import constants as el

if TYPE_CHECKING:
    from molcontacts.structure import Structure


def is_quaternary_amine(s: Structure, a: int) -> bool:
    """Nitrogen with four carbon neighbours."""
    return s.numbers[a] == el.N and s.bond_count(a) == 4 and s.bond_to_element_count(a, el.C) == 4


def is_tertiary_amine(s: Structure, a: int, ideal_valence: int) -> bool:
    """Protonated nitrogen with three carbon neighbours."""
    return (
        s.numbers[a] == el.N
        and s.bond_to_element_count(a, el.C) == 3
        and s.total_coordination(a) == ideal_valence
    )


def is_sulfonium(s: Structure, a: int) -> bool:
    """Sulfur with three carbon neighbours."""
    return s.numbers[a] == el.S and s.bond_count(a) == 3 and s.bond_to_element_count(a, el.C) == 3


def is_sulfonic_acid(s: Structure, a: int) -> bool:
    return s.numbers[a] == el.S and s.bond_to_element_count(a, el.O) == 3 and s.bond_to_element_count(a, el.C) == 1


def is_sulfate(s: Structure, a: int) -> bool:
    return s.numbers[a] == el.S and s.bond_to_element_count(a, el.O) == 4


def is_phosphate(s: Structure, a: int) -> bool:
    """Phosphorus bonded to oxygen only."""
    return s.numbers[a] == el.P and s.bond_count(a) > 0 and s.bond_to_element_count(a, el.O) == s.bond_count(a)


def is_halocarbon(s: Structure, a: int) -> bool:
    return s.numbers[a] in el.HALOGENS and s.bond_to_element_count(a, el.C) == 1


def _terminal(s: Structure, a: int) -> bool:
    """Bonded to exactly one heavy atom."""
    return len(s.heavy_neighbors(a)) == 1


def is_carboxylate(s: Structure, a: int) -> bool:
    """Carbon bonded to one carbon and two terminal oxygens without hydrogen."""
    if s.numbers[a] != el.C or s.bond_to_element_count(a, el.C) != 1:
        return False
    oxygens = [b for b in s.neighbors(a) if s.numbers[b] == el.O]
    return len(oxygens) == 2 and all(_terminal(s, o) and s.hydrogen_count(o) == 0 for o in oxygens)


def is_guanidine(s: Structure, a: int) -> bool:
    """Three-coordinate carbon bonded to three nitrogens, at most one of them substituted."""
    if s.numbers[a] != el.C or s.bond_count(a) != 3 or s.bond_to_element_count(a, el.N) != 3:
        return False
    substituted = sum(1 for b in s.neighbors(a) if len(s.heavy_neighbors(b)) > 1)
    return substituted <= 1


def is_acetamidine(s: Structure, a: int) -> bool:
    """Three-coordinate carbon bonded to one carbon and two terminal nitrogens."""
    if s.numbers[a] != el.C or s.bond_count(a) != 3:
        return False
    if s.bond_to_element_count(a, el.C) != 1 or s.bond_to_element_count(a, el.N) != 2:
        return False
    return all(_terminal(s, b) for b in s.neighbors(a) if s.numbers[b] == el.N)
