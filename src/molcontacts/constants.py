"""Element numbers and residue/atom name tables used by feature perception."""

from __future__ import annotations

# Element numbers
H, C, N, O, F, P, S = 1, 6, 7, 8, 9, 15, 16
CL, BR, I, AT = 17, 35, 53, 85
ZN, CD = 30, 48

HALOGENS = frozenset({F, CL, BR, I, AT})

# Halogens able to form a sigma hole (not F)
HALOGEN_BOND_ELEMENTS = frozenset({CL, BR, I, AT})

IONIC_TYPE_METALS = frozenset(
    {
        3, 11, 19, 37, 55,  # Li, Na, K, Rb, Cs
        12, 20, 38, 56,  # Mg, Ca, Sr, Ba
        13, 31, 49, 81,  # Al, Ga, In, Tl
        21, 50, 82, 83, 51, 80,  # Sc, Sn, Pb, Bi, Sb, Hg
    }
)


def is_transition_metal(number: int) -> bool:
    """d-block (without Sc and Hg) plus lanthanides."""
    return (
        22 <= number <= 29
        or 39 <= number <= 47
        or 57 <= number <= 79
        or 104 <= number <= 108
    )


def is_metal(number: int) -> bool:
    return number in IONIC_TYPE_METALS or number in (ZN, CD) or is_transition_metal(number)


AMINO_ACIDS = frozenset(
    {
        "ALA", "ARG", "ASN", "ASP", "CYS", "GLN", "GLU", "GLY", "HIS", "ILE",
        "LEU", "LYS", "MET", "PHE", "PRO", "SER", "THR", "TRP", "TYR", "VAL",
        "SEC", "PYL", "MSE", "ASX", "GLX", "HID", "HIE", "HIP", "CYX", "UNK",
    }
)

NUCLEIC_ACIDS = frozenset(
    {"A", "C", "G", "U", "T", "I", "N", "DA", "DC", "DG", "DT", "DU", "DI", "DN"}
)

WATER_NAMES = frozenset({"HOH", "WAT", "H2O", "DOD", "D2O", "SOL", "TIP", "TIP3", "SPC"})

PROTEIN_BACKBONE_ATOMS = frozenset(
    {"N", "CA", "C", "O", "OXT", "H", "H1", "H2", "H3", "HA", "HA2", "HA3", "HN"}
)

NUCLEIC_BACKBONE_ATOMS = frozenset(
    {
        "P", "OP1", "OP2", "OP3", "O1P", "O2P", "O3P",
        "O5'", "C5'", "C4'", "O4'", "C3'", "O3'", "C2'", "O2'", "C1'",
    }
)

POSITIVE_RESIDUES = frozenset({"ARG", "HIS", "LYS"})
NEGATIVE_RESIDUES = frozenset({"ASP", "GLU"})

HISTIDINE_RING_NITROGENS = frozenset({"ND1", "NE2"})

# Metal binding context (protein side chains)
METAL_BINDING_OXYGEN_RESIDUES = frozenset({"ASP", "GLU", "SER", "THR", "TYR", "ASN", "GLN"})
METAL_BINDING_BASE_NITROGENS = frozenset({"N3", "N4", "N7"})
METAL_BINDING_BASE_OXYGENS = frozenset({"O2", "O4", "O6"})
