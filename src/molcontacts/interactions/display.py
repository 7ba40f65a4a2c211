"""Contact display formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .contact import contact_type_name

if TYPE_CHECKING:
    from molcontacts.structure import Structure

    from .contact import ContactData
    from .features import Features


def _format_site(structure: Structure, atoms: tuple[int, ...]) -> str:
    """Residue name plus element+index, bracketed for multi-atom features."""
    resname = structure.residue_name(atoms[0])
    if len(atoms) == 1:
        return f"{resname}:{structure.symbols[atoms[0]]}{atoms[0]}"
    syms = [f"{structure.symbols[a]}{a}" for a in atoms]
    return f"{resname}:[{','.join(syms)}]"


def format_contact_table(
    structure: Structure,
    features: Features,
    data: ContactData,
    debug: bool = False,
) -> str:
    """Format active contacts as a summary table.

    Returns the full text block including header and one line per contact.
    """
    lines: list[str] = []
    lines.append(f"\n{'=' * 80}")
    lines.append("# Molecular Contacts")
    lines.append("=" * 80)

    if not len(data):
        lines.append("\n  No contacts detected.\n")
        return "\n".join(lines)

    lines.append(f"\n  {len(data)} contact(s) detected:\n")
    for n in range(len(data)):
        site1 = _format_site(structure, features.atom_sets[int(data.feature1[n])])
        site2 = _format_site(structure, features.atom_sets[int(data.feature2[n])])
        dist = float(np.linalg.norm(data.position2[n] - data.position1[n]))
        line = f"  {contact_type_name(data.types[n]):<32s}  {site1} ... {site2}  {dist:.2f} A"
        if debug:
            line += f"  (contact {int(data.contact_ids[n])})"
        lines.append(line)
    lines.append("")

    return "\n".join(lines)
