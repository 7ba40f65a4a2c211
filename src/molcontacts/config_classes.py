"""Configuration dataclass for contact detection and refinement.

All distances in Angstroms, all angles in degrees. Defaults follow the
values commonly used for protein-ligand interaction analysis.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .interactions.contact import ContactType


@dataclass(frozen=True)
class ContactParams:
    """Thresholds and switches for every interaction family."""

    # Interaction families
    hydrogen_bond: bool = True
    weak_hydrogen_bond: bool = False
    """C-H...A contacts. Numerous and mostly noise at protein scale."""

    water_hydrogen_bond: bool = False
    """H-bonds with a water on either side."""

    backbone_hydrogen_bond: bool = False
    """H-bonds between two polymer backbone atoms (secondary structure)."""

    hydrophobic: bool = True
    halogen_bond: bool = True
    ionic_interaction: bool = True
    metal_coordination: bool = True
    cation_pi: bool = True
    pi_stacking: bool = True

    # Hydrophobic
    max_hydrophobic_dist: float = 4.0

    # Hydrogen bonds
    max_hbond_dist: float = 3.5
    """Donor-acceptor heavy atom distance."""

    max_hbond_sulfur_dist: float = 4.1
    """Used when donor or acceptor is sulfur."""

    max_hbond_acc_angle: float = 45.0
    """Max deviation below the acceptor's ideal angle."""

    max_hbond_don_angle: float = 45.0
    """Max deviation from linear D-H...A, or from the donor's ideal angle."""

    max_hbond_acc_plane_angle: float = 90.0
    """Out-of-plane limit for trigonal acceptors."""

    max_hbond_don_plane_angle: float = 30.0
    """Out-of-plane limit for trigonal donors."""

    # Pi stacking
    max_pi_stacking_dist: float = 5.5
    max_pi_stacking_offset: float = 2.0
    max_pi_stacking_angle: float = 30.0

    # Cation-pi
    max_cation_pi_dist: float = 6.0
    max_cation_pi_offset: float = 2.0

    # Ionic
    max_ionic_dist: float = 5.0

    # Halogen bonds
    max_halogen_bond_dist: float = 4.0
    max_halogen_bond_angle: float = 30.0

    # Metal coordination
    max_metal_dist: float = 3.0
    max_metal_coordination: int = 6
    """Coordination contacts kept per metal, nearest first."""

    # Refinement
    refine_salt_bridges: bool = True
    master_model_index: int = -1
    """Model whose contacts to other models (symmetry mates) are kept. -1 disables."""

    line_of_sight_dist_factor: float = 1.0
    """Scale on the van der Waals radius of atoms blocking a contact."""

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name.startswith("max_") and f.name.endswith(("_dist", "_offset")) and value < 0:
                raise ValueError(f"{f.name} must be non-negative, got {value}")
            if f.name.endswith("_angle") and not 0.0 <= value <= 180.0:
                raise ValueError(f"{f.name} must be within [0, 180], got {value}")
        if self.max_cutoff() <= 0:
            raise ValueError("at least one interaction distance must be positive")
        if self.max_metal_coordination < 1:
            raise ValueError(f"max_metal_coordination must be >= 1, got {self.max_metal_coordination}")
        if self.line_of_sight_dist_factor <= 0:
            raise ValueError(f"line_of_sight_dist_factor must be positive, got {self.line_of_sight_dist_factor}")

    def max_cutoff(self) -> float:
        """Largest search radius used by any detector (spatial hash cell size)."""
        return max(
            self.max_hydrophobic_dist,
            self.max_hbond_dist,
            self.max_hbond_sulfur_dist,
            self.max_pi_stacking_dist,
            self.max_cation_pi_dist,
            self.max_ionic_dist,
            self.max_halogen_bond_dist,
            self.max_metal_dist,
        )

    def enabled_types(self) -> frozenset[ContactType]:
        """Contact types switched on by the family flags."""
        from .interactions.contact import ContactType

        flags = {
            ContactType.HYDROGEN_BOND: self.hydrogen_bond,
            ContactType.WEAK_HYDROGEN_BOND: self.weak_hydrogen_bond,
            ContactType.WATER_HYDROGEN_BOND: self.water_hydrogen_bond,
            ContactType.BACKBONE_HYDROGEN_BOND: self.backbone_hydrogen_bond,
            ContactType.HYDROPHOBIC: self.hydrophobic,
            ContactType.HALOGEN_BOND: self.halogen_bond,
            ContactType.IONIC_INTERACTION: self.ionic_interaction,
            ContactType.METAL_COORDINATION: self.metal_coordination,
            ContactType.CATION_PI: self.cation_pi,
            ContactType.PI_STACKING: self.pi_stacking,
        }
        return frozenset(t for t, on in flags.items() if on)


DEFAULT_PARAMS = asdict(ContactParams())
