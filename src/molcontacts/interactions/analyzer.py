"""Contact pipeline orchestration, ContactAnalyzer and detect_contacts convenience function."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from molcontacts.config_classes import ContactParams
from molcontacts.structure import Structure

from . import charged, halogen_bonds, hydrogen_bonds, hydrophobic, metal_binding, refine
from .contact import (
    ContactData,
    Contacts,
    ContactStage,
    FrozenContacts,
    create_contacts,
    create_frozen_contacts,
    get_contact_data,
)
from .features import FeatureCollector, Features

if TYPE_CHECKING:
    import networkx as nx

    from molcontacts.structure import Selection

logger = logging.getLogger(__name__)

FeatureProvider = Callable[[Structure, FeatureCollector], None]
Detector = Callable[[Structure, Contacts, ContactParams], None]
Refiner = Callable[[Structure, FrozenContacts, ContactParams], None]

DEFAULT_FEATURE_PROVIDERS: tuple[FeatureProvider, ...] = (
    charged.add_positive_charges,
    charged.add_negative_charges,
    charged.add_aromatic_rings,
    hydrogen_bonds.add_hydrogen_acceptors,
    hydrogen_bonds.add_hydrogen_donors,
    hydrogen_bonds.add_weak_hydrogen_donors,
    metal_binding.add_metal_binding,
    metal_binding.add_metals,
    hydrophobic.add_hydrophobic,
    halogen_bonds.add_halogen_acceptors,
    halogen_bonds.add_halogen_donors,
)

DEFAULT_DETECTORS: tuple[Detector, ...] = (
    charged.add_charged_contacts,
    hydrogen_bonds.add_hydrogen_bonds,
    metal_binding.add_metal_complexation,
    hydrophobic.add_hydrophobic_contacts,
    halogen_bonds.add_halogen_bonds,
)

DEFAULT_REFINERS: tuple[Refiner, ...] = (
    refine.refine_line_of_sight,
    refine.refine_hydrophobic_contacts,
    refine.refine_salt_bridges,
    refine.refine_pi_stacking,
    refine.refine_metal_coordination,
)


class _StageTracker:
    """Forward-only stage log for one pipeline call."""

    def __init__(self) -> None:
        self.stage = ContactStage.EMPTY

    def advance(self, stage: ContactStage) -> None:
        if stage <= self.stage:
            raise RuntimeError(f"Stage cannot move back: {self.stage.name} -> {stage.name}")
        logger.debug("Stage: %s -> %s", self.stage.name, stage.name)
        self.stage = stage


def calculate_features(
    structure: Structure,
    feature_providers: Sequence[FeatureProvider] = DEFAULT_FEATURE_PROVIDERS,
) -> Features:
    """Run every feature provider in order and freeze the collection."""
    collector = FeatureCollector(structure)
    for provider in feature_providers:
        provider(structure, collector)
    features = collector.build()
    logger.debug("Features: %d from %d atoms", len(features), len(structure))
    return features


def calculate_contacts(
    structure: Structure,
    params: ContactParams | None = None,
    *,
    features: Features | None = None,
    feature_providers: Sequence[FeatureProvider] = DEFAULT_FEATURE_PROVIDERS,
    detectors: Sequence[Detector] = DEFAULT_DETECTORS,
    refiners: Sequence[Refiner] = DEFAULT_REFINERS,
) -> FrozenContacts:
    """Detect and refine contacts for one structure.

    Parameters
    ----------
    structure : Structure
        Atoms, bonds and residue context.
    params : ContactParams, optional
        Thresholds and switches; defaults when omitted.
    features : Features, optional
        Precomputed features for ``structure``. Must be rebuilt whenever
        the structure changes.
    feature_providers, detectors, refiners : sequence of callables
        Pipeline stages, run in the given order.
    """
    params = params or ContactParams()
    stages = _StageTracker()

    logger.debug("\n" + "=" * 80)
    logger.debug("CONTACT DETECTION")
    logger.debug("=" * 80)

    if features is None:
        features = calculate_features(structure, feature_providers)
    stages.advance(ContactStage.FEATURES_BUILT)

    contacts = create_contacts(features, params)
    for detector in detectors:
        detector(structure, contacts, params)
    stages.advance(ContactStage.CONTACTS_POPULATED)

    frozen = create_frozen_contacts(contacts)
    stages.advance(ContactStage.FROZEN)
    n_frozen = frozen.contact_set.size()

    for refiner in refiners:
        refiner(structure, frozen, params)
    stages.advance(ContactStage.REFINED)

    logger.debug("Contacts: %d active of %d detected", frozen.contact_set.size(), n_frozen)
    stages.advance(ContactStage.DONE)
    return frozen


def detect_contacts(G: nx.Graph, params: ContactParams | None = None) -> ContactData:
    """Detect contacts in a molecular graph. Stores result in ``G.graph["contacts"]``."""
    analyzer = ContactAnalyzer(Structure(G))
    data = analyzer.contact_data(analyzer.calculate(params), params)
    G.graph["contacts"] = data
    return data


class ContactAnalyzer:
    """Build features once from a structure, detect contacts for many parameter sets.

    Parameters
    ----------
    structure : Structure
        Structure to analyse. Create a new analyzer after changing it.
    feature_providers, detectors, refiners : sequence of callables, optional
        Pipeline stages; module defaults when omitted.
    """

    def __init__(
        self,
        structure: Structure,
        feature_providers: Sequence[FeatureProvider] = DEFAULT_FEATURE_PROVIDERS,
        detectors: Sequence[Detector] = DEFAULT_DETECTORS,
        refiners: Sequence[Refiner] = DEFAULT_REFINERS,
    ) -> None:
        self.structure = structure
        self._detectors = tuple(detectors)
        self._refiners = tuple(refiners)

        logger.debug("\n" + "=" * 80)
        logger.debug("CONTACT FEATURE PERCEPTION")
        logger.debug("=" * 80)
        self.features = calculate_features(structure, feature_providers)

    def calculate(self, params: ContactParams | None = None) -> FrozenContacts:
        """Run detectors and refiners against the cached features."""
        return calculate_contacts(
            self.structure,
            params,
            features=self.features,
            detectors=self._detectors,
            refiners=self._refiners,
        )

    def contact_data(
        self,
        frozen: FrozenContacts,
        params: ContactParams | None = None,
        filter_sele: Selection | tuple[Selection, Selection] | None = None,
    ) -> ContactData:
        return get_contact_data(frozen, self.structure, params or ContactParams(), filter_sele)
