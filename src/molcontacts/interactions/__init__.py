"""Feature perception, contact detection and refinement."""

from .analyzer import (
    DEFAULT_DETECTORS,
    DEFAULT_FEATURE_PROVIDERS,
    DEFAULT_REFINERS,
    ContactAnalyzer,
    calculate_contacts,
    calculate_features,
    detect_contacts,
)
from .contact import (
    ContactData,
    Contacts,
    ContactStage,
    ContactType,
    FrozenContacts,
    contact_type_name,
    get_contact_data,
)
from .display import format_contact_table
from .features import FeatureGroup, Features, FeatureType

__all__ = [
    "DEFAULT_DETECTORS",
    "DEFAULT_FEATURE_PROVIDERS",
    "DEFAULT_REFINERS",
    "ContactAnalyzer",
    "ContactData",
    "ContactStage",
    "ContactType",
    "Contacts",
    "FeatureGroup",
    "FeatureType",
    "Features",
    "FrozenContacts",
    "calculate_contacts",
    "calculate_features",
    "contact_type_name",
    "detect_contacts",
    "format_contact_table",
    "get_contact_data",
]
