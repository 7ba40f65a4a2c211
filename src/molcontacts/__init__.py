from importlib.metadata import version
__version__ = version("molcontacts")

# Eagerly load data
from .data_loader import DATA

# Import default parameters from config
from .config_classes import DEFAULT_PARAMS, ContactParams

# Core data structures
from .bitarray import BitArray
from .spatial_hash import SpatialHash
from .contact_store import ContactStore
from .adjacency import AdjacencyList, create_adjacency_list
from .structure import Structure, build_structure

# Main interfaces (imported after DEFAULT_PARAMS to avoid circular import)
from .interactions import (
    ContactAnalyzer,
    ContactData,
    ContactType,
    FrozenContacts,
    calculate_contacts,
    calculate_features,
    contact_type_name,
    detect_contacts,
    format_contact_table,
    get_contact_data,
)

__all__ = [
    # Main interfaces
    'ContactAnalyzer',
    'calculate_contacts',
    'calculate_features',
    'detect_contacts',
    'get_contact_data',

    # Structure input
    'Structure',
    'build_structure',

    # Results
    'ContactData',
    'ContactType',
    'FrozenContacts',
    'contact_type_name',
    'format_contact_table',

    # Core data structures
    'AdjacencyList',
    'BitArray',
    'ContactStore',
    'SpatialHash',
    'create_adjacency_list',

    # Configuration
    'ContactParams',
    'DEFAULT_PARAMS',

    # Data access
    'DATA',                 # Access as DATA.vdw, DATA.s2n, etc.
]
