from .geometry import Coordinates, Vector2D
from .forces import MIN_DISTANCE_SQUARED, coulomb_vector, distance_squared, hook_force, hook_vector
from .model import Node, ReadWriteLock, Relation
from .simulation import SimulationError, SimulationState, partition_ranges
from .loader import LoadError, load_graph, read_all
from .config import LayoutOptions, default_worker_count, get_default_options, set_default_options
from .svg_codegen import generate_svg_document

__all__ = [
    'Coordinates',
    'Vector2D',
    'MIN_DISTANCE_SQUARED',
    'coulomb_vector',
    'distance_squared',
    'hook_force',
    'hook_vector',
    'Node',
    'ReadWriteLock',
    'Relation',
    'SimulationError',
    'SimulationState',
    'partition_ranges',
    'LoadError',
    'load_graph',
    'read_all',
    'LayoutOptions',
    'default_worker_count',
    'get_default_options',
    'set_default_options',
    'generate_svg_document',
]
