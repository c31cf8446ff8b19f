# model/__init__.py

"""
Structural model of route Petri nets: places, transitions, arcs, the
data-flow ContextObject attached to transitions, marking vectors and the
immutable PetriNet snapshot implementing the firing rule.
"""

from .context import ContextObject, TransitionKind
from .exceptions import PetriNetError, StructuralValidationError, TransitionNotEnabledError
from .marking import Marking
from .node import Arc, Node, Place, Transition
from .petri_net import PetriNet

__all__ = [
    "Arc",
    "ContextObject",
    "Marking",
    "Node",
    "PetriNet",
    "PetriNetError",
    "Place",
    "StructuralValidationError",
    "Transition",
    "TransitionKind",
    "TransitionNotEnabledError",
]
