# model/exceptions.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Exceptions raised while building or firing Petri nets

"""Domain-specific exceptions for the Petri net model.

All exceptions derive from :class:`PetriNetError` so that callers can treat
every structural problem of a single verification request uniformly.
"""


class PetriNetError(RuntimeError):
    """Base class for errors raised by the net model."""

    pass


class StructuralValidationError(PetriNetError):
    """Raised when a net violates its structural invariants.

    Covers duplicate node identifiers, arcs referencing nodes that are not
    part of the net, arcs connecting two nodes of the same kind and negative
    token counts. Raised while the net is constructed, before any state-space
    exploration begins.
    """

    pass


class TransitionNotEnabledError(PetriNetError):
    """Raised when firing a transition that is not enabled in the marking."""

    pass
