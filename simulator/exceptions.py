# simulator/exceptions.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Exceptions raised during state-space exploration

from model.exceptions import PetriNetError


class ExplorationLimitExceeded(PetriNetError):
    """Raised when an exploration exhausts its step or event budget.

    Exploring a structurally unbounded net never terminates on its own. A
    caller that cannot guarantee boundedness passes a budget and receives
    this error instead of an endless loop.

    Attributes:
        limit: The budget that was exhausted
    """

    def __init__(self, message: str, limit: int):
        super().__init__(message)
        self.limit = limit
