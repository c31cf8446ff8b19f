# logic/exceptions.py

"""
Exceptions raised while evaluating formulas.
"""


class FormulaDomainError(TypeError):
    """A formula of one domain was evaluated at a node of the other domain.

    State formulas hold at places and transition formulas at transitions;
    evaluating across domains is a caller error and is reported, never
    coerced into a verdict.
    """

    pass
