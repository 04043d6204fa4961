# bufete/services/opportunity_lifecycle.py
"""
Grafo de estados de una oportunidad.

    prospect -> consultation -> active -> {won, lost}

won y lost son terminales. Desde cualquier estado abierto se puede cerrar
(won/lost); el avance secuencial solo llega hasta active.
"""
from typing import List, NamedTuple, Union

from bufete.core.errors import IllegalTransition
from bufete.models.common import OpportunityStatus, STATUS_FLOW, TERMINAL_STATES

CLOSING_STATES = [OpportunityStatus.WON, OpportunityStatus.LOST]


class TransitionResult(NamedTuple):
    new_status: OpportunityStatus
    should_create_matter: bool


def next_states(current: Union[OpportunityStatus, str]) -> List[OpportunityStatus]:
    current = OpportunityStatus(current)
    if current in TERMINAL_STATES:
        return []
    idx = STATUS_FLOW.index(current)
    sequential = STATUS_FLOW[idx + 1:idx + 2]
    return sequential + CLOSING_STATES


def apply_transition(current: Union[OpportunityStatus, str], target: Union[OpportunityStatus, str]) -> TransitionResult:
    current = OpportunityStatus(current)
    try:
        target = OpportunityStatus(target)
    except ValueError:
        raise IllegalTransition(current, target) from None
    if target not in next_states(current):
        raise IllegalTransition(current, target) from None
    # al ganar, quien llama debe crear el asunto
    return TransitionResult(target, target == OpportunityStatus.WON)
