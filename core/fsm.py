from enum import Enum, auto


class GenerationPhase(Enum):
    ROOMS = auto()
    MAZES = auto()
    CONNECTORS = auto()
    CONNECTING_REGIONS = auto()
    REMOVE_DEAD_ENDS = auto()
    DONE = auto()


_PHASE_ORDER: tuple[GenerationPhase, ...] = tuple(GenerationPhase)


def next_phase(phase: GenerationPhase) -> GenerationPhase:
    """Return the phase that follows `phase`; DONE is terminal."""
    if phase is GenerationPhase.DONE:
        return phase
    return _PHASE_ORDER[_PHASE_ORDER.index(phase) + 1]
