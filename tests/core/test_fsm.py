"""Tests for the generation phase state machine."""

from core.fsm import GenerationPhase, next_phase


def test_generation_phases_exist() -> None:
    """Test that all generation phases are defined."""
    assert GenerationPhase.ROOMS is not None
    assert GenerationPhase.MAZES is not None
    assert GenerationPhase.CONNECTORS is not None
    assert GenerationPhase.CONNECTING_REGIONS is not None
    assert GenerationPhase.REMOVE_DEAD_ENDS is not None
    assert GenerationPhase.DONE is not None


def test_generation_phase_values_are_unique() -> None:
    """Test that all phase values are unique."""
    values = [phase.value for phase in GenerationPhase]
    assert len(values) == len(set(values))


def test_next_phase_follows_linear_order() -> None:
    """Test that phases advance in the fixed pipeline order."""
    phase = GenerationPhase.ROOMS
    visited = [phase]
    while phase is not GenerationPhase.DONE:
        phase = next_phase(phase)
        visited.append(phase)

    assert visited == [
        GenerationPhase.ROOMS,
        GenerationPhase.MAZES,
        GenerationPhase.CONNECTORS,
        GenerationPhase.CONNECTING_REGIONS,
        GenerationPhase.REMOVE_DEAD_ENDS,
        GenerationPhase.DONE,
    ]


def test_done_is_terminal() -> None:
    """Test that DONE never advances."""
    assert next_phase(GenerationPhase.DONE) is GenerationPhase.DONE
