class GenerationError(RuntimeError):
    """Raised when generation reaches a state its invariants rule out."""
