"""Recommendation error types.

- NoCandidatesError: no workout survives filtering and cooldown
- CollaboratorUnavailableError: catalog or history store could not be read
"""

NO_YOGA_CANDIDATES_MESSAGE = "No yoga workouts found matching your criteria. Try adjusting duration filters."
NO_CANDIDATES_MESSAGE = "No workouts match the criteria. Try adjusting your filters."


class RecommendationError(RuntimeError):
    """Base class for recommendation failures."""


class NoCandidatesError(RecommendationError):
    """Raised when the filtered, cooldown-checked candidate set is empty.

    Attributes:
        yoga: Whether the request was in yoga mode
        reason: Human-readable message for the caller
    """

    def __init__(self, yoga: bool):
        self.yoga = yoga
        self.reason = NO_YOGA_CANDIDATES_MESSAGE if yoga else NO_CANDIDATES_MESSAGE
        super().__init__(self.reason)


class CollaboratorUnavailableError(RecommendationError):
    """Raised when the catalog or history store fails during a recommendation.

    Attributes:
        collaborator: "catalog" or "history"
    """

    def __init__(self, collaborator: str, cause: Exception):
        self.collaborator = collaborator
        self.cause = cause
        super().__init__(f"{collaborator} store unavailable: {cause}")
