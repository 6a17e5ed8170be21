"""Domain exceptions raised by the quiz, session and scenario layers."""


class PathfinderError(Exception):
    """Base class for all Pathfinder domain errors."""


class QuizError(PathfinderError):
    pass


class ReflectionError(PathfinderError):
    pass


class PhaseError(PathfinderError):
    """Raised when an operation is not allowed in the current phase."""


class BusyError(PathfinderError):
    """Raised when a request is already in flight for a component."""


class AnalysisError(PathfinderError):
    pass


class ScenarioError(PathfinderError):
    pass


class FeedbackError(PathfinderError):
    pass
