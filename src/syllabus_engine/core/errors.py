"""
Error taxonomy for the review engine.

Every failure the engine raises derives from SyllabusEngineError, so callers
that own persistence and transport can catch one base class and decide what
to surface.

    SyllabusEngineError
    ├── InvalidInput               malformed or missing required field
    ├── InvalidTransition          illegal status change
    ├── NoAcceptedRecommendations  revision requested with nothing to apply
    ├── AlreadyInProgress          per-document revision flag already held
    ├── NotFoundError
    │   ├── DocumentNotFound
    │   └── RecommendationNotFound
    └── ExternalServiceError       drafting collaborator failed or replied badly
        └── RevisionFailed         revision reply unusable
            └── SerializationError reply text is not a JSON object
"""

DEFAULT_MAX_REASON_LENGTH = 500


class SyllabusEngineError(Exception):
    """Base class for all engine errors."""


class InvalidInput(SyllabusEngineError):
    """A required field is missing or malformed."""


class InvalidTransition(SyllabusEngineError):
    """A status change is not allowed from the current state."""


class NoAcceptedRecommendations(SyllabusEngineError):
    """A revision was requested but no recommendation has been accepted."""


class AlreadyInProgress(SyllabusEngineError):
    """Another revision already holds the document's editing flag."""


class NotFoundError(SyllabusEngineError):
    """A keyed lookup found nothing."""


class DocumentNotFound(NotFoundError):
    """No document is stored under the given id."""


class RecommendationNotFound(NotFoundError):
    """The document has no recommendation with the given id."""


class ExternalServiceError(SyllabusEngineError):
    """The drafting collaborator errored or returned an unusable reply."""


class RevisionFailed(ExternalServiceError):
    """The revision reply is missing its revised text or is malformed."""


class SerializationError(RevisionFailed):
    """The reply text could not be parsed as a single JSON object."""


def truncate_reason(
    error: BaseException | str,
    max_length: int = DEFAULT_MAX_REASON_LENGTH,
) -> str:
    """
    Render a failure reason bounded for storage on a document.

    Exceptions are rendered as "<ClassName>: <message>".
    """
    if isinstance(error, BaseException):
        message = str(error)
        reason = f"{type(error).__name__}: {message}" if message else type(error).__name__
    else:
        reason = str(error)

    if len(reason) <= max_length:
        return reason
    if max_length <= 3:
        return reason[:max_length]
    return reason[: max_length - 3] + "..."
