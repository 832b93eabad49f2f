"""
Digital twin exceptions.
"""


class DigitalTwinError(Exception):
    """Base exception for digital twin errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(DigitalTwinError):
    """Raised when required service configuration is missing."""


class PipelineStageError(DigitalTwinError):
    """Raised when a stage of the RAG pipeline fails."""

    stage = "pipeline"

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class RetrievalError(PipelineStageError):
    """Raised when the vector search call fails."""

    stage = "retrieval"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(f"Failed to query profile: {message}", cause)


class GenerationError(PipelineStageError):
    """Raised when the language model call fails or returns no text."""

    stage = "generation"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(f"Failed to generate response: {message}", cause)


class SectionLookupError(DigitalTwinError):
    """Raised when the profile section catalog cannot be read."""

    def __init__(self, message: str):
        super().__init__(f"Failed to list profile sections: {message}")
