"""
Data model for profile retrieval and answers.
"""

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from digital_twin import constants


class ProfileCategory(str, Enum):
    """Category of an indexed profile chunk."""
    INTRO = "intro"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    TECHNICAL_SKILLS = "technical_skills"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"
    GOALS = "goals"
    INTERVIEW_PREP = "interview_prep"

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]


class ChunkTags(BaseModel):
    """Optional metadata attached to a chunk at index time."""
    category: str | None = None
    tags: list[str] = Field(default_factory=list)


class ProfileChunk(BaseModel):
    """A unit of indexed profile content."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    type: ProfileCategory
    content: str
    metadata: ChunkTags | None = None


class ChunkMetadata(BaseModel):
    """Metadata stored alongside a vector in the index."""
    title: str | None = None
    content: str | None = None
    category: str | None = None
    type: str | None = None
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None) -> "ChunkMetadata | None":
        """
        Build metadata from the untyped mapping returned by the vector store.

        Text fields keep only string values and tags keep only string items;
        anything else is dropped. Unknown keys are ignored.
        """
        if not isinstance(raw, Mapping):
            return None

        fields: dict[str, Any] = {}
        for key in ("title", "content", "category", "type"):
            value = raw.get(key)
            if isinstance(value, str):
                fields[key] = value

        tags = raw.get("tags")
        if isinstance(tags, list):
            fields["tags"] = [tag for tag in tags if isinstance(tag, str)]

        return cls(**fields)


class VectorSearchResult(BaseModel):
    """One retrieved chunk with its similarity score."""
    title: str = "Information"
    content: str = ""
    score: float = 0.0
    metadata: ChunkMetadata | None = None


class RAGResponse(BaseModel):
    """Answer to a single question."""
    answer: str
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    sources: list[VectorSearchResult] = Field(default_factory=list)

    @classmethod
    def no_information(cls) -> "RAGResponse":
        """Fallback response used when nothing was retrieved."""
        return cls(answer=constants.NO_INFORMATION_ANSWER, confidence=0.0, sources=[])


class ProfileSearchResult(BaseModel):
    """A user-facing search hit."""
    id: str
    title: str
    type: str
    relevance: float
    preview: str


class ProfileSection(BaseModel):
    """Static descriptor of one profile category."""
    name: str
    type: str
    description: str
    count: int | None = None


class QuestionOutcome(BaseModel):
    """Result of one question in a batch that tolerates failures."""
    question: str
    response: RAGResponse | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HealthStatus(BaseModel):
    """Reachability of the hosted services."""
    vector_store: bool
    language_model: bool

    @property
    def healthy(self) -> bool:
        return self.vector_store and self.language_model
