"""Clinical text analysis request and response schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import settings
from app.schemas.base import EntityCategory, SeverityLevel
from app.services.nlp import AnalysisResult


class AnalyzeRequest(BaseModel):
    """Request for analyzing one clinical note."""

    text: str | None = Field(
        default=None,
        max_length=settings.max_text_length,
        description="Free-text clinical note. Empty, null or missing text yields the neutral result.",
    )


class BatchAnalyzeRequest(BaseModel):
    """Request for analyzing multiple clinical notes."""

    texts: list[str | None] = Field(
        ...,
        min_length=1,
        max_length=settings.max_batch_size,
        description="List of clinical notes to analyze",
    )


class EntitySchema(BaseModel):
    """A recognized medical entity."""

    text: str = Field(..., description="Verbatim text from the note")
    category: EntityCategory = Field(..., description="Entity category")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Extraction confidence")


class SentimentSchema(BaseModel):
    """Tone of the clinical language."""

    score: float = Field(..., ge=-1.0, le=1.0, description="Concerning (-1) to reassuring (1)")
    magnitude: float = Field(..., ge=0.0, le=1.0, description="Amount of sentiment-bearing language")


class AnalysisSchema(BaseModel):
    """Structured signals extracted from a clinical note."""

    model_config = ConfigDict(populate_by_name=True)

    entities: list[EntitySchema] = Field(default_factory=list, description="Recognized entities")
    sentiment: SentimentSchema = Field(..., description="Sentiment score and magnitude")
    key_phrases: list[str] = Field(
        default_factory=list,
        alias="keyPhrases",
        description="Up to three most relevant sentences",
    )
    suggested_diagnoses: list[str] = Field(
        default_factory=list,
        alias="suggestedDiagnoses",
        description="Candidate diagnoses in rule-table order",
    )
    severity: int = Field(..., ge=1, le=10, description="Severity estimate (1-10)")

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisSchema":
        """Build the schema from an analyzer result."""
        return cls.model_validate(result.to_dict())


class AnalyzeResponse(BaseModel):
    """Response for a single analyzed note."""

    request_id: str = Field(..., description="Unique request identifier")
    text_length: int = Field(..., description="Length of the analyzed text")
    analysis: AnalysisSchema = Field(..., description="Analyzer output")
    severity_level: SeverityLevel = Field(..., description="Severity display band")
    is_severe_case: bool = Field(..., description="Whether severity is 8 or higher")
    recommended_actions: list[str] = Field(..., description="Suggested follow-up actions")
    processing_time_ms: float = Field(..., description="Processing time")


class BatchAnalyzeItem(BaseModel):
    """Result for a single note in batch analysis."""

    index: int = Field(..., description="Index of this text in the input list")
    text_preview: str = Field(..., description="First 100 chars of the text")
    entities_extracted: int = Field(0, description="Number of entities extracted")
    suggested_diagnoses: list[str] = Field(default_factory=list, description="Candidate diagnoses")
    severity: int | None = Field(None, description="Severity estimate (1-10)")
    severity_level: SeverityLevel | None = Field(None, description="Severity display band")
    error: str | None = Field(None, description="Error message if processing failed")


class BatchAnalyzeResponse(BaseModel):
    """Response from batch analysis."""

    request_id: str = Field(..., description="Unique request identifier")
    total_texts: int = Field(..., description="Total texts processed")
    successful: int = Field(..., description="Successfully processed")
    failed: int = Field(..., description="Failed to process")
    severe_cases: int = Field(..., description="Notes with severity 8 or higher")
    results: list[BatchAnalyzeItem] = Field(..., description="Results for each text")
    total_time_ms: float = Field(..., description="Total processing time")
