from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Literal, Optional


Category = Literal["personal", "education", "experience", "skills", "other", "unknown"]
ConfidenceScore = float  # 0.0 to 1.0


def _normalize(value: Any) -> Any:
    """Lower-case and trim strings; pass everything else through."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip().lower()
    return value


class FieldMetadata(BaseModel):
    """
    Snapshot of every textual signal attached to one form control.

    All strings are lower-cased and trimmed on construction so the classifier
    can rely on plain substring matching.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    type: str = ""
    placeholder: str = ""
    class_name: str = ""
    value: str = ""
    autocomplete: str = ""

    aria_label: str = ""
    aria_labelledby: str = ""
    aria_describedby: str = ""
    title: str = ""
    data_attributes: Dict[str, str] = Field(default_factory=dict, description="data-* attributes, name -> value")

    label_text: str = ""
    label_for_field: bool = Field(default=False, description="True when bound via label[for=id], False when inferred")

    required: bool = False
    pattern: str = ""
    min_length: int = 0
    max_length: int = 0
    min: str = ""
    max: str = ""

    options: List[str] = Field(default_factory=list, description="Visible option texts of enumerable controls")
    extensions: Dict[str, str] = Field(default_factory=dict, description="Adapter-contributed signals")

    @field_validator(
        "id", "name", "type", "placeholder", "class_name", "value", "autocomplete",
        "aria_label", "aria_labelledby", "aria_describedby", "title", "label_text",
        "pattern", "min", "max",
        mode="before",
    )
    @classmethod
    def _lower_strings(cls, v: Any) -> Any:
        return _normalize(v)

    @field_validator("data_attributes", "extensions", mode="before")
    @classmethod
    def _lower_mapping(cls, v: Any) -> Any:
        if not v:
            return {}
        return {str(k).strip().lower(): _normalize(val) for k, val in dict(v).items()}

    @field_validator("options", mode="before")
    @classmethod
    def _lower_options(cls, v: Any) -> Any:
        if not v:
            return []
        return [_normalize(o) for o in v]

    def with_signals(self, **updates: Any) -> "FieldMetadata":
        """Copy with updated fields, re-running normalization."""
        return FieldMetadata.model_validate({**self.model_dump(), **updates})


class ClassificationResult(BaseModel):
    category: Category = "unknown"
    subcategory: str = "unknown"
    confidence: ConfidenceScore = Field(default=0.0, ge=0.0, le=1.0, description="0.0 (no decision) to 1.0")

    @property
    def is_unknown(self) -> bool:
        return self.category == "unknown"


class DetectedField(BaseModel):
    """A form control together with what we learned about it in one detection pass."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    field_handle: Any = Field(default=None, exclude=True, description="Opaque reference to the DOM control")
    metadata: FieldMetadata
    classification: ClassificationResult = Field(default_factory=ClassificationResult)

    @property
    def category(self) -> str:
        return self.classification.category

    @property
    def subcategory(self) -> str:
        return self.classification.subcategory

    @property
    def confidence(self) -> float:
        return self.classification.confidence


class PersonalInfo(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    website: str = ""
    address: str = ""


class ExperienceEntry(BaseModel):
    """Experience entry in document order."""
    title: str = ""
    company: str = ""
    start_date: str = ""  # verbatim, e.g. "Jan 2020"
    end_date: str = ""  # verbatim, e.g. "Present"
    description: str = ""


class EducationEntry(BaseModel):
    """Education entry in document order."""
    degree: str = ""  # Bachelor of Science, M.S., etc.
    school: str = ""  # University, School, Institute name
    field_of_study: str = ""  # Computer Science, Engineering, etc.
    gpa: str = ""
    start_date: str = ""  # YYYY
    end_date: str = ""  # YYYY or Present
    description: str = ""


class ResumeRecord(BaseModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    raw_text: str = ""


class SessionContext(BaseModel):
    """Per-page state owned by the shell: created on load, replaced on reload."""
    resume: Optional[ResumeRecord] = None
    autofill_enabled: bool = True
    highlight_uncertain: bool = True


class FillInstruction(BaseModel):
    """What the shell would write into one control. The engine never writes it."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    field_handle: Any = Field(default=None, exclude=True)
    category: str
    subcategory: str
    value: str
    confidence: ConfidenceScore = Field(..., ge=0.0, le=1.0)
    uncertain: bool = Field(default=False, description="Shell should highlight this field for review")
