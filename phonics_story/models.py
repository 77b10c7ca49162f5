"""Data models for story inputs, the working story document and evaluations."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .analytics import AnalyticsSink
from .config import PipelineConfig
from .education.grade_constraints import VALID_GRADES, normalize_grade
from .utils.cancellation import CancellationToken

ACTIONABLE_PRIORITIES = ("critical", "important")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def count_words(text: str) -> int:
    return len(text.split())


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and str(v)]
    return [str(value)]


def _as_mapping(value: Any) -> dict:
    # Evaluators sometimes answer an analysis section with prose
    return dict(value) if isinstance(value, Mapping) else {}


class StoryInput(BaseModel):
    """Caller-supplied parameters for one pipeline run."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    theme: str = Field(min_length=1)
    genre: str = Field(min_length=1)
    phonic_skill: str = Field(alias="phonicSkill", min_length=1)
    length: int = Field(gt=0, description="Number of sentences in the story")
    grade_level: str = Field(alias="gradeLevel")

    @field_validator("theme", "genre", "phonic_skill")
    @classmethod
    def _strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("grade_level", mode="before")
    @classmethod
    def _check_grade(cls, v: Any) -> str:
        if v is None or isinstance(v, bool):
            raise ValueError("grade level must be K or 1-6")
        grade = normalize_grade(v)
        if grade not in VALID_GRADES:
            raise ValueError(f"grade level must be K or 1-6, got {v!r}")
        return grade


@dataclass(frozen=True)
class PipelineOptions:
    quality_threshold: float = 0.75
    max_revision_cycles: int = 2
    max_tokens: int = 8192
    strict_phonics: bool = True
    token: Optional[CancellationToken] = None
    analytics: Optional[AnalyticsSink] = None

    def __post_init__(self):
        if not 0 <= self.quality_threshold <= 1:
            raise ValueError("quality_threshold must be within [0, 1]")
        if self.max_revision_cycles < 0:
            raise ValueError("max_revision_cycles must be >= 0")
        if self.max_tokens <= 0:
            raise ValueError("max_tokens must be > 0")

    @classmethod
    def from_config(cls, config: PipelineConfig, **overrides: Any) -> "PipelineOptions":
        values = config.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class Sentence:
    sentence: str = ""
    phonics_words: list[str] = field(default_factory=list)
    word_count: int = 0
    revised: bool = False
    revision_timestamp: Optional[str] = None
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Sentence":
        if isinstance(data, str):
            return cls(sentence=data, word_count=count_words(data))
        text = str(data.get("sentence", "") or "")
        word_count = _as_int(data.get("wordCount"))
        return cls(
            sentence=text,
            phonics_words=_as_str_list(data.get("phonicsWords")),
            word_count=word_count if word_count is not None else count_words(text),
            revised=_as_bool(data.get("revised", False)),
            revision_timestamp=data.get("revisionTimestamp"),
            notes=str(data.get("designNotes", "") or ""),
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "sentence": self.sentence,
            "phonicsWords": list(self.phonics_words),
            "wordCount": self.word_count,
        }
        if self.revised:
            data["revised"] = True
            data["revisionTimestamp"] = self.revision_timestamp
        return data

    def replace_text(self, text: str) -> None:
        self.sentence = text
        self.word_count = count_words(text)
        self.revised = True
        self.revision_timestamp = utc_timestamp()


@dataclass
class Paragraph:
    sentences: list[Sentence] = field(default_factory=list)


@dataclass
class SentenceRevision:
    original: str = ""
    issues: list[str] = field(default_factory=list)
    priority: str = "minor"
    suggested_direction: str = ""
    paragraph_index: Optional[int] = None
    sentence_index: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "SentenceRevision":
        return cls(
            original=str(data.get("original", "") or ""),
            issues=_as_str_list(data.get("issues")),
            priority=str(data.get("priority", "minor") or "minor").strip().lower(),
            suggested_direction=str(data.get("suggestedDirection", "") or ""),
            paragraph_index=_as_int(data.get("paragraphIndex")),
            sentence_index=_as_int(data.get("sentenceIndex")),
        )

    @property
    def actionable(self) -> bool:
        return self.priority in ACTIONABLE_PRIORITIES


@dataclass
class Evaluation:
    overall_score: float = 0.0
    meets_standards: bool = False
    critical_issues: list[str] = field(default_factory=list)
    sentence_revisions: list[SentenceRevision] = field(default_factory=list)
    phonics_analysis: dict = field(default_factory=dict)
    grade_level_analysis: dict = field(default_factory=dict)
    grade_appropriate_score: float = 0.0
    phonics_score: float = 0.0
    story_quality_score: float = 0.0
    improvement_priorities: list[str] = field(default_factory=list)
    educational_strengths: list[str] = field(default_factory=list)
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Evaluation":
        revisions = data.get("sentenceRevisions") or []
        return cls(
            overall_score=_as_float(data.get("overallScore")),
            meets_standards=_as_bool(data.get("meetsStandards", False)),
            critical_issues=_as_str_list(data.get("criticalIssues")),
            sentence_revisions=[
                SentenceRevision.from_dict(r) for r in revisions if isinstance(r, dict)
            ],
            phonics_analysis=_as_mapping(data.get("phonicsAnalysis")),
            grade_level_analysis=_as_mapping(data.get("gradeLevelAnalysis")),
            grade_appropriate_score=_as_float(data.get("gradeAppropriateScore")),
            phonics_score=_as_float(data.get("phonicsScore")),
            story_quality_score=_as_float(data.get("storyQualityScore")),
            improvement_priorities=_as_str_list(data.get("improvementPriorities")),
            educational_strengths=_as_str_list(data.get("educationalStrengths")),
            raw=dict(data),
        )

    def passes(self, threshold: float) -> bool:
        return self.meets_standards and self.overall_score >= threshold


@dataclass
class PipelineRecord:
    final_evaluation: Optional[Evaluation] = None
    revision_cycles: int = 0
    quality_threshold: float = 0.75
    timestamp: str = field(default_factory=utc_timestamp)


@dataclass
class Story:
    title: str = ""
    paragraphs: list[Paragraph] = field(default_factory=list)
    pipeline: Optional[PipelineRecord] = None
    educational_analysis: Any = None
    final_report: Any = None
    extras: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        paragraphs = []
        for p in data.get("paragraphs") or []:
            if not isinstance(p, Mapping):
                continue
            raw_sentences = p.get("sentences")
            if not isinstance(raw_sentences, list):
                raw_sentences = []
            # Nulls and stray numbers in the sentence list are dropped
            paragraphs.append(Paragraph(sentences=[
                Sentence.from_dict(s) for s in raw_sentences if isinstance(s, (str, Mapping))
            ]))
        extras = {k: v for k, v in data.items() if k not in ("title", "paragraphs")}
        return cls(
            title=str(data.get("title", "") or ""),
            paragraphs=paragraphs,
            extras=extras,
        )

    def iter_sentences(self) -> Iterator[tuple[int, int, Sentence]]:
        for p_idx, paragraph in enumerate(self.paragraphs):
            for s_idx, sentence in enumerate(paragraph.sentences):
                yield p_idx, s_idx, sentence

    @property
    def sentence_count(self) -> int:
        return sum(len(p.sentences) for p in self.paragraphs)

    def sentence_texts(self) -> list[str]:
        return [s.sentence for _, _, s in self.iter_sentences()]

    def sentence_at(self, paragraph_index: Optional[int], sentence_index: Optional[int]) -> Optional[Sentence]:
        if paragraph_index is None or sentence_index is None:
            return None
        if not 0 <= paragraph_index < len(self.paragraphs):
            return None
        sentences = self.paragraphs[paragraph_index].sentences
        if not 0 <= sentence_index < len(sentences):
            return None
        return sentences[sentence_index]

    def text(self) -> str:
        """Plain story text, one line per paragraph with a blank line between."""
        paragraphs = (" ".join(s.sentence for s in p.sentences if s.sentence) for p in self.paragraphs)
        return "\n\n".join(p for p in paragraphs if p)

    def context_string(self) -> str:
        return f'Story: "{self.title}" - Context: {" ".join(self.sentence_texts())}'

    def to_dict(self, with_locations: bool = False) -> dict:
        paragraphs = []
        for p_idx, paragraph in enumerate(self.paragraphs):
            sentences = []
            for s_idx, sentence in enumerate(paragraph.sentences):
                data = sentence.to_dict()
                if with_locations:
                    data = {"paragraphIndex": p_idx, "sentenceIndex": s_idx, **data}
                sentences.append(data)
            paragraphs.append({"sentences": sentences})
        return {"title": self.title, "paragraphs": paragraphs}
