"""Educational analysis and final report attached to a finished story."""

from typing import Optional

from pydantic import BaseModel, Field

from ..education.grade_constraints import (
    StoryValidation,
    estimate_syllables,
    grade_display,
    validate_story,
)
from ..education.phonics import MIN_PHONICS_WORDS, analyze_story, validate_phonics_integration
from ..education.vocabulary import validate_story_vocabulary
from ..models import Evaluation, Story, StoryInput

ASSESSMENT_BANDS = (
    (0.85, "EXCELLENT"),
    (0.75, "GOOD"),
    (0.65, "ACCEPTABLE"),
)


class PhonicsSummary(BaseModel):
    pattern: str
    total_words: int
    unique_words: list[str]
    integration: str
    coverage: float
    required_words: int
    meets_requirements: bool
    validation_score: float
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    evaluator_words: list[str] = Field(default_factory=list)


class SentenceIssueReport(BaseModel):
    location: str
    sentence: str
    issues: list[str]


class GradeLevelSummary(BaseModel):
    is_valid: bool
    issues: list[SentenceIssueReport]
    stats: dict
    developmental_alignment: str
    readability_score: float


class VocabularySummary(BaseModel):
    is_valid: bool
    tier_distribution: dict[str, int]
    flagged_words: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class InstructionalSummary(BaseModel):
    classroom_ready: bool
    teacher_notes: str
    extension_activities: list[str]


class EducationalAnalysis(BaseModel):
    """Offline analysis of a story's phonics and grade-level fit."""
    phonics: PhonicsSummary
    grade_level: GradeLevelSummary
    vocabulary: VocabularySummary
    instructional: InstructionalSummary
    evaluator_score: float = 0.0
    recommended_use: str
    strengths: list[str] = Field(default_factory=list)
    concerns: list[str] = Field(default_factory=list)

    def summary(self) -> str:
        p = self.phonics
        g = self.grade_level
        v = self.vocabulary
        tiers = ", ".join(f"{name} {count}" for name, count in v.tier_distribution.items())
        lines = [
            "Educational Analysis",
            f"{'='*50}",
            f"Phonics pattern: {p.pattern or 'unknown'} ({p.integration})",
            f"Phonics words: {p.total_words}/{p.required_words} required"
            f" [{', '.join(p.unique_words)}]",
            f"Coverage: {p.coverage:.2f} words per sentence",
            f"Grade alignment: {g.developmental_alignment}"
            f" ({g.stats.get('valid_sentences', 0)}/{g.stats.get('total_sentences', 0)} sentences valid)",
            f"Readability: {g.readability_score}",
            f"Vocabulary tiers: {tiers}",
            f"Recommended use: {self.recommended_use}",
        ]
        for issue in g.issues:
            lines.append(f"  {issue.location}: {'; '.join(issue.issues)}")
        for issue in v.issues:
            lines.append(f"  {issue}")
        return "\n".join(lines)


class FinalReport(BaseModel):
    """Headline verdict for a generated story."""
    overall_assessment: str
    overall_score: float
    meets_threshold: bool
    grade_level: str
    total_sentences: int
    phonics_words: int
    phonics_pattern: str
    ready_for_instruction: bool
    revision_cycles: int = 0
    educational_strengths: list[str] = Field(default_factory=list)
    critical_issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    teacher_guidance: str = ""
    quality_breakdown: dict[str, float] = Field(default_factory=dict)

    def summary(self) -> str:
        """Return human-readable summary."""
        lines = [
            f"Final Report: {self.overall_assessment}",
            f"{'='*50}",
            f"Overall score: {self.overall_score:.3f}"
            f" ({'meets' if self.meets_threshold else 'below'} threshold)",
            f"Grade: {grade_display(self.grade_level)}",
            f"Sentences: {self.total_sentences}, revision cycles: {self.revision_cycles}",
            f"Phonics: {self.phonics_words} '{self.phonics_pattern}' words",
            f"Ready for instruction: {'yes' if self.ready_for_instruction else 'no'}",
            "",
        ]
        for name, score in self.quality_breakdown.items():
            lines.append(f"  {name}: {score:.2f}")
        if self.critical_issues:
            lines.append("")
            lines.append("Critical issues:")
            lines.extend(f"  - {issue}" for issue in self.critical_issues)
        if self.recommendations:
            lines.append("")
            lines.append("Recommendations:")
            lines.extend(f"  - {rec}" for rec in self.recommendations)
        return "\n".join(lines)


def _final_evaluation(story: Story) -> Optional[Evaluation]:
    return story.pipeline.final_evaluation if story.pipeline else None


def assess(score: float) -> str:
    for floor, label in ASSESSMENT_BANDS:
        if score >= floor:
            return label
    return "NEEDS IMPROVEMENT"


def developmental_alignment(validation: StoryValidation) -> str:
    if validation.is_valid:
        return "appropriate"
    count = len(validation.issues)
    if count <= 2:
        return "mostly appropriate"
    if count <= 5:
        return "some concerns"
    return "inappropriate"


def readability_score(story: Story) -> float:
    """Average sentence length plus the percentage of 3+ syllable words. Lower is easier."""
    total_words = 0
    complex_words = 0
    sentences = 0
    for _, _, sentence in story.iter_sentences():
        sentences += 1
        words = sentence.sentence.split()
        total_words += len(words)
        complex_words += sum(1 for w in words if estimate_syllables(w) >= 3)

    avg_words = total_words / sentences if sentences else 0.0
    complex_ratio = complex_words / total_words if total_words else 0.0
    return round(avg_words + complex_ratio * 100, 1)


def teacher_notes(story_input: StoryInput) -> str:
    return (
        f"This story is designed for {grade_display(story_input.grade_level)} phonics instruction "
        f'focusing on "{story_input.phonic_skill}". Use for guided reading, independent practice, '
        f"or phonics reinforcement. Encourage students to identify and discuss the target "
        f"phonics pattern throughout the story."
    )


def extension_activities(story_input: StoryInput) -> list[str]:
    return [
        f"Have students find and circle all words with the {story_input.phonic_skill} pattern",
        "Ask students to draw their favorite scene from the story",
        f"Discuss the story's theme: {story_input.theme}",
        "Create new sentences using the same phonics pattern",
        "Act out the story with classmates",
    ]


def recommended_use(evaluation: Optional[Evaluation]) -> str:
    if evaluation is None or evaluation.overall_score < 0.65:
        return "Needs revision before classroom use"
    if evaluation.overall_score >= 0.85:
        return "Excellent for independent and guided reading"
    if evaluation.overall_score >= 0.75:
        return "Good for guided reading with teacher support"
    return "Suitable for phonics practice with modifications"


def build_educational_analysis(story: Story, story_input: StoryInput) -> EducationalAnalysis:
    evaluation = _final_evaluation(story)

    phonics = analyze_story(story, story_input.phonic_skill)
    phonics_check = validate_phonics_integration(phonics, story_input.grade_level)
    required = MIN_PHONICS_WORDS.get(story_input.grade_level, 3)
    evaluator_words = []
    if evaluation is not None:
        found = evaluation.phonics_analysis.get("wordsFound")
        if isinstance(found, list):
            evaluator_words = [str(w) for w in found]

    grade_check = validate_story(story, story_input.grade_level)
    vocabulary_check = validate_story_vocabulary(story, story_input.grade_level)

    return EducationalAnalysis(
        phonics=PhonicsSummary(
            pattern=phonics.pattern,
            total_words=phonics.total_words,
            unique_words=phonics.unique_words,
            integration=phonics.integration,
            coverage=phonics.coverage,
            required_words=required,
            meets_requirements=phonics.total_words >= required,
            validation_score=phonics_check.score,
            issues=phonics_check.issues,
            recommendations=phonics_check.recommendations,
            evaluator_words=evaluator_words,
        ),
        grade_level=GradeLevelSummary(
            is_valid=grade_check.is_valid,
            issues=[
                SentenceIssueReport(location=i.location, sentence=i.sentence, issues=i.issues)
                for i in grade_check.issues
            ],
            stats=grade_check.stats,
            developmental_alignment=developmental_alignment(grade_check),
            readability_score=readability_score(story),
        ),
        vocabulary=VocabularySummary(
            is_valid=vocabulary_check.is_valid,
            tier_distribution=vocabulary_check.tier_distribution,
            flagged_words=vocabulary_check.flagged_words,
            issues=vocabulary_check.issues,
            recommendations=vocabulary_check.recommendations,
        ),
        instructional=InstructionalSummary(
            classroom_ready=bool(
                evaluation and evaluation.meets_standards and evaluation.overall_score >= 0.7
            ),
            teacher_notes=teacher_notes(story_input),
            extension_activities=extension_activities(story_input),
        ),
        evaluator_score=evaluation.overall_score if evaluation else 0.0,
        recommended_use=recommended_use(evaluation),
        strengths=list(evaluation.educational_strengths) if evaluation else [],
        concerns=list(evaluation.critical_issues) if evaluation else [],
    )


def build_final_report(story: Story, story_input: StoryInput, threshold: float) -> FinalReport:
    evaluation = _final_evaluation(story) or Evaluation()
    analysis = story.educational_analysis
    if not isinstance(analysis, EducationalAnalysis):
        analysis = build_educational_analysis(story, story_input)

    score = evaluation.overall_score
    meets_threshold = score >= threshold

    return FinalReport(
        overall_assessment=assess(score),
        overall_score=round(score, 3),
        meets_threshold=meets_threshold,
        grade_level=story_input.grade_level,
        total_sentences=story.sentence_count,
        phonics_words=analysis.phonics.total_words,
        phonics_pattern=analysis.phonics.pattern or "unknown",
        ready_for_instruction=meets_threshold,
        revision_cycles=story.pipeline.revision_cycles if story.pipeline else 0,
        educational_strengths=evaluation.educational_strengths,
        critical_issues=evaluation.critical_issues,
        recommendations=evaluation.improvement_priorities,
        teacher_guidance=analysis.instructional.teacher_notes,
        quality_breakdown={
            "developmental_appropriateness": evaluation.grade_appropriate_score,
            "phonics_integration": evaluation.phonics_score,
            "story_quality": evaluation.story_quality_score,
            "instructional_readiness": evaluation.overall_score,
        },
    )
