from .grade_constraints import (
    GRADE_CONSTRAINTS,
    VALID_GRADES,
    GradeConstraints,
    constraints_for,
    estimate_syllables,
    grade_display,
    grade_summary,
    normalize_grade,
    validate_sentence,
    validate_story,
)
from .phonics import (
    PhonicsAnalysis,
    PhonicsValidation,
    analyze_story,
    extract_pattern,
    find_matches_in_sentence,
    validate_phonics_integration,
    word_bank_for,
    word_bank_for_skill,
    writing_prompts,
)
from .vocabulary import (
    VocabularyGuidance,
    VocabularyRecommendation,
    VocabularyValidation,
    recommended_vocabulary,
    validate_story_vocabulary,
    validate_vocabulary,
    vocabulary_guidance,
    vocabulary_tier,
)

__all__ = [
    "GRADE_CONSTRAINTS",
    "VALID_GRADES",
    "GradeConstraints",
    "constraints_for",
    "estimate_syllables",
    "grade_display",
    "grade_summary",
    "normalize_grade",
    "validate_sentence",
    "validate_story",
    "PhonicsAnalysis",
    "PhonicsValidation",
    "analyze_story",
    "extract_pattern",
    "find_matches_in_sentence",
    "validate_phonics_integration",
    "word_bank_for",
    "word_bank_for_skill",
    "writing_prompts",
    "VocabularyGuidance",
    "VocabularyRecommendation",
    "VocabularyValidation",
    "recommended_vocabulary",
    "validate_story_vocabulary",
    "validate_vocabulary",
    "vocabulary_guidance",
    "vocabulary_tier",
]
