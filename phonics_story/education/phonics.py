"""Phonics pattern extraction, word banks and story-level phonics analysis."""

import re
from dataclasses import dataclass, field
from typing import Any, Union

from .grade_constraints import Grade, normalize_grade
from .word_banks import GRADE_ORDER, PATTERN_FAMILIES, PHONICS_PATTERNS, PHONICS_WORD_BANKS

# Minimum phonics word occurrences a story needs per grade
MIN_PHONICS_WORDS = {"K": 2, "1": 2, "2": 3, "3": 3, "4": 4, "5": 4, "6": 5}

_FAMILY_KEYWORDS = {
    "digraph": ("digraph", "trigraph"),
    "blend": ("blend",),
    "long vowel": ("long vowel", "vowel team"),
    "r-controlled": ("r-controlled", "r controlled"),
    "diphthong": ("diphthong",),
}

# Words that show up in skill descriptions but never name a pattern
_FILLER = re.compile(
    r"\b(?:consonant|digraphs?|trigraphs?|blends?|long|short|vowels?|teams?|"
    r"r-controlled|r controlled|diphthongs?|patterns?|words?|sounds?|"
    r"use|using|practice|practise|with|focus|on|the|and|of|containing)\b"
)


@dataclass
class PhonicsAnalysis:
    pattern: str
    total_words: int = 0
    unique_words: list[str] = field(default_factory=list)
    sentence_count: int = 0
    integration: str = "insufficient"
    coverage: float = 0.0
    words_per_sentence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "pattern": self.pattern,
            "totalWords": self.total_words,
            "uniqueWords": list(self.unique_words),
            "sentenceCount": self.sentence_count,
            "integration": self.integration,
            "coverage": self.coverage,
            "wordsPerSentence": self.words_per_sentence,
        }


@dataclass
class PhonicsValidation:
    is_valid: bool
    score: float
    issues: list[str]
    recommendations: list[str]
    educational_value: str
    meets_grade_standards: bool


def extract_pattern(skill: str) -> str:
    """Find the catalog pattern a phonics skill description refers to.

    Quoted patterns win, then standalone pattern tokens, then substrings
    within the family the description names ("digraph", "blend", ...),
    then substrings anywhere. Returns an empty string when nothing in the
    catalog is recognised.
    """
    if not skill:
        return ""

    text = skill.lower()

    for quoted in re.findall(r"['\"]([a-z]{1,3})['\"]", text):
        if quoted in PHONICS_PATTERNS:
            return quoted

    tokens = set(re.findall(r"[a-z]+", text))
    for pattern in PHONICS_PATTERNS:
        if pattern in tokens:
            return pattern

    stripped = _FILLER.sub(" ", text)

    for family, keywords in _FAMILY_KEYWORDS.items():
        if any(k in text for k in keywords):
            for pattern in PATTERN_FAMILIES[family]:
                if pattern in stripped:
                    return pattern

    for pattern in PHONICS_PATTERNS:
        if pattern in stripped:
            return pattern

    return ""


def word_bank_for(pattern: str, grade: Grade) -> list[str]:
    """Words for ``pattern`` from kindergarten up to and including ``grade``."""
    bank = PHONICS_WORD_BANKS.get(pattern)
    if not bank:
        return []

    normalized = normalize_grade(grade)
    if normalized not in GRADE_ORDER:
        return list(bank.get("2", []))

    words = []
    for g in GRADE_ORDER[: GRADE_ORDER.index(normalized) + 1]:
        words.extend(bank.get(g, []))
    return list(dict.fromkeys(words))


def word_bank_for_skill(skill: str, grade: Grade) -> list[str]:
    pattern = extract_pattern(skill)
    return word_bank_for(pattern, grade) if pattern else []


def _tokens(sentence: str) -> list[str]:
    return re.sub(r"[^\w\s]", "", sentence.lower()).split()


def find_matches_in_sentence(sentence: str, pattern: Union[str, re.Pattern]) -> list[str]:
    """Lowercased words of ``sentence`` that contain ``pattern``."""
    if not sentence or not pattern:
        return []
    regex = PHONICS_PATTERNS.get(pattern) if isinstance(pattern, str) else pattern
    if regex is None:
        return []
    return [word for word in _tokens(sentence) if regex.search(word)]


def _integration_label(total: int, unique: int, coverage: float) -> str:
    if total >= 4 and unique >= 2:
        return "excellent" if coverage > 0.5 else "natural"
    if total >= 2:
        return "adequate"
    return "insufficient"


def analyze_story(story: Any, skill: str) -> PhonicsAnalysis:
    """Count target-pattern words across every sentence of ``story``."""
    pattern = extract_pattern(skill)
    paragraphs = getattr(story, "paragraphs", None)
    if not paragraphs:
        return PhonicsAnalysis(pattern=pattern)

    matches = []
    sentence_count = 0
    for paragraph in paragraphs:
        for sentence in paragraph.sentences:
            sentence_count += 1
            matches.extend(find_matches_in_sentence(sentence.sentence, pattern))

    unique = list(dict.fromkeys(matches))
    coverage = len(matches) / sentence_count if sentence_count else 0.0

    return PhonicsAnalysis(
        pattern=pattern,
        total_words=len(matches),
        unique_words=unique,
        sentence_count=sentence_count,
        integration=_integration_label(len(matches), len(unique), coverage),
        coverage=round(coverage, 2),
        words_per_sentence=round(len(matches) / max(1, sentence_count), 2),
    )


def validate_phonics_integration(analysis: PhonicsAnalysis, grade: Grade) -> PhonicsValidation:
    """Judge whether a story's phonics practice is enough for its grade."""
    required = MIN_PHONICS_WORDS.get(normalize_grade(grade), 3)
    unique = len(analysis.unique_words)
    issues = []
    recommendations = []

    if analysis.total_words < required:
        issues.append(f"Insufficient phonics words: {analysis.total_words}/{required} needed")
        recommendations.append(
            f"Add {required - analysis.total_words} more {analysis.pattern} words "
            "naturally into actions or descriptions"
        )

    if unique < 2:
        issues.append("Needs more variety in phonics words")
        recommendations.append(
            f"Use different {analysis.pattern} words to avoid repetition and build vocabulary"
        )

    if analysis.coverage < 0.3:
        issues.append("Phonics pattern not well-distributed across story")
        recommendations.append(
            "Spread phonics words more evenly throughout the story for better reinforcement"
        )

    score = min(
        1.0,
        (analysis.total_words / required) * (unique / 2) * min(1.0, analysis.coverage / 0.3),
    )
    score = round(score, 2)
    is_valid = not issues

    return PhonicsValidation(
        is_valid=is_valid,
        score=score,
        issues=issues,
        recommendations=recommendations,
        educational_value=analysis.integration,
        meets_grade_standards=is_valid and score >= 0.7,
    )


def writing_prompts(skill: str, grade: Grade, theme: str) -> list[str]:
    pattern = extract_pattern(skill)
    words = word_bank_for(pattern, grade) if pattern else []

    if len(words) < 2:
        return [f"Write a story about {theme} using {pattern or skill} sounds."]

    sample = ", ".join(words[:4])
    return [
        f"Create an adventure where characters use these {pattern} words: {sample}",
        f"Write about {theme} featuring actions with {pattern} sounds like {', '.join(words[:3])}",
        f"Tell a story where {pattern} words help solve a problem: {sample}",
        f"Describe characters doing things with {pattern} words in a {theme} setting",
    ]
