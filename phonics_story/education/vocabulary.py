"""Vocabulary tiers (everyday, academic, domain) and per-grade vocabulary guidance.

Tier 1 words are learned through conversation, tier 2 words are academic
words that cross subjects, and tier 3 words belong to one subject. The
lists are deliberately small: they steer prompts and flag obvious
mismatches rather than grade every word of a story.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .grade_constraints import Grade, normalize_grade

TIER_1_CORE_WORDS = {
    "K": (
        "a", "and", "are", "as", "at", "be", "big", "can", "come", "day", "do", "down",
        "eat", "for", "get", "go", "good", "have", "he", "here", "i", "in", "is", "it",
        "like", "look", "make", "me", "my", "no", "not", "on", "play", "run", "said",
        "see", "she", "the", "this", "to", "up", "was", "we", "with", "you",
    ),
    "1": (
        "after", "again", "all", "boy", "came", "could", "did", "from", "girl", "had",
        "has", "help", "him", "his", "home", "house", "how", "just", "know", "let",
        "little", "man", "may", "new", "now", "old", "our", "out", "put", "say",
        "some", "take", "than", "them", "there", "time", "too", "two", "way", "well",
        "went", "were", "what", "when", "where", "will", "work", "your",
    ),
    "2": (
        "about", "also", "any", "ask", "back", "because", "before", "being", "both",
        "buy", "call", "children", "different", "does", "don't", "each", "even",
        "every", "find", "first", "found", "gave", "give", "going", "hand", "keep",
        "kind", "last", "leave", "long", "made", "many", "might", "more", "most",
        "mother", "move", "much", "must", "name", "need", "never", "next", "number",
        "only", "other", "over", "own", "part", "place", "right", "same", "school",
        "should", "show", "small", "still", "such", "tell", "think", "three",
        "through", "try", "turn", "under", "until", "very", "want", "water",
        "why", "without", "words", "world", "would", "write", "year", "years",
    ),
}

TIER_2_ACADEMIC_WORDS = {
    2: (
        "compare", "describe", "explain", "identify", "observe", "predict",
        "important", "problem", "solution", "example", "different", "similar",
    ),
    3: (
        "analyze", "categorize", "classify", "conclude", "contrast", "create",
        "demonstrate", "develop", "discuss", "evaluate", "examine", "illustrate",
        "investigate", "organize", "summarize", "support", "character", "setting",
        "event", "sequence", "cause", "effect", "detail", "evidence",
    ),
    4: (
        "accomplish", "achieve", "approach", "argument", "assume", "calculate",
        "challenge", "combine", "communicate", "construct", "convince", "determine",
        "elaborate", "estimate", "formulate", "interpret", "justify", "maintain",
        "previous", "process", "provide", "reference", "respond", "significant",
        "strategy", "structure", "sufficient", "traditional", "various",
    ),
    5: (
        "alternative", "approximate", "attitude", "category", "circumstances",
        "concept", "consistent", "demonstrate", "dimension", "emphasis",
        "establish", "factor", "feature", "function", "individual", "involve",
        "method", "obvious", "occur", "percent", "period", "primary", "procedure",
        "require", "resource", "specific", "symbol", "technique", "theory",
    ),
    6: (
        "abstract", "accurate", "acquire", "adapt", "adequate", "analyze",
        "annual", "apparent", "appropriate", "approximate", "arbitrary", "assume",
        "authority", "benefit", "concept", "conclude", "conduct", "consequent",
        "considerable", "consist", "constant", "constitute", "context", "contract",
        "create", "data", "define", "derive", "distribute", "economy", "environment",
        "establish", "estimate", "evaluate", "evident", "export", "factor",
        "formula", "function", "identify", "income", "indicate", "individual",
        "interpret", "involve", "issue", "labor", "legal", "legislate", "major",
        "method", "occur", "percent", "period", "policy", "principle", "proceed",
        "process", "require", "research", "respond", "role", "section", "significant",
        "similar", "source", "specific", "structure", "theory", "vary",
    ),
}

TIER_3_DOMAIN_WORDS = {
    "science": (
        "habitat", "ecosystem", "adaptation", "photosynthesis", "evaporation",
        "condensation", "precipitation", "mammal", "reptile", "amphibian",
        "vertebrate", "invertebrate", "predator", "prey", "producer", "consumer",
        "decomposer", "migration", "hibernation",
    ),
    "mathematics": (
        "addition", "subtraction", "multiplication", "division", "fraction",
        "decimal", "percent", "geometry", "perimeter", "area", "volume",
        "equation", "variable", "coordinate", "graph", "pattern", "sequence",
        "probability", "statistics", "average", "median", "mode", "range",
    ),
    "social_studies": (
        "community", "government", "citizen", "democracy", "constitution",
        "amendment", "freedom", "responsibility", "geography", "continent",
        "country", "state", "culture", "tradition", "history", "timeline",
        "artifact", "civilization",
    ),
}

VOCABULARY_EXAMPLES = {
    "K": {
        "good": ["cat", "dog", "run", "big", "red", "see", "go"],
        "avoid": ["enormous", "magnificent", "because", "although"],
    },
    "1": {
        "good": ["play", "friend", "happy", "jump", "look", "help", "find"],
        "avoid": ["wonderful", "important", "different", "problem"],
    },
    "2": {
        "good": ["important", "different", "problem", "example", "describe"],
        "avoid": ["magnificent", "extraordinary", "complicated", "sophisticated"],
    },
    "3": {
        "good": ["analyze", "compare", "character", "setting", "evidence"],
        "avoid": ["comprehensive", "sophisticated", "phenomenon", "hypothesis"],
    },
}

VOCABULARY_INSTRUCTIONS = {
    "K": "Use only simple, concrete words that children know from daily conversation. Avoid any words longer than 2 syllables.",
    "1": "Focus on high-frequency words and simple phonics patterns. Include basic action words and descriptive words.",
    "2": "Combine everyday words with beginning academic vocabulary. Introduce words that appear across different subjects.",
    "3": "Use academic vocabulary that builds reading comprehension. Include words for discussing stories and ideas.",
    "4": "Incorporate subject-specific vocabulary with context support. Use words with prefixes and suffixes appropriately.",
    "5": "Include advanced academic vocabulary and abstract concepts. Support understanding through story context.",
    "6": "Use sophisticated vocabulary including figurative language. Demonstrate complex word relationships and meanings.",
}

_TIER_1_ORDER = ("K", "1", "2")


def _clean(word: str) -> str:
    return re.sub(r"[^\w]", "", word.lower())


def _grade_number(grade: str) -> Optional[int]:
    if grade == "K":
        return 0
    try:
        return int(grade)
    except ValueError:
        return None


def _cleaned(words: Iterable[str]) -> frozenset:
    return frozenset(_clean(w) for w in words)


_TIER_1_SETS = {g: _cleaned(words) for g, words in TIER_1_CORE_WORDS.items()}
_TIER_2_SETS = {g: _cleaned(words) for g, words in TIER_2_ACADEMIC_WORDS.items()}
_TIER_3_SET = _cleaned(w for words in TIER_3_DOMAIN_WORDS.values() for w in words)


@dataclass
class VocabularyValidation:
    is_valid: bool
    issues: list[str]
    flagged_words: list[str]
    tier_distribution: dict[str, int]
    recommendations: list[str]


@dataclass
class VocabularyRecommendation:
    tier1: list[str] = field(default_factory=list)
    tier2: list[str] = field(default_factory=list)
    focus: str = ""
    avoid: list[str] = field(default_factory=list)


@dataclass
class VocabularyGuidance:
    primary_words: list[str]
    academic_words: list[str]
    focus_area: str
    avoid: list[str]
    examples: dict[str, list[str]]
    instructions: str


def vocabulary_tier(word: str, grade: Grade) -> Optional[int]:
    """Tier 1, 2 or 3 for ``word`` at ``grade``, or None when it is in no list.

    Tier 1 lists are cumulative up to the grade. Tier 2 lists are cumulative
    from grade 2 up to the grade (grade 2's list for K and 1).
    """
    cleaned = _clean(word)
    if not cleaned:
        return None
    grade = normalize_grade(grade)

    for check in _TIER_1_ORDER:
        if cleaned in _TIER_1_SETS[check]:
            return 1
        if check == grade:
            break

    number = _grade_number(grade)
    for g in range(2, max(2, number or 2) + 1):
        if cleaned in _TIER_2_SETS.get(g, ()):
            return 2

    if cleaned in _TIER_3_SET:
        return 3
    return None


def _recommendations(counts: dict[str, int], grade: str) -> list[str]:
    recommendations = []
    if grade in ("K", "1"):
        if counts["tier2"] > 0:
            recommendations.append("Consider replacing some Tier 2 words with simpler alternatives")
        if counts["tier1"] < 5:
            recommendations.append("Include more high-frequency Tier 1 words for accessibility")
    elif grade in ("2", "3"):
        if counts["tier2"] < 2:
            recommendations.append("Consider adding some academic vocabulary (Tier 2) words")
        if counts["tier3"] > 2:
            recommendations.append("Limit specialized vocabulary unless essential to content")
    elif counts["tier2"] < 3:
        recommendations.append("Include more academic vocabulary to build word knowledge")
    return recommendations


def validate_vocabulary(words: Iterable[str], grade: Grade) -> VocabularyValidation:
    """Count tiers across ``words`` and flag words that run ahead of ``grade``.

    Tier 2 words are flagged for K and grade 1, tier 3 words for K through
    grade 2. Words in no list are counted as unknown and never flagged.
    """
    grade = normalize_grade(grade)
    number = _grade_number(grade)
    counts = {"tier1": 0, "tier2": 0, "tier3": 0, "unknown": 0}
    flagged: dict[str, str] = {}

    for word in words:
        tier = vocabulary_tier(word, grade)
        if tier is None:
            counts["unknown"] += 1
            continue
        counts[f"tier{tier}"] += 1
        key = _clean(word)
        if key in flagged:
            continue
        if tier == 2 and number is not None and number < 2:
            flagged[key] = f'Tier 2 word "{key}" may be advanced for grade {grade}'
        elif tier == 3 and number is not None and number < 3:
            flagged[key] = f'Tier 3 word "{key}" may be too specialized for grade {grade}'

    return VocabularyValidation(
        is_valid=not flagged,
        issues=list(flagged.values()),
        flagged_words=list(flagged),
        tier_distribution=counts,
        recommendations=_recommendations(counts, grade),
    )


def validate_story_vocabulary(story: Any, grade: Grade) -> VocabularyValidation:
    """``validate_vocabulary`` over every word of ``story`` (anything with ``paragraphs``)."""
    words = []
    for paragraph in getattr(story, "paragraphs", None) or []:
        for sentence in paragraph.sentences:
            words.extend(sentence.sentence.split())
    return validate_vocabulary(words, grade)


def recommended_vocabulary(grade: Grade) -> VocabularyRecommendation:
    grade = normalize_grade(grade)
    all_tier1 = [w for g in _TIER_1_ORDER for w in TIER_1_CORE_WORDS[g]]

    if grade == "K":
        return VocabularyRecommendation(
            tier1=list(TIER_1_CORE_WORDS["K"]),
            focus="Simple, concrete words for everyday objects and actions",
            avoid=["multisyllabic words", "abstract concepts", "complex grammar"],
        )
    if grade == "1":
        return VocabularyRecommendation(
            tier1=list(TIER_1_CORE_WORDS["K"] + TIER_1_CORE_WORDS["1"]),
            focus="High-frequency words with simple phonics patterns",
            avoid=["complex prefixes/suffixes", "idioms", "advanced grammar"],
        )
    if grade == "2":
        return VocabularyRecommendation(
            tier1=all_tier1,
            tier2=list(TIER_2_ACADEMIC_WORDS[2]),
            focus="Academic utility words that appear across subjects",
            avoid=["technical jargon", "rare words", "complex sentence structures"],
        )

    number = _grade_number(grade) or 3
    tier2 = []
    for g in range(2, min(number, 6) + 1):
        tier2.extend(TIER_2_ACADEMIC_WORDS.get(g, ()))
    return VocabularyRecommendation(
        tier1=all_tier1,
        tier2=list(dict.fromkeys(tier2)),
        focus=f"Academic vocabulary with morphological awareness (Grade {grade})",
        avoid=["archaic terms", "highly technical language", "college-level abstractions"],
    )


def vocabulary_guidance(grade: Grade) -> VocabularyGuidance:
    """Word lists and a one-line instruction for story prompts at ``grade``."""
    grade = normalize_grade(grade)
    recommended = recommended_vocabulary(grade)
    examples = VOCABULARY_EXAMPLES.get(grade, VOCABULARY_EXAMPLES["2"])
    return VocabularyGuidance(
        primary_words=recommended.tier1[:20],
        academic_words=recommended.tier2[:10],
        focus_area=recommended.focus,
        avoid=list(recommended.avoid),
        examples={k: list(v) for k, v in examples.items()},
        instructions=VOCABULARY_INSTRUCTIONS.get(grade, VOCABULARY_INSTRUCTIONS["2"]),
    )
