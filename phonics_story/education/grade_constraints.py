"""Grade-level constraints for sentence length, syllables, vocabulary and syntax."""

import re
from dataclasses import dataclass, field
from typing import Any, Union

Grade = Union[str, int]

VALID_GRADES = ("K", "1", "2", "3", "4", "5", "6")


@dataclass(frozen=True)
class GradeConstraints:
    min_words: int
    max_words: int
    max_syllables: int
    vocabulary_tier: str
    sentence_structure: str
    allowed_structures: tuple[str, ...]
    forbidden_structures: tuple[str, ...]
    lexile_range: str
    preferred_words: tuple[str, ...] = ()
    avoid_words: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()


GRADE_CONSTRAINTS: dict[str, GradeConstraints] = {
    "K": GradeConstraints(
        min_words=3,
        max_words=6,
        max_syllables=2,
        vocabulary_tier="Tier 1 only (everyday, high-frequency)",
        sentence_structure="Simple SVO only - no subordination or compound sentences",
        allowed_structures=("SVO", "SV"),
        forbidden_structures=("compound", "complex", "subordinate clauses"),
        lexile_range="BR-200L",
        preferred_words=("sight words", "CVC patterns", "basic nouns and verbs"),
        avoid_words=("multisyllabic", "abstract concepts", "idiomatic expressions"),
        examples=("I see a dog.", "The cat is big.", "We go up.", "The ball is red."),
    ),
    "1": GradeConstraints(
        min_words=4,
        max_words=8,
        max_syllables=2,
        vocabulary_tier="Tier 1 + early Tier 2 (high utility)",
        sentence_structure='Simple sentences, basic compound with "and"',
        allowed_structures=("SVO", "SVOC", "simple compound with and"),
        forbidden_structures=("subordinate clauses", "complex sentences", "multiple conjunctions"),
        lexile_range="200L-400L",
        preferred_words=("high-frequency words", "CVC/CVCC patterns", "simple blends", "inflectional endings"),
        avoid_words=("multisyllabic beyond 2 syllables", "idioms", "complex prefixes"),
        examples=("The dog runs fast.", "I play with Sam.", "We read and play games.", "My mom is nice."),
    ),
    "2": GradeConstraints(
        min_words=5,
        max_words=10,
        max_syllables=3,
        vocabulary_tier="Tier 1 + Tier 2 (academic utility)",
        sentence_structure="Simple and compound sentences, introductory phrases",
        allowed_structures=("SVO", "SVOC", "compound with and/but", "prepositional phrase starters"),
        forbidden_structures=("subordinate clauses", "relative clauses", "multiple dependent clauses"),
        lexile_range="400L-650L",
        preferred_words=("high-frequency", "basic compound words", "affixed words", "basic academic vocabulary"),
        avoid_words=("idioms", "rare words", "complex Latinate forms", "highly technical terms"),
        examples=(
            "My friend helps me clean up.",
            "We went to the park after lunch.",
            "The happy dog played outside.",
            "After school, we play games.",
        ),
    ),
    "3": GradeConstraints(
        min_words=6,
        max_words=12,
        max_syllables=3,
        vocabulary_tier="Tier 2 focus + contextual Tier 3",
        sentence_structure="Simple, compound, and emerging complex sentences",
        allowed_structures=("SVO", "compound", "basic subordinate with because/when/after"),
        forbidden_structures=("multiple subordinate clauses", "embedded clauses", "passive voice"),
        lexile_range="650L-820L",
        preferred_words=("Tier 2 academic words", "affixed words", "irregular plurals", "basic content words"),
        avoid_words=("obscure affixes", "dense idiomatic expressions", "highly technical jargon"),
        examples=(
            "After breakfast, the family walked to the market.",
            "She was unhappy because her book was lost.",
            "The students observed the experiment carefully.",
            "When it rains, we play inside the house.",
        ),
    ),
    "4": GradeConstraints(
        min_words=7,
        max_words=15,
        max_syllables=4,
        vocabulary_tier="Tier 2 + contextual Tier 3 + morphological analysis",
        sentence_structure="Compound and complex sentences with subordinate clauses",
        allowed_structures=("compound", "complex", "subordinate clauses", "relative clauses emerging"),
        forbidden_structures=("compound-complex", "multiple embedded clauses"),
        lexile_range="820L-980L",
        preferred_words=("Tier 2 academic", "beginning Tier 3", "multisyllabic words", "Greek/Latin roots"),
        avoid_words=("highly technical beyond context", "archaic terms", "dense jargon"),
        examples=(
            "Although the weather was cold, we still played soccer after school.",
            "The scientist measured the water in three different containers.",
            "Because she studied hard, Maria received excellent grades on her test.",
            "The mysterious package that arrived yesterday contained a beautiful gift.",
        ),
    ),
    "5": GradeConstraints(
        min_words=8,
        max_words=18,
        max_syllables=4,
        vocabulary_tier="Tier 2 + domain-specific Tier 3 + morphological complexity",
        sentence_structure="Compound/complex with dependent and independent clauses",
        allowed_structures=("compound", "complex", "relative clauses", "participial phrases"),
        forbidden_structures=("overly dense compound-complex", "multiple embeddings"),
        lexile_range="980L-1120L",
        preferred_words=("Tier 2 academic", "content-specific vocabulary", "abstract concepts", "Latin/Greek bases"),
        avoid_words=("dense technical terminology", "archaisms", "advanced idioms without context"),
        examples=(
            "Because the river flooded, the team canceled their trip and planned a new one for next week.",
            "Many inventions, such as the telephone, have changed the world in surprising ways.",
            "Despite the challenging circumstances, the expedition team successfully reached the summit.",
            "The archaeologist carefully examined the ancient artifacts before recording her observations.",
        ),
    ),
    "6": GradeConstraints(
        min_words=9,
        max_words=20,
        max_syllables=5,
        vocabulary_tier="Tier 2-3 + figurative + morphologically complex",
        sentence_structure="Complex and compound-complex with multiple subordinate clauses",
        allowed_structures=("compound-complex", "multiple subordinate clauses", "embedded phrases", "varied starters"),
        forbidden_structures=("extremely dense academic prose", "overly convoluted syntax"),
        lexile_range="1120L-1185L",
        preferred_words=("Tier 2-3 academic", "domain-specific", "figurative language", "sophisticated vocabulary"),
        avoid_words=("archaic without context", "densely technical outside domain", "college-level abstractions"),
        examples=(
            "After completing the science project, the students presented their findings to the class, clearly explaining each step.",
            "When the river began to rise, the villagers built levees to prevent flooding in their community.",
            "Despite her fear of heights, Maya climbed the tall mountain and admired the spectacular view below.",
            "The protagonist's internal conflict, which had been building throughout the novel, finally reached its climax.",
        ),
    ),
}

KEY_FOCUS = {
    "K": "Basic phonics, sight words, simple sentence structure",
    "1": "Phonics patterns, high-frequency words, basic fluency",
    "2": "Compound words, beginning academic vocabulary, sentence variety",
    "3": "Academic vocabulary, complex sentences, reading comprehension",
    "4": "Multisyllabic words, advanced sentence structures, content reading",
    "5": "Abstract concepts, complex text structures, critical thinking",
    "6": "Sophisticated vocabulary, varied syntax, analytical reading",
}

SUBORDINATORS = (
    "because", "when", "if", "since", "while", "although",
    "though", "after", "before", "unless", "until", "wherever",
)

_VOWELS = "aeiouy"


def normalize_grade(grade: Grade) -> str:
    """Map 0/"k"/"K" to "K" and everything else to its string form."""
    if isinstance(grade, str):
        grade = grade.strip()
        if grade.lower() in ("k", "0"):
            return "K"
        return grade
    if grade == 0:
        return "K"
    return str(grade)


def grade_display(grade: Grade) -> str:
    normalized = normalize_grade(grade)
    return "Kindergarten" if normalized == "K" else f"Grade {normalized}"


def constraints_for(grade: Grade) -> GradeConstraints:
    """Constraints for ``grade``; unknown grades get grade 1's."""
    return GRADE_CONSTRAINTS.get(normalize_grade(grade), GRADE_CONSTRAINTS["1"])


def example_sentences(grade: Grade) -> list[str]:
    return list(constraints_for(grade).examples)


def estimate_syllables(word: str) -> int:
    """Vowel-group syllable estimate; never less than 1."""
    if not word or len(word) <= 3:
        return 1

    word = re.sub(r"[^a-z]", "", word.lower())
    if not word:
        return 1

    syllables = 0
    previous_was_vowel = False
    for c in word:
        is_vowel = c in _VOWELS
        if is_vowel and not previous_was_vowel:
            syllables += 1
        previous_was_vowel = is_vowel

    # Silent trailing e
    if word.endswith("e") and syllables > 1:
        syllables -= 1

    # Consonant + le ("tumble", "little")
    if word.endswith("le") and len(word) > 2 and word[-3] not in "aeiou":
        syllables += 1

    return max(1, syllables)


@dataclass
class SentenceValidation:
    is_valid: bool
    issues: list[str]
    word_count: int
    complex_words: list[str] = field(default_factory=list)


@dataclass
class SentenceIssue:
    location: str
    sentence: str
    issues: list[str]


@dataclass
class StoryValidation:
    is_valid: bool
    issues: list[SentenceIssue]
    stats: dict


def validate_sentence(sentence: str, grade: Grade) -> SentenceValidation:
    constraints = constraints_for(grade)
    words = sentence.split()
    issues = []

    if len(words) > constraints.max_words:
        issues.append(f"Too many words: {len(words)} > {constraints.max_words}")
    if len(words) < constraints.min_words:
        issues.append(f"Too few words: {len(words)} < {constraints.min_words}")

    complex_words = [w for w in words if estimate_syllables(w) > constraints.max_syllables]
    if complex_words:
        issues.append(
            f"Complex words: {', '.join(complex_words)} exceed {constraints.max_syllables} syllables"
        )

    return SentenceValidation(
        is_valid=not issues,
        issues=issues,
        word_count=len(words),
        complex_words=complex_words,
    )


def validate_story(story: Any, grade: Grade) -> StoryValidation:
    """Validate every sentence of ``story`` (anything with ``paragraphs``)."""
    constraints = constraints_for(grade)

    if not getattr(story, "paragraphs", None):
        return StoryValidation(
            is_valid=False,
            issues=[SentenceIssue("Story structure", "", ["No paragraphs found"])],
            stats={"total_sentences": 0, "valid_sentences": 0},
        )

    issues = []
    results = []
    for p_idx, paragraph in enumerate(story.paragraphs):
        for s_idx, sentence in enumerate(paragraph.sentences):
            validation = validate_sentence(sentence.sentence, grade)
            results.append(validation)
            if not validation.is_valid:
                issues.append(
                    SentenceIssue(
                        location=f"Paragraph {p_idx + 1}, Sentence {s_idx + 1}",
                        sentence=sentence.sentence,
                        issues=validation.issues,
                    )
                )

    total = len(results)
    valid = sum(1 for r in results if r.is_valid)
    avg_words = sum(r.word_count for r in results) / total if total else 0.0

    return StoryValidation(
        is_valid=not issues,
        issues=issues,
        stats={
            "total_sentences": total,
            "valid_sentences": valid,
            "average_word_count": round(avg_words, 1),
            "max_word_limit": constraints.max_words,
            "min_word_limit": constraints.min_words,
            "lexile_range": constraints.lexile_range,
            "pass_rate": round(valid / total * 100) if total else 0,
        },
    )


def _has_word(text: str, words: tuple[str, ...]) -> bool:
    return any(re.search(rf"\b{w}\b", text) for w in words)


def is_structure_appropriate(sentence: str, grade: Grade) -> bool:
    """Rough check that a sentence avoids structures the grade forbids."""
    normalized = normalize_grade(grade)
    lower = sentence.lower()
    subordinate = _has_word(lower, SUBORDINATORS)

    if normalized == "K":
        return not (subordinate or _has_word(lower, ("and", "but", "or")))
    if normalized == "1":
        return not (subordinate or _has_word(lower, ("but", "or", "so", "yet")))
    if normalized == "2":
        return not subordinate
    return True


def grade_summary(grade: Grade) -> dict:
    constraints = constraints_for(grade)
    normalized = normalize_grade(grade)
    return {
        "grade": normalized,
        "display_name": grade_display(normalized),
        "word_range": f"{constraints.min_words}-{constraints.max_words} words per sentence",
        "syllable_limit": f"Maximum {constraints.max_syllables} syllables per word",
        "vocabulary_level": constraints.vocabulary_tier,
        "sentence_types": ", ".join(constraints.allowed_structures),
        "lexile_range": constraints.lexile_range,
        "key_focus": KEY_FOCUS.get(normalized, "General literacy development"),
    }
