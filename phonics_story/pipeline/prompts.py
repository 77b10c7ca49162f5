"""Chat messages for the generate, evaluate and revise passes and the classroom extras."""

import json

from ..education.grade_constraints import KEY_FOCUS, constraints_for, grade_display
from ..education.phonics import MIN_PHONICS_WORDS, word_bank_for_skill
from ..education.vocabulary import vocabulary_guidance
from ..models import Story, StoryInput

GENERATION_SYSTEM = """You are a master children's story writer specializing in phonics-integrated narratives. You create engaging stories that naturally incorporate specific phonics patterns while maintaining high literary quality for specific grade levels."""

EVALUATION_SYSTEM = """You are an expert children's literacy specialist who evaluates stories for grade-level appropriateness, phonics integration, and educational quality. You understand research-based constraints from CCSS and Lexile frameworks."""

REVISION_SYSTEM = """You are a literacy education specialist who revises sentences to meet specific grade-level research requirements while maintaining story quality and natural phonics integration."""

JSON_ONLY = "CRITICAL: Return ONLY valid JSON. No explanatory text, no markdown, no prefixes."


def _messages(system: str, user: str) -> list[dict]:
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]


def _vocabulary_section(grade_level: str) -> str:
    guidance = vocabulary_guidance(grade_level)
    section = (
        "VOCABULARY:\n"
        f"- {guidance.instructions}\n"
        f"- Focus: {guidance.focus_area}\n"
        f"- Core words: {', '.join(guidance.primary_words)}\n"
    )
    if guidance.academic_words:
        section += f"- Academic words to weave in: {', '.join(guidance.academic_words)}\n"
    section += (
        f"- Good examples: {', '.join(guidance.examples['good'])}\n"
        f"- Avoid words like: {', '.join(guidance.examples['avoid'])}\n"
    )
    return section


def messages_for_story(story_input: StoryInput, strict_phonics: bool = True) -> list[dict]:
    c = constraints_for(story_input.grade_level)
    grade = grade_display(story_input.grade_level)
    words = word_bank_for_skill(story_input.phonic_skill, story_input.grade_level)
    skill = story_input.phonic_skill
    if strict_phonics:
        required = MIN_PHONICS_WORDS.get(story_input.grade_level, 3)
        usage = f"- Use at least {required} words with the target pattern, spread across the story\n"
    else:
        usage = "- Use words with the target pattern where they fit naturally\n"

    user = (
        f'CREATE an engaging {story_input.length}-sentence story for {grade} '
        f'that masterfully integrates "{skill}" phonics.\n\n'
        f"STORY PARAMETERS:\n"
        f"- Genre: {story_input.genre}\n"
        f"- Theme: {story_input.theme}\n"
        f"- Grade: {grade} ({c.lexile_range})\n"
        f'- Phonics focus: "{skill}"\n'
        f"- Total sentences: EXACTLY {story_input.length}\n\n"
        f"PHONICS INTEGRATION:\n"
        f"{usage}"
        f"- Available phonics words: {', '.join(words) or 'choose suitable words'}\n"
        f"- Make phonics words central to plot and character actions\n\n"
        f"{grade.upper()} CONSTRAINTS:\n"
        f"- {c.min_words}-{c.max_words} words per sentence\n"
        f"- Maximum {c.max_syllables} syllables per word\n"
        f"- Sentence structures: {', '.join(c.allowed_structures)}\n"
        f"- AVOID: {', '.join(c.forbidden_structures)}\n"
        f"- Vocabulary level: {c.vocabulary_tier}\n\n"
        f"{_vocabulary_section(story_input.grade_level)}\n"
        f"QUALITY:\n"
        f"- Clear story arc: setup, adventure, resolution\n"
        f"- Each sentence advances the plot\n\n"
        f"{JSON_ONLY}\n"
        f"Return exactly this JSON structure:\n"
        f'{{"title": "...", "paragraphs": [{{"sentences": [{{"sentence": "...", '
        f'"phonicsWords": ["..."], "wordCount": 0, "designNotes": "..."}}]}}], '
        f'"phonicsIntegration": {{"targetPattern": "{skill}", "totalPhonicsWords": 0, '
        f'"integrationStrategy": "..."}}, "gradeLevel": "{story_input.grade_level}", '
        f'"educationalFocus": "..."}}\n\n'
        f"Count words carefully. Each sentence must be {c.min_words}-{c.max_words} words."
    )
    return _messages(GENERATION_SYSTEM, user)


def messages_for_evaluation(story: Story, story_input: StoryInput) -> list[dict]:
    c = constraints_for(story_input.grade_level)
    grade = grade_display(story_input.grade_level)
    story_json = json.dumps(story.to_dict(with_locations=True), indent=2, ensure_ascii=False)

    user = (
        f"EVALUATE this {grade} story for educational effectiveness.\n\n"
        f"STORY TO EVALUATE:\n{story_json}\n\n"
        f"{grade.upper()} REQUIREMENTS:\n"
        f"- Sentence length: {c.min_words}-{c.max_words} words\n"
        f"- Syllable limit: {c.max_syllables} per word\n"
        f"- Vocabulary tier: {c.vocabulary_tier}\n"
        f"- Sentence structures: {', '.join(c.allowed_structures)}\n"
        f"- FORBIDDEN structures: {', '.join(c.forbidden_structures)}\n"
        f'- Phonics skill: "{story_input.phonic_skill}" (3-4 words minimum)\n'
        f"- Lexile range: {c.lexile_range}\n\n"
        f"Score grade-level appropriateness, phonics integration and story quality from 0.0 to 1.0. "
        f"Identify the exact sentences with problems. For every sentence revision copy "
        f"paragraphIndex and sentenceIndex from the story above.\n\n"
        f"{JSON_ONLY}\n"
        f'{{"overallScore": 0.0, "gradeAppropriateScore": 0.0, "phonicsScore": 0.0, '
        f'"storyQualityScore": 0.0, "meetsStandards": false, "criticalIssues": ["..."], '
        f'"improvementPriorities": ["..."], "educationalStrengths": ["..."], '
        f'"sentenceRevisions": [{{"paragraphIndex": 0, "sentenceIndex": 0, '
        f'"original": "exact sentence text", "issues": ["..."], '
        f'"priority": "critical/important/minor", "suggestedDirection": "..."}}], '
        f'"phonicsAnalysis": {{"targetPattern": "...", "wordsFound": ["..."], "wordCount": 0, '
        f'"integration": "natural/forced/insufficient"}}, '
        f'"gradeLevelAnalysis": {{"sentenceComplexityIssues": [], '
        f'"vocabularyAppropriatenessIssues": [], "syntaxDevelopmentalIssues": []}}}}\n\n'
        f"BE RIGOROUS: only score 0.85+ for stories that fully match {grade} requirements."
    )
    return _messages(EVALUATION_SYSTEM, user)


def messages_for_revision(
    sentence: str,
    issues: list[str],
    story_input: StoryInput,
    context: str,
    direction: str = "",
) -> list[dict]:
    c = constraints_for(story_input.grade_level)
    grade = grade_display(story_input.grade_level)
    words = word_bank_for_skill(story_input.phonic_skill, story_input.grade_level)

    user = (
        f"REVISE this sentence to meet {grade} standards:\n\n"
        f'ORIGINAL: "{sentence}"\n'
        f"IDENTIFIED ISSUES: {', '.join(issues) or 'none listed'}\n"
    )
    if direction:
        user += f"SUGGESTED DIRECTION: {direction}\n"
    user += (
        f"STORY CONTEXT: {context}\n\n"
        f"REQUIREMENTS:\n"
        f"- Fix all identified issues while preserving meaning\n"
        f"- Word count: {c.min_words}-{c.max_words} words\n"
        f"- Syllable limit: maximum {c.max_syllables} per word\n"
        f'- Include the "{story_input.phonic_skill}" pattern naturally if missing\n'
        f"- Vocabulary: {c.vocabulary_tier}. {vocabulary_guidance(story_input.grade_level).instructions}\n"
        f"- Sentence structure: {'/'.join(c.allowed_structures)}\n"
        f"- AVOID: {', '.join(c.forbidden_structures)}\n\n"
        f"AVAILABLE PHONICS WORDS: {', '.join(words) or 'choose suitable words'}\n\n"
        f"{JSON_ONLY}\n"
        f'{{"revisedSentence": "...", "wordCount": 0, "changesExplained": "...", '
        f'"issuesResolved": ["..."]}}'
    )
    return _messages(REVISION_SYSTEM, user)


RANDOM_STORY_SYSTEM = """You are a wildly creative educational content specialist who generates completely original story concepts while respecting research-based grade-level constraints from CCSS and Lexile frameworks. You never repeat ideas and always create surprising, delightful concepts that are developmentally appropriate."""

QUESTIONS_SYSTEM = """You are an experienced reading teacher who writes comprehension questions about children's stories. Respond with ONLY valid JSON."""

PRE_READING_SYSTEM = """You are an expert literacy teacher creating pre-reading thinking prompts. You understand developmental appropriateness and the difference between pre-reading activators and post-reading questions. Respond with ONLY valid JSON."""

RANDOM_LENGTH_RANGE = (4, 15)

PRE_READING_STRATEGIES = {
    "K": {
        "complexity": "Very simple, concrete, visual",
        "language": "Basic vocabulary, short sentences",
        "max_words": 12,
        "examples": (
            "Think about your favorite toy. How do you take care of it?",
            "Have you ever lost something important? How did you feel?",
            "What makes you feel happy when you're sad?",
        ),
    },
    "1": {
        "complexity": "Simple experiences, feelings-focused",
        "language": "Familiar words, clear emotions",
        "max_words": 15,
        "examples": (
            "Think about a time you helped someone. How did it make you feel?",
            "Have you ever been scared of something new? What happened?",
            "What do you do when you make a mistake?",
        ),
    },
    "2": {
        "complexity": "Personal connections, simple problem-solving",
        "language": "Everyday situations, basic choices",
        "max_words": 18,
        "examples": (
            "Think about a time you had to choose between two things you wanted. How did you decide?",
            "Have you ever had to be brave when you were frightened? What did you do?",
            "What makes a good friend? Think about someone special to you.",
        ),
    },
    "3": {
        "complexity": "Social situations, moral reasoning",
        "language": "More complex emotions, relationships",
        "max_words": 20,
        "examples": (
            "Think about a time when you had to stand up for what was right, even when it was hard.",
            "Have you ever had to choose between what you wanted and what was best for others?",
            "What would you do if you saw someone being treated unfairly?",
        ),
    },
    "4": {
        "complexity": "Abstract concepts, community connections",
        "language": "Academic vocabulary, complex scenarios",
        "max_words": 22,
        "examples": (
            "Think about what it means to show courage. Can you think of different types of courage?",
            "Have you ever had to persevere through something really difficult? What kept you going?",
            "What responsibilities do we have to help others in our community?",
        ),
    },
    "5": {
        "complexity": "Abstract thinking, moral dilemmas",
        "language": "Sophisticated vocabulary, nuanced concepts",
        "max_words": 25,
        "examples": (
            "Consider a time when you had to choose between personal loyalty and doing what's right.",
            "Think about how our actions can have consequences we don't expect. Can you think of an example?",
            "What does it mean to you to make a sacrifice for someone else?",
        ),
    },
    "6": {
        "complexity": "Complex moral reasoning, identity exploration",
        "language": "Advanced concepts, philosophical thinking",
        "max_words": 28,
        "examples": (
            "Reflect on a time when your perspective on something important changed. What influenced that change?",
            "Consider the difference between conformity and belonging. When might each be important?",
            "Think about how we balance individual desires with collective responsibility.",
        ),
    },
}

THEME_CONNECTIONS = {
    "friendship": ("loyalty", "trust", "making friends", "being a good friend", "peer pressure"),
    "courage": ("fear", "bravery", "being scared", "trying new things", "speaking up"),
    "family": ("relationships", "family rules", "family time", "feeling loved", "family changes"),
    "growth": ("learning", "getting better", "trying hard", "not giving up", "learning from mistakes"),
    "community": ("belonging", "helping others", "neighbors", "making a difference", "working together"),
    "adventure": ("exploring", "taking risks", "curiosity", "discovering new things", "facing the unknown"),
    "responsibility": ("taking care of things", "keeping promises", "doing the right thing", "helping family"),
}


def messages_for_random_story(grade_level: str) -> list[dict]:
    c = constraints_for(grade_level)
    grade = grade_display(grade_level)
    low, high = RANDOM_LENGTH_RANGE

    user = (
        f"Generate a completely ORIGINAL and CREATIVE story concept for {grade} students "
        f"that follows educational research requirements.\n\n"
        f"CREATIVE FREEDOM:\n"
        f"- A theme that kids at this grade level find fascinating\n"
        f"- A common genre that fits the theme\n"
        f"- A grade-appropriate phonics skill that appears naturally in the concept\n"
        f"- A story length that serves the idea and the grade level\n\n"
        f"EDUCATIONAL RESEARCH REQUIREMENTS for {grade}:\n"
        f"- Sentence complexity: {c.min_words}-{c.max_words} words per sentence\n"
        f"- Syllable limit: Maximum {c.max_syllables} syllables per word\n"
        f"- Vocabulary tier: {c.vocabulary_tier}\n"
        f"- Sentence structures: {', '.join(c.allowed_structures)}\n"
        f"- AVOID: {', '.join(c.forbidden_structures)}\n"
        f"- Lexile range: {c.lexile_range}\n"
        f"- Developmental focus: {KEY_FOCUS.get(grade_level, 'General literacy development')}\n\n"
        f"STORY LENGTH: pick {low}-{high} sentences.\n\n"
        f"{JSON_ONLY}\n"
        f'{{"theme": "...", "genre": "...", "phonicSkill": "...", "length": {low}}}'
    )
    return _messages(RANDOM_STORY_SYSTEM, user)


def _story_metadata(story: Story, story_input: StoryInput) -> str:
    return (
        f"STORY METADATA:\n"
        f"- Title: {story.title or 'Untitled Story'}\n"
        f"- Theme: {story_input.theme}\n"
        f"- Grade Level: {grade_display(story_input.grade_level)}\n"
        f"- Reading Skill: {story_input.phonic_skill}\n"
        f"- Story Length: {story.sentence_count} sentences\n"
        f"- Genre: {story_input.genre}\n"
    )


def messages_for_questions(
    story: Story,
    story_input: StoryInput,
    count: int,
    question_types: tuple[str, ...] = (),
) -> list[dict]:
    type_lines = "\n".join(f"- {t}" for t in question_types) or "- No specific types requested"

    user = (
        f"Here is the story:\n\n{story.text()}\n\n"
        f"Generate exactly {count} comprehension questions for this story.\n"
        f"If helpful, focus on these question types:\n{type_lines}\n\n"
        f"{_story_metadata(story, story_input)}\n"
        f"{JSON_ONLY}\n"
        f'{{"questions": [{{"text": "Question 1?", "type": "Open-ended"}}]}}'
    )
    return _messages(QUESTIONS_SYSTEM, user)


def messages_for_pre_reading(story: Story, story_input: StoryInput, count: int) -> list[dict]:
    grade = grade_display(story_input.grade_level)
    strategy = PRE_READING_STRATEGIES.get(story_input.grade_level, PRE_READING_STRATEGIES["2"])
    connections = THEME_CONNECTIONS.get(
        story_input.theme.lower(), ("experiences", "feelings", "choices")
    )
    examples = "\n".join(f"- {ex}" for ex in strategy["examples"])

    user = (
        f"You are creating PRE-READING thinking prompts for {grade} students. Students see them "
        f"BEFORE reading the story, to activate prior knowledge.\n\n"
        f"{_story_metadata(story, story_input)}"
        f"(Do NOT reveal plot details in prompts.)\n\n"
        f"{grade.upper()} REQUIREMENTS:\n"
        f"- Complexity: {strategy['complexity']}\n"
        f"- Language: {strategy['language']}\n"
        f"- Maximum words per prompt: {strategy['max_words']}\n"
        f"- Theme concepts to connect: {', '.join(connections)}\n\n"
        f"EXAMPLE PROMPTS:\n{examples}\n\n"
        f"Generate exactly {count} prompts that connect to students' own experiences of "
        f"{story_input.theme}. Start with \"Think about...\", \"Have you ever...\" or \"Imagine...\". "
        f"Never mention character names or story events.\n\n"
        f"{JSON_ONLY}\n"
        f'{{"prompts": ["Prompt 1 text"]}}'
    )
    return _messages(PRE_READING_SYSTEM, user)
