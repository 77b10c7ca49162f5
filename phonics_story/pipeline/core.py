"""Generate, evaluate and revise loop for a single story."""

from typing import Optional

from loguru import logger

from ..ai_client import ChatClient
from ..analytics import timed
from ..errors import CancellationError, MalformedResponseError
from ..models import (
    Evaluation,
    PipelineOptions,
    PipelineRecord,
    Sentence,
    SentenceRevision,
    Story,
    StoryInput,
)
from .prompts import messages_for_evaluation, messages_for_revision, messages_for_story

GENERATE_TEMPERATURE = 0.8
EVALUATE_TEMPERATURE = 0.3
REVISE_TEMPERATURE = 0.4
REVISE_MAX_TOKENS = 4096
MAX_REVISIONS_PER_PASS = 3

Location = tuple[int, int]


async def run_pipeline_core(
    story_input: StoryInput,
    client: ChatClient,
    options: Optional[PipelineOptions] = None,
) -> Story:
    """Generate a story, then evaluate and revise it until it passes.

    The loop ends when an evaluation meets standards at or above the quality
    threshold, when ``max_revision_cycles`` revision passes have run, or when
    the evaluator proposes no sentence revisions. Evaluation and revision
    failures end the loop but still return the story; generation failures
    and cancellation propagate.
    """
    options = options or PipelineOptions()
    threshold = options.quality_threshold

    story = await _generate(story_input, client, options)

    evaluation: Optional[Evaluation] = None
    cycles = 0
    while True:
        try:
            evaluation = await _evaluate(story, story_input, client, options)
        except CancellationError:
            raise
        except Exception as e:
            logger.warning(f"Evaluation after {cycles} revision cycle(s) failed: {e}")
            break

        if evaluation.passes(threshold):
            logger.success(f"Story meets quality standards (score: {evaluation.overall_score:.3f})")
            break

        if cycles >= options.max_revision_cycles:
            logger.warning(
                f"Maximum revision cycles reached. Final score: {evaluation.overall_score:.3f}"
            )
            break

        if not evaluation.sentence_revisions:
            logger.info("Evaluator proposed no sentence revisions; keeping current story")
            break

        try:
            await _revise(story, evaluation, story_input, client, options)
        except CancellationError:
            raise
        except Exception as e:
            logger.warning(f"Revision cycle {cycles + 1} failed: {e}")
            break
        cycles += 1

    story.pipeline = PipelineRecord(
        final_evaluation=evaluation,
        revision_cycles=cycles,
        quality_threshold=threshold,
    )
    return story


async def _generate(story_input: StoryInput, client: ChatClient, options: PipelineOptions) -> Story:
    with timed("story-generation", 1, options.analytics) as meta:
        data = await client.chat_json(
            messages_for_story(story_input, options.strict_phonics),
            temperature=GENERATE_TEMPERATURE,
            max_tokens=options.max_tokens,
            token=options.token,
        )
        story = Story.from_dict(data)
        if not story.paragraphs:
            raise MalformedResponseError("AI story response has no paragraphs")

        meta.update(
            title=story.title,
            sentence_count=story.sentence_count,
            phonics_target=story_input.phonic_skill,
        )

    logger.info(f'Generated "{story.title}" with {story.sentence_count} sentences')
    return story


async def _evaluate(
    story: Story, story_input: StoryInput, client: ChatClient, options: PipelineOptions
) -> Evaluation:
    with timed("story-evaluation", 2, options.analytics) as meta:
        data = await client.chat_json(
            messages_for_evaluation(story, story_input),
            temperature=EVALUATE_TEMPERATURE,
            max_tokens=options.max_tokens,
            token=options.token,
        )
        evaluation = Evaluation.from_dict(data)
        meta.update(
            overall_score=evaluation.overall_score,
            meets_standards=evaluation.meets_standards,
            critical_issue_count=len(evaluation.critical_issues),
        )

    logger.info(
        f"Evaluation score {evaluation.overall_score:.3f}, "
        f"meets standards: {evaluation.meets_standards}, "
        f"{len(evaluation.sentence_revisions)} revision(s) proposed"
    )
    return evaluation


def select_revisions(evaluation: Evaluation) -> list[SentenceRevision]:
    """Critical and important revisions, in evaluator order, at most three."""
    return [r for r in evaluation.sentence_revisions if r.actionable][:MAX_REVISIONS_PER_PASS]


def locate_sentence(
    story: Story, revision: SentenceRevision, skip: frozenset = frozenset()
) -> Optional[tuple[Location, Sentence]]:
    """Find the single sentence a revision targets.

    The echoed (paragraph, sentence) index wins when it points at a sentence
    whose text matches ``revision.original`` (or when no original was given).
    Otherwise the first sentence with exactly that text is used. Locations in
    ``skip`` are never returned.
    """
    original = revision.original.strip()
    target = story.sentence_at(revision.paragraph_index, revision.sentence_index)
    if target is not None:
        location = (revision.paragraph_index, revision.sentence_index)
        if location not in skip and (not original or target.sentence.strip() == original):
            return location, target

    if not original:
        return None

    for p_idx, s_idx, sentence in story.iter_sentences():
        if (p_idx, s_idx) in skip:
            continue
        if sentence.sentence.strip() == original:
            return (p_idx, s_idx), sentence
    return None


async def _revise(
    story: Story,
    evaluation: Evaluation,
    story_input: StoryInput,
    client: ChatClient,
    options: PipelineOptions,
) -> int:
    with timed("targeted-revisions", 3, options.analytics) as meta:
        selected = select_revisions(evaluation)
        logger.info(f"Processing {len(selected)} revision(s)")

        context = story.context_string()
        touched: set[Location] = set()
        applied = 0

        for revision in selected:
            found = locate_sentence(story, revision, frozenset(touched))
            if found is None:
                logger.warning(f'No sentence matches revision target: "{revision.original}"')
                continue
            location, sentence = found
            current = sentence.sentence

            try:
                data = await client.chat_json(
                    messages_for_revision(
                        current,
                        revision.issues,
                        story_input,
                        context,
                        revision.suggested_direction,
                    ),
                    temperature=REVISE_TEMPERATURE,
                    max_tokens=min(options.max_tokens, REVISE_MAX_TOKENS),
                    token=options.token,
                )
            except CancellationError:
                raise
            except Exception as e:
                logger.warning(f'Failed to revise "{current}": {e}')
                continue

            revised = data.get("revisedSentence")
            revised = revised.strip() if isinstance(revised, str) else ""
            if not revised or revised == current.strip():
                logger.debug(f'No change made to "{current}"')
                continue

            sentence.replace_text(revised)
            touched.add(location)
            applied += 1
            logger.debug(f"Revised paragraph {location[0]}, sentence {location[1]}: {revised}")

        meta.update(critical_revisions=len(selected), revisions_applied=applied)

    return applied
