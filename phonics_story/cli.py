import asyncio
import json
import click
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .ai_client import AIClient
from .config import Config
from .education.grade_constraints import VALID_GRADES, grade_summary
from .errors import CancellationError, PipelineError, StoryPipelineError, ValidationError
from .models import PipelineOptions, Story, StoryInput
from .pipeline.activities import generate_pre_reading_prompts, generate_questions
from .pipeline.randomizer import generate_story_options
from .pipeline.report import build_educational_analysis
from .pipeline.runner import run_pipeline
from .utils.cancellation import CancellationToken
from .utils.logger import setup_logger
from .utils.progress import ProgressSink, create_progress

GRADE_CHOICE = click.Choice(list(VALID_GRADES), case_sensitive=False)

console = Console()

@click.group()
@click.option('--config', '-c', type=click.Path(dir_okay=False), default='config.yaml',
              help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool):
    """Phonics Story Writer - grade-appropriate phonics stories from an LLM."""
    ctx.ensure_object(dict)

    config_path = Path(config)
    if config_path.exists():
        ctx.obj['config'] = Config.from_yaml(config_path)
    else:
        ctx.obj['config'] = Config()

    log_level = "DEBUG" if verbose else ctx.obj['config'].log_level
    # Each invocation sets its own level, so -v takes effect after an earlier setup
    logger = setup_logger(log_level, ctx.obj['config'].log_file, force=True)
    ctx.obj['logger'] = logger

    if config_path.exists():
        logger.info(f"Config loaded from: {config_path}")

def story_payload(story: Story) -> dict:
    data = story.to_dict()
    data.update(story.extras)
    if story.pipeline:
        evaluation = story.pipeline.final_evaluation
        data["pipeline"] = {
            "finalEvaluation": evaluation.raw if evaluation else None,
            "revisionCycles": story.pipeline.revision_cycles,
            "qualityThreshold": story.pipeline.quality_threshold,
            "timestamp": story.pipeline.timestamp,
        }
    if story.educational_analysis is not None:
        data["educationalAnalysis"] = story.educational_analysis.model_dump()
    if story.final_report is not None:
        data["finalReport"] = story.final_report.model_dump()
    return data

def print_story(story: Story):
    console.print(f"\n[bold]{escape(story.title or 'Untitled')}[/bold]\n")
    for paragraph in story.paragraphs:
        text = " ".join(s.sentence for s in paragraph.sentences)
        console.print(text + "\n", markup=False)

async def _generate(story_input: StoryInput, options: PipelineOptions, config: Config,
                    timeout: Optional[float]) -> Story:
    if timeout:
        options.token.cancel_after(timeout)
    return await run_pipeline(story_input, options, config=config)

@cli.command()
@click.option('--theme', required=True, help='Story theme, e.g. friendship')
@click.option('--genre', required=True, help='Story genre, e.g. adventure')
@click.option('--phonics', 'phonic_skill', required=True, help='Phonics skill, e.g. "sh digraph"')
@click.option('--length', type=click.IntRange(min=1), default=6, help='Number of sentences')
@click.option('--grade', type=GRADE_CHOICE, default='1', help='Grade level (K-6)')
@click.option('--threshold', type=click.FloatRange(0, 1), help='Override quality threshold')
@click.option('--max-cycles', type=click.IntRange(min=0), help='Override max revision cycles')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), help='Cancel the run after N seconds')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Save the story as JSON')
@click.pass_context
def generate(ctx: click.Context, theme: str, genre: str, phonic_skill: str, length: int, grade: str,
             threshold: Optional[float], max_cycles: Optional[int], timeout: Optional[float],
             output: Optional[str]):
    """Generate, evaluate and revise a phonics story."""
    try:
        story_input = StoryInput(theme=theme, genre=genre, phonic_skill=phonic_skill,
                                 length=length, grade_level=grade)
    except Exception as e:
        raise click.ClickException(f"Invalid input: {e}")

    run_and_report(ctx, story_input, threshold, max_cycles, timeout, output)

def run_and_report(ctx: click.Context, story_input: StoryInput, threshold: Optional[float],
                   max_cycles: Optional[int], timeout: Optional[float], output: Optional[str]):
    config = ctx.obj['config']
    logger = ctx.obj['logger']

    with create_progress(console) as progress:
        options = PipelineOptions.from_config(
            config.pipeline,
            quality_threshold=threshold,
            max_revision_cycles=max_cycles,
            token=CancellationToken(),
            analytics=ProgressSink(progress),
        )
        try:
            story = asyncio.run(_generate(story_input, options, config, timeout))
        except CancellationError as e:
            logger.error(f"Generation cancelled: {e}")
            raise click.ClickException("operation cancelled")
        except (ValidationError, PipelineError) as e:
            raise click.ClickException(str(e))

    print_story(story)
    console.print(story.final_report.summary(), markup=False)

    summary = options.analytics.summary()
    logger.info(f"{summary['total_events']} pipeline events in {summary['total_time_ms']}ms")

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(story_payload(story), f, ensure_ascii=False, indent=2)
        logger.success(f"Story saved to {output_path}")

@cli.command()
@click.argument('story_json', type=click.Path(exists=True, dir_okay=False))
@click.option('--phonics', 'phonic_skill', required=True, help='Phonics skill the story targets')
@click.option('--grade', type=GRADE_CHOICE, required=True, help='Grade level (K-6)')
@click.option('--theme', default='the story', help='Theme used in extension activities')
@click.pass_context
def analyze(ctx: click.Context, story_json: str, phonic_skill: str, grade: str, theme: str):
    """Analyze a saved story's phonics and grade-level fit without calling the LLM."""
    logger = ctx.obj['logger']

    try:
        with open(story_json, 'r', encoding='utf-8') as f:
            data = json.load(f)
        story = Story.from_dict(data)
        story_input = StoryInput(theme=theme, genre='unspecified', phonic_skill=phonic_skill,
                                 length=max(1, story.sentence_count), grade_level=grade)
        analysis = build_educational_analysis(story, story_input)
    except Exception as e:
        logger.error(f"Analysis failed: {e}")
        raise click.ClickException(str(e))

    console.print(analysis.summary(), markup=False)

async def _story_options(config: Config, grade: Optional[str], count: int) -> list:
    async with AIClient(config.api) as client:
        return await generate_story_options(client, grade, count)

@cli.command('random')
@click.option('--grade', type=GRADE_CHOICE, help='Grade level (K-6); random when omitted')
@click.option('--count', type=click.IntRange(min=1), default=1, help='Number of story ideas')
@click.option('--run', 'run_first', is_flag=True, help='Run the pipeline on the first idea')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), help='Cancel the run after N seconds')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Save the story as JSON (with --run)')
@click.pass_context
def random_story(ctx: click.Context, grade: Optional[str], count: int, run_first: bool,
                 timeout: Optional[float], output: Optional[str]):
    """Let the LLM invent grade-appropriate story parameters."""
    config = ctx.obj['config']
    logger = ctx.obj['logger']

    try:
        ideas = asyncio.run(_story_options(config, grade.upper() if grade else None, count))
    except CancellationError:
        raise click.ClickException("operation cancelled")
    except StoryPipelineError as e:
        logger.error(f"Random story parameters failed: {e}")
        raise click.ClickException(str(e))

    table = Table(title="Story ideas")
    for column in ("#", "Grade", "Theme", "Genre", "Phonics", "Length"):
        table.add_column(column)
    for i, idea in enumerate(ideas, 1):
        table.add_row(str(i), idea.grade_level, escape(idea.theme), escape(idea.genre),
                      escape(idea.phonic_skill), str(idea.length))
    console.print(table)

    if run_first:
        run_and_report(ctx, ideas[0], None, None, timeout, output)

async def _activities(config: Config, story: Story, story_input: StoryInput, count: int,
                      question_types: tuple, prompt_count: int) -> tuple:
    async with AIClient(config.api) as client:
        questions = await generate_questions(client, story, story_input, count, question_types)
        prompts = await generate_pre_reading_prompts(client, story, story_input, prompt_count)
    return questions, prompts

@cli.command()
@click.argument('story_json', type=click.Path(exists=True, dir_okay=False))
@click.option('--phonics', 'phonic_skill', required=True, help='Phonics skill the story targets')
@click.option('--grade', type=GRADE_CHOICE, required=True, help='Grade level (K-6)')
@click.option('--theme', default='the story', help='Story theme')
@click.option('--genre', default='unspecified', help='Story genre')
@click.option('--count', type=click.IntRange(min=0), default=3, help='Number of comprehension questions')
@click.option('--type', 'question_types', multiple=True, help='Question type to favour; repeatable')
@click.option('--prompts', 'prompt_count', type=click.IntRange(min=0), default=0,
              help='Number of pre-reading prompts')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Save the story with questions as JSON')
@click.pass_context
def questions(ctx: click.Context, story_json: str, phonic_skill: str, grade: str, theme: str, genre: str,
              count: int, question_types: tuple, prompt_count: int, output: Optional[str]):
    """Write comprehension questions and pre-reading prompts for a saved story."""
    config = ctx.obj['config']
    logger = ctx.obj['logger']

    try:
        with open(story_json, 'r', encoding='utf-8') as f:
            data = json.load(f)
        story = Story.from_dict(data)
        story_input = StoryInput(theme=theme, genre=genre, phonic_skill=phonic_skill,
                                 length=max(1, story.sentence_count), grade_level=grade)
    except Exception as e:
        raise click.ClickException(f"Invalid story: {e}")

    try:
        question_list, prompt_list = asyncio.run(
            _activities(config, story, story_input, count, question_types, prompt_count)
        )
    except CancellationError:
        raise click.ClickException("operation cancelled")
    except StoryPipelineError as e:
        logger.error(f"Question generation failed: {e}")
        raise click.ClickException(str(e))

    if prompt_list:
        console.print("\n[bold]Before reading[/bold]")
        for prompt in prompt_list:
            console.print(f"  - {prompt}", markup=False)
    if question_list:
        console.print("\n[bold]Comprehension questions[/bold]")
        for i, question in enumerate(question_list, 1):
            console.print(f"  {i}. {question.text} ({question.type})", markup=False)

    if output:
        data["questions"] = [q.to_dict() for q in question_list]
        data["preReadingPrompts"] = prompt_list
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        logger.success(f"Questions saved to {output_path}")

@cli.command()
@click.argument('grade', type=GRADE_CHOICE)
def constraints(grade: str):
    """Show the writing constraints for a grade level."""
    summary = grade_summary(grade)

    table = Table(title=summary['display_name'])
    table.add_column("Constraint", style="cyan")
    table.add_column("Value")
    table.add_row("Sentence length", summary['word_range'])
    table.add_row("Syllables", summary['syllable_limit'])
    table.add_row("Vocabulary", summary['vocabulary_level'])
    table.add_row("Sentence types", summary['sentence_types'])
    table.add_row("Lexile", summary['lexile_range'])
    table.add_row("Focus", summary['key_focus'])
    console.print(table)

@cli.command('init-config')
@click.argument('path', type=click.Path(dir_okay=False))
@click.pass_context
def init_config(ctx: click.Context, path: str):
    """Write a default configuration file."""
    config_path = Path(path)
    if config_path.exists():
        raise click.ClickException(f"{config_path} already exists")
    config_path.parent.mkdir(parents=True, exist_ok=True)
    Config().to_yaml(config_path)
    ctx.obj['logger'].success(f"Default config written to {config_path}")

def main():
    cli()

if __name__ == '__main__':
    main()
