import json

import pytest
from click.testing import CliRunner

from chat_fakes import SAMPLE_STORY, FakeChatClient
from phonics_story.cli import cli
from phonics_story.errors import CancellationError, PipelineError
from phonics_story.pipeline import runner as pipeline_runner

@pytest.fixture
def runner():
    return CliRunner()

@pytest.fixture
def fake_pipeline(monkeypatch):
    """Route the generate command through a scripted chat client."""
    seen = {}

    async def run(story_input, options, config=None):
        seen['input'] = story_input
        seen['options'] = options
        return await pipeline_runner.run_pipeline(story_input, options, client=FakeChatClient(), config=config)

    monkeypatch.setattr('phonics_story.cli.run_pipeline', run)
    return seen

@pytest.fixture
def story_file(tmp_path):
    path = tmp_path / "story.json"
    path.write_text(json.dumps(SAMPLE_STORY))
    return path

def test_cli_help(runner):
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'generate' in result.output
    assert 'analyze' in result.output
    assert 'constraints' in result.output

def test_constraints_command(runner):
    result = runner.invoke(cli, ['constraints', 'K'])
    assert result.exit_code == 0
    assert 'Kindergarten' in result.output
    assert '3-6 words per sentence' in result.output

def test_constraints_rejects_unknown_grade(runner):
    result = runner.invoke(cli, ['constraints', '9'])
    assert result.exit_code != 0

def test_init_config_command(runner, tmp_path):
    config_file = tmp_path / "conf" / "config.yaml"

    result = runner.invoke(cli, ['init-config', str(config_file)])
    assert result.exit_code == 0
    assert config_file.exists()
    assert 'quality_threshold' in config_file.read_text()

    # Refuses to overwrite
    result = runner.invoke(cli, ['init-config', str(config_file)])
    assert result.exit_code == 1
    assert 'already exists' in result.output

def test_analyze_command(runner, story_file):
    result = runner.invoke(cli, ['analyze', str(story_file), '--phonics', 'sh digraph', '--grade', '2'])
    assert result.exit_code == 0
    assert 'Educational Analysis' in result.output
    assert 'Phonics pattern: sh' in result.output

def test_analyze_rejects_bad_json(runner, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("not json")
    result = runner.invoke(cli, ['analyze', str(bad), '--phonics', 'sh', '--grade', '1'])
    assert result.exit_code == 1

def test_generate_command(runner, fake_pipeline, tmp_path):
    output_file = tmp_path / "out" / "story.json"

    result = runner.invoke(cli, [
        'generate', '--theme', 'friendship', '--genre', 'adventure',
        '--phonics', 'sh digraph', '--length', '4', '--grade', '2',
        '--max-cycles', '1', '-o', str(output_file),
    ])
    assert result.exit_code == 0, result.output
    assert 'The Fish Shop' in result.output
    assert 'Final Report: EXCELLENT' in result.output

    assert fake_pipeline['input'].grade_level == "2"
    assert fake_pipeline['options'].max_revision_cycles == 1
    assert fake_pipeline['options'].quality_threshold == 0.75

    data = json.loads(output_file.read_text())
    assert data['title'] == 'The Fish Shop'
    assert data['pipeline']['revisionCycles'] == 0
    assert data['finalReport']['overall_assessment'] == 'EXCELLENT'
    assert data['phonicsIntegration']['targetPattern'] == 'sh digraph'

def test_generate_uses_config_file(runner, fake_pipeline, tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
pipeline:
  quality_threshold: 0.9
  max_revision_cycles: 3
""")

    result = runner.invoke(cli, [
        '-c', str(config_file), 'generate', '--theme', 'pets', '--genre', 'fable',
        '--phonics', 'ch', '--threshold', '0.8',
    ])
    assert result.exit_code == 0, result.output
    assert fake_pipeline['options'].quality_threshold == 0.8
    assert fake_pipeline['options'].max_revision_cycles == 3
    assert fake_pipeline['input'].grade_level == "1"

def test_generate_cancelled(runner, monkeypatch):
    async def run(story_input, options, config=None):
        raise CancellationError()

    monkeypatch.setattr('phonics_story.cli.run_pipeline', run)
    result = runner.invoke(cli, ['generate', '--theme', 'pets', '--genre', 'fable', '--phonics', 'sh'])
    assert result.exit_code == 1
    assert 'operation cancelled' in result.output

def test_generate_pipeline_failure(runner, monkeypatch):
    async def run(story_input, options, config=None):
        raise PipelineError("story generation failed: endpoint down")

    monkeypatch.setattr('phonics_story.cli.run_pipeline', run)
    result = runner.invoke(cli, ['generate', '--theme', 'pets', '--genre', 'fable', '--phonics', 'sh'])
    assert result.exit_code == 1
    assert 'endpoint down' in result.output

def test_generate_rejects_blank_theme(runner, fake_pipeline):
    result = runner.invoke(cli, ['generate', '--theme', '  ', '--genre', 'fable', '--phonics', 'sh'])
    assert result.exit_code == 1
    assert 'Invalid input' in result.output
    assert 'input' not in fake_pipeline

@pytest.fixture
def fake_client(monkeypatch):
    """Hand every AIClient the CLI builds over to one scripted chat client."""
    chat = FakeChatClient()
    monkeypatch.setattr('phonics_story.cli.AIClient', lambda api_config: chat)
    return chat

def test_random_command(runner, fake_client):
    result = runner.invoke(cli, ['random', '--grade', 'k'])
    assert result.exit_code == 0, result.output
    assert 'pirates' in result.output
    assert 'sh digraph' in result.output
    assert fake_client.count('random') == 1
    assert fake_client.closed is True

def test_random_command_runs_pipeline(runner, fake_client, fake_pipeline, tmp_path):
    output_file = tmp_path / "story.json"
    result = runner.invoke(cli, ['random', '--grade', '3', '--run', '-o', str(output_file)])
    assert result.exit_code == 0, result.output
    assert fake_pipeline['input'].theme == 'pirates'
    assert fake_pipeline['input'].grade_level == '3'
    assert 'Final Report' in result.output
    assert output_file.exists()

def test_random_command_failure(runner, monkeypatch):
    chat = FakeChatClient(ideas=[{"theme": "pirates"}])
    monkeypatch.setattr('phonics_story.cli.AIClient', lambda api_config: chat)
    result = runner.invoke(cli, ['random', '--grade', '2'])
    assert result.exit_code == 1
    assert 'random story generation failed' in result.output

def test_questions_command(runner, fake_client, story_file, tmp_path):
    output_file = tmp_path / "with_questions.json"
    result = runner.invoke(cli, [
        'questions', str(story_file), '--phonics', 'sh digraph', '--grade', '2',
        '--theme', 'friendship', '--count', '2', '--type', 'Literal', '--prompts', '2',
        '-o', str(output_file),
    ])
    assert result.exit_code == 0, result.output
    assert 'Before reading' in result.output
    assert '1. Where did Sam run? (Literal)' in result.output
    assert fake_client.count('pre-reading') == 1

    data = json.loads(output_file.read_text())
    assert data['title'] == 'The Fish Shop'
    assert data['questions'][1]['type'] == 'Open-ended'
    assert len(data['preReadingPrompts']) == 2

def test_questions_command_bad_reply(runner, monkeypatch, story_file):
    chat = FakeChatClient(questions={"oops": []})
    monkeypatch.setattr('phonics_story.cli.AIClient', lambda api_config: chat)
    result = runner.invoke(cli, ['questions', str(story_file), '--phonics', 'sh', '--grade', '1'])
    assert result.exit_code == 1
    assert 'questions' in result.output

def test_verbose_flag_reconfigures_logging(runner, tmp_path):
    quiet = tmp_path / "quiet.yaml"
    quiet.write_text("log_level: WARNING\n")

    result = runner.invoke(cli, ['-c', str(quiet), 'init-config', str(tmp_path / "a.yaml")])
    assert result.exit_code == 0
    assert 'Default config written' not in result.output

    result = runner.invoke(cli, ['-c', str(quiet), '-v', 'init-config', str(tmp_path / "b.yaml")])
    assert result.exit_code == 0
    assert 'Default config written' in result.output
