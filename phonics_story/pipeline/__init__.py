from .activities import ComprehensionQuestion, generate_pre_reading_prompts, generate_questions
from .core import locate_sentence, run_pipeline_core, select_revisions
from .randomizer import generate_random_story_input, generate_story_options
from .report import EducationalAnalysis, FinalReport, build_educational_analysis, build_final_report
from .runner import run_pipeline, validate_input

__all__ = [
    "ComprehensionQuestion",
    "generate_pre_reading_prompts",
    "generate_questions",
    "locate_sentence",
    "run_pipeline_core",
    "select_revisions",
    "generate_random_story_input",
    "generate_story_options",
    "EducationalAnalysis",
    "FinalReport",
    "build_educational_analysis",
    "build_final_report",
    "run_pipeline",
    "validate_input",
]
