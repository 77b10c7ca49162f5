import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field
import yaml

TOKEN_ENV_VAR = "PHONICS_STORY_API_TOKEN"

class APIConfig(BaseModel):
    base_url: str = Field(default="http://localhost:8000")
    model: str = Field(default="meta-llama/Meta-Llama-3.1-8B-Instruct")
    api_token: str = Field(default_factory=lambda: os.getenv(TOKEN_ENV_VAR, ""))
    timeout: float = Field(default=60.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)

class PipelineConfig(BaseModel):
    quality_threshold: float = Field(default=0.75, ge=0, le=1)
    max_revision_cycles: int = Field(default=2, ge=0)
    max_tokens: int = Field(default=8192, gt=0)
    strict_phonics: bool = Field(default=True)

class Config(BaseModel):
    api: APIConfig = Field(default_factory=APIConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None, description="Optional DEBUG log file")

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Path):
        # Tokens come from the environment; never write them to disk
        data = self.model_dump(mode="json", exclude={"api": {"api_token"}})
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
