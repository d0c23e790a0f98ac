from pydantic import BaseModel, Field
from typing import Literal


class GitSettings(BaseModel):
    executable: str = "git"
    timeout: int = Field(default=120, gt=0)
    head_remote: str = Field(default="origin", min_length=1)


class SetupConfig(BaseModel):
    gitmodules: str = ".gitmodules"
    remote_name: str = Field(default="upstream", min_length=1)


class StatusConfig(BaseModel):
    remote: str = Field(default="upstream", min_length=1)
    pattern: str = "*"
    format: Literal["table", "json", "csv"] = "table"
    max_workers: int = Field(default=1, gt=0)


class ForktrackConfig(BaseModel):
    git: GitSettings = Field(default_factory=GitSettings)
    setup: SetupConfig = Field(default_factory=SetupConfig)
    status: StatusConfig = Field(default_factory=StatusConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "warn"
    log_format: Literal["text", "json"] = "text"
