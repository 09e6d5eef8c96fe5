from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FileMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str = Field(default="", max_length=255)
    mime_type: str = Field(default="", max_length=255)


class RawInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    resume_text: str
    job_description_text: str
    file_meta: FileMeta = Field(default_factory=FileMeta)
    job_title: str | None = None

    def resolved_job_title(self) -> str:
        if self.job_title and self.job_title.strip():
            return self.job_title.strip()
        for line in self.job_description_text.splitlines():
            stripped = line.strip()
            if stripped:
                return stripped[:120]
        return ""
