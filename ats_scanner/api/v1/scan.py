from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import BaseModel, Field

from ats_scanner.core.rate_limit import rate_limit
from ats_scanner.core.security import check_api_key
from ats_scanner.enrichment import EnrichmentProvider, get_enrichment_provider
from ats_scanner.schemas import FileMeta, RawInput, ScanReport
from ats_scanner.services.scan_service import ScanInputError, run_scan
from ats_scanner.taxonomy import SkillVocabularyProvider, get_default_vocabulary

router = APIRouter()


class ScanFileMeta(BaseModel):
    filename: str = Field(default="resume.txt", max_length=255)
    mime_type: str = Field(default="text/plain", max_length=255)


class ScanRequest(BaseModel):
    resume_text: str = Field(default="", max_length=60000)
    job_description_text: str = Field(default="", max_length=30000)
    job_title: str | None = Field(default=None, max_length=200)
    file_meta: ScanFileMeta = Field(default_factory=ScanFileMeta)

    def to_raw_input(self) -> RawInput:
        return RawInput(
            resume_text=self.resume_text,
            job_description_text=self.job_description_text,
            job_title=self.job_title,
            file_meta=FileMeta(filename=self.file_meta.filename, mime_type=self.file_meta.mime_type),
        )


def enrichment_provider_dependency() -> EnrichmentProvider:
    return get_enrichment_provider()


def vocabulary_dependency() -> SkillVocabularyProvider:
    return get_default_vocabulary()


@router.post("/ats/scan", response_model=ScanReport)
@rate_limit()
async def ats_scan(
    request: Request,
    payload: ScanRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    provider: EnrichmentProvider = Depends(enrichment_provider_dependency),
    vocabulary: SkillVocabularyProvider = Depends(vocabulary_dependency),
):
    _ = request
    check_api_key(x_api_key)
    try:
        return await run_scan(payload.to_raw_input(), provider=provider, vocabulary=vocabulary)
    except ScanInputError as exc:
        raise HTTPException(
            status_code=422,
            detail={"code": exc.code, "message": str(exc)},
        ) from exc
