from functools import lru_cache

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import Field

from resume_analyzer.config import get_settings
from resume_analyzer.core.document_loader import load_document
from resume_analyzer.core.exceptions import InputError, UnsupportedDocumentError
from resume_analyzer.core.pipeline import ResumePipeline
from resume_analyzer.core.schemas import (
    AnalysisResult,
    CamelModel,
    ExtractedProfile,
    ExtractionResult,
    MatchResult,
)

router = APIRouter(tags=["analyze"])


class TextExtractionRequest(CamelModel):
    text: str


class ScoreRequest(CamelModel):
    profile: ExtractedProfile


class MatchRequest(CamelModel):
    profile: ExtractedProfile
    job_description: str = Field(..., min_length=1)


@lru_cache()
def get_pipeline() -> ResumePipeline:
    return ResumePipeline.from_settings(get_settings())


@router.post(
    "/extract",
    response_model=ExtractionResult,
    summary="Extract Resume",
    description="Extract a structured candidate profile from a resume file (DOCX, PDF, or TXT).",
    responses={
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no usable text"},
    },
)
async def extract_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    """
    Extract a profile from an uploaded resume.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - text layer only, OCR not supported
    - TXT (.txt)

    The AI oracle is used when configured; otherwise, or when it fails, the
    result is heuristic-only and `metadata.method` says so.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    try:
        document = load_document(raw, file.filename or "", file.content_type)
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=415, detail=exc.to_dict())

    if not document.text.strip():
        raise HTTPException(
            status_code=422,
            detail="Document appears to have no extractable text. OCR is not supported.",
        )

    try:
        return await pipeline.extract(document.text, document.file_name, document.file_size_bytes)
    except InputError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict())


@router.post("/extract/text", response_model=ExtractionResult, summary="Extract Resume Text")
async def extract_resume_text(request: TextExtractionRequest, pipeline: ResumePipeline = Depends(get_pipeline)):
    """Extract a profile from pasted resume text."""
    try:
        return await pipeline.extract(request.text)
    except InputError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict())


@router.post("/score", response_model=AnalysisResult, summary="Score Resume")
async def score_resume(request: ScoreRequest, pipeline: ResumePipeline = Depends(get_pipeline)):
    """Score an extracted profile out of 100 with strengths, weaknesses and suggestions."""
    return await pipeline.score(request.profile)


@router.post("/match", response_model=MatchResult, summary="Match Job Description")
async def match_job(request: MatchRequest, pipeline: ResumePipeline = Depends(get_pipeline)):
    """Match an extracted profile against a job description."""
    return await pipeline.match(request.profile, request.job_description)
