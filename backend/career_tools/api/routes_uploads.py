from fastapi import APIRouter, UploadFile, File, HTTPException

from ..budget import default_budget_manager
from ..file_utils import MAX_UPLOAD_BYTES, validate_file_type, validate_file_size, format_file_size, read_as_text
from ..schemas import ResumeUploadResponse

router = APIRouter(prefix="/api/uploads", tags=["uploads"])


@router.post("/resume", response_model=ResumeUploadResponse)
async def upload_resume(file: UploadFile = File(...)):
    """Accept a resume file and return its text for the AI tools."""
    if not file.filename:
        raise HTTPException(400, "No file selected")

    if not validate_file_type(file.content_type):
        raise HTTPException(400, "Invalid file type. Please upload TXT, PDF, DOC, or DOCX files only")

    # read one byte past the limit so oversize is detected without buffering the whole file
    contents = await file.read(MAX_UPLOAD_BYTES + 1)
    ok, message = validate_file_size(len(contents))
    if not ok:
        raise HTTPException(400, message)

    text = read_as_text(contents)
    return ResumeUploadResponse(
        success=True,
        filename=file.filename,
        contentType=file.content_type,
        size=format_file_size(len(contents)),
        text=text,
        estimatedTokens=default_budget_manager.estimate_size(text),
    )
