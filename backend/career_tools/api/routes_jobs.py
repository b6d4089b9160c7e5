from fastapi import APIRouter, Depends, HTTPException

from ..jobs import JobSearchService, get_job_search_service
from ..schemas import JobSearchRequest, JobSearchResponse

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.post("/search", response_model=JobSearchResponse)
def search_jobs(request: JobSearchRequest, service: JobSearchService = Depends(get_job_search_service)):
    try:
        jobs = service.search(request)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return JobSearchResponse(jobs=jobs, total=len(jobs))
