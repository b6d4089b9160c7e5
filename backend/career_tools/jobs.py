"""
Job search.

No job board API is wired up; searches are answered from a static catalog of
sample listings.
"""
from typing import List

from .schemas import JobListing, JobSearchRequest

SAMPLE_JOBS = [
    JobListing(
        title="Frontend Developer",
        company="Tech Corp",
        location="San Francisco, CA",
        description="We are looking for a skilled Frontend Developer to join our team...",
        postedDate="2 days ago",
        url="https://linkedin.com/jobs/123",
        salary="$80,000 - $120,000",
    ),
    JobListing(
        title="Full Stack Engineer",
        company="StartupXYZ",
        location="Remote",
        description="Join our growing team as a Full Stack Engineer...",
        postedDate="1 week ago",
        url="https://linkedin.com/jobs/456",
        salary="$90,000 - $140,000",
    ),
    JobListing(
        title="Software Developer",
        company="Enterprise Solutions",
        location="New York, NY",
        description="Looking for a Software Developer with experience in...",
        postedDate="3 days ago",
        url="https://linkedin.com/jobs/789",
    ),
]


class JobSearchService:
    def __init__(self, catalog: List[JobListing] = None):
        self.catalog = list(catalog if catalog is not None else SAMPLE_JOBS)

    def search(self, request: JobSearchRequest) -> List[JobListing]:
        if not request.keywords.strip():
            raise ValueError("keywords are required")
        return [job.model_copy() for job in self.catalog]


def get_job_search_service() -> JobSearchService:
    return JobSearchService()
