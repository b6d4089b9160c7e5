from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any

# ----- AI tools -----
class AIRequest(BaseModel):
    action: Optional[str] = None  # generate-portfolio|generate-cover-letter|analyze-resume|enhance-resume|mock-interview
    data: Optional[Any] = None  # must be an object; anything else is rejected by the route

class PortfolioInput(BaseModel):
    resume: Optional[str] = None
    answers: Optional[Dict[str, Any]] = None  # questionnaire answers when no resume was uploaded

class ResumeJobInput(BaseModel):
    resume: str
    jobDescription: str

class MockInterviewInput(BaseModel):
    role: str
    jobDescription: Optional[str] = None
    question: Optional[str] = None
    answer: Optional[str] = None

class ResumeAnalysis(BaseModel):
    atsScore: float = Field(ge=0, le=100)
    strengths: List[str]
    improvements: List[str]
    missingKeywords: List[str]
    recommendations: List[str]

class PortfolioResponse(BaseModel):
    portfolio: str

class CoverLetterResponse(BaseModel):
    coverLetter: str
    warning: Optional[str] = None

class ResumeAnalysisResponse(BaseModel):
    analysis: ResumeAnalysis
    warning: Optional[str] = None

class EnhancedResumeResponse(BaseModel):
    enhancedResume: str
    warning: Optional[str] = None

class InterviewQuestionsResponse(BaseModel):
    questions: str
    questionList: List[str]

class InterviewFeedbackResponse(BaseModel):
    feedback: str

class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None

class ActionUsage(BaseModel):
    action: str
    calls: int
    prompt_tokens: int
    completion_tokens: int
    truncated_calls: int

class UsageResponse(BaseModel):
    total_calls: int
    actions: List[ActionUsage]

# ----- Job search -----
class JobSearchRequest(BaseModel):
    keywords: str = ""
    location: Optional[str] = None
    experience: Optional[str] = None

class JobListing(BaseModel):
    title: str
    company: str
    location: str
    description: str
    postedDate: str
    url: str
    salary: Optional[str] = None

class JobSearchResponse(BaseModel):
    jobs: List[JobListing]
    total: int

# ----- Uploads -----
class ResumeUploadResponse(BaseModel):
    success: bool
    filename: str
    contentType: str
    size: str
    text: str
    estimatedTokens: int
