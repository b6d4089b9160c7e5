"""
Career tools: portfolio generator, cover letter generator, resume analyzer,
resume enhancer and mock interview.

Every tool sizes the user's text with the input budget manager before the
prompt is rendered, so the generation service only ever sees text that fits
the tool's budget.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .budget import InputBudgetManager, default_budget_manager
from .llm_client import GenerationClient
from .prompts import render_prompt
from .schemas import (
    PortfolioInput, ResumeJobInput, MockInterviewInput, ResumeAnalysis,
    PortfolioResponse, CoverLetterResponse, ResumeAnalysisResponse,
    EnhancedResumeResponse, InterviewQuestionsResponse, InterviewFeedbackResponse,
)

logger = logging.getLogger(__name__)

ANSWERS_MAX_CHARS = 6000

InputT = TypeVar("InputT", bound=BaseModel)


class ToolInputError(ValueError):
    """The request data does not carry what the tool needs."""


@dataclass(frozen=True)
class ToolLimits:
    input_budget: int  # tokens allowed for the user's text
    max_output_tokens: int


TOOL_LIMITS: Dict[str, ToolLimits] = {
    "generate-portfolio": ToolLimits(input_budget=1500, max_output_tokens=2000),
    "generate-cover-letter": ToolLimits(input_budget=2000, max_output_tokens=800),
    "analyze-resume": ToolLimits(input_budget=2000, max_output_tokens=800),
    "enhance-resume": ToolLimits(input_budget=2000, max_output_tokens=1200),
    "mock-interview": ToolLimits(input_budget=800, max_output_tokens=600),
}


@dataclass
class ToolResult:
    payload: BaseModel
    prompt: str
    output: str
    truncated: bool = False


def _parse(model: Type[InputT], data: Dict[str, Any]) -> InputT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ToolInputError(f"Missing or invalid fields: {', '.join(missing) or 'data'}") from e


def serialize_answers(answers: Dict[str, Any], max_chars: int = ANSWERS_MAX_CHARS) -> str:
    text = json.dumps(answers, separators=(",", ":"), ensure_ascii=False)
    if len(text) > max_chars:
        text = text[:max_chars] + "..."
    return text


class CareerTools:
    def __init__(self, client: GenerationClient, budget: InputBudgetManager = default_budget_manager):
        self.client = client
        self.budget = budget
        self._actions: Dict[str, Callable[[Dict[str, Any]], Awaitable[ToolResult]]] = {
            "generate-portfolio": self.generate_portfolio,
            "generate-cover-letter": self.generate_cover_letter,
            "analyze-resume": self.analyze_resume,
            "enhance-resume": self.enhance_resume,
            "mock-interview": self.mock_interview,
        }

    @property
    def actions(self):
        return list(self._actions)

    def supports(self, action: Optional[str]) -> bool:
        return action in self._actions

    async def dispatch(self, action: str, data: Dict[str, Any]) -> ToolResult:
        handler = self._actions.get(action)
        if handler is None:
            raise ToolInputError("Invalid action")
        return await handler(data)

    async def generate_portfolio(self, data: Dict[str, Any]) -> ToolResult:
        body = _parse(PortfolioInput, data)
        limits = TOOL_LIMITS["generate-portfolio"]
        truncated = False
        if body.resume:
            input_text = self.budget.truncate(body.resume, limits.input_budget)
            truncated = input_text != body.resume
        elif body.answers:
            input_text = serialize_answers(body.answers)
            truncated = len(input_text) > ANSWERS_MAX_CHARS
        else:
            raise ToolInputError("Provide either a resume or questionnaire answers")

        prompt = render_prompt("portfolio", input_text=input_text)
        text = await self.client.generate_text(prompt, max_tokens=limits.max_output_tokens)
        return ToolResult(PortfolioResponse(portfolio=text), prompt, text, truncated)

    async def generate_cover_letter(self, data: Dict[str, Any]) -> ToolResult:
        body = _parse(ResumeJobInput, data)
        limits = TOOL_LIMITS["generate-cover-letter"]
        verdict = self.budget.evaluate(body.resume, body.jobDescription, limits.input_budget)
        resume, job_description = verdict.resolve(body.resume, body.jobDescription)
        if not verdict.valid:
            logger.warning(f"Cover letter input truncated: {verdict.message}")

        prompt = render_prompt("cover_letter", resume=resume, job_description=job_description, note=verdict.message)
        text = await self.client.generate_text(prompt, max_tokens=limits.max_output_tokens)
        return ToolResult(CoverLetterResponse(coverLetter=text, warning=verdict.message), prompt, text, not verdict.valid)

    async def analyze_resume(self, data: Dict[str, Any]) -> ToolResult:
        body = _parse(ResumeJobInput, data)
        limits = TOOL_LIMITS["analyze-resume"]
        verdict = self.budget.evaluate(body.resume, body.jobDescription, limits.input_budget)
        resume, job_description = verdict.resolve(body.resume, body.jobDescription)
        if not verdict.valid:
            logger.warning(f"Resume analysis input truncated: {verdict.message}")

        prompt = render_prompt("resume_analysis", resume=resume, job_description=job_description)
        analysis = await self.client.generate_object(prompt, ResumeAnalysis, max_tokens=limits.max_output_tokens)
        payload = ResumeAnalysisResponse(analysis=analysis, warning=verdict.message)
        return ToolResult(payload, prompt, analysis.model_dump_json(), not verdict.valid)

    async def enhance_resume(self, data: Dict[str, Any]) -> ToolResult:
        body = _parse(ResumeJobInput, data)
        limits = TOOL_LIMITS["enhance-resume"]
        verdict = self.budget.evaluate(body.resume, body.jobDescription, limits.input_budget)
        resume, job_description = verdict.resolve(body.resume, body.jobDescription)
        if not verdict.valid:
            logger.warning(f"Resume enhancement input truncated: {verdict.message}")

        prompt = render_prompt("resume_enhancement", resume=resume, job_description=job_description, note=verdict.message)
        text = await self.client.generate_text(prompt, max_tokens=limits.max_output_tokens)
        return ToolResult(EnhancedResumeResponse(enhancedResume=text, warning=verdict.message), prompt, text, not verdict.valid)

    async def mock_interview(self, data: Dict[str, Any]) -> ToolResult:
        body = _parse(MockInterviewInput, data)
        limits = TOOL_LIMITS["mock-interview"]

        if body.question and body.answer:
            answer = self.budget.truncate(body.answer, limits.input_budget)
            prompt = render_prompt("interview_feedback", question=body.question, answer=answer, role=body.role)
            text = await self.client.generate_text(prompt, max_tokens=limits.max_output_tokens)
            return ToolResult(InterviewFeedbackResponse(feedback=text), prompt, text, answer != body.answer)

        job_description = self.budget.truncate(body.jobDescription, limits.input_budget) if body.jobDescription else ""
        prompt = render_prompt("interview_questions", role=body.role, job_description=job_description)
        text = await self.client.generate_text(prompt, max_tokens=limits.max_output_tokens)
        question_list = [line.strip() for line in text.split("\n") if line.strip()]
        payload = InterviewQuestionsResponse(questions=text, questionList=question_list)
        return ToolResult(payload, prompt, text, job_description != (body.jobDescription or ""))
