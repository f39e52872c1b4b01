"""HTTP proxy that hands sampled repositories to the LLM."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..core.services import RepoExplainer


logger = logging.getLogger(__name__)

FAILURE_HINT = (
    "Ensure your REVO_LLM__API_KEY is valid and the model is available. "
    "Check the logs for details."
)


class RepoFile(BaseModel):
    path: str
    content: Optional[str] = None
    snippet: Optional[str] = None


class AnalyzeRepoBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    repo_summary: Optional[str] = Field(default=None, alias="repoSummary")
    selected_files: list[RepoFile] = Field(default_factory=list, alias="selectedFiles")
    repo: Optional[str] = None
    samples: list[RepoFile] = Field(default_factory=list)


class AskRevoBody(BaseModel):
    summary: Optional[str] = None
    samples: Optional[list[RepoFile]] = None
    question: Optional[str] = None


def create_app(explainer_factory: Callable[[], RepoExplainer]) -> FastAPI:
    """Build the proxy application.

    Args:
        explainer_factory: Returns a ready explainer for each request
    """
    app = FastAPI(title="REVO proxy")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.post("/analyzeRepo")
    def analyze_repo(body: AnalyzeRepoBody):
        repo_summary = body.repo_summary or (f"Repository: {body.repo}" if body.repo else "")
        files = body.selected_files or body.samples

        if not repo_summary and not files:
            return JSONResponse(
                {"error": "Missing repository context: please provide repoSummary or selectedFiles."},
                status_code=400,
            )

        try:
            result = explainer_factory().summarize(
                repo_summary=repo_summary,
                files=[f.model_dump() for f in files],
            )
        except Exception as e:
            logger.exception("Summary request failed")
            return JSONResponse(
                {"error": f"AI service failure: {str(e) or 'Unknown internal error.'}", "hint": FAILURE_HINT},
                status_code=500,
            )

        return {
            "summary": result.summary,
            "latency": result.latency,
            "tokens": result.tokens,
            "model": result.model,
        }

    @app.post("/askRevo")
    def ask_revo(body: AskRevoBody):
        if not body.question or (not body.summary and body.samples is None):
            return JSONResponse({"error": "Missing question or context."}, status_code=400)

        try:
            answer = explainer_factory().answer(
                summary=body.summary or "",
                samples=[s.model_dump() for s in body.samples or []],
                question=body.question,
            )
        except Exception as e:
            logger.exception("Question request failed")
            return JSONResponse({"error": str(e) or "Internal error"}, status_code=500)

        return {"answer": answer}

    return app
