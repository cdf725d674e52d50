"""
Toronto LUTO Nomogram - FastAPI Application

Main application entry point with API endpoints for:
- Scoring an ultrasound finding assessment
- Toggling / resetting findings
- Publishing model constants and citation
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from luto_nomogram import __version__
from luto_nomogram.config import settings
from luto_nomogram.core.scoring import Assessment, Finding, NomogramEngine, reset, toggle
from luto_nomogram.models.assessment import (
    AssessmentRequest,
    AssessmentResponse,
    FindingInfo,
    HealthResponse,
    ModelResponse,
    ToggleRequest,
)
from luto_nomogram.utils import NomogramError, get_logger, setup_logging

setup_logging(settings.log_level, settings.log_file, settings.log_color)
logger = get_logger(__name__)

_engine = NomogramEngine()
START_TIME = datetime.now()


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.engine = _engine
    logger.info(f"Nomogram API ready ({_engine.model.citation})")
    yield
    logger.info("Nomogram API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.api_title,
    description="Bayesian meta-regression derived prenatal ultrasound index for "
                "Lower Urinary Tract Obstruction (LUTO) and Prune Belly Syndrome",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NomogramError)
async def nomogram_error_handler(request: Request, exc: NomogramError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=400, content=exc.to_dict())


# ---- Utility Functions ----

def _respond(assessment: Assessment) -> AssessmentResponse:
    return AssessmentResponse(
        findings=assessment.as_dict(),
        result=_engine.summarise(assessment),
    )


def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        model=str(_engine.model.citation),
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health()


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health()


@app.get("/api/v1/findings", tags=["Reference"])
async def list_findings():
    """
    List the ultrasound findings the nomogram accepts.
    """
    return {
        "findings": [
            FindingInfo(finding=f.value, label=f.label,
                        coefficient=_engine.model.coefficient(f))
            for f in Finding
        ]
    }


@app.get("/api/v1/model", response_model=ModelResponse, tags=["Reference"])
async def describe_model():
    """Intercept, coefficient table, formula and source study."""
    return _engine.describe_model()


@app.post("/api/v1/assess", response_model=AssessmentResponse, tags=["Assessment"])
async def assess(request: AssessmentRequest):
    """
    Score a set of findings. Findings omitted from the body are absent.
    """
    assessment = Assessment.from_dict(request.findings)
    response = _respond(assessment)
    logger.info(
        f"Assessment {[f.value for f in assessment.active_findings()]}: "
        f"{response.result.percentage}% ({response.result.band})"
    )
    return response


@app.post("/api/v1/assess/toggle", response_model=AssessmentResponse, tags=["Assessment"])
async def toggle_finding(request: ToggleRequest):
    """Flip one finding and return the rescored assessment."""
    assessment = toggle(Assessment.from_dict(request.findings), request.finding)
    return _respond(assessment)


@app.get("/api/v1/assess/reset", response_model=AssessmentResponse, tags=["Assessment"])
async def reset_assessment():
    """All findings absent: the baseline prevalence."""
    return _respond(reset())


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
