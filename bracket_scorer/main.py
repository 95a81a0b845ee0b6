from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

# IMPORT ROUTERS
from bracket_scorer.config import get_settings
from bracket_scorer.core.exceptions import SettlementException
from bracket_scorer.logging_config import configure_logging
from bracket_scorer.routers.health import router as health_router
from bracket_scorer.routers.scoring import router as scoring_router
from bracket_scorer.routers.settlements import router as settlements_router
from bracket_scorer.routers.settlements import settlement_exception_handler

settings = get_settings()
configure_logging(settings)


# SWAGGER UI: tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scoring"},
    {"name": "Settlements"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(SettlementException, settlement_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)       # Health
app.include_router(scoring_router)      # Scoring
app.include_router(settlements_router)  # Settlements


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "api": settings.API_V1_PREFIX,
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bracket_scorer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
