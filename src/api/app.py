"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import analysis, rates

app = FastAPI(
    title="PIN Tax Analyzer",
    description="Property tax estimates from assessment and neighborhood rate data",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
    expose_headers=["X-Request-ID"],
)

app.include_router(analysis.router)
app.include_router(rates.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
