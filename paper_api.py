"""
Mid-Term Paper Generator API — Main Application
FastAPI application that builds mid1 / mid2 question papers from an uploaded
question bank spreadsheet.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import config
from routers import generate, images

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s  %(levelname)s  %(message)s")

app = FastAPI(
    title="Mid-Term Paper Generator API",
    description="Question bank ingestion and randomized mid-term paper assembly",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── Routers ───────────────────────────────────────────────────────────────────

app.include_router(generate.router)   # /api/generate, /api/bank
app.include_router(images.router)     # /api/image-proxy-base64


@app.get("/")
def root():
    return {
        "name": "Mid-Term Paper Generator API",
        "version": "1.0.0",
        "endpoints": {
            "docs": "/docs",
            "generate": "/api/generate",
            "bank": "/api/bank",
            "image_proxy": "/api/image-proxy-base64",
        },
    }


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "paper-generator-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
