"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fund_switch.api.reallocation_routes import router as reallocation_router
from fund_switch.config import LOG_LEVEL


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=LOG_LEVEL)
    yield


app = FastAPI(title="Fund Switch", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reallocation_router)


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
