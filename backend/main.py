import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server import settings
from server.api import router as schema_router

logger = logging.getLogger("uvicorn.error")
logger.setLevel(settings.log_level())

app = FastAPI(
    title="Table Schema",
    description="Declarative table schemas: inference, JSON round-trips and filter queries",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount the schema API router
app.include_router(schema_router)


@app.get("/health")
async def health():
    return {"ok": True}
