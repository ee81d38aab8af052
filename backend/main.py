"""
App setup, middleware, lifespan
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from core.logging_utils import setup_logging
from core.startup import initialize_rag_system, cleanup_rag_system
from api.routes import root, search, grading, benchmark, documents


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic"""
    setup_logging()
    await initialize_rag_system(app)
    try:
        yield
    finally:
        await cleanup_rag_system(app)


app = FastAPI(title="RAG Explorer API", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root.router)
app.include_router(search.router)
app.include_router(grading.router)
app.include_router(benchmark.router)
app.include_router(documents.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
