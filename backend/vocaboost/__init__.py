from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vocaboost.config import settings
from vocaboost.db import init_all_databases


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_all_databases(settings.data_dir)
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title="VocaBoost Backend", version="0.1.0", lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from vocaboost.routers import decks, exercises, health, review, stats

    application.include_router(health.router)
    application.include_router(
        decks.router, prefix="/decks", tags=["decks"]
    )
    application.include_router(
        review.router, prefix="/review", tags=["review"]
    )
    application.include_router(
        exercises.router, prefix="/exercises", tags=["exercises"]
    )
    application.include_router(
        stats.router, prefix="/stats", tags=["stats"]
    )

    return application


app = create_app()
