from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scope3dict.api.routes import dictionary, matching
from scope3dict.db.dictionary_store import DictionaryStore
from scope3dict.infra.config import CORS_ORIGINS
from scope3dict.services.classification_service import ClassificationService


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One store per app instance; discarded on shutdown.
    store = DictionaryStore()
    app.state.classification_service = ClassificationService(store)
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Scope3 Dictionary", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dictionary.router)
    app.include_router(matching.router)

    @app.get("/api/health")
    async def health():
        service: ClassificationService = app.state.classification_service
        return {"status": "ok", "entries": len(service.store)}

    return app


app = create_app()
