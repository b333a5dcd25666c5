from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .api.routes_auth import router as auth_router
from .api.routes_counters import router as counters_router
from .api.routes_words import router as words_router
from .config import Settings, get_settings
from .core.database import Base, create_db_engine, make_session_factory
from .core.errors import register_error_handlers


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    engine = create_db_engine(settings.database_url)
    # Create tables
    Base.metadata.create_all(bind=engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/api/v1", response_class=PlainTextResponse, tags=["health"])
    def root():
        return "Vocabulary API is running"

    app.include_router(auth_router)
    app.include_router(words_router)
    app.include_router(counters_router)

    return app


# uvicorn vocab_api.main:create_app --factory
if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=get_settings().port)
