import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import errors, schema, settings
from core.db import Database
from issuance import router as issuance_router
from students import router as students_router

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One DB handle per process; built here unless the caller supplied one.
        db = database if database is not None else Database.from_env()
        await db.connect()
        app.state.db = db
        try:
            if settings.db_bootstrap():
                await schema.apply(db)
            if settings.api_key_is_default():
                logger.warning("api_key_default API_KEY is not set; using the built-in default secret")
            yield
        finally:
            await db.close()

    app = FastAPI(title="card-issuance-api", lifespan=lifespan)

    origins = settings.cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    errors.install(app)

    app.include_router(students_router.router, tags=["students"])
    app.include_router(issuance_router.router, tags=["issuance"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "card issuance api"}

    return app


app = create_app()


def serve() -> None:
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host=settings.host(), port=settings.port())


if __name__ == "__main__":
    serve()
