import uvicorn

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.responses import RedirectResponse, JSONResponse
from faker import Faker
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter
from typing import Optional

from . import __version__
from .config import Settings, get_settings
from .database import Database, DatabaseConnectionError, create_database, get_db
from .handler.schema import schema
from .handler.utils import UserRepository, UserService
from .logging import configure_logging, get_logger
from .model.sqlalchemy.user import UserModel
from .router.user import router as router_user

logger = get_logger(__name__)


def get_context(db: Session = Depends(get_db)) -> dict:
    return {"users": UserService(UserRepository(db))}


def create_app(database: Database, settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an already connected database."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        database.dispose()

    graphql_app = GraphQLRouter(schema, context_getter=get_context)

    app = FastAPI(title="User GraphQL API", version=__version__, lifespan=lifespan)
    app.state.database = database
    app.include_router(graphql_app, prefix=settings.graphql_path)
    app.include_router(router_user)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url=settings.graphql_path)

    @app.get("/api/v1/health", summary="Health Check", tags=["Health"])
    async def health_check():
        return JSONResponse(content={"status": "ok", "message": "Service is running"})

    return app


def seed_demo_users(database: Database, count: int) -> int:
    """Insert ``count`` fake users when the table is empty. Returns how many were added."""
    if count <= 0:
        return 0

    fake = Faker()
    with database.session() as db:
        if db.query(UserModel).first():
            logger.info("Demo data already present")
            return 0

        for _ in range(count):
            db.add(UserModel(
                first_name=fake.first_name(),
                last_name=fake.last_name(),
                age=fake.random_int(min=18, max=80),
                email=fake.unique.email()))
        db.commit()

    logger.info("Inserted demo users", count=count)
    return count


def run() -> None:
    settings = get_settings()
    configure_logging(settings.debug)

    try:
        database = create_database(settings)
    except DatabaseConnectionError:
        logger.exception("Startup failed")
        raise

    seed_demo_users(database, settings.seed_demo_users)

    app = create_app(database, settings)
    logger.info("Server is running", host=settings.api_host, port=settings.api_port, path=settings.graphql_path)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
    # curl -X POST http://localhost:4000/graphql -H "Content-Type: application/json" \
    #   -d '{"query": "mutation { createUser(firstName: \"A\", lastName: \"B\", age: 30, email: \"a@b.com\") { id } }"}'
