import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import Settings
from .controller import UserController
from .crud import UserRepository
from .database import ConnectionFactory, DatabaseUnavailable, get_db
from .template import Template
from .validation import UserValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


def get_controller(request: Request, db: Session = Depends(get_db)) -> UserController:
    state = request.app.state
    return UserController(
        repository=UserRepository(db),
        validator=state.validator,
        template=state.template,
        title=state.settings.app_name,
    )


@router.api_route("/", methods=["GET", "POST"], response_class=HTMLResponse)
async def users_page(request: Request, controller: UserController = Depends(get_controller)):
    form = await request.form() if request.method == "POST" else None
    return controller.handle(request.method, form)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the users table before serving requests."""
    try:
        app.state.connection_factory.create_schema()
    except DatabaseUnavailable:
        logger.error("Database unavailable at startup; users table not created.")
    yield


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Wire settings, connection factory, validator and template into an app."""
    settings = settings or Settings()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.connection_factory = ConnectionFactory(settings, engine=engine)
    app.state.validator = UserValidator()
    app.state.template = Template()

    @app.exception_handler(DatabaseUnavailable)
    async def database_unavailable_handler(request: Request, exc: DatabaseUnavailable):
        return PlainTextResponse("Database unavailable.", status_code=500)

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Unhandled storage error", exc_info=exc)
        return PlainTextResponse("Internal server error", status_code=500)

    app.include_router(router)
    return app


def run() -> None:
    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(create_app(settings), host=settings.app_host, port=settings.app_port)
