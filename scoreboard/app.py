import logging
from contextlib import asynccontextmanager
from typing import Any, List

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .errors import InvalidInput
from .ranking import INVALID_SCORE, RankingService
from .schemas import Message, ScoreOut
from .store import open_store

logger = logging.getLogger(__name__)

RETRIEVE_FAILED = "Failed to retrieve scores."
SAVE_FAILED = "Failed to save the score."


def _message(status_code, text):
    return JSONResponse(status_code=status_code, content=Message(message=text).model_dump())


def get_service(request: Request) -> RankingService:
    return RankingService(request.app.state.store)


def create_app(store=None, settings=None):
    """Build the FastAPI app around an explicit score store.

    When ``store`` is None the store is opened from ``settings`` at startup.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            app.state.store = open_store(settings)
        yield

    app = FastAPI(title="Scoreboard (HTTP)", lifespan=lifespan)
    app.state.store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError):
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            logger.info("%s %s rejected: malformed JSON body", request.method, request.url.path)
            return _message(400, INVALID_SCORE)
        return await request_validation_exception_handler(request, exc)

    @app.get("/scores", response_model=List[ScoreOut], responses={500: {"model": Message}})
    def get_scores(service: RankingService = Depends(get_service)):
        try:
            records = service.get_top_scores()
        except Exception:
            logger.exception("GET /scores failed")
            return _message(500, RETRIEVE_FAILED)
        return [ScoreOut.from_record(r) for r in records]

    @app.post(
        "/scores",
        status_code=201,
        response_model=ScoreOut,
        responses={400: {"model": Message}, 500: {"model": Message}},
    )
    def post_score(body: Any = Body(None), service: RankingService = Depends(get_service)):
        try:
            record = service.submit_score(body)
        except InvalidInput as e:
            logger.info("POST /scores rejected: %s", e)
            return _message(400, str(e))
        except Exception:
            logger.exception("POST /scores failed")
            return _message(500, SAVE_FAILED)
        return ScoreOut.from_record(record)

    return app


# ASGI target for `uvicorn scoreboard.app:app`
app = create_app()
