"""
Todo Manager HTTP Server

FastAPI-based server providing:
- REST API for todo CRUD under /api/todos
- CORS headers on every response and short-circuited pre-flight requests
- Static file serving for the front-end from a configured root
"""

from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from todo_manager.config import ServerSettings
from todo_manager.service import TodoService
from todo_manager.storage import TaskStore, create_store
from todo_manager.utils.exceptions import (
    InvalidTodoDataError,
    StorageError,
    TodoNotFoundError,
)
from todo_manager.utils.logger import get_logger
from ui.static_files import StaticFileResponder

logger = get_logger(__name__)

API_PREFIX = "/api/todos"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}


# ============================================================================
# PYDANTIC MODELS
# ============================================================================

class TodoCreate(BaseModel):
    model_config = ConfigDict(strict=True)

    text: str


class TodoUpdate(BaseModel):
    model_config = ConfigDict(strict=True)

    text: Optional[str] = None
    completed: Optional[bool] = None


# ============================================================================
# MIDDLEWARE
# ============================================================================

class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Adds permissive CORS headers and answers OPTIONS before routing."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception as e:
                # Handled here so the 500 still passes through this middleware
                logger.exception(f"{request.method} {request.url.path} failed: {e}")
                response = JSONResponse(status_code=500, content={"error": "Server error"})
        response.headers.update(CORS_HEADERS)
        return response


# ============================================================================
# DEPENDENCIES
# ============================================================================

def get_service(request: Request) -> TodoService:
    return request.app.state.service


def get_static(request: Request) -> StaticFileResponder:
    return request.app.state.static


def json_body(model):
    """
    Dependency that parses the request body as JSON into *model*.

    The body is parsed whatever the Content-Type header says, so clients
    posting JSON as text/plain or as a form still get through.
    """
    async def _parse(request: Request):
        raw = await request.body()
        try:
            return model.model_validate_json(raw)
        except ValidationError as e:
            logger.debug(f"Rejected {request.method} {request.url.path}: {e.errors()}")
            raise InvalidTodoDataError(errors=e.errors()) from e
    return _parse


def _parse_todo_id(raw: str) -> int:
    """Non-numeric ids cannot match a stored task."""
    if not raw.isascii() or not raw.isdigit():
        raise TodoNotFoundError(raw)
    return int(raw)


# ============================================================================
# TODO API
# ============================================================================

router = APIRouter()


@router.get(API_PREFIX)
def list_todos(service: TodoService = Depends(get_service)):
    return [t.to_dict() for t in service.list_todos()]


@router.post(API_PREFIX, status_code=201)
def create_todo(data: TodoCreate = Depends(json_body(TodoCreate)),
                service: TodoService = Depends(get_service)):
    return service.create_todo(data.text).to_dict()


@router.put(API_PREFIX + "/{todo_id}")
def update_todo(todo_id: str, data: TodoUpdate = Depends(json_body(TodoUpdate)),
                service: TodoService = Depends(get_service)):
    updates = {k: v for k, v in data.model_dump().items() if v is not None}
    return service.update_todo(_parse_todo_id(todo_id), updates).to_dict()


@router.delete(API_PREFIX + "/{todo_id}", status_code=204)
def delete_todo(todo_id: str, service: TodoService = Depends(get_service)):
    service.delete_todo(_parse_todo_id(todo_id))
    return Response(status_code=204)


# ============================================================================
# STATIC FILES
# ============================================================================

# Registered last so the API routes above take precedence
@router.api_route("/{full_path:path}", methods=["GET", "HEAD"])
def static_file(full_path: str, static: StaticFileResponder = Depends(get_static)):
    path = "/" + full_path
    if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return static.respond(path)


# ============================================================================
# ERROR HANDLERS
# ============================================================================

async def _todo_not_found(request: Request, exc: TodoNotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message})


async def _invalid_data(request: Request, exc: InvalidTodoDataError):
    return JSONResponse(status_code=400, content={"error": exc.message})


async def _storage_failure(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path} failed: {exc.to_dict()}")
    return JSONResponse(status_code=500, content={"error": "Storage failure"})


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(
    settings: Optional[ServerSettings] = None,
    store: Optional[TaskStore] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Server settings; read from config.properties if omitted
        store: Task store to use instead of the one named in *settings*
    """
    settings = settings or ServerSettings.from_properties()
    if store is None:
        store = create_store(settings.storage_backend, settings.data_file)

    app = FastAPI(
        title="Todo Manager",
        description="Todo CRUD API over a flat-file store",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.service = TodoService(store)
    app.state.static = StaticFileResponder(settings.static_root, settings.default_document)

    app.add_middleware(CORSHeadersMiddleware)
    app.add_exception_handler(TodoNotFoundError, _todo_not_found)
    app.add_exception_handler(InvalidTodoDataError, _invalid_data)
    app.add_exception_handler(StorageError, _storage_failure)
    app.include_router(router)
    return app


app = create_app()


# ============================================================================
# ENTRYPOINT
# ============================================================================

def start_server(host: Optional[str] = None, port: Optional[int] = None,
                 application: Optional[FastAPI] = None):
    """Start the server with uvicorn."""
    import uvicorn

    application = application or app
    settings: ServerSettings = application.state.settings
    host = host or settings.host
    port = port or settings.port

    logger.info(f"Server running at http://{host}:{port}")
    logger.info(f"Data file: {settings.data_file} (backend={settings.storage_backend})")
    logger.info(f"Static root: {application.state.static.root}")
    uvicorn.run(application, host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    start_server()
