"""
Static File Responder - serves the front-end from a directory on disk.

Request paths are resolved against the static root and must stay inside it;
anything that canonicalises to a location outside the root is treated as
missing.
"""

from pathlib import Path
from typing import Optional

from fastapi.responses import Response

from todo_manager.utils.logger import get_logger

logger = get_logger(__name__)

CONTENT_TYPES = {
    ".js": "text/javascript",
    ".css": "text/css",
    ".json": "application/json",
}
DEFAULT_CONTENT_TYPE = "text/html"

NOT_FOUND_BODY = "<h1>404 Not Found</h1>"
SERVER_ERROR_BODY = "Server Error"


def content_type_for(path: Path) -> str:
    """Media type inferred from the file extension; HTML when unknown."""
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


class StaticFileResponder:
    """Maps URL paths onto files under *root*."""

    def __init__(self, root: str = ".", default_document: str = "app.html"):
        self.root = Path(root).resolve()
        self.default_document = default_document

    def resolve(self, url_path: str) -> Optional[Path]:
        """
        Return the file path for *url_path*, or None when it would escape
        the static root.
        """
        relative = url_path.lstrip("/") or self.default_document
        try:
            candidate = (self.root / relative).resolve()
        except (OSError, ValueError) as e:
            logger.warning(f"Cannot resolve static path {url_path!r}: {e}")
            return None

        if candidate != self.root and not candidate.is_relative_to(self.root):
            logger.warning(f"Rejected static path outside root: {url_path!r}")
            return None
        return candidate

    def respond(self, url_path: str) -> Response:
        path = self.resolve(url_path)
        if path is None or path.is_dir():
            return self._not_found()

        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return self._not_found()
        except OSError as e:
            logger.error(f"Failed to read static file {path}: {e}")
            return Response(content=SERVER_ERROR_BODY, status_code=500, media_type="text/plain")

        return Response(content=content, status_code=200, media_type=content_type_for(path))

    @staticmethod
    def _not_found() -> Response:
        return Response(content=NOT_FOUND_BODY, status_code=404, media_type="text/html")
