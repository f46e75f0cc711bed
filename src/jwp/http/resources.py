"""
=============================================================================
STATIC RESOURCE LOADING
=============================================================================

Controllers never read files. They name a resource on the response
(`response.set_response_resource(HTTPStatus.OK, "/login.html")`) and the
serialization step asks a ResourceLoader for the bytes:

    controller                 HttpResponse                ResourceLoader
    ──────────                 ────────────                ──────────────
    set_response_resource ──►  resource_path="/login.html"
                               to_bytes(loader) ─────────► load("/login.html")
                                                    ◄───── Resource(content, type)

=============================================================================
PATH TRAVERSAL
=============================================================================

The resource path comes from a controller, and for ResourceController it is
the request path itself. Every lookup is resolved and then checked to still
live under the root directory:

    root:     /srv/jwp/static
    request:  /../../etc/passwd
    resolved: /etc/passwd        → relative_to(root) fails → not found

=============================================================================
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import logging

from .mime_types import get_content_type


logger = logging.getLogger(__name__)

# Pages shipped with the package (index, login, register, 401, 404).
DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "static"


class ResourceNotFoundError(Exception):
    """Raised when a named resource does not exist under the root."""

    def __init__(self, resource_path: str):
        super().__init__(f"Resource not found: {resource_path}")
        self.resource_path = resource_path


@dataclass(frozen=True)
class Resource:
    """Loaded bytes plus the Content-Type to send them with."""

    path: str
    content: bytes
    content_type: str


class ResourceLoader:
    """
    Loads static resources from a directory.

    Args:
        root_dir: Directory that resource paths are relative to. Defaults to
                  the pages bundled with the package.
    """

    def __init__(self, root_dir: Optional[Union[str, Path]] = None):
        self.root_dir = Path(root_dir or DEFAULT_STATIC_DIR).resolve()

    def load(self, resource_path: str) -> Resource:
        """
        Read a resource.

        Raises:
            ResourceNotFoundError: Missing file, a directory, or a path that
                                   escapes the root.
        """
        full_path = self._resolve(resource_path)
        if full_path is None:
            raise ResourceNotFoundError(resource_path)

        content = full_path.read_bytes()
        logger.debug(f"Loaded {resource_path} ({len(content)} bytes)")
        return Resource(
            path=resource_path,
            content=content,
            content_type=get_content_type(full_path),
        )

    def _resolve(self, resource_path: str) -> Optional[Path]:
        relative = resource_path.lstrip("/")
        if not relative:
            return None

        full_path = (self.root_dir / relative).resolve()
        try:
            full_path.relative_to(self.root_dir)
        except ValueError:
            logger.warning(f"Path traversal attempt: {resource_path}")
            return None

        if not full_path.is_file():
            return None
        return full_path
