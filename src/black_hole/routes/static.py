"""Static asset endpoint."""

from fastapi import APIRouter, Depends, Request, Response

from ..handler import RequestHandler
from ..models import AssetResponse

router = APIRouter()

SOURCE_HEADER = "X-Black-Hole-Source"


def get_handler(request: Request) -> RequestHandler:
    """Return the request handler built for this app."""
    return request.app.state.handler


def to_response(result: AssetResponse) -> Response:
    """Convert an AssetResponse into an HTTP response.

    The Content-Type header is set directly so no charset is appended to
    text types.
    """
    headers = {"Content-Type": result.content_type}
    if result.ok:
        headers[SOURCE_HEADER] = result.source.value
    return Response(content=result.body, status_code=result.status, headers=headers)


@router.get("/static/{path:path}")
async def get_static(
    path: str,
    handler: RequestHandler = Depends(get_handler),
) -> Response:
    """Serve a local file or a cached/proxied package file."""
    result = await handler.handle(path)
    return to_response(result)
