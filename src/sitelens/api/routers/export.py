"""Session export API endpoint."""

from fastapi import APIRouter, Depends, Response

from ...export import ExportError, ExportFormatter
from ...utils.logging import get_structured_logger
from ..dependencies import get_storage_manager
from ..types import APIError, ExportRequest

logger = get_structured_logger(__name__)

router = APIRouter()

formatter = ExportFormatter()


@router.post("")
async def export_sessions(
    request: ExportRequest, storage=Depends(get_storage_manager)
) -> Response:
    """Export the requested sessions, or all of them, as a file download."""
    if request.session_ids:
        sessions = []
        for session_id in request.session_ids:
            session = await storage.get_session(session_id)
            if session is not None:
                sessions.append(session)
    else:
        sessions = await storage.list_sessions()

    try:
        payload = formatter.export(sessions, request.format)
    except ExportError as e:
        raise APIError(str(e)) from e

    return Response(
        content=payload.content,
        media_type=payload.media_type,
        headers={"Content-Disposition": f'attachment; filename="{payload.filename}"'},
    )
