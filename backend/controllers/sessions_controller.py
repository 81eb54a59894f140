"""
/**
 * @file backend/controllers/sessions_controller.py
 * @description 实时会话控制器：输入防抖、状态轮询、复制、通知。
 */
"""

from fastapi import APIRouter, HTTPException

from backend.models.session_models import CopyRequest, SessionInputRequest
from backend.services.session_service import SessionNotFound, SessionService


router = APIRouter()


def _service() -> SessionService:
    return SessionService.instance()


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail={"error": "Session not found", "session_id": session_id})


@router.post("/api/sessions")
def create_session():
    return _service().create_session()


@router.get("/api/sessions/{session_id}")
def get_session(session_id: str):
    try:
        return _service().get_session(session_id)
    except SessionNotFound:
        raise _not_found(session_id)


@router.put("/api/sessions/{session_id}/input")
def put_input(session_id: str, req: SessionInputRequest):
    try:
        return _service().update_input(session_id, req.text)
    except SessionNotFound:
        raise _not_found(session_id)


@router.post("/api/sessions/{session_id}/process")
def process_now(session_id: str):
    try:
        return _service().process_now(session_id)
    except SessionNotFound:
        raise _not_found(session_id)


@router.post("/api/sessions/{session_id}/copy")
def copy_slot(session_id: str, req: CopyRequest):
    try:
        result = _service().copy_slot(session_id, req.slot)
    except SessionNotFound:
        raise _not_found(session_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail={"error": str(e)})
    if result.get("status") != "success":
        raise HTTPException(status_code=400, detail=result)
    return result


@router.get("/api/sessions/{session_id}/notifications")
def get_notifications(session_id: str):
    try:
        return {"notifications": _service().drain_notifications(session_id)}
    except SessionNotFound:
        raise _not_found(session_id)


@router.delete("/api/sessions/{session_id}")
def delete_session(session_id: str):
    try:
        _service().delete_session(session_id)
    except SessionNotFound:
        raise _not_found(session_id)
    return {"status": "ok"}
