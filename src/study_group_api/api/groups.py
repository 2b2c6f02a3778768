import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from study_group_api.api.auth import get_current_user_id
from study_group_api.api.schemas import CreateGroupRequest
from study_group_api.groups.service import GroupService

logger = logging.getLogger(__name__)


async def log_request(request: Request) -> None:
    logger.info("request method=%s url=%s", request.method, request.url.path)


router = APIRouter(prefix="/api/groups", tags=["groups"], dependencies=[Depends(log_request)])
service = GroupService()


def _respond(outcome: tuple[int, dict]) -> JSONResponse:
    status_code, payload = outcome
    return JSONResponse(status_code=status_code, content=payload)


@router.post("/groupDashboard")
async def group_dashboard(user_id: str = Depends(get_current_user_id)) -> JSONResponse:
    return _respond(await service.dashboard(user_id))


@router.get("/find")
async def find_groups(
    search: str | None = None,
    q: str | None = None,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    return _respond(await service.find(search if search is not None else q))


@router.post("/createGroup")
async def create_group(
    req: CreateGroupRequest,
    user_id: str = Depends(get_current_user_id),
) -> JSONResponse:
    return _respond(await service.create(user_id, req.groupName, about=req.about))


@router.post("/my-groups")
async def my_groups(user_id: str = Depends(get_current_user_id)) -> JSONResponse:
    return _respond(await service.joined(user_id))


@router.post("/{group_id}")
async def group_details(group_id: str, user_id: str = Depends(get_current_user_id)) -> JSONResponse:
    return _respond(await service.details(user_id, group_id))


@router.post("/{group_id}/join")
async def join_group(group_id: str, user_id: str = Depends(get_current_user_id)) -> JSONResponse:
    return _respond(await service.join(user_id, group_id))


@router.post("/{group_id}/leave")
async def leave_group(group_id: str, user_id: str = Depends(get_current_user_id)) -> JSONResponse:
    return _respond(await service.leave(user_id, group_id))
