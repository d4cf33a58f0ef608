"""Discussion-related API endpoints."""

from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from discussboard.core.modules.discussion.models import DiscussionView
from discussboard.core.modules.vote.models import VoteResult
from discussboard.errors import NotFoundError
from discussboard.web.deps import AppDep, AuthTokenDep, unwrap
from discussboard.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["discussions"])


class CreateDiscussionRequest(BaseModel):
    """Request to start a new discussion."""

    title: str = Field(..., description="Title, 3 to 200 characters")
    description: str = Field(..., description="Body, 3 to 1000 characters")


@router.get(
    "/discussions",
    summary="List discussions",
    description="Get all discussions, newest first. Works anonymously; liked flags need a session.",
    operation_id="listDiscussions",
    responses={200: {"description": "All discussions"}},
)
async def list_discussions(app: AppDep, auth_token: AuthTokenDep) -> list[DiscussionView]:
    return unwrap(await app.list_discussions(auth_token))


@router.get(
    "/discussions/mine",
    summary="List my discussions",
    description="Get the discussions started by the current user, newest first.",
    operation_id="listMyDiscussions",
    responses={
        200: {"description": "The user's discussions"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_my_discussions(app: AppDep, auth_token: AuthTokenDep) -> list[DiscussionView]:
    return unwrap(await app.list_my_discussions(auth_token))


@router.post(
    "/discussions",
    summary="Create discussion",
    description="Start a new discussion as the current user.",
    operation_id="createDiscussion",
    status_code=201,
    responses={
        201: {"description": "Discussion created"},
        400: {"model": ErrorResponse, "description": "Input failed validation"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_discussion(request: CreateDiscussionRequest, app: AppDep, auth_token: AuthTokenDep) -> DiscussionView:
    return unwrap(await app.create_discussion(auth_token, request.title, request.description))


@router.get(
    "/discussions/{discussion_id}",
    summary="Get discussion",
    description="Get a single discussion by ID.",
    operation_id="getDiscussion",
    responses={
        200: {"description": "Discussion details"},
        404: {"model": ErrorResponse, "description": "Discussion not found"},
    },
)
async def get_discussion(discussion_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> DiscussionView:
    discussion = unwrap(await app.get_discussion(auth_token, discussion_id))
    if discussion is None:
        raise NotFoundError(f"Discussion '{discussion_id}' not found")
    return discussion


@router.post(
    "/discussions/{discussion_id}/vote",
    summary="Toggle discussion like",
    description="Like the discussion, or remove the like if the user already liked it. Returns the stored state.",
    operation_id="toggleDiscussionVote",
    responses={
        200: {"description": "Vote state after the toggle"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Discussion not found"},
        503: {"model": ErrorResponse, "description": "Store unavailable; safe to retry"},
    },
)
async def toggle_discussion_vote(discussion_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> VoteResult:
    return unwrap(await app.toggle_discussion_vote(auth_token, discussion_id))
