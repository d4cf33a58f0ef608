"""Comment-related API endpoints."""

from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from discussboard.core.modules.comment.models import CommentView
from discussboard.core.modules.vote.models import VoteResult
from discussboard.web.deps import AppDep, AuthTokenDep, unwrap
from discussboard.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["comments"])


class CreateCommentRequest(BaseModel):
    """Request to create a new comment."""

    description: str = Field(..., description="The comment text, 1 to 2000 characters")


@router.get(
    "/discussions/{discussion_id}/comments",
    summary="List discussion comments",
    description="Get all comments of a discussion, oldest first. Works anonymously.",
    operation_id="listComments",
    responses={200: {"description": "Comments of the discussion"}},
)
async def list_comments(discussion_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> list[CommentView]:
    return unwrap(await app.list_comments(auth_token, discussion_id))


@router.post(
    "/discussions/{discussion_id}/comments",
    summary="Create comment",
    description="Add a comment to a discussion as the current user.",
    operation_id="createComment",
    status_code=201,
    responses={
        201: {"description": "Comment created successfully"},
        400: {"model": ErrorResponse, "description": "Input failed validation"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_comment(
    discussion_id: UUID, request: CreateCommentRequest, app: AppDep, auth_token: AuthTokenDep
) -> CommentView:
    return unwrap(await app.create_comment(auth_token, discussion_id, request.description))


@router.post(
    "/comments/{comment_id}/vote",
    summary="Toggle comment like",
    description="Like the comment, or remove the like if the user already liked it. Returns the stored state.",
    operation_id="toggleCommentVote",
    responses={
        200: {"description": "Vote state after the toggle"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Comment not found"},
        503: {"model": ErrorResponse, "description": "Store unavailable; safe to retry"},
    },
)
async def toggle_comment_vote(comment_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> VoteResult:
    return unwrap(await app.toggle_comment_vote(auth_token, comment_id))
