"""Content item and comment endpoints for the activity tracker API."""

from fastapi import APIRouter, HTTPException, status

from activity_tracker.api.v1.dependencies import ContentServiceDep, CurrentUserDep, SessionDep
from activity_tracker.core.errors import ContentNotFoundError, PermissionDeniedError
from activity_tracker.models import Comment, ContentItem
from activity_tracker.schemas.item import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)

router = APIRouter(tags=["items"])


def _not_found(err: ContentNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err))


def _forbidden(err: PermissionDeniedError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err))


@router.post("/items/", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: ItemCreate,
    current_user: CurrentUserDep,
    content: ContentServiceDep,
    db: SessionDep,
) -> ContentItem:
    """Create a content item owned by the caller.

    Args:
        item_data: Title, body and publication flag
        current_user: Authenticated author
        content: Content service bound to the request session
        db: Database session

    Returns:
        Created ContentItem object
    """
    item = content.create_item(
        owner_id=current_user.id,
        title=item_data.title,
        body=item_data.body,
        published=item_data.published,
    )
    db.commit()
    db.refresh(item)
    return item


@router.get("/items/{item_id}", response_model=ItemResponse)
async def get_item(item_id: int, content: ContentServiceDep) -> ContentItem:
    """Get a content item by ID."""
    try:
        return content.get_item(item_id)
    except ContentNotFoundError as err:
        raise _not_found(err) from err


@router.patch("/items/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: int,
    item_data: ItemUpdate,
    current_user: CurrentUserDep,
    content: ContentServiceDep,
    db: SessionDep,
) -> ContentItem:
    """Update an item owned by the caller.

    Raises:
        HTTPException: If the item or the new owner is missing, or the caller
            is not the owner
    """
    try:
        content.ensure_owner(content.get_item(item_id), current_user.id)
        item = content.update_item(
            item_id,
            title=item_data.title,
            body=item_data.body,
            published=item_data.published,
            owner_id=item_data.owner_id,
        )
    except ContentNotFoundError as err:
        raise _not_found(err) from err
    except PermissionDeniedError as err:
        raise _forbidden(err) from err
    db.commit()
    db.refresh(item)
    return item


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: int,
    current_user: CurrentUserDep,
    content: ContentServiceDep,
    db: SessionDep,
) -> None:
    """Delete an item owned by the caller, along with its comments."""
    try:
        content.ensure_owner(content.get_item(item_id), current_user.id)
        content.delete_item(item_id)
    except ContentNotFoundError as err:
        raise _not_found(err) from err
    except PermissionDeniedError as err:
        raise _forbidden(err) from err
    db.commit()


@router.get("/items/{item_id}/comments", response_model=list[CommentResponse])
async def list_comments(item_id: int, content: ContentServiceDep) -> list[Comment]:
    """List published comments on an item, oldest first."""
    try:
        return content.list_comments(item_id)
    except ContentNotFoundError as err:
        raise _not_found(err) from err


@router.post(
    "/items/{item_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    item_id: int,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    content: ContentServiceDep,
    db: SessionDep,
) -> Comment:
    """Comment on an item as the caller."""
    try:
        comment = content.create_comment(
            item_id=item_id,
            owner_id=current_user.id,
            body=comment_data.body,
            published=comment_data.published,
        )
    except ContentNotFoundError as err:
        raise _not_found(err) from err
    db.commit()
    db.refresh(comment)
    return comment


@router.patch("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    current_user: CurrentUserDep,
    content: ContentServiceDep,
    db: SessionDep,
) -> Comment:
    """Edit, publish or unpublish a comment owned by the caller."""
    try:
        content.ensure_owner(content.get_comment(comment_id), current_user.id)
        comment = content.update_comment(
            comment_id,
            body=comment_data.body,
            published=comment_data.published,
        )
    except ContentNotFoundError as err:
        raise _not_found(err) from err
    except PermissionDeniedError as err:
        raise _forbidden(err) from err
    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    content: ContentServiceDep,
    db: SessionDep,
) -> None:
    """Delete a comment owned by the caller."""
    try:
        content.ensure_owner(content.get_comment(comment_id), current_user.id)
        content.delete_comment(comment_id)
    except ContentNotFoundError as err:
        raise _not_found(err) from err
    except PermissionDeniedError as err:
        raise _forbidden(err) from err
    db.commit()
