from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mini_jira.db.database import get_async_session
from mini_jira.api.dependencies.permissions import ProjectAccess, get_project_access
from mini_jira.models.label import Label
from mini_jira.repositories.label_repository import LabelRepository
from mini_jira.schemas.label import LabelCreate, LabelUpdate, LabelResponse
from mini_jira.schemas.response import ApiResponse, success_response

router = APIRouter(tags=["labels"])


async def get_label_or_404(db: AsyncSession, label_id: int) -> Label:
    label = await LabelRepository.get_by_id(db, label_id)
    if not label:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Label not found"
        )
    return label


@router.get("/projects/{project_id}/labels", response_model=ApiResponse[List[LabelResponse]])
async def list_labels(
    project_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    await access.require_member(project_id)

    labels = await LabelRepository.get_by_project_id(db, project_id)
    return success_response(labels)


@router.post("/projects/{project_id}/labels", response_model=ApiResponse[LabelResponse], status_code=status.HTTP_201_CREATED)
async def create_label(
    project_id: int,
    label_data: LabelCreate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    await access.require_admin(project_id)

    label = await LabelRepository.create(
        db,
        project_id=project_id,
        name=label_data.name,
        color=label_data.color
    )
    return success_response(label, "Label created")


@router.patch("/labels/{label_id}", response_model=ApiResponse[LabelResponse])
async def update_label(
    label_id: int,
    label_data: LabelUpdate,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    label = await get_label_or_404(db, label_id)
    await access.require_admin(label.project_id)

    updated = await LabelRepository.update(db, label_id, **label_data.model_dump(exclude_none=True))
    return success_response(updated, "Label updated")


@router.delete("/labels/{label_id}", response_model=ApiResponse)
async def delete_label(
    label_id: int,
    db: AsyncSession = Depends(get_async_session),
    access: ProjectAccess = Depends(get_project_access),
):
    label = await get_label_or_404(db, label_id)
    await access.require_admin(label.project_id)

    await LabelRepository.delete(db, label_id)
    return success_response(None, "Label deleted successfully")
