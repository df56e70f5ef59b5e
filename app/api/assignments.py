# app/api/assignments.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps import get_assignment_service, get_current_user_id
from app.core.ownership import Forbidden, TaskNotFound
from app.schemas.assignment import AssigneeRef, BalanceResult
from app.schemas.user import UserRead
from app.services.task_assignment_service import AssignmentConflict, TaskAssignmentService


router = APIRouter(prefix="/tasks", tags=["assignments"])


@router.post("/assignments", response_model=BalanceResult)
def assign_balanced(
    actor_user_id: int = Depends(get_current_user_id),
    service: TaskAssignmentService = Depends(get_assignment_service),
):
    """Spread the actor's unassigned tasks over the least loaded users."""
    return service.assign_balanced(owner=actor_user_id)


@router.post("/{task_id}/assignees", response_model=AssigneeRef, status_code=status.HTTP_201_CREATED)
def assign_task_to_user(
    task_id: int,
    body: AssigneeRef,
    actor_user_id: int = Depends(get_current_user_id),
    service: TaskAssignmentService = Depends(get_assignment_service),
):
    try:
        service.assign_task_to_user(user_id=body.id, task_id=task_id, owner=actor_user_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except Forbidden as e:
        raise HTTPException(status_code=403, detail=str(e))
    except AssignmentConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
    return body


@router.get("/{task_id}/assignees", response_model=list[UserRead])
def get_users_assigned(
    task_id: int,
    actor_user_id: int = Depends(get_current_user_id),
    service: TaskAssignmentService = Depends(get_assignment_service),
):
    try:
        return service.get_users_assigned(task_id=task_id, owner=actor_user_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except Forbidden as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete("/{task_id}/assignees/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(
    task_id: int,
    user_id: int,
    actor_user_id: int = Depends(get_current_user_id),
    service: TaskAssignmentService = Depends(get_assignment_service),
):
    try:
        service.remove_user(task_id=task_id, user_id=user_id, owner=actor_user_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except Forbidden as e:
        raise HTTPException(status_code=403, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
