# app/api/users.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps import get_assignment_service, get_current_user_id
from app.core.ownership import Forbidden, TaskNotFound
from app.schemas.assignment import TaskRef
from app.services.task_assignment_service import TaskAssignmentService


router = APIRouter(prefix="/users", tags=["selection"])


@router.put("/{user_id}/selection", status_code=status.HTTP_204_NO_CONTENT)
def select_task(
    user_id: int,
    body: TaskRef,
    actor_user_id: int = Depends(get_current_user_id),
    service: TaskAssignmentService = Depends(get_assignment_service),
):
    """Make one of the user's assigned tasks their active task."""
    if user_id != actor_user_id:
        raise HTTPException(status_code=403, detail="Users can only select their own active task")

    try:
        service.select_task(user_id=user_id, task_id=body.id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except Forbidden as e:
        # NotAssigned included
        raise HTTPException(status_code=403, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
