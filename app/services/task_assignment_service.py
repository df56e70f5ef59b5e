from __future__ import annotations

import logging

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.ownership import Forbidden, TaskNotFound, ensure_task_owner
from app.models.assignment import Assignment
from app.models.task import Task
from app.models.user import User
from app.schemas.assignment import BalanceResult
from app.schemas.client_message import ClientMessageOut
from app.schemas.user import UserRead
from app.services.notifications import NotificationChannel

logger = logging.getLogger(__name__)


class AssignmentConflict(Exception):
    """Insert rejected by the DB: user already assigned, or user does not exist."""
    pass


class NotAssigned(Forbidden):
    """Selection of a task the user is not assigned to."""
    pass


class TaskAssignmentService:
    def __init__(self, db: Session, notifier: NotificationChannel | None = None):
        self.db = db
        self.notifier = notifier

    # ------------------------------------------------------------------
    # Assignees (owner only)
    # ------------------------------------------------------------------

    def assign_task_to_user(self, *, user_id: int, task_id: int, owner: int) -> None:
        ensure_task_owner(self.db, task_id=task_id, owner=owner)

        # (task, user) uniqueness is left to the primary key
        try:
            self.db.execute(insert(Assignment).values(task_id=task_id, user_id=user_id))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AssignmentConflict(f"Cannot assign user {user_id} to task {task_id}") from e
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info("User %s assigned to task %s by owner %s", user_id, task_id, owner)

    def get_users_assigned(self, *, task_id: int, owner: int) -> list[UserRead]:
        ensure_task_owner(self.db, task_id=task_id, owner=owner)

        users = self.db.execute(
            select(User)
            .join(Assignment, Assignment.user_id == User.id)
            .where(Assignment.task_id == task_id)
            .order_by(User.id)
        ).scalars()
        return [UserRead.model_validate(u) for u in users]

    def remove_user(self, *, task_id: int, user_id: int, owner: int) -> None:
        """Delete the assignment. Removing a user that is not assigned is a no-op."""
        ensure_task_owner(self.db, task_id=task_id, owner=owner)

        try:
            result = self.db.execute(
                delete(Assignment).where(
                    Assignment.task_id == task_id,
                    Assignment.user_id == user_id,
                )
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        if result.rowcount:
            logger.info("User %s removed from task %s by owner %s", user_id, task_id, owner)

    # ------------------------------------------------------------------
    # Balanced assignment
    # ------------------------------------------------------------------

    def _unassigned_task_ids(self, owner: int) -> list[int]:
        return list(
            self.db.execute(
                select(Task.id)
                .outerjoin(Assignment, Assignment.task_id == Task.id)
                .where(Task.owner == owner, Assignment.task_id.is_(None))
                .order_by(Task.id)
            ).scalars()
        )

    def _least_assigned_user_id(self) -> int:
        # users without assignments count as 0; ties go to the lowest id.
        # Never empty while there are tasks: every task owner is a user.
        n_assignments = func.count(Assignment.task_id)
        return self.db.execute(
            select(User.id)
            .outerjoin(Assignment, Assignment.user_id == User.id)
            .group_by(User.id)
            .order_by(n_assignments, User.id)
            .limit(1)
        ).scalar_one()

    def assign_balanced(self, *, owner: int) -> BalanceResult:
        """
        Give every unassigned task of `owner` to the currently least loaded user.

        Tasks are processed one by one and the load is recomputed before each
        pick. A failed task is logged and reported in `failed`; the remaining
        tasks are still attempted.
        """
        result = BalanceResult()

        task_ids = self._unassigned_task_ids(owner)
        if not task_ids:
            return result

        for task_id in task_ids:
            user_id = self._least_assigned_user_id()
            try:
                self.assign_task_to_user(user_id=user_id, task_id=task_id, owner=owner)
            except (TaskNotFound, Forbidden, AssignmentConflict, SQLAlchemyError) as e:
                logger.warning("Balanced assignment of task %s to user %s failed: %s", task_id, user_id, e)
                result.failed.append(task_id)
                continue
            result.assigned[task_id] = user_id

        logger.info(
            "Balanced assignment for owner %s: %d assigned, %d failed",
            owner, len(result.assigned), len(result.failed),
        )
        return result

    # ------------------------------------------------------------------
    # Active task selection
    # ------------------------------------------------------------------

    def select_task(self, *, user_id: int, task_id: int) -> ClientMessageOut:
        """
        Make `task_id` the only active task of `user_id`.

        Deactivate-all and activate-one run in a single transaction on this
        session, after locking the user's assignment rows. Clients are
        notified only once the transaction is committed.
        """
        try:
            task = self.db.get(Task, task_id)
            if task is None:
                raise TaskNotFound(f"Task not found: {task_id}")

            # serialize concurrent selections of the same user (no-op on sqlite)
            self.db.execute(
                select(Assignment.task_id)
                .where(Assignment.user_id == user_id)
                .with_for_update()
            ).all()

            info = self.db.execute(
                select(User.name, Task.description)
                .select_from(Assignment)
                .join(User, User.id == Assignment.user_id)
                .join(Task, Task.id == Assignment.task_id)
                .where(Assignment.user_id == user_id, Assignment.task_id == task_id)
            ).one_or_none()

            self.db.execute(
                update(Assignment)
                .where(Assignment.user_id == user_id)
                .values(active=False)
            )
            activated = self.db.execute(
                update(Assignment)
                .where(Assignment.user_id == user_id, Assignment.task_id == task_id)
                .values(active=True)
            )
            if activated.rowcount == 0 or info is None:
                raise NotAssigned(f"User {user_id} is not assigned to task {task_id}")

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("User %s selected task %s as active", user_id, task_id)

        message = ClientMessageOut(
            kind="update",
            user_id=user_id,
            user_name=info.name,
            task_id=task_id,
            task_description=info.description,
        )
        if self.notifier is not None:
            # log first: a failed append must not leave clients ahead of the log
            self.notifier.append_log(user_id, message.model_copy(update={"kind": "login"}))
            self.notifier.broadcast(message)
        return message
