"""Task Service domain layer. Task CRUD, assignee resolution and assignment status flow."""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from tasktracker.models.project import Project
from tasktracker.models.task import (
    ASSIGNMENT_STATUSES, PRIORITIES, STATUS_COMPLETE, STATUS_ONGOING, STATUS_PENDING, Task, TaskAssignment,
)
from tasktracker.models.user import User
from tasktracker.schemas.task import TaskCreate, TaskUpdate, UserSequence
from tasktracker.services.project_service import members_by_project
from tasktracker.utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from tasktracker.utils.permissions import (
    can_create_task, can_view_all_tasks, is_admin, is_software_engineer,
)
from tasktracker.utils.task_assignment import AssignmentSelection

logger = logging.getLogger(__name__)

# (user_id, project_id, sequence)
ResolvedAssignee = Tuple[int, int, Optional[int]]


def _normalize_priority(value: Optional[str]) -> str:
    text = (value or "medium").strip().lower()
    if text not in PRIORITIES:
        raise ValidationError(f"Invalid priority: {value}")
    return text


def _load_projects(db: Session, project_ids: List[int]) -> List[Project]:
    projects = db.query(Project).filter(Project.project_id.in_(project_ids)).all()
    found = {p.project_id for p in projects}
    missing = [pid for pid in project_ids if pid not in found]
    if missing:
        raise NotFoundError(f"Project not found: {', '.join(str(pid) for pid in missing)}")
    by_id = {p.project_id: p for p in projects}
    return [by_id[pid] for pid in project_ids]


def _ordered_from_sequences(users_with_sequence: List[UserSequence]) -> List[int]:
    user_ids = [item.user_id for item in users_with_sequence]
    if len(set(user_ids)) != len(user_ids):
        raise ValidationError("A user appears more than once in the sequence")
    sequences = sorted(item.sequence for item in users_with_sequence)
    if sequences != list(range(1, len(sequences) + 1)):
        raise ValidationError("Sequences must be contiguous and start at 1")
    return [item.user_id for item in sorted(users_with_sequence, key=lambda item: item.sequence)]


def resolve_assignees(
    db: Session,
    project_ids: List[int],
    user_ids: List[int],
    is_sequential: bool,
    users_with_sequence: Optional[List[UserSequence]] = None,
) -> List[ResolvedAssignee]:
    """Re-run the form's selection rules against the database.

    Every user must belong to at least one selected project; the assignment is
    booked against the first selected project (in submitted order) they belong to.
    """
    project_ids = list(dict.fromkeys(project_ids or []))
    if not project_ids:
        raise ValidationError("Please select at least one project")
    _load_projects(db, project_ids)

    members = members_by_project(db, project_ids)
    selection = AssignmentSelection(members, is_sequential=is_sequential)
    selection.select_projects(project_ids)

    if is_sequential and users_with_sequence:
        requested = _ordered_from_sequences(users_with_sequence)
    else:
        requested = list(dict.fromkeys(user_ids or []))

    for user_id in requested:
        try:
            selection.toggle_user(user_id, True)
        except ValueError:
            raise ValidationError(f"User {user_id} is not assigned to the selected projects")

    if not selection.is_valid():
        raise ValidationError("Please select at least one employee")

    payload = selection.payload()
    if is_sequential:
        ordered = [(item["user_id"], item["sequence"]) for item in payload["users_with_sequence"]]
    else:
        # stable order for storage; unordered mode carries no sequence
        ordered = [(user_id, None) for user_id in requested]

    resolved: List[ResolvedAssignee] = []
    for user_id, sequence in ordered:
        project_id = next(pid for pid in project_ids if user_id in members[pid])
        resolved.append((user_id, project_id, sequence))
    return resolved


def _ensure_can_read(task: Task, current_user: User):
    if can_view_all_tasks(current_user.role):
        return
    if any(a.user_id == current_user.user_id for a in task.assignments):
        return
    if task.created_by == current_user.user_id:
        return
    raise ForbiddenError("You do not have access to this task")


def _ensure_can_write(task: Task, current_user: User):
    if is_admin(current_user.role):
        return
    if is_software_engineer(current_user.role) and task.created_by == current_user.user_id:
        return
    raise ForbiddenError("Only an admin or the task creator can modify this task")


def list_tasks(db: Session, current_user: User) -> List[Task]:
    q = db.query(Task)
    if not can_view_all_tasks(current_user.role):
        q = q.join(TaskAssignment).filter(TaskAssignment.user_id == current_user.user_id)
    return q.order_by(Task.deadline, Task.task_id).all()


def get_task(db: Session, task_id: int, current_user: User) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise NotFoundError("Task not found")
    _ensure_can_read(task, current_user)
    return task


def create_task(db: Session, data: TaskCreate, current_user: User) -> Task:
    if not can_create_task(current_user.role):
        raise ForbiddenError("You are not allowed to create tasks")

    resolved = resolve_assignees(db, data.project_ids, data.user_ids, data.is_sequential, data.users_with_sequence)
    if is_software_engineer(current_user.role) and current_user.user_id not in {r[0] for r in resolved}:
        raise ForbiddenError("Software engineers can only create tasks assigned to themselves")

    task = Task(
        title=data.title.strip(),
        description=data.description,
        priority=_normalize_priority(data.priority),
        deadline=data.deadline,
        remark=data.remark,
        is_sequential=data.is_sequential,
        created_by=current_user.user_id,
    )
    task.projects = _load_projects(db, list(dict.fromkeys(data.project_ids)))
    for user_id, project_id, sequence in resolved:
        task.assignments.append(TaskAssignment(user_id=user_id, project_id=project_id, sequence=sequence))
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info(
        "[task] created task_id=%s sequential=%s assignees=%d",
        task.task_id, task.is_sequential, len(task.assignments),
    )
    return task


def _apply_assignees(db: Session, task: Task, resolved: List[ResolvedAssignee]):
    current: Dict[int, TaskAssignment] = {a.user_id: a for a in task.assignments}
    keep = {user_id for user_id, _, _ in resolved}

    for user_id, assignment in current.items():
        if user_id not in keep:
            task.assignments.remove(assignment)
    # clear sequences first so reordering never trips the per-task unique sequence
    for assignment in task.assignments:
        assignment.sequence = None
    db.flush()

    for user_id, project_id, sequence in resolved:
        assignment = current.get(user_id)
        if assignment is not None:
            assignment.project_id = project_id
            assignment.sequence = sequence
        else:
            task.assignments.append(TaskAssignment(user_id=user_id, project_id=project_id, sequence=sequence))
    db.flush()


def sequential_task_ids(db: Session, *criteria) -> List[int]:
    """Ids of sequential tasks with an assignment matching ``criteria``.

    Collect these before deleting a user or project; the cascade drops
    their assignments and leaves holes in the sequence.
    """
    rows = (
        db.query(TaskAssignment.task_id)
        .join(Task, Task.task_id == TaskAssignment.task_id)
        .filter(Task.is_sequential.is_(True), *criteria)
        .distinct()
        .all()
    )
    return [row[0] for row in rows]


def resequence_tasks(db: Session, task_ids: List[int]):
    """Renumber surviving assignments of each task to 1..N, keeping their order."""
    for task_id in task_ids:
        assignments = db.query(TaskAssignment).filter(TaskAssignment.task_id == task_id).all()
        assignments.sort(key=lambda a: (a.sequence is None, a.sequence or 0, a.assignment_id))
        for assignment in assignments:
            assignment.sequence = None
        db.flush()
        for position, assignment in enumerate(assignments, start=1):
            assignment.sequence = position
        db.flush()
        if assignments:
            logger.info("[task] resequenced task_id=%s assignees=%d", task_id, len(assignments))


def update_task(db: Session, task_id: int, data: TaskUpdate, current_user: User) -> Task:
    task = get_task(db, task_id, current_user)
    _ensure_can_write(task, current_user)

    updates = data.model_dump(
        exclude_none=True,
        include={"title", "description", "priority", "deadline", "remark"},
    )
    if "priority" in updates:
        updates["priority"] = _normalize_priority(updates["priority"])
    if "title" in updates and not updates["title"].strip():
        raise ValidationError("Title is required")
    for k, v in updates.items():
        setattr(task, k, v)

    assignee_fields = {"project_ids", "user_ids", "is_sequential", "users_with_sequence"}
    if assignee_fields & data.model_fields_set:
        is_sequential = task.is_sequential if data.is_sequential is None else data.is_sequential
        project_ids = data.project_ids if data.project_ids is not None else task.project_ids
        if data.user_ids is not None:
            user_ids = data.user_ids
        else:
            user_ids = [a.user_id for a in sorted(task.assignments, key=lambda a: (a.sequence or 0, a.assignment_id))]
        resolved = resolve_assignees(db, project_ids, user_ids, is_sequential, data.users_with_sequence)
        task.is_sequential = is_sequential
        task.projects = _load_projects(db, list(dict.fromkeys(project_ids)))
        _apply_assignees(db, task, resolved)

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int, current_user: User):
    task = get_task(db, task_id, current_user)
    _ensure_can_write(task, current_user)
    db.delete(task)
    db.commit()
    logger.info("[task] deleted task_id=%s by user_id=%s", task_id, current_user.user_id)


def update_assignment_status(
    db: Session, task_id: int, assignment_id: int, status: str, current_user: User,
) -> TaskAssignment:
    if status not in ASSIGNMENT_STATUSES:
        raise ValidationError(f"Invalid status: {status}")

    task = db.get(Task, task_id)
    if not task:
        raise NotFoundError("Task not found")
    assignment = next((a for a in task.assignments if a.assignment_id == assignment_id), None)
    if not assignment:
        raise NotFoundError("Task assignment not found")
    if not is_admin(current_user.role) and assignment.user_id != current_user.user_id:
        raise ForbiddenError("Only the assignee or an admin can change this status")

    if task.is_sequential and status != STATUS_PENDING and assignment.sequence:
        blocking = [
            a for a in task.assignments
            if a.sequence is not None and a.sequence < assignment.sequence and a.status != STATUS_COMPLETE
        ]
        if blocking:
            raise ConflictError("Previous assignees in the sequence have not completed their work")

    assignment.status = status
    db.commit()
    db.refresh(assignment)
    return assignment


def task_stats_for_user(db: Session, user_id: int) -> dict:
    rows = db.query(TaskAssignment.status).filter(TaskAssignment.user_id == user_id).all()
    statuses = [row[0] for row in rows]
    return {
        "pending": statuses.count(STATUS_PENDING),
        "ongoing": statuses.count(STATUS_ONGOING),
        "completed": statuses.count(STATUS_COMPLETE),
    }
