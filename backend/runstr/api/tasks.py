"""
Task API endpoints.
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from runstr.api.deps import get_dispatcher
from runstr.core.errors import RunstrError, UnknownOperationError
from runstr.core.logging import get_logger
from runstr.services.tasks import TaskDispatcher, TaskEnvelope, TaskInfo

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=list[TaskInfo])
async def list_tasks(
    dispatcher: TaskDispatcher = Depends(get_dispatcher),
):
    """
    List available tasks.
    """
    return dispatcher.describe_tasks()


@router.post("/{task_name}", response_model=TaskEnvelope)
async def run_task(
    task_name: str,
    params: Optional[Any] = Body(None),
    dispatcher: TaskDispatcher = Depends(get_dispatcher),
):
    """
    Run a task with the JSON body as its parameters.
    """
    try:
        result = dispatcher.dispatch(task_name, params)
    except UnknownOperationError as e:
        logger.warning("Unknown task requested", task=task_name)
        return JSONResponse(
            status_code=404,
            content=TaskEnvelope(success=False, error=e.message).model_dump(),
        )
    except RunstrError as e:
        logger.warning("Task failed", task=task_name, error=e.message)
        return JSONResponse(
            status_code=400,
            content=TaskEnvelope(success=False, error=e.message).model_dump(),
        )

    return TaskEnvelope(success=True, result=result)
