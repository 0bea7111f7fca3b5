"""
Task Dispatcher - Routes named tasks to the extraction, analytics and feed layers.

Both transports use it: the HTTP API calls ``dispatch``/``run`` directly and
relay task requests go through ``handle_task_request``.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from runstr.core.errors import InvalidParamsError, RunstrError, UnknownOperationError
from runstr.core.logging import get_logger, track_task
from runstr.models.event import InboundEvent
from runstr.services.analytics import ActivitySummarizer
from runstr.services.extraction import NoteParser
from runstr.services.feed import (
    EventRouter,
    IngestStatus,
    RunningFeed,
    TemplateCatalog,
    WorkoutRecordStore,
)
from runstr.services.tasks.params import (
    ParseNoteParams,
    ReadFeedParams,
    ReadRecordsParams,
    ReadTemplatesParams,
    SummarizeActivitiesParams,
    TaskEnvelope,
    TaskInfo,
    TaskRequest,
)

logger = get_logger(__name__)


@dataclass
class Task:
    """A named operation with its parameter schema."""
    name: str
    description: str
    params_model: Type[BaseModel]
    handler: Callable[[Any], BaseModel]
    aliases: List[str] = field(default_factory=list)


class TaskDispatcher:
    """
    Registry of tasks over one set of stores.

    The stores are owned by the caller and handed in at construction, so
    several dispatchers never share state unless given the same stores.

    Usage:
        dispatcher = TaskDispatcher(RunningFeed(), TemplateCatalog(), WorkoutRecordStore())
        result = dispatcher.dispatch("parse_note", {"content": "Ran 5km in 25:30"})
    """

    def __init__(
        self,
        feed: RunningFeed,
        templates: TemplateCatalog,
        records: WorkoutRecordStore,
    ):
        self.feed = feed
        self.templates = templates
        self.records = records
        self.router = EventRouter(feed, templates, records)
        self.parser = NoteParser()
        self.summarizer = ActivitySummarizer()

        self._tasks: Dict[str, Task] = {}
        self._aliases: Dict[str, str] = {}
        self._register_default_tasks()

    def _register_default_tasks(self) -> None:
        """Register the default set of tasks."""
        self.register(Task(
            name="parse_note",
            description="Extract and parse running-related notes",
            params_model=ParseNoteParams,
            handler=lambda p: self.parser.parse(p.content),
            aliases=["running_notes"],
        ))
        self.register(Task(
            name="summarize_activities",
            description="Summarize running activities from a collection of notes",
            params_model=SummarizeActivitiesParams,
            handler=lambda p: self.summarizer.summarize(p.activities),
            aliases=["activity_summary"],
        ))
        self.register(Task(
            name="read_feed",
            description="Get a feed of recent running-related notes",
            params_model=ReadFeedParams,
            handler=lambda p: self.feed.read(
                limit=p.limit, since=p.since, until=p.until,
                include_workouts=p.include_workouts,
            ),
            aliases=["get_running_feed"],
        ))
        self.register(Task(
            name="read_templates",
            description="Get running exercise and workout templates",
            params_model=ReadTemplatesParams,
            handler=lambda p: self.templates.read(
                limit=p.limit, since=p.since, until=p.until, type=p.type,
            ),
            aliases=["get_workout_templates"],
        ))
        self.register(Task(
            name="read_records",
            description="Get workout records",
            params_model=ReadRecordsParams,
            handler=lambda p: self.records.read(
                limit=p.limit, since=p.since, until=p.until, completed=p.completed,
            ),
            aliases=["get_workout_records"],
        ))

    def register(self, task: Task) -> None:
        """
        Register a task under its name and aliases.

        Args:
            task: Task definition
        """
        self._tasks[task.name] = task
        for alias in task.aliases:
            self._aliases[alias] = task.name
        logger.debug("Registered task", task=task.name, aliases=task.aliases)

    def get_task(self, name: str) -> Task:
        """
        Look up a task by name or alias.

        Raises:
            UnknownOperationError: If the name is not registered
        """
        task = self._tasks.get(self._aliases.get(name, name))
        if task is None:
            raise UnknownOperationError(name)
        return task

    def describe_tasks(self) -> List[TaskInfo]:
        """Name and description of every registered task."""
        return [
            TaskInfo(name=task.name, description=task.description)
            for task in self._tasks.values()
        ]

    # ========================================
    # Execution
    # ========================================

    def dispatch(self, name: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Run a task and return its JSON-ready result.

        Args:
            name: Task name or alias
            params: Task parameters

        Returns:
            Task result as a plain dict

        Raises:
            UnknownOperationError: If the task is not registered
            InvalidParamsError: If the parameters fail validation
            RunstrError: Domain failures raised by the task
        """
        task = self.get_task(name)

        try:
            parsed = task.params_model.model_validate(params or {})
        except ValidationError as e:
            raise InvalidParamsError(task.name, _describe_validation_error(e)) from e

        with track_task(logger, task.name, requested=name):
            result = task.handler(parsed)
        return result.model_dump(mode="json")

    def run(self, name: str, params: Optional[dict[str, Any]] = None) -> TaskEnvelope:
        """
        Run a task and wrap the outcome in an envelope.

        Domain failures become ``success=False`` envelopes carrying the
        error message.
        """
        try:
            result = self.dispatch(name, params)
        except RunstrError as e:
            logger.warning("Task failed", task=name, error_type=type(e).__name__, error=e.message)
            return TaskEnvelope(success=False, error=e.message)

        return TaskEnvelope(success=True, result=result)

    def handle_task_request(self, content: str) -> TaskEnvelope:
        """
        Handle the JSON body of a task-request message.

        Args:
            content: JSON text ``{"task": name, "params": {...}}``

        Returns:
            TaskEnvelope to publish back to the requester
        """
        try:
            request = TaskRequest.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Malformed task request", error=str(e))
            return TaskEnvelope(success=False, error=f"Malformed task request: {e}")

        logger.info("Received task request", task=request.task)

        try:
            return self.run(request.task, request.params)
        except Exception as e:
            # The requester still gets an answer published back
            logger.exception("Error handling task request", task=request.task)
            return TaskEnvelope(success=False, error=str(e))

    # ========================================
    # Ingestion
    # ========================================

    def ingest_event(self, event: InboundEvent) -> IngestStatus:
        """Store an inbound event in the collection for its kind."""
        return self.router.ingest(event)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(item) for item in detail.get("loc", ()))
        parts.append(f"{location}: {detail.get('msg')}" if location else detail.get("msg", ""))
    return "; ".join(parts)
