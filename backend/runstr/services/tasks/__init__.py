"""
Tasks module - Named task registry and failure envelopes.
"""
from runstr.services.tasks.dispatcher import Task, TaskDispatcher
from runstr.services.tasks.params import TaskEnvelope, TaskInfo, TaskRequest

__all__ = [
    "Task",
    "TaskDispatcher",
    "TaskEnvelope",
    "TaskInfo",
    "TaskRequest",
]
