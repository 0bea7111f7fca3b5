"""
Services module - Application business logic layer.

Modules:
- extraction: Measurement extraction from free-text running notes
- analytics: Activity summaries and pace trends
- feed: Bounded stores for notes, templates and workout records
- tasks: Named task registry shared by the HTTP and relay transports
"""
# Main exports for convenience
from runstr.services.tasks import TaskDispatcher, TaskEnvelope

__all__ = [
    "TaskDispatcher",
    "TaskEnvelope",
]
