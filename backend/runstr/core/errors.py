"""
Error taxonomy shared by the extraction, analytics and task layers.

Every error carries a human-readable message that is returned to callers
unchanged inside a failure envelope.
"""


class RunstrError(Exception):
    """Base class for failures surfaced to task callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInputError(RunstrError):
    """No text was given to the note extractor."""

    def __init__(self, message: str = "No content provided to parse"):
        super().__init__(message)


class EmptyActivityListError(RunstrError):
    """No activities (or an empty list) were given to the summarizer."""

    def __init__(self, message: str = "No activities provided for summary"):
        super().__init__(message)


class UnknownOperationError(RunstrError):
    """The dispatcher was asked for a task name it does not know."""

    def __init__(self, task_name: str):
        super().__init__(f"Unknown task: {task_name}")
        self.task_name = task_name


class InvalidParamsError(RunstrError):
    """Task parameters did not pass validation."""

    def __init__(self, task_name: str, detail: str):
        super().__init__(f"Invalid parameters for {task_name}: {detail}")
        self.task_name = task_name
        self.detail = detail
