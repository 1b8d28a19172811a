"""Exception taxonomy for the approval workflow engine."""


class WorkflowError(Exception):
    """Base class for all grantflow errors."""


class UnknownPermission(WorkflowError, KeyError):
    """Raised when a requested permission is not in the catalog.

    The engine never decides whether to drop the permission or reject the
    whole request; that is the caller's choice.
    """

    def __init__(self, permission: str):
        super().__init__(f"Unknown permission: {permission}")
        self.permission = permission

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class UnknownStage(WorkflowError, KeyError):
    """Raised when a stage label has no configured approver.

    Rendering code treats this as "no approver to display".
    """

    def __init__(self, stage: str):
        super().__init__(f"Unknown stage: {stage}")
        self.stage = stage

    def __str__(self) -> str:
        return self.args[0]


class ConfigurationError(WorkflowError):
    """Raised while loading the catalog, directory or policy table.

    Only ever raised at startup, never while serving a request.
    """


class InvalidDecision(WorkflowError):
    """Raised when a decision cannot be recorded against an approval snapshot."""

    def __init__(self, message: str, stage: str, current_stage: str):
        super().__init__(message)
        self.stage = stage
        self.current_stage = current_stage
