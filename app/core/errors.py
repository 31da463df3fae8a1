"""Workflow error taxonomy.

Services raise these; the HTTP layer maps each family to a status code in
``app.main``. Every error carries a machine-readable ``kind`` and a
human-readable message.
"""


class WorkflowError(Exception):
    kind = "workflow_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WorkflowError):
    kind = "validation_error"
    status_code = 400


class MarksOutOfRange(ValidationError):
    kind = "marks_out_of_range"


class ConflictError(WorkflowError):
    kind = "conflict"
    status_code = 409


class AlreadySubmitted(ConflictError):
    kind = "already_submitted"


class LateWithoutApproval(ConflictError):
    kind = "late_without_approval"


class DuplicateLateRequest(ConflictError):
    kind = "duplicate_late_request"


class AlreadyResponded(ConflictError):
    kind = "already_responded"


class AuthorizationError(WorkflowError):
    kind = "authorization_error"
    status_code = 403


class NotFoundError(WorkflowError):
    kind = "not_found"
    status_code = 404
