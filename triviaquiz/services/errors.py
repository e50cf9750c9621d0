class QuizError(Exception):
    """Base class for expected, recoverable quiz failures."""
    status_code = 400
    kind = "quiz_error"

    def __init__(self, msg=None):
        super().__init__(msg or self.__class__.__doc__ or self.kind)
        self.msg = str(self.args[0])

    def to_dict(self):
        return {"status": "error", "error": self.kind, "msg": self.msg}


class NotFound(QuizError):
    """Not found."""
    status_code = 404
    kind = "not_found"


class QuizNotFound(NotFound):
    """Quiz not found."""


class QuestionNotFound(NotFound):
    """Question not found."""


class ContestantNotFound(NotFound):
    """Contestant not found."""


class AlreadyRegistered(QuizError):
    """Someone with this name has already started the quiz in this group."""
    status_code = 409
    kind = "already_registered"


class StateMismatch(QuizError):
    """Submitted progress does not match the stored progress."""
    status_code = 409
    kind = "state_mismatch"


class InvalidAnswerFormat(QuizError):
    """Answer must be one of the options 1-4."""
    kind = "invalid_answer"


class InvalidRegistration(QuizError):
    """A contestant name is required."""
    kind = "invalid_registration"


class StoreUnavailable(QuizError):
    """The quiz database is unavailable, please try again."""
    status_code = 503
    kind = "store_unavailable"
