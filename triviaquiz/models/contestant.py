import enum

from extensions import db


class ContestantState(enum.Enum):
    REGISTERED = "registered"
    STARTED = "started"
    ANSWERING = "answering"
    FINISHED = "finished"


class Contestant(db.Model):
    """
    One registered participant in one quiz/group.
    Stored in the `scores` table; the row doubles as the running score.
    """
    __tablename__ = "scores"

    id = db.Column(db.Integer, primary_key=True)
    contestant_id = db.Column(db.String(64), unique=True, nullable=False)
    quiz_id = db.Column(db.String(100), db.ForeignKey("quizzes.quiz_id"), nullable=False)
    group = db.Column(db.String(100), nullable=False)  # always lowercase
    name = db.Column(db.String(100), nullable=False)

    correct_answers = db.Column(db.Integer, default=0, nullable=False)
    questions_answered = db.Column(db.Integer, default=0, nullable=False)
    started = db.Column(db.DateTime, nullable=True)
    finished = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        db.UniqueConstraint("quiz_id", "group", "name", name="uq_scores_quiz_group_name"),
        db.Index("ix_scores_quiz_group", "quiz_id", "group"),
    )

    @property
    def state(self):
        if self.finished is not None:
            return ContestantState.FINISHED
        if self.questions_answered:
            return ContestantState.ANSWERING
        if self.started is not None:
            return ContestantState.STARTED
        return ContestantState.REGISTERED

    @property
    def elapsed_seconds(self):
        """Whole seconds between start and finish, None until both are set."""
        if self.started is None or self.finished is None:
            return None
        return max(0, int((self.finished - self.started).total_seconds()))
