from extensions import db


class Quiz(db.Model):
    __tablename__ = "quizzes"

    quiz_id = db.Column(db.String(100), primary_key=True)
    name = db.Column(db.String(200), nullable=False)

    questions = db.relationship(
        "Question",
        back_populates="quiz",
        order_by="Question.sort_order",
        cascade="all, delete-orphan",
    )
