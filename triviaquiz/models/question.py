from extensions import db


class Question(db.Model):
    """Multiple choice question with four options (linked to Quiz)."""
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.String(100), db.ForeignKey("quizzes.quiz_id"), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False)

    question = db.Column(db.String(500), nullable=False)
    answer_1 = db.Column(db.String(200), default="")
    answer_2 = db.Column(db.String(200), default="")
    answer_3 = db.Column(db.String(200), default="")
    answer_4 = db.Column(db.String(200), default="")
    correct_answer = db.Column(db.Integer, nullable=False)  # 1-4
    active = db.Column(db.Boolean, default=True, nullable=False)

    quiz = db.relationship("Quiz", back_populates="questions")

    __table_args__ = (
        db.UniqueConstraint("quiz_id", "sort_order", name="uq_question_quiz_sort_order"),
        db.Index("ix_question_quiz", "quiz_id"),
    )

    def get_answers(self):
        return [
            {"number": number, "text": text or ""}
            for number, text in enumerate(
                (self.answer_1, self.answer_2, self.answer_3, self.answer_4), start=1
            )
        ]
