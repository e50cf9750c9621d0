from .quiz import Quiz
from .question import Question
from .contestant import Contestant, ContestantState
from .log_entry import LogEntry

__all__ = [
	"Quiz",
	"Question",
	"Contestant",
	"ContestantState",
	"LogEntry",
]
