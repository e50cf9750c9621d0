import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///quiz-data.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
    }

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Cookie that carries the contestant id between registration and question 1
    CONTESTANT_COOKIE = os.getenv("CONTESTANT_COOKIE", "contestant-id")

    # Reads are retried on connection errors, writes are not
    STORE_READ_RETRIES = int(os.getenv("STORE_READ_RETRIES", 3))
    STORE_RETRY_DELAY = float(os.getenv("STORE_RETRY_DELAY", 0.2))

    CORRECT_ANSWER_LINES = (
        "Well done, you're smarter than you look",
        "Come on, that was a lucky guess wasn't it? I won't tell anyone...",
        "Way to go",
        "Your knowledge is impressive",
        "Even Santa couldn't answer that one!",
    )
    INCORRECT_ANSWER_LINES = (
        "Better luck with the next one",
        "Rudolph could have answered it",
        "You may get replaced by ChatGPT at this rate...",
        "How did you not know that?!?",
        "You've made the elves cry",
    )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    STORE_RETRY_DELAY = 0.0
