"""Quiz domain models."""

from quizdomain.models.answer_sheet import AnswerSheet
from quizdomain.models.choice import Choice
from quizdomain.models.question import AnyQuestion, MaterialQuestion, Question
from quizdomain.models.question_type import CHOICE_BASED_TYPES, QuestionType
from quizdomain.models.quiz import Quiz
from quizdomain.models.user_answer import UserAnswer

__all__ = [
    "AnswerSheet",
    "AnyQuestion",
    "CHOICE_BASED_TYPES",
    "Choice",
    "MaterialQuestion",
    "Question",
    "QuestionType",
    "Quiz",
    "UserAnswer",
]
