"""A learner's full submission for one quiz attempt, and how it is scored."""

from __future__ import annotations

import time
from collections.abc import Sequence

from pydantic import ConfigDict, Field

from quizdomain.ids import generate_id
from quizdomain.models.base import DomainModel
from quizdomain.models.question import (
    AnyQuestion,
    MaterialQuestion,
    Question,
    find_question,
)
from quizdomain.models.user_answer import UserAnswer
from quizdomain.schemas.scoring import QuestionScore


def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def score_question(answer: UserAnswer, question: Question | MaterialQuestion) -> int:
    """
    Points for one answer/question pair, all or nothing.

    The selected choice ids must equal the correct answer as an exact ordered
    sequence; a text correct answer never matches.
    """
    if answer.selected_choice_ids == question.correct_answer:
        return question.points
    return 0


class AnswerSheet(DomainModel):
    """
    Immutable record of the answers a user submitted for a quiz.

    The sheet references its quiz by id only; scoring takes the quiz's
    current question list as an argument, so a sheet can be graded against a
    question set that changed after submission. Answers whose question is
    gone score 0.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    quiz_id: str
    user_id: str
    submission_time: int = Field(default_factory=now_millis, ge=0)
    user_answers: tuple[UserAnswer, ...] = ()

    def score(self, quiz_questions: Sequence[AnyQuestion]) -> int:
        """Total score of this sheet against ``quiz_questions``."""
        return sum(item.awarded for item in self.score_items(quiz_questions))

    def score_items(self, quiz_questions: Sequence[AnyQuestion]) -> list[QuestionScore]:
        """Per-answer scores, in submission order."""
        return [_score_answer(answer, quiz_questions) for answer in self.user_answers]


def _score_answer(
    answer: UserAnswer,
    quiz_questions: Sequence[AnyQuestion],
) -> QuestionScore:
    question = find_question(quiz_questions, answer.question_id)
    if question is None:
        return QuestionScore(question_id=answer.question_id, matched=False)

    if not isinstance(question, MaterialQuestion):
        return QuestionScore(
            question_id=answer.question_id,
            matched=True,
            awarded=score_question(answer, question),
        )

    # The sub-question total is added whether or not the sub-questions were
    # answered, on top of the per-sub-question scores.
    material_points = question.total_sub_question_points
    sub_scores: list[QuestionScore] = []
    for sub_question in question.sub_questions:
        sub_answer = answer.find_sub_answer(sub_question.id)
        if sub_answer is None:
            continue
        sub_scores.append(
            QuestionScore(
                question_id=sub_question.id,
                matched=True,
                awarded=score_question(sub_answer, sub_question),
            )
        )

    return QuestionScore(
        question_id=answer.question_id,
        matched=True,
        awarded=material_points + sum(s.awarded for s in sub_scores),
        material_points=material_points,
        sub_scores=sub_scores,
    )
