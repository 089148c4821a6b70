"""Score reporting for answer sheets."""

from collections.abc import Sequence

from loguru import logger

from quizdomain.exceptions import DomainValidationError
from quizdomain.models.answer_sheet import AnswerSheet
from quizdomain.models.question import AnyQuestion
from quizdomain.models.quiz import Quiz
from quizdomain.schemas.scoring import ScoreReport


class ScoringService:
    """Score answer sheets and report the per-answer breakdown."""

    def build_report(
        self,
        sheet: AnswerSheet,
        quiz_questions: Sequence[AnyQuestion],
    ) -> ScoreReport:
        """
        Score every answer on the sheet.

        Args:
            sheet: Submitted answers, scored in submission order
            quiz_questions: Current questions of the quiz; the first question
                with a matching id is used

        Returns:
            ScoreReport whose total equals ``sheet.score(quiz_questions)``
        """
        items = sheet.score_items(quiz_questions)
        total = sum(item.awarded for item in items)
        unmatched = [item.question_id for item in items if not item.matched]

        if unmatched:
            logger.debug(
                "Answers reference unknown questions",
                sheet_id=sheet.id,
                question_ids=unmatched,
            )
        logger.info(
            "Scored answer sheet",
            sheet_id=sheet.id,
            quiz_id=sheet.quiz_id,
            answers=len(items),
            total=total,
        )
        return ScoreReport(
            sheet_id=sheet.id,
            quiz_id=sheet.quiz_id,
            user_id=sheet.user_id,
            total=total,
            items=items,
        )

    def score_for_quiz(self, sheet: AnswerSheet, quiz: Quiz) -> ScoreReport:
        """
        Score a sheet against the quiz it was submitted for.

        Raises:
            DomainValidationError: If the sheet was submitted for a different quiz
        """
        if sheet.quiz_id != quiz.id:
            raise DomainValidationError(
                f"Answer sheet '{sheet.id}' was submitted for quiz "
                f"'{sheet.quiz_id}', not '{quiz.id}'",
                field="quiz_id",
                details={"sheet_quiz_id": sheet.quiz_id, "expected_quiz_id": quiz.id},
            )
        return self.build_report(sheet, quiz.questions)
