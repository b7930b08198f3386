"""Word-test (exam) scheduling."""

import logging

from ..models import Day, DayGroup, ExamAssignment
from .constraints import ConstraintIndex
from .policies import word_test_time

logger = logging.getLogger(__name__)


class WordTestScheduler:
    """Attaches one word test per class to rounds that carry one.

    The test is always run by the class's resolved homeroom teacher. When
    there is no homeroom teacher, that teacher is exam-blocked for the day,
    or that teacher already runs another class's test at the same time, the
    test is omitted rather than handed to a substitute.
    """

    def __init__(self, day_group: DayGroup, constraints: ConstraintIndex) -> None:
        self.day_group = day_group
        self.constraints = constraints
        # (day, word-test time, teacher) already running a test
        self._running: set[tuple[Day, str, str]] = set()

    def has_word_test(self, round_number: int) -> bool:
        return word_test_time(self.day_group, round_number) is not None

    def schedule(
        self,
        class_id: str,
        round_number: int,
        day: Day,
        homeroom: str | None,
    ) -> ExamAssignment | None:
        """Build the word test for a class round, if one applies.

        Args:
            class_id: Class taking the test
            round_number: Round the test opens
            day: Day of the week
            homeroom: Resolved homeroom teacher for the class

        Returns:
            ExamAssignment, or None when the round has no test or it is skipped
        """
        time = word_test_time(self.day_group, round_number)
        if time is None:
            return None

        if homeroom is None:
            logger.debug(f"Skipping word test for {class_id} on {day.value}: no homeroom teacher")
            return None

        if self.constraints.is_exam_blocked(homeroom, day):
            logger.debug(
                f"Skipping word test for {class_id} on {day.value}: "
                f"{homeroom} is exam-blocked"
            )
            return None

        key = (day, time, homeroom)
        if key in self._running:
            logger.debug(
                f"Skipping word test for {class_id} on {day.value}: "
                f"{homeroom} already runs one at {time}"
            )
            return None
        self._running.add(key)

        return ExamAssignment(
            class_id=class_id,
            teacher=homeroom,
            time=time,
            round=round_number,
        )
