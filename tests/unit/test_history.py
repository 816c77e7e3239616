"""
Unit tests for HistoryReporter.
"""

from studyflow.quiz import QuizPolicy
from studyflow.quiz.history import HistoryReporter


class TestGetHistory:
    def test_course_without_chapters_returns_empty(self, store, add_past_result, make_course, user_id):
        _, chapters = make_course({"C1": 1})
        add_past_result([chapters["C1"]])
        empty_course = store.create_course(user_id, "Empty")

        assert HistoryReporter(store).get_history(user_id, empty_course.id) == []

    def test_newest_first_capped_at_twenty(self, store, make_course, add_past_result, user_id):
        course, chapters = make_course({"C1": 1})
        inserted = [add_past_result([chapters["C1"]], minutes_ago=minutes) for minutes in range(25)]

        history = HistoryReporter(store).get_history(user_id, course.id)

        assert len(history) == 20
        assert [r.id for r in history] == [r.id for r in inserted[:20]]

    def test_results_are_not_filtered_by_course(self, store, make_course, add_past_result, user_id):
        biology, bio_chapters = make_course({"C1": 1})
        _, chem_chapters = make_course({"X1": 1}, title="Chemistry")
        chem_result = add_past_result([chem_chapters["X1"]], minutes_ago=1)
        bio_result = add_past_result([bio_chapters["C1"]], minutes_ago=2)

        history = HistoryReporter(store).get_history(user_id, biology.id)

        assert [r.id for r in history] == [chem_result.id, bio_result.id]

    def test_other_users_results_are_excluded(
        self, store, make_course, add_past_result, user_id, other_user_id
    ):
        course, chapters = make_course({"C1": 1})
        mine = add_past_result([chapters["C1"]])
        add_past_result([chapters["C1"]], user_id=other_user_id)

        history = HistoryReporter(store).get_history(user_id, course.id)

        assert [r.id for r in history] == [mine.id]

    def test_limit_follows_policy(self, store, make_course, add_past_result, user_id):
        course, chapters = make_course({"C1": 1})
        for minutes in range(4):
            add_past_result([chapters["C1"]], minutes_ago=minutes)

        history = HistoryReporter(store, QuizPolicy(history_limit=2)).get_history(user_id, course.id)

        assert len(history) == 2
