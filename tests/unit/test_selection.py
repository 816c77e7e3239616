"""
Unit tests for the SelectionPolicy and review chapter collection.
"""

from uuid import uuid4

import pytest

from studyflow.db.models import QuizResult
from studyflow.quiz import NotFoundError, QuizValidationError
from studyflow.quiz.selection import SelectionPolicy, collect_review_chapters


def _result(*chapter_ids):
    return QuizResult(
        user_id="learner",
        questions=[{"question_id": str(uuid4()), "from_chapter": str(c)} for c in chapter_ids],
    )


class TestCollectReviewChapters:
    def test_requested_chapter_is_never_review(self):
        c1, c2, c3 = uuid4(), uuid4(), uuid4()
        results = [_result(c1, c2), _result(c3, c1)]

        review = collect_review_chapters(results, [c1, c2, c3], [c1])

        assert review == [c2, c3]

    def test_chapters_outside_course_are_ignored(self):
        c1, c2, foreign = uuid4(), uuid4(), uuid4()

        review = collect_review_chapters([_result(foreign, c2)], [c1, c2], [c1])

        assert review == [c2]

    def test_duplicates_collapse_in_first_seen_order(self):
        c1, c2, c3 = uuid4(), uuid4(), uuid4()
        results = [_result(c3, c2), _result(c2, c3, c3)]

        assert collect_review_chapters(results, [c1, c2, c3], [c1]) == [c3, c2]

    def test_answers_without_chapter_are_skipped(self):
        c1, c2 = uuid4(), uuid4()
        result = QuizResult(
            user_id="learner",
            questions=[
                {"question_id": str(uuid4()), "from_chapter": None},
                {"question_id": str(uuid4())},
                {"question_id": str(uuid4()), "from_chapter": str(c2)},
            ],
        )

        assert collect_review_chapters([result], [c1, c2], [c1]) == [c2]

    def test_no_history_means_no_review(self):
        assert collect_review_chapters([], [uuid4()], [uuid4()]) == []


class TestSelectQuestions:
    def test_new_pool_holds_only_exam_questions_from_requested_chapters(self, store, make_course, user_id):
        course, chapters = make_course({"C1": 3, "C2": 2, "C3": 4}, discussion=2)
        requested = [chapters["C1"].id, chapters["C3"].id]

        pools = SelectionPolicy(store).select_questions(course.id, requested, user_id)

        assert len(pools.new_pool) == 7
        assert all(q.type == "exam" for q in pools.new_pool)
        assert {q.chapter_id for q in pools.new_pool} == set(requested)

    def test_review_pool_built_from_previously_answered_chapter(
        self, store, make_course, add_past_result, user_id
    ):
        course, chapters = make_course({"C1": 3, "C2": 2}, discussion=1)
        add_past_result([chapters["C2"]])

        pools = SelectionPolicy(store).select_questions(course.id, [chapters["C1"].id], user_id)

        assert pools.review_chapter_ids == [chapters["C2"].id]
        assert len(pools.review_pool) == 2
        assert {q.chapter_id for q in pools.review_pool} == {chapters["C2"].id}
        assert all(q.type == "exam" for q in pools.review_pool)

    def test_requesting_the_past_chapter_empties_review_pool(
        self, store, make_course, add_past_result, user_id
    ):
        course, chapters = make_course({"C1": 3, "C2": 2})
        add_past_result([chapters["C2"]])

        pools = SelectionPolicy(store).select_questions(
            course.id, [chapters["C1"].id, chapters["C2"].id], user_id
        )

        assert pools.review_pool == []
        assert pools.review_chapter_ids == []
        assert len(pools.new_pool) == 5

    def test_only_most_recent_five_results_are_scanned(self, store, make_course, add_past_result, user_id):
        course, chapters = make_course({"C1": 1, "C2": 1, "C3": 1})
        add_past_result([chapters["C3"]], minutes_ago=60)
        for minutes in range(5):
            add_past_result([chapters["C2"]], minutes_ago=minutes)

        pools = SelectionPolicy(store).select_questions(course.id, [chapters["C1"].id], user_id)

        assert pools.review_chapter_ids == [chapters["C2"].id]

    def test_other_users_history_is_ignored(
        self, store, make_course, add_past_result, user_id, other_user_id
    ):
        course, chapters = make_course({"C1": 1, "C2": 1})
        add_past_result([chapters["C2"]], user_id=other_user_id)

        pools = SelectionPolicy(store).select_questions(course.id, [chapters["C1"].id], user_id)

        assert pools.review_pool == []

    def test_history_from_other_course_is_ignored(self, store, make_course, add_past_result, user_id):
        course, chapters = make_course({"C1": 1, "C2": 1})
        _, other_chapters = make_course({"X1": 3}, title="Chemistry")
        add_past_result([other_chapters["X1"]])

        pools = SelectionPolicy(store).select_questions(course.id, [chapters["C1"].id], user_id)

        assert pools.review_pool == []

    def test_empty_request_is_a_validation_failure(self, store, make_course, user_id):
        course, _ = make_course({"C1": 1})

        with pytest.raises(QuizValidationError):
            SelectionPolicy(store).select_questions(course.id, [], user_id)

    def test_course_without_chapters_is_not_found(self, store, user_id):
        course = store.create_course(user_id, "Empty course")

        with pytest.raises(NotFoundError):
            SelectionPolicy(store).select_questions(course.id, [uuid4()], user_id)

    def test_selection_does_not_write(self, store, db_session, make_course, add_past_result, user_id):
        course, chapters = make_course({"C1": 2, "C2": 2})
        add_past_result([chapters["C2"]])
        db_session.commit()

        SelectionPolicy(store).select_questions(course.id, [chapters["C1"].id], user_id)

        assert not db_session.new
        assert not db_session.dirty
