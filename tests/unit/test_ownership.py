"""
Unit tests for the ownership verifiers.
"""

from uuid import uuid4

import pytest

from studyflow.quiz import (
    NotFoundError,
    OwnershipError,
    StoreOwnershipVerifier,
    TrustingOwnershipVerifier,
)


@pytest.fixture
def verifier(store):
    return StoreOwnershipVerifier(store)


class TestCourseOwnership:
    def test_owner_owns_course(self, verifier, make_course, user_id):
        course, _ = make_course({"C1": 1})
        assert verifier.owns_course(user_id, course.id) is True

    def test_foreign_course_is_not_found(self, verifier, make_course, other_user_id):
        course, _ = make_course({"C1": 1})

        assert verifier.owns_course(other_user_id, course.id) is False
        with pytest.raises(NotFoundError):
            verifier.verify_course(other_user_id, course.id)

    def test_unknown_course_is_not_found(self, verifier, user_id):
        with pytest.raises(NotFoundError):
            verifier.verify_course(user_id, uuid4())


class TestChapterOwnership:
    def test_chapters_of_the_course_pass(self, verifier, make_course, user_id):
        course, chapters = make_course({"C1": 1, "C2": 1})
        verifier.verify_chapters(user_id, course.id, [c.id for c in chapters.values()])

    def test_unknown_chapter_is_not_found(self, verifier, make_course, user_id):
        course, chapters = make_course({"C1": 1})

        with pytest.raises(NotFoundError):
            verifier.verify_chapters(user_id, course.id, [chapters["C1"].id, uuid4()])

    def test_chapter_from_another_course_is_rejected(self, verifier, make_course, user_id):
        course, chapters = make_course({"C1": 1})
        _, other = make_course({"X1": 1}, title="Chemistry")

        with pytest.raises(OwnershipError):
            verifier.verify_chapters(user_id, course.id, [chapters["C1"].id, other["X1"].id])

    def test_chapter_of_another_user_is_rejected(self, verifier, make_course, user_id, other_user_id):
        course, _ = make_course({"C1": 1})
        _, foreign = make_course({"B1": 1}, user_id=other_user_id)

        with pytest.raises(OwnershipError):
            verifier.verify_chapters(user_id, course.id, [foreign["B1"].id])


class TestAnswerChapterOwnership:
    def test_own_chapters_across_courses_pass(self, verifier, make_course, user_id):
        _, bio = make_course({"C1": 1})
        _, chem = make_course({"X1": 1}, title="Chemistry")

        verifier.verify_answer_chapters(user_id, [bio["C1"].id, chem["X1"].id])

    def test_foreign_chapter_is_rejected(self, verifier, make_course, user_id, other_user_id):
        _, foreign = make_course({"B1": 1}, user_id=other_user_id)

        with pytest.raises(OwnershipError):
            verifier.verify_answer_chapters(user_id, [foreign["B1"].id])

    def test_unknown_chapter_is_not_found(self, verifier, user_id):
        with pytest.raises(NotFoundError):
            verifier.verify_answer_chapters(user_id, [uuid4()])


class TestSessionOwnership:
    def test_own_session_passes(self, verifier, store, user_id):
        study_session = store.create_study_session(user_id, [uuid4()])
        verifier.verify_session(user_id, study_session.id)

    def test_foreign_session_is_not_found(self, verifier, store, user_id, other_user_id):
        study_session = store.create_study_session(other_user_id, [uuid4()])

        with pytest.raises(NotFoundError):
            verifier.verify_session(user_id, study_session.id)

    def test_unknown_session_is_not_found(self, verifier, user_id):
        with pytest.raises(NotFoundError):
            verifier.verify_session(user_id, uuid4())


class TestTrustingVerifier:
    def test_accepts_everything(self, user_id):
        verifier = TrustingOwnershipVerifier()

        assert verifier.owns_course(user_id, uuid4()) is True
        verifier.verify_course(user_id, uuid4())
        verifier.verify_chapters(user_id, uuid4(), [uuid4()])
        verifier.verify_answer_chapters(user_id, [uuid4()])
        verifier.verify_session(user_id, uuid4())
