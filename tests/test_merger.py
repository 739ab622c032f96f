"""
Progress merging tests: single section and whole account.
"""

from platypus.classroom import merge_account, merge_section
from platypus.classroom.merger import section_progress_payload
from platypus.schemas import Course, ProgressDocument, Section


def _doc(sections, course_id="algebra", user_id="u1"):
    return ProgressDocument(user_id=user_id, course_id=course_id, sections=sections)


class TestMergeSection:

    def test_example_scenario(self, algebra):
        doc = _doc({"intro": {"progress": 0.5, "steps": {"s1": 80}}})
        merged = merge_section(doc, algebra, algebra.get_section("intro"))
        assert merged.progress == 0.5
        assert merged.steps == {"s1": 80, "s2": None}

    def test_no_document(self, algebra):
        merged = merge_section(None, algebra, algebra.get_section("intro"))
        assert merged.progress == 0.0
        assert merged.steps == {"s1": None, "s2": None}

    def test_section_not_started(self, algebra):
        doc = _doc({"intro": {"progress": 1.0, "steps": {"s1": 1, "s2": 2}}})
        merged = merge_section(doc, algebra, algebra.get_section("quadratics"))
        assert merged.progress == 0.0
        assert merged.steps == {"s1": None, "s2": None}

    def test_every_declared_step_present(self, make_course):
        course = make_course(["a"])
        doc = _doc({"a": {"progress": 0.2, "steps": {}}})
        merged = merge_section(doc, course, course.get_section("a"))
        assert list(merged.steps) == course.get_section("a").steps

    def test_stale_step_dropped(self, algebra):
        doc = _doc({"intro": {"progress": 0.5, "steps": {"s1": 80, "removed": 10}}})
        merged = merge_section(doc, algebra, algebra.get_section("intro"))
        assert "removed" not in merged.steps
        assert merged.steps == {"s1": 80, "s2": None}

    def test_scores_passed_through(self, algebra):
        scores = {"attempts": [1, 0, 1], "hint": True}
        doc = _doc({"intro": {"progress": 0.5, "steps": {"s2": scores}}})
        merged = merge_section(doc, algebra, algebra.get_section("intro"))
        assert merged.steps["s2"] == scores

    def test_document_for_other_course_ignored(self, algebra):
        doc = _doc({"intro": {"progress": 0.9, "steps": {"s1": 1}}}, course_id="geometry")
        merged = merge_section(doc, algebra, algebra.get_section("intro"))
        assert merged.progress == 0.0

    def test_payload_nesting(self, algebra):
        section = algebra.get_section("intro")
        merged = merge_section(None, algebra, section)
        payload = section_progress_payload(algebra, section, merged)
        assert payload == {"algebra": {"intro": {"progress": 0.0, "steps": {"s1": None, "s2": None}}}}


class TestMergeAccount:

    def _shapes(self, *courses: Course):
        shapes = {course.id: course.shape() for course in courses}
        return shapes.get

    def test_merges_stored_sections_only(self, algebra):
        doc = _doc({"intro": {"progress": 0.5, "steps": {"s1": 80}}})
        result = merge_account([doc], self._shapes(algebra))
        assert result == {
            "algebra": {"intro": {"progress": 0.5, "steps": {"s1": 80, "s2": None}}},
        }

    def test_several_courses(self, algebra, make_course):
        other = make_course(["x"], course_id="geometry")
        docs = [
            _doc({"intro": {"progress": 1.0, "steps": {"s1": 1, "s2": 2}}}),
            _doc({"x": {"progress": 0.0, "steps": {}}}, course_id="geometry"),
        ]
        result = merge_account(docs, self._shapes(algebra, other))
        assert set(result) == {"algebra", "geometry"}
        assert result["geometry"]["x"]["steps"] == {"s1": None, "s2": None}

    def test_stale_section_skipped(self, algebra):
        doc = _doc({
            "intro": {"progress": 0.5, "steps": {"s1": 80}},
            "removed-section": {"progress": 1.0, "steps": {"s1": 1}},
        })
        result = merge_account([doc], self._shapes(algebra))
        assert list(result["algebra"]) == ["intro"]

    def test_missing_course_skipped(self, algebra):
        docs = [
            _doc({"intro": {"progress": 0.5, "steps": {}}}),
            _doc({"a": {"progress": 0.5, "steps": {}}}, course_id="retired"),
        ]
        result = merge_account(docs, self._shapes(algebra))
        assert list(result) == ["algebra"]

    def test_no_documents(self, algebra):
        assert merge_account([], self._shapes(algebra)) == {}

    def test_steps_follow_content_shape(self):
        course = Course(id="algebra", sections=[Section(id="intro", steps=["s2", "s3"])])
        doc = _doc({"intro": {"progress": 0.5, "steps": {"s1": 1, "s2": 2}}})
        result = merge_account([doc], self._shapes(course))
        assert result["algebra"]["intro"]["steps"] == {"s2": 2, "s3": None}
