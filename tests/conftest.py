"""Shared fixtures: small courses, a content root on disk, and stores."""

import json
from pathlib import Path

import pytest
import yaml

from platypus.classroom import ContentStore, ProgressStore
from platypus.schemas import Course, Section, TocChapter, TocCourse, CourseType
from platypus.utils import load_lookups


def _make_course(section_ids, course_id="algebra", toc=None, extra=None):
    """Build a course whose sections each have steps s1, s2."""
    extra = extra or {}
    return Course(
        id=course_id,
        sections=[
            Section(id=sid, title=sid.title(), steps=["s1", "s2"], **extra.get(sid, {}))
            for sid in section_ids
        ],
        toc=toc,
    )


@pytest.fixture
def make_course():
    return _make_course


@pytest.fixture
def algebra():
    return _make_course(["intro", "linear-eq", "quadratics"])


@pytest.fixture
def learning_path():
    toc = TocCourse(
        id="paths",
        type=CourseType.LEARNING_PATH,
        chapters=[
            TocChapter(id="start", sections=["qubits"]),
            TocChapter(id="tracks", sections=["gates", "measurement", "algorithms"]),
        ],
        paths={
            "qubits": ["gates", "measurement"],
            "gates": ["algorithms"],
            "measurement": ["algorithms"],
            "algorithms": [],
        },
    )
    return _make_course(["qubits", "gates", "measurement", "algorithms"], course_id="paths", toc=toc)


COURSES = {
    "algebra": {
        "id": "algebra",
        "title": "Algebra",
        "sections": [
            {"id": "intro", "title": "Introduction", "steps": ["s1", "s2"], "glossary": ["matrix"]},
            {"id": "linear-eq", "title": "Linear Equations", "steps": ["s1", "s2", "s3"],
             "glossary": ["matrix", "vector"]},
            {"id": "quadratics", "title": "Quadratics", "steps": ["s1"]},
        ],
    },
    "paths": {
        "id": "paths",
        "title": "Paths",
        "sections": [
            {"id": "qubits", "title": "Qubits", "steps": ["bloch"]},
            {"id": "gates", "title": "Gates", "steps": ["x-gate"]},
            {"id": "algorithms", "title": "Algorithms", "steps": ["grover"]},
        ],
    },
}

TOC = {
    "courses": [
        {
            "id": "algebra",
            "title": "Algebra",
            "chapters": [
                {"id": "basics", "title": "Basics", "sections": ["intro", "linear-eq"]},
                {"id": "advanced", "title": "Advanced", "sections": ["quadratics"]},
            ],
        },
        {
            "id": "paths",
            "title": "Paths",
            "type": "learning-path",
            "paths": {"qubits": ["gates", "algorithms"], "gates": ["algorithms"]},
        },
    ]
}


def write_json(path: Path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def write_yaml(path: Path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


@pytest.fixture
def content_root(tmp_path):
    """Content directory with two courses, a TOC and English/German lookups."""
    root = tmp_path / "content"
    for course_id, data in COURSES.items():
        write_json(root / course_id / "data_en.json", data)

    german = json.loads(json.dumps(COURSES["algebra"]))
    german["locale"] = "de"
    german["sections"][0]["title"] = "Einleitung"
    write_json(root / "algebra" / "data_de.json", german)

    write_yaml(root / "config.yaml", {"locales": ["en", "de"], "textbook_home": "/start"})
    write_yaml(root / "toc.yaml", TOC)
    write_yaml(root / "translations" / "en" / "glossary.yaml", {
        "matrix": {"title": "Matrix", "text": "A grid of numbers."},
        "vector": {"title": "Vector", "text": "A list of numbers."},
    })
    write_yaml(root / "translations" / "en" / "strings.yaml", {"Next": "Next"})
    write_yaml(root / "translations" / "en" / "notations.yaml", {"ket": "|x>"})
    write_yaml(root / "translations" / "de" / "glossary.yaml", {
        "matrix": {"title": "Matrix", "text": "Ein Zahlengitter."},
    })
    write_yaml(root / "translations" / "de" / "strings.yaml", {"Next": "Weiter"})
    return root


@pytest.fixture
def lookups(content_root):
    return load_lookups(content_root)


@pytest.fixture
def content_store(content_root, lookups):
    return ContentStore(content_root, toc=lookups.toc)


@pytest.fixture
def progress_store(tmp_path):
    return ProgressStore(tmp_path / "progress.db")
