"""Unit tests for the resume document model and its defaults."""

import json

import pytest

from resume_maker.contexts.editing import (
    Document,
    DocumentFormatError,
    Experience,
    Project,
    Theme,
    default_document,
    empty_education,
    empty_experience,
    empty_project,
)


@pytest.mark.unit
def test_default_document_contents():
    """Test the starter document shown when nothing is stored."""
    doc = default_document()

    assert doc.meta.theme is Theme.CLASSIC
    assert doc.meta.dark is False
    assert doc.profile.name == "Your Name"
    assert doc.profile.title == "Full-Stack Developer"
    assert doc.skills == ["JavaScript", "React", "Node.js", "Express", "MongoDB", "TailwindCSS"]
    assert len(doc.experience) == 1
    assert doc.experience[0].company == "Awesome Co"
    assert len(doc.experience[0].bullets) == 2
    assert doc.education[0].degree == "B.Tech in Computer Science"
    assert doc.projects[0].tech == ["Next.js", "PostgreSQL", "Prisma", "Razorpay"]


@pytest.mark.unit
def test_default_document_is_fresh_each_call():
    """Test that callers never share the starter document's lists."""
    first = default_document()
    second = default_document()

    first.skills.append("Rust")
    first.experience[0].bullets.clear()

    assert "Rust" not in second.skills
    assert len(second.experience[0].bullets) == 2


@pytest.mark.unit
def test_empty_entry_factories():
    """Test the entries the form appends to each section."""
    assert empty_experience() == Experience(bullets=[""])
    assert empty_education().school == ""
    assert empty_project().tech == []


@pytest.mark.unit
def test_clone_shares_no_mutable_structure(document):
    """Test that a clone is fully independent of its source."""
    clone = document.clone()

    assert clone == document
    assert clone is not document

    clone.profile.name = "Changed"
    clone.skills.append("Go")
    clone.experience[0].bullets[0] = "Changed bullet"
    clone.projects[0].tech.append("Redis")
    clone.meta.dark = True

    assert document.profile.name == "Your Name"
    assert "Go" not in document.skills
    assert document.experience[0].bullets[0].startswith("Built and scaled")
    assert "Redis" not in document.projects[0].tech
    assert document.meta.dark is False


@pytest.mark.unit
def test_serialization_roundtrip(document):
    """Test that to_dict/from_dict preserve the document through JSON."""
    restored = Document.from_dict(json.loads(json.dumps(document.to_dict())))
    assert restored == document


@pytest.mark.unit
def test_to_dict_uses_wire_keys(document):
    """Test the serialized shape used by local storage and the remote API."""
    data = document.to_dict()

    assert set(data) == {"meta", "profile", "skills", "experience", "education", "projects"}
    assert data["meta"] == {"theme": "classic", "dark": False}
    assert data["experience"][0]["bullets"] == document.experience[0].bullets


@pytest.mark.unit
def test_absent_tech_is_not_serialized():
    """Test that a legacy project without tech stays without a tech key."""
    doc = Document(projects=[Project(name="Legacy")])
    data = doc.to_dict()

    assert "tech" not in data["projects"][0]
    assert Document.from_dict(data).projects[0].tech is None


@pytest.mark.unit
def test_tech_tags_reads_absent_as_empty():
    """Test that absent and empty tech both read as no tags."""
    assert Project(tech=None).tech_tags == []
    assert Project(tech=[]).tech_tags == []
    assert Project(tech=["Go"]).tech_tags == ["Go"]


@pytest.mark.unit
def test_from_dict_fills_missing_keys():
    """Test that partial data loads with empty defaults."""
    doc = Document.from_dict({"profile": {"name": "Ada"}, "experience": [{"role": "Analyst"}]})

    assert doc.profile.name == "Ada"
    assert doc.profile.email == ""
    assert doc.skills == []
    assert doc.experience[0].role == "Analyst"
    assert doc.experience[0].bullets == []
    assert doc.meta.theme is Theme.CLASSIC


@pytest.mark.unit
def test_from_dict_unknown_theme_falls_back_to_classic():
    """Test that an unknown stored theme loads as classic."""
    doc = Document.from_dict({"meta": {"theme": "brutalist"}})
    assert doc.meta.theme is Theme.CLASSIC


@pytest.mark.unit
def test_from_dict_modern_theme():
    doc = Document.from_dict({"meta": {"theme": "modern", "dark": True}})
    assert doc.meta.theme is Theme.MODERN
    assert doc.meta.dark is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "data, location",
    [
        ([], "document"),
        ({"skills": "Python"}, "skills"),
        ({"experience": [{"bullets": "one"}]}, "experience.0.bullets"),
        ({"profile": {"name": 42}}, "profile.name"),
        ({"projects": [{"tech": [1, 2]}]}, "projects.0.tech.0"),
        ({"meta": {"dark": "yes"}}, "meta.dark"),
    ],
)
def test_from_dict_rejects_wrong_shapes(data, location):
    """Test that values of the wrong JSON shape raise DocumentFormatError."""
    with pytest.raises(DocumentFormatError) as exc_info:
        Document.from_dict(data)

    assert exc_info.value.location == location
