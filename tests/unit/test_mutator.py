"""Unit tests for path-addressed mutations."""

import pytest

from resume_maker.contexts.editing import (
    Document,
    FieldPath,
    InvalidPathError,
    InvalidValueError,
    Project,
    Theme,
    add_array_item,
    empty_experience,
    read,
    remove_array_item,
    update,
)
from resume_maker.contexts.editing.mutator import (
    experience_bullet,
    experience_field,
    meta_field,
    profile_field,
    project_tech,
    skill,
)


# FieldPath


@pytest.mark.unit
def test_parse_dotted_path():
    """Test that digit segments become list indices."""
    path = FieldPath.parse("experience.0.bullets.1")
    assert path.segments == ("experience", 0, "bullets", 1)
    assert str(path) == "experience.0.bullets.1"


@pytest.mark.unit
def test_selectors_build_valid_paths():
    """Test typed selectors against their dotted equivalents."""
    assert experience_bullet(0, 1) == FieldPath.parse("experience.0.bullets.1")
    assert profile_field("name") == FieldPath.parse("profile.name")
    assert project_tech(2) == FieldPath.parse("projects.2.tech")
    assert project_tech(2, 0) == FieldPath.parse("projects.2.tech.0")
    assert skill() == FieldPath.parse("skills")
    assert meta_field("theme") == FieldPath.parse("meta.theme")


@pytest.mark.unit
@pytest.mark.parametrize(
    "path",
    ["", "profile.nmae", "profile..name", "experience.first.role", "profile.name.x", "unknown"],
)
def test_parse_rejects_invalid_paths(path):
    """Test that malformed paths fail before any document is touched."""
    with pytest.raises(InvalidPathError):
        FieldPath.parse(path)


@pytest.mark.unit
def test_selector_rejects_unknown_field():
    with pytest.raises(InvalidPathError):
        experience_field(0, "employer")


# update


@pytest.mark.unit
def test_update_returns_new_document(document):
    """Test that update leaves its input untouched."""
    result = update(document, "profile.name", "Ada Lovelace")

    assert result.profile.name == "Ada Lovelace"
    assert document.profile.name == "Your Name"
    assert result is not document


@pytest.mark.unit
def test_update_nested_list_element(document):
    """Test the example from the form: replacing a bullet by index."""
    result = update(document, "experience.0.bullets.1", "Cut deploy time in half")

    assert result.experience[0].bullets == [
        "Built and scaled a MERN app serving 50k+ users.",
        "Cut deploy time in half",
    ]
    assert document.experience[0].bullets[1].startswith("Implemented CI/CD")


@pytest.mark.unit
def test_update_is_idempotent(document):
    once = update(document, "profile.title", "Engineer")
    twice = update(once, "profile.title", "Engineer")
    assert once == twice


@pytest.mark.unit
def test_update_theme_accepts_string(document):
    """Test that enum fields accept their string values."""
    result = update(document, "meta.theme", "modern")
    assert result.meta.theme is Theme.MODERN


@pytest.mark.unit
def test_update_unknown_theme_rejected(document):
    with pytest.raises(InvalidValueError):
        update(document, "meta.theme", "brutalist")
    assert document.meta.theme is Theme.CLASSIC


@pytest.mark.unit
@pytest.mark.parametrize(
    "path, value",
    [
        ("profile.name", 42),
        ("meta.dark", "yes"),
        ("skills", "Python"),
        ("skills", [1, 2]),
    ],
)
def test_update_rejects_wrong_types(document, path, value):
    """Test that values of the wrong type raise InvalidValueError."""
    with pytest.raises(InvalidValueError):
        update(document, path, value)


@pytest.mark.unit
def test_update_out_of_range_index(document):
    with pytest.raises(InvalidPathError):
        update(document, "experience.5.role", "Ghost")


@pytest.mark.unit
def test_update_whole_list_copies_value(document):
    """Test that an assigned list is not shared with the caller."""
    skills = ["Python"]
    result = update(document, "skills", skills)
    skills.append("Go")
    assert result.skills == ["Python"]


@pytest.mark.unit
def test_update_through_missing_container_fails():
    """Test addressing into a project whose tech list is absent."""
    doc = Document(projects=[Project(name="Legacy")])
    with pytest.raises(InvalidPathError):
        update(doc, "projects.0.tech.0", "Go")


# add_array_item


@pytest.mark.unit
def test_add_array_item_appends_factory_result(document):
    """Test appending a new experience entry."""
    result = add_array_item(document, "experience", empty_experience)

    assert len(result.experience) == 2
    assert result.experience[1].bullets == [""]
    assert len(document.experience) == 1


@pytest.mark.unit
def test_add_array_item_calls_factory_per_call(document):
    """Test that two appended entries are distinct objects."""
    result = add_array_item(document, "experience", empty_experience)
    result = add_array_item(result, "experience", empty_experience)

    result.experience[1].bullets.append("mutated")
    assert result.experience[2].bullets == [""]


@pytest.mark.unit
def test_add_array_item_creates_absent_tech():
    """Test that a legacy project gains a tech list on first add."""
    doc = Document(projects=[Project(name="Legacy")])
    result = add_array_item(doc, "projects.0.tech", lambda: "Go")

    assert result.projects[0].tech == ["Go"]
    assert doc.projects[0].tech is None


@pytest.mark.unit
def test_add_array_item_requires_list(document):
    with pytest.raises(InvalidPathError):
        add_array_item(document, "profile.name", str)


@pytest.mark.unit
def test_add_array_item_checks_item_type(document):
    with pytest.raises(InvalidValueError):
        add_array_item(document, "skills", lambda: 3)


# remove_array_item


@pytest.mark.unit
def test_remove_array_item(document):
    result = remove_array_item(document, "skills", 0)

    assert result.skills[0] == "React"
    assert document.skills[0] == "JavaScript"


@pytest.mark.unit
@pytest.mark.parametrize("index", [-1, 6, 100])
def test_remove_array_item_out_of_range(document, index):
    with pytest.raises(InvalidPathError):
        remove_array_item(document, "skills", index)


@pytest.mark.unit
def test_remove_from_absent_tech_fails():
    doc = Document(projects=[Project(name="Legacy")])
    with pytest.raises(InvalidPathError):
        remove_array_item(doc, "projects.0.tech", 0)


# read


@pytest.mark.unit
def test_read(document):
    assert read(document, "experience.0.company") == "Awesome Co"
    assert read(document, skill(1)) == "React"
