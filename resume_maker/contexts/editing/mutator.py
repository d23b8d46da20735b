"""
Path-Addressed Mutator

Copy-on-write update / insert / delete operations addressed by a path into a
Document. Every operation clones the whole document first, so the returned
Document shares no mutable structure with its input and reference identity can
be used to detect change.

Paths are parsed into a FieldPath whose segments are checked against the closed
set of schema fields, so a typo such as "profile.nmae" fails before anything is
touched. Dotted strings ("experience.0.bullets.1") and the typed selectors below
both go through the same validation.

Examples:
    >>> doc = update(doc, "profile.name", "Ada Lovelace")
    >>> doc = update(doc, experience_bullet(0, 1), "Shipped the analytical engine")
    >>> doc = add_array_item(doc, "experience", empty_experience)
    >>> doc = remove_array_item(doc, "skills", 2)
"""

import typing
from dataclasses import dataclass, is_dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Tuple, Union

from resume_maker.contexts.editing.document import Document
from resume_maker.contexts.editing.exceptions import InvalidPathError, InvalidValueError

Segment = Union[str, int]
PathLike = Union[str, "FieldPath"]

SEGMENT_SEPARATOR = "."


@dataclass(frozen=True)
class FieldPath:
    """
    Validated address of a field or list element inside a Document.

    Attributes:
        segments: Field names (str) and list indices (int), root first
    """

    segments: Tuple[Segment, ...]

    def __post_init__(self):
        _check_schema(self)

    @classmethod
    def parse(cls, path: PathLike) -> "FieldPath":
        """
        Parse a dotted path ("experience.0.bullets.1") into a FieldPath.

        Raises:
            InvalidPathError: If the path is empty or names a field outside the schema
        """
        if isinstance(path, FieldPath):
            return path
        if not isinstance(path, str) or not path:
            raise InvalidPathError("Path must be a non-empty string", path=str(path))

        segments = []
        for raw in path.split(SEGMENT_SEPARATOR):
            if not raw:
                raise InvalidPathError("Path contains an empty segment", path=path)
            segments.append(int(raw) if raw.isdigit() else raw)
        return cls(tuple(segments))

    @property
    def parent(self) -> "FieldPath":
        return FieldPath(self.segments[:-1])

    @property
    def leaf(self) -> Segment:
        return self.segments[-1]

    def child(self, segment: Segment) -> "FieldPath":
        return FieldPath(self.segments + (segment,))

    def __str__(self) -> str:
        return SEGMENT_SEPARATOR.join(str(segment) for segment in self.segments)


# Typed selectors


def meta_field(name: str) -> FieldPath:
    return FieldPath(("meta", name))


def profile_field(name: str) -> FieldPath:
    return FieldPath(("profile", name))


def skill(index: Optional[int] = None) -> FieldPath:
    """Path to the skills list, or to one skill when index is given."""
    return FieldPath(("skills",) if index is None else ("skills", index))


def experience_field(index: int, name: str) -> FieldPath:
    return FieldPath(("experience", index, name))


def experience_bullet(index: int, bullet_index: int) -> FieldPath:
    return FieldPath(("experience", index, "bullets", bullet_index))


def education_field(index: int, name: str) -> FieldPath:
    return FieldPath(("education", index, name))


def project_field(index: int, name: str) -> FieldPath:
    return FieldPath(("projects", index, name))


def project_tech(index: int, tech_index: Optional[int] = None) -> FieldPath:
    """Path to a project's tech list, or to one tag when tech_index is given."""
    segments = ("projects", index, "tech")
    return FieldPath(segments if tech_index is None else segments + (tech_index,))


# Operations


def read(document: Document, path: PathLike) -> Any:
    """
    Read the value addressed by path.

    Raises:
        InvalidPathError: If the path does not resolve
    """
    field_path = FieldPath.parse(path)
    value, _ = _walk(document, field_path.segments, field_path)
    return value


def update(document: Document, path: PathLike, value: Any) -> Document:
    """
    Return a copy of document with the field at path replaced by value.

    Raises:
        InvalidPathError: If path does not resolve to an existing field or element
        InvalidValueError: If value does not match the field's declared type
    """
    field_path = _non_root(path)
    result = document.clone()

    parent, parent_type = _walk(result, field_path.parent.segments, field_path)
    _, leaf_type = _step(parent, parent_type, field_path.leaf, field_path)
    _assign(parent, field_path.leaf, _coerce(leaf_type, value, field_path))
    return result


def add_array_item(document: Document, path: PathLike, factory: Callable[[], Any]) -> Document:
    """
    Return a copy of document with factory() appended to the list at path.

    An optional list that is absent (e.g. a legacy project's tech) is created
    empty before appending.

    Raises:
        InvalidPathError: If path does not address a list
        InvalidValueError: If factory() produces an item of the wrong type
    """
    field_path = _non_root(path)
    result = document.clone()

    parent, parent_type = _walk(result, field_path.parent.segments, field_path)
    target, target_type = _step(parent, parent_type, field_path.leaf, field_path)
    list_type = _list_type(target_type, field_path)

    if target is None:
        target = []
        _assign(parent, field_path.leaf, target)

    target.append(_coerce(_item_type(list_type), factory(), field_path))
    return result


def remove_array_item(document: Document, path: PathLike, index: int) -> Document:
    """
    Return a copy of document with the element at index removed from the list at path.

    Raises:
        InvalidPathError: If path does not address a list or index is out of range
    """
    field_path = _non_root(path)
    result = document.clone()

    target, target_type = _walk(result, field_path.segments, field_path)
    _list_type(target_type, field_path)
    target = target or []

    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(target):
        raise InvalidPathError(
            f"Index {index!r} out of range for list of length {len(target)}", path=str(field_path)
        )

    del target[index]
    return result


# Schema resolution


@lru_cache(maxsize=None)
def _field_types(cls: type) -> Dict[str, Any]:
    return typing.get_type_hints(cls)


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) is Union:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_optional(annotation: Any) -> bool:
    return typing.get_origin(annotation) is Union and type(None) in typing.get_args(annotation)


def _is_list(annotation: Any) -> bool:
    return typing.get_origin(annotation) is list


def _item_type(list_annotation: Any) -> Any:
    return typing.get_args(list_annotation)[0]


def _list_type(annotation: Any, path: FieldPath) -> Any:
    list_annotation = _unwrap_optional(annotation)
    if not _is_list(list_annotation):
        raise InvalidPathError("Path does not address a list", path=str(path))
    return list_annotation


def _check_schema(path: FieldPath) -> None:
    """Validate segment names and kinds against the Document type (no values involved)."""
    annotation: Any = Document
    for depth, segment in enumerate(path.segments):
        annotation = _unwrap_optional(annotation)
        where = SEGMENT_SEPARATOR.join(str(s) for s in path.segments[: depth + 1])

        if isinstance(annotation, type) and is_dataclass(annotation):
            fields = _field_types(annotation)
            if not isinstance(segment, str) or segment not in fields:
                raise InvalidPathError(
                    f"Unknown field {segment!r} on {annotation.__name__}; "
                    f"expected one of: {', '.join(fields)}",
                    path=where,
                )
            annotation = fields[segment]
        elif _is_list(annotation):
            if isinstance(segment, bool) or not isinstance(segment, int) or segment < 0:
                raise InvalidPathError(f"Expected a list index, got {segment!r}", path=where)
            annotation = _item_type(annotation)
        else:
            raise InvalidPathError("Cannot address into a scalar field", path=where)


def _walk(root: Document, segments: Tuple[Segment, ...], path: FieldPath) -> Tuple[Any, Any]:
    node: Any = root
    annotation: Any = Document
    for segment in segments:
        node, annotation = _step(node, annotation, segment, path)
    return node, annotation


def _step(node: Any, annotation: Any, segment: Segment, path: FieldPath) -> Tuple[Any, Any]:
    """Descend one segment, returning the child value and its declared type."""
    if is_dataclass(node):
        return getattr(node, segment), _field_types(type(node))[segment]

    if isinstance(node, list):
        if not segment < len(node):
            raise InvalidPathError(
                f"Index {segment} out of range for list of length {len(node)}", path=str(path)
            )
        return node[segment], _item_type(_unwrap_optional(annotation))

    # Optional containers that are absent (None) have nothing to index into
    raise InvalidPathError("Path runs through a missing container", path=str(path))


def _assign(container: Any, segment: Segment, value: Any) -> None:
    if isinstance(container, list):
        container[segment] = value
    else:
        setattr(container, segment, value)


def _non_root(path: PathLike) -> FieldPath:
    field_path = FieldPath.parse(path)
    if not field_path.segments:
        raise InvalidPathError("Path must address a field, not the document root", path="")
    return field_path


def _coerce(annotation: Any, value: Any, path: FieldPath) -> Any:
    """
    Check value against a declared type and return an unshared copy of it.

    Enum fields accept their string values (e.g., "modern" for meta.theme).
    """
    if _is_optional(annotation):
        if value is None:
            return None
        annotation = _unwrap_optional(annotation)

    if isinstance(annotation, type) and issubclass(annotation, Enum):
        try:
            return annotation(value)
        except ValueError:
            allowed = ", ".join(member.value for member in annotation)
            raise InvalidValueError(
                f"Expected one of: {allowed}", path=str(path), value=value
            ) from None

    if annotation is bool:
        if not isinstance(value, bool):
            raise InvalidValueError("Expected a boolean", path=str(path), value=value)
        return value

    if annotation is str:
        if not isinstance(value, str):
            raise InvalidValueError("Expected a string", path=str(path), value=value)
        return value

    if _is_list(annotation):
        if not isinstance(value, list):
            raise InvalidValueError("Expected a list", path=str(path), value=value)
        return [_coerce(_item_type(annotation), item, path) for item in value]

    if isinstance(annotation, type) and is_dataclass(annotation):
        if not isinstance(value, annotation):
            raise InvalidValueError(
                f"Expected a {annotation.__name__}", path=str(path), value=value
            )
        return value.clone()

    raise InvalidValueError("Unsupported field type", path=str(path), value=value)
