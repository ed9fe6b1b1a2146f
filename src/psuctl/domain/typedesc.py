"""Type-structure descriptors and the ``--format`` help renderer.

``describe`` turns a Python type (pydantic model, dataclass, sequence
generic, or anything else) into a :class:`TypeDescriptor`; ``render`` dumps
a descriptor as an indented schema so users writing ``--format`` templates
can see which attributes are addressable.

Self-referential types are not supported and recurse without bound.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

FORMAT_ENGINE = "Jinja2"

_SEQUENCE_TYPES: tuple[type, ...] = (list, set, frozenset)
_SEQUENCE_ORIGINS: tuple[Any, ...] = (
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.Iterable,
)


class TypeKind(StrEnum):
    COMPOSITE = "composite"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


@dataclass(frozen=True)
class TypeDescriptor:
    """Structural description of a type.

    Attributes:
        kind: Composite (record), sequence, or scalar.
        name: Bare type name.
        module: Defining module, empty for builtins and typing constructs.
        fields: ``(field name, descriptor)`` pairs in declaration order
            (composites only).
        element: Element descriptor (sequences only).
    """

    kind: TypeKind
    name: str
    module: str = ""
    fields: tuple[tuple[str, TypeDescriptor], ...] = ()
    element: TypeDescriptor | None = None

    @property
    def qualified_name(self) -> str:
        if self.module and self.module != "builtins":
            return f"{self.module}.{self.name}"
        return self.name


def _type_name(tp: Any) -> str:
    if tp is Any:
        return "Any"
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__name__
    return str(tp).replace("typing.", "")


def _describe_union(tp: Any) -> TypeDescriptor:
    members = [arg for arg in get_args(tp) if arg is not type(None)]
    if len(members) == 1:
        return describe(members[0])
    return TypeDescriptor(TypeKind.SCALAR, " | ".join(_type_name(m) for m in members))


def _describe_tuple(tp: Any) -> TypeDescriptor:
    args = get_args(tp)
    if len(args) == 2 and args[1] is Ellipsis:
        return TypeDescriptor(TypeKind.SEQUENCE, "tuple", element=describe(args[0]))
    if not args:
        return TypeDescriptor(TypeKind.SEQUENCE, "tuple", element=describe(Any))
    return TypeDescriptor(TypeKind.SCALAR, _type_name(tp))


def describe(tp: Any) -> TypeDescriptor:
    """Build a :class:`TypeDescriptor` for *tp*."""
    origin = get_origin(tp)

    if origin is Annotated:
        return describe(get_args(tp)[0])
    if origin is Union or origin is types.UnionType:
        return _describe_union(tp)
    if origin is tuple or tp is tuple:
        return _describe_tuple(tp)
    if origin in _SEQUENCE_ORIGINS:
        args = get_args(tp)
        return TypeDescriptor(
            TypeKind.SEQUENCE,
            _type_name(origin),
            element=describe(args[0] if args else Any),
        )
    if origin is None and isinstance(tp, type) and issubclass(tp, _SEQUENCE_TYPES):
        return TypeDescriptor(TypeKind.SEQUENCE, tp.__name__, element=describe(Any))

    if isinstance(tp, type) and issubclass(tp, BaseModel):
        fields = tuple(
            (name, describe(info.annotation)) for name, info in tp.model_fields.items()
        )
        return TypeDescriptor(TypeKind.COMPOSITE, tp.__name__, tp.__module__, fields)

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        hints = get_type_hints(tp)
        fields = tuple(
            (f.name, describe(hints.get(f.name, f.type))) for f in dataclasses.fields(tp)
        )
        return TypeDescriptor(TypeKind.COMPOSITE, tp.__name__, tp.__module__, fields)

    return TypeDescriptor(TypeKind.SCALAR, _type_name(tp), getattr(tp, "__module__", ""))


def render(t: TypeDescriptor, indent_unit: str = "  ", current_indent: str = "") -> str:
    """Render *t* as a schema block.

    Composites open ``{`` inline, list one field per line one *indent_unit*
    deeper, and close ``}`` at *current_indent*.  Sequences render as ``[]``
    followed by their element.  Scalars render as their bare name.
    """
    if t.kind is TypeKind.COMPOSITE:
        lines = ["{"]
        deeper = current_indent + indent_unit
        for name, field_type in t.fields:
            lines.append(f"{deeper}{name} {render(field_type, indent_unit, deeper)}")
        lines.append(f"{current_indent}}}")
        return "\n".join(lines)
    if t.kind is TypeKind.SEQUENCE:
        if t.element is None:
            msg = f"Sequence descriptor {t.name!r} has no element type"
            raise TypeError(msg)
        return f"[]{render(t.element, indent_unit, current_indent)}"
    return t.name


def get_format_help(sample: Any) -> str:
    """Return ``--format`` help text describing the type of *sample*.

    *sample* may be an instance or the class itself.
    """
    tp = sample if isinstance(sample, type) else type(sample)
    descriptor = describe(tp)
    schema = render(descriptor, "  ", "  ")
    return (
        "Format:\n"
        f"  The --format flag accepts a {FORMAT_ENGINE} template, which is passed a "
        f"{descriptor.qualified_name} object:\n"
        "\n"
        f"  {schema}\n"
    )
