"""Typed decoder for the Khronos Vulkan / VulkanSC API registry (vk.xml).

Decodes a parsed vk.xml element tree into an immutable object graph of
platforms, author tags, types, constant groups, commands, features and
extensions. The graph can be encoded back into an element tree with the
same wrapper layout it was decoded from.

Usage:
    python vkregistry.py --vk-xml path/to/vk.xml [--write-xml out.xml]
"""

import argparse
import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, NamedTuple, TypeVar

PROJECT_ROOT = Path(__file__).parent
DEFAULT_VK_XML = PROJECT_ROOT / "Vulkan-Docs" / "xml" / "vk.xml"

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# ===--- Errors ---=== #


DECODE_ERROR_CODES = {
    "MISSING_REQUIRED_FIELD",
    "UNRECOGNIZED_DISCRIMINANT",
    "MALFORMED_VALUE",
    "STRUCTURAL_MISMATCH",
}


class DecodeError(Exception):
    """A registry node could not be decoded.

    Attributes:
        code: One of DECODE_ERROR_CODES.
        message: Human-readable description of the failure.
        entity: Element kind being decoded, e.g. "type" or "extension".
        name: Name of the entity, when it was already known.
        key: Offending attribute or child element name.
        value: Raw offending value, when one was present.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        entity: str | None = None,
        name: str | None = None,
        key: str | None = None,
        value: str | None = None,
    ):
        if code not in DECODE_ERROR_CODES:
            raise ValueError(f"Unknown decode error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.entity = entity
        self.name = name
        self.key = key
        self.value = value

    def within(self, parent: str) -> "DecodeError":
        """Copy of this error naming the enclosing type or command."""
        return DecodeError(
            self.code,
            f"{self.message} (in '{parent}')",
            entity=self.entity,
            name=self.name,
            key=self.key,
            value=self.value,
        )


def _describe(entity: str, name: str | None) -> str:
    if name:
        return f"<{entity}> '{name}'"
    return f"<{entity}>"


# ===--- Token utilities ---=== #


def split_list(raw: str | None, separator: str = ",") -> tuple[str, ...] | None:
    """Split a comma-separated attribute into trimmed, non-empty tokens.

    Returns None when the attribute is absent, so callers can tell "not
    given" apart from an empty list.
    """
    if raw is None:
        return None
    tokens = (token.strip() for token in raw.split(separator))
    return tuple(token for token in tokens if token)


def join_list(tokens: Iterable[str] | None, separator: str = ",") -> str | None:
    if tokens is None:
        return None
    return separator.join(tokens)


def parse_bool(raw: str | None, default: bool = False) -> bool:
    """Interpret a "true"/"false" attribute. Only the exact string "true" is true."""
    if raw is None:
        return default
    return raw == "true"


def is_optional_flag(raw: str | None) -> bool:
    """Derive the optional flag of a member or parameter.

    Pointers with several levels of indirection carry one value per level,
    e.g. "true,false". Only the outermost level is inspected, so "false,true"
    is reported as not optional.
    """
    if raw is None:
        return False
    return raw == "true" or raw.startswith("true,")


def is_externsync_flag(raw: str | None) -> bool:
    return raw == "true"


_INT_RE = re.compile(r"-?[0-9]+")


def parse_int(
    raw: str | None, *, entity: str, key: str, name: str | None = None
) -> int | None:
    if raw is None:
        return None
    if _INT_RE.fullmatch(raw.strip()) is None:
        raise DecodeError(
            "MALFORMED_VALUE",
            f"{_describe(entity, name)} has non-integer {key}={raw!r}",
            entity=entity,
            name=name,
            key=key,
            value=raw,
        )
    return int(raw)


def parse_choice(
    raw: str | None,
    choices: type[E],
    *,
    entity: str,
    key: str,
    name: str | None = None,
) -> E | None:
    """Map a raw attribute onto a closed vocabulary enum member."""
    if raw is None:
        return None
    try:
        return choices(raw)
    except ValueError as err:
        raise DecodeError(
            "UNRECOGNIZED_DISCRIMINANT",
            f"{_describe(entity, name)} has unknown {key} token {raw!r}",
            entity=entity,
            name=name,
            key=key,
            value=raw,
        ) from err


def parse_choices(
    raw: str | None,
    choices: type[E],
    *,
    entity: str,
    key: str,
    name: str | None = None,
) -> tuple[E, ...] | None:
    tokens = split_list(raw)
    if tokens is None:
        return None
    return tuple(
        parse_choice(token, choices, entity=entity, key=key, name=name)
        for token in tokens
    )


def _child_text(node: ET.Element | None, tag: str) -> str | None:
    if node is None:
        return None
    child = node.find(tag)
    if child is None:
        return None
    return "".join(child.itertext())


def _lookup(node: ET.Element, key: str) -> str | None:
    """Read `key` as an attribute, falling back to the text of a child element.

    vk.xml spells some values either way, e.g. `<type name="X">` and
    `<type>...<name>X</name></type>`.
    """
    value = node.get(key)
    if value is not None:
        return value
    return _child_text(node, key)


def _require(
    value: str | None, *, entity: str, key: str, name: str | None = None
) -> str:
    if value is None:
        raise DecodeError(
            "MISSING_REQUIRED_FIELD",
            f"{_describe(entity, name)} is missing required '{key}'",
            entity=entity,
            name=name,
            key=key,
        )
    return value


# ===--- Platforms & tags ---=== #


@dataclass(frozen=True)
class Platform:
    """A platform name used by window system-specific extensions.

    Attributes:
        name: Short platform name, e.g. "xlib".
        protect: Preprocessor guard, e.g. "VK_USE_PLATFORM_XLIB_KHR".
        comment: Arbitrary string (unused).
    """

    name: str
    protect: str
    comment: str | None = None


@dataclass(frozen=True)
class Tag:
    """A registered author ID for extensions and layers."""

    name: str
    author: str
    contact: str


def decode_platform(node: ET.Element) -> Platform:
    name = _require(node.get("name"), entity="platform", key="name")
    protect = _require(node.get("protect"), entity="platform", key="protect", name=name)
    return Platform(name=name, protect=protect, comment=node.get("comment"))


def decode_tag(node: ET.Element) -> Tag:
    name = _require(node.get("name"), entity="tag", key="name")
    return Tag(
        name=name,
        author=_require(node.get("author"), entity="tag", key="author", name=name),
        contact=_require(node.get("contact"), entity="tag", key="contact", name=name),
    )


# ===--- Struct/union members ---=== #


class LimitType(Enum):
    """How a device limit member is compared against a required value."""

    MIN = "min"
    MAX = "max"
    BITMASK = "bitmask"
    RANGE = "range"
    STRUCT = "struct"
    NOAUTO = "noauto"
    EXACT = "exact"
    BITS = "bits"
    MIN_MUL = "min,mul"
    MAX_POT = "max,pot"
    MIN_POT = "min,pot"


@dataclass(frozen=True)
class Member:
    """One `<member>` of a struct or union.

    `len` may hold one component per array indirection: a sibling member
    name, "null-terminated", "1", or a latexmath expression. `altlen` is
    the C99 equivalent of the latexmath components.

    Attributes:
        name: Member name.
        type: Type name from the `<type>` child, if any.
        enum: Enumerant naming a static array length, if any.
        comment: Arbitrary string (unused).
        structure_types: Valid sType values, only set on `sType` members.
        len: Raw array length expression.
        altlen: C expression equivalent of `len`.
        externsync: Raw external synchronization marker.
        is_optional: Whether the outermost indirection may be omitted.
        selector: Member selecting the valid field of a union member.
        selection: Selector value for which this union member is valid.
        noautovalidity: Suppresses generated validity language.
        limittype: Device limit comparison kind.
        api: API this member definition is specialized for.
    """

    name: str
    type: str | None = None
    enum: str | None = None
    comment: str | None = None
    structure_types: tuple[str, ...] | None = None
    len: str | None = None
    altlen: str | None = None
    externsync: str | None = None
    is_optional: bool = False
    selector: str | None = None
    selection: str | None = None
    noautovalidity: str | None = None
    limittype: LimitType | None = None
    api: str | None = None


def decode_member(node: ET.Element, parent: str | None = None) -> Member:
    try:
        return _decode_member(node)
    except DecodeError as err:
        if parent is None:
            raise
        raise err.within(parent) from err


def _decode_member(node: ET.Element) -> Member:
    entity = "member"
    name = _require(_lookup(node, "name"), entity=entity, key="name")
    return Member(
        name=name,
        type=_lookup(node, "type"),
        enum=_lookup(node, "enum"),
        comment=_lookup(node, "comment"),
        structure_types=split_list(node.get("values")),
        len=node.get("len"),
        altlen=node.get("altlen"),
        externsync=node.get("externsync"),
        is_optional=is_optional_flag(node.get("optional")),
        selector=node.get("selector"),
        selection=node.get("selection"),
        noautovalidity=node.get("noautovalidity"),
        limittype=parse_choice(
            node.get("limittype"), LimitType, entity=entity, key="limittype", name=name
        ),
        api=node.get("api"),
    )


# ===--- Types ---=== #


@dataclass(frozen=True)
class BasetypeCategory:
    kind: ClassVar[str] = "basetype"


@dataclass(frozen=True)
class DefineCategory:
    kind: ClassVar[str] = "define"


@dataclass(frozen=True)
class IncludeCategory:
    kind: ClassVar[str] = "include"


@dataclass(frozen=True)
class BitmaskCategory:
    kind: ClassVar[str] = "bitmask"


@dataclass(frozen=True)
class EnumCategory:
    kind: ClassVar[str] = "enum"


@dataclass(frozen=True)
class FuncpointerCategory:
    kind: ClassVar[str] = "funcpointer"


@dataclass(frozen=True)
class GroupCategory:
    kind: ClassVar[str] = "group"


@dataclass(frozen=True)
class HandleCategory:
    """Handle type.

    Attributes:
        parent: Handle type acting as the parent object.
        objtypeenum: VkObjectType enumerant matching this handle.
    """

    kind: ClassVar[str] = "handle"

    parent: str | None = None
    objtypeenum: str | None = None


@dataclass(frozen=True)
class StructCategory:
    """Struct type.

    struct_extends is None when the attribute is absent, which is distinct
    from an empty tuple.

    Attributes:
        returned_only: Filled in by the API rather than the application.
        struct_extends: Structures whose pNext chain may include this one.
        allow_duplicate: pNext chains may hold more than one instance.
        members: Members in declaration order.
    """

    kind: ClassVar[str] = "struct"

    returned_only: bool = False
    struct_extends: tuple[str, ...] | None = None
    allow_duplicate: bool = False
    members: tuple[Member, ...] = ()


@dataclass(frozen=True)
class UnionCategory:
    kind: ClassVar[str] = "union"

    returned_only: bool = False
    struct_extends: tuple[str, ...] | None = None
    members: tuple[Member, ...] = ()


Category = (
    BasetypeCategory
    | DefineCategory
    | IncludeCategory
    | BitmaskCategory
    | EnumCategory
    | FuncpointerCategory
    | GroupCategory
    | HandleCategory
    | StructCategory
    | UnionCategory
)


@dataclass(frozen=True)
class Typedef:
    """One `<type>` definition.

    Attributes:
        name: Type name, from the attribute or the `<name>` child.
        requires: Another type this one needs to complete its definition.
        alias: Type this one is an alias of.
        api: API this definition is specialized for.
        category: Structured definition kind, None for plain C types.
        comment: Arbitrary string (unused).
    """

    name: str
    requires: str | None = None
    alias: str | None = None
    api: str | None = None
    category: Category | None = None
    comment: str | None = None


def _decode_handle(node: ET.Element) -> HandleCategory:
    return HandleCategory(parent=node.get("parent"), objtypeenum=node.get("objtypeenum"))


def _decode_members(node: ET.Element, parent: str | None) -> tuple[Member, ...]:
    return tuple(decode_member(m, parent) for m in node.findall("member"))


def _decode_struct(node: ET.Element, name: str | None = None) -> StructCategory:
    return StructCategory(
        returned_only=parse_bool(node.get("returnedonly")),
        struct_extends=split_list(node.get("structextends")),
        allow_duplicate=parse_bool(node.get("allowduplicate")),
        members=_decode_members(node, name),
    )


def _decode_union(node: ET.Element, name: str | None = None) -> UnionCategory:
    return UnionCategory(
        returned_only=parse_bool(node.get("returnedonly")),
        struct_extends=split_list(node.get("structextends")),
        members=_decode_members(node, name),
    )


# Category-specific attributes are only read once the category is known.
_CATEGORY_DECODERS: dict[str, Callable[[ET.Element, str], Category]] = {
    "basetype": lambda node, name: BasetypeCategory(),
    "define": lambda node, name: DefineCategory(),
    "include": lambda node, name: IncludeCategory(),
    "bitmask": lambda node, name: BitmaskCategory(),
    "enum": lambda node, name: EnumCategory(),
    "funcpointer": lambda node, name: FuncpointerCategory(),
    "group": lambda node, name: GroupCategory(),
    "handle": lambda node, name: _decode_handle(node),
    "struct": _decode_struct,
    "union": _decode_union,
}

CATEGORY_NAMES: tuple[str, ...] = tuple(_CATEGORY_DECODERS)


def decode_category(node: ET.Element, raw: str | None, name: str) -> Category | None:
    """Dispatch on the raw `category` string of a `<type>` node.

    Args:
        node: The `<type>` element, re-read for category-specific attributes.
        raw: Raw category attribute, or None when absent.
        name: Name of the enclosing type, for error context.

    Returns:
        The decoded category, or None when `raw` is None.

    Raises:
        DecodeError: UNRECOGNIZED_DISCRIMINANT for an unknown category.
    """
    if raw is None:
        return None
    decoder = _CATEGORY_DECODERS.get(raw)
    if decoder is None:
        raise DecodeError(
            "UNRECOGNIZED_DISCRIMINANT",
            f"<type> '{name}' has unrecognized category {raw!r}",
            entity="type",
            name=name,
            key="category",
            value=raw,
        )
    return decoder(node, name)


def _typedef_name(node: ET.Element) -> str | None:
    name = _lookup(node, "name")
    if name is None:
        # Function pointers nest their name in <proto>.
        name = _child_text(node.find("proto"), "name")
    return name


def decode_typedef(node: ET.Element) -> Typedef:
    name = _require(_typedef_name(node), entity="type", key="name")
    return Typedef(
        name=name,
        requires=node.get("requires"),
        alias=node.get("alias"),
        api=node.get("api"),
        category=decode_category(node, node.get("category"), name),
        comment=_lookup(node, "comment"),
    )


# ===--- Constants ---=== #


DEFAULT_BITWIDTH = 32


class ConstantType(Enum):
    """Kind of C type an `<enums>` group generates.

    None and CONSTANTS both mean a block of compile time `#define`s; newer
    registries spell the API Constants block with type="constants".
    """

    ENUMERATION = "enum"
    BITMASK = "bitmask"
    CONSTANTS = "constants"


@dataclass(frozen=True)
class Constant:
    """A single API token (`<enum>`).

    Exactly one of value / bitpos is expected on definitions. That rule is
    left to validators; references inside require blocks carry neither.

    Attributes:
        name: Enumerant name.
        value: C expression for the value.
        bitpos: Bit position in a bitmask.
        api: API this definition is specialized for.
        type: C scalar type of `value`.
        alias: Enumerant this one is an alias of.
        extends: Enumerated type extended by a require block enumerant.
        protect: Additional preprocessor guard.
        offset: Offset within the extension's enum range.
        extnumber: Extension number overriding the enclosing extension's.
        dir: "-" for negative values computed from `offset`.
        comment: Arbitrary string (unused).
    """

    name: str
    value: str | None = None
    bitpos: str | None = None
    api: str | None = None
    type: str | None = None
    alias: str | None = None
    extends: str | None = None
    protect: str | None = None
    offset: str | None = None
    extnumber: str | None = None
    dir: str | None = None
    comment: str | None = None


@dataclass(frozen=True)
class Constants:
    """An `<enums>` group: a C enum, a bitmask, or a block of `#define`s.

    Attributes:
        constants: Enumerants in source order.
        name: C enum type name, if the group is one.
        type: ENUMERATION, BITMASK, or None for compile time constants.
        start: Start of a reserved enumerant range.
        end: End of a reserved enumerant range.
        vendor: Owner of the reserved range.
        comment: Arbitrary string (unused).
        bitwidth: Bit width of the generated value type.
    """

    constants: tuple[Constant, ...] = ()
    name: str | None = None
    type: ConstantType | None = None
    start: int | None = None
    end: int | None = None
    vendor: str | None = None
    comment: str | None = None
    bitwidth: int = DEFAULT_BITWIDTH


def decode_constant(node: ET.Element, parent: str | None = None) -> Constant:
    try:
        return _decode_constant(node)
    except DecodeError as err:
        if parent is None:
            raise
        raise err.within(parent) from err


def _decode_constant(node: ET.Element) -> Constant:
    return Constant(
        name=_require(node.get("name"), entity="enum", key="name"),
        value=node.get("value"),
        bitpos=node.get("bitpos"),
        api=node.get("api"),
        type=node.get("type"),
        alias=node.get("alias"),
        extends=node.get("extends"),
        protect=node.get("protect"),
        offset=node.get("offset"),
        extnumber=node.get("extnumber"),
        dir=node.get("dir"),
        comment=node.get("comment"),
    )


def decode_constants(node: ET.Element) -> Constants:
    name = node.get("name")

    def _int(key: str) -> int | None:
        return parse_int(node.get(key), entity="enums", key=key, name=name)

    bitwidth = _int("bitwidth")
    return Constants(
        constants=tuple(decode_constant(e, name) for e in node.findall("enum")),
        name=name,
        type=parse_choice(node.get("type"), ConstantType, entity="enums", key="type", name=name),
        start=_int("start"),
        end=_int("end"),
        vendor=node.get("vendor"),
        comment=node.get("comment"),
        bitwidth=DEFAULT_BITWIDTH if bitwidth is None else bitwidth,
    )


# ===--- Commands ---=== #


class Queue(Enum):
    COMPUTE = "compute"
    TRANSFER = "transfer"
    GRAPHICS = "graphics"
    SPARSE_BINDING = "sparse_binding"
    DECODE = "decode"
    ENCODE = "encode"
    OPTICALFLOW = "opticalflow"
    DATA_GRAPH = "data_graph"


class RenderPass(Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"


class BufferLevel(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class Pipeline(Enum):
    COMPUTE = "compute"
    TRANSFER = "transfer"
    GRAPHICS = "graphics"


RENDER_PASS_BOTH: tuple[RenderPass, ...] = (RenderPass.INSIDE, RenderPass.OUTSIDE)


@dataclass(frozen=True)
class Prototype:
    """Return type and name of a command."""

    name: str
    type: str | None = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: str | None = None
    len: str | None = None
    altlen: str | None = None
    is_optional: bool = False
    selector: str | None = None
    noautovalidity: str | None = None
    is_externsync: bool = False
    api: str | None = None


@dataclass(frozen=True)
class Command:
    """A `<command>` node.

    One record covers three shapes: a definition (prototype and parameters
    set), an alias (name and alias set), and, inside require blocks, a bare
    name reference.

    Attributes:
        name: Name attribute; set for aliases and references.
        alias: Command this one is an alias of.
        prototype: Return type and name of a definition.
        parameters: Parameters of a definition, None for other shapes.
        queues: Queue types the command can be submitted on.
        success_codes: Successful VkResult codes.
        error_codes: Error VkResult codes.
        render_pass: Where the command may be recorded relative to a render pass.
        command_buffer_levels: Command buffer levels allowed to record it.
        pipeline: Pipeline type used when executed.
        api: API this definition is specialized for.
        comment: Arbitrary string (unused).
    """

    name: str | None = None
    alias: str | None = None
    prototype: Prototype | None = None
    parameters: tuple[Parameter, ...] | None = None
    queues: tuple[Queue, ...] | None = None
    success_codes: tuple[str, ...] | None = None
    error_codes: tuple[str, ...] | None = None
    render_pass: tuple[RenderPass, ...] | None = None
    command_buffer_levels: tuple[BufferLevel, ...] | None = None
    pipeline: Pipeline | None = None
    api: str | None = None
    comment: str | None = None

    @property
    def is_alias(self) -> bool:
        return self.alias is not None and self.prototype is None

    @property
    def command_name(self) -> str | None:
        if self.prototype is not None:
            return self.prototype.name
        return self.name


def parse_render_pass(
    raw: str | None, name: str | None = None
) -> tuple[RenderPass, ...] | None:
    if raw is None:
        return None
    if raw == "both":
        return RENDER_PASS_BOTH
    return (parse_choice(raw, RenderPass, entity="command", key="renderpass", name=name),)


def decode_prototype(node: ET.Element) -> Prototype:
    return Prototype(
        name=_require(_lookup(node, "name"), entity="proto", key="name"),
        type=_lookup(node, "type"),
    )


def decode_parameter(node: ET.Element, parent: str | None = None) -> Parameter:
    name = _lookup(node, "name")
    if name is None:
        err = DecodeError(
            "MISSING_REQUIRED_FIELD",
            "<param> is missing required 'name'",
            entity="param",
            key="name",
        )
        raise err.within(parent) if parent is not None else err
    return Parameter(
        name=name,
        type=_lookup(node, "type"),
        len=node.get("len"),
        altlen=node.get("altlen"),
        is_optional=is_optional_flag(node.get("optional")),
        selector=node.get("selector"),
        noautovalidity=node.get("noautovalidity"),
        is_externsync=is_externsync_flag(node.get("externsync")),
        api=node.get("api"),
    )


def decode_command(node: ET.Element, allow_reference: bool = False) -> Command:
    """Decode a `<command>` definition, alias, or (optionally) name reference.

    Args:
        node: The `<command>` element.
        allow_reference: Accept a bare `name` attribute, as used in
            `<require>` and `<remove>` blocks.

    Returns:
        Command with the fields of the matching shape set.

    Raises:
        DecodeError: STRUCTURAL_MISMATCH when the node matches no shape,
            MISSING_REQUIRED_FIELD when a prototype or parameter has no name,
            UNRECOGNIZED_DISCRIMINANT for unknown closed vocabulary tokens.
    """
    name = node.get("name")
    alias = node.get("alias")
    proto_node = node.find("proto")

    prototype = None
    parameters = None
    if proto_node is not None:
        prototype = decode_prototype(proto_node)
        parameters = tuple(
            decode_parameter(p, prototype.name) for p in node.findall("param")
        )
    elif alias is None or name is None:
        if not (allow_reference and name is not None):
            raise DecodeError(
                "STRUCTURAL_MISMATCH",
                f"{_describe('command', name)} is neither a definition"
                " (<proto> with <param>s) nor an alias (name + alias)",
                entity="command",
                name=name,
                key="alias" if name is not None else "name",
                value=alias,
            )

    label = prototype.name if prototype is not None else name

    def _choices(key: str, choices: type[E]) -> tuple[E, ...] | None:
        return parse_choices(node.get(key), choices, entity="command", key=key, name=label)

    return Command(
        name=name,
        alias=alias,
        prototype=prototype,
        parameters=parameters,
        queues=_choices("queues", Queue),
        success_codes=split_list(node.get("successcodes")),
        error_codes=split_list(node.get("errorcodes")),
        render_pass=parse_render_pass(node.get("renderpass"), label),
        command_buffer_levels=_choices("cmdbufferlevel", BufferLevel),
        pipeline=parse_choice(
            node.get("pipeline"), Pipeline, entity="command", key="pipeline", name=label
        ),
        api=node.get("api"),
        comment=node.get("comment"),
    )


# ===--- Require / remove blocks ---=== #


@dataclass(frozen=True)
class Definitions:
    """Interfaces required (or removed) by a feature or extension.

    Attributes:
        constants: Enumerants, in source order.
        types: Types, in source order.
        commands: Commands, usually bare name references.
        api: API this block applies to.
        comment: Arbitrary string (unused).
        depends: Raw boolean expression of features/extensions this block needs.
    """

    constants: tuple[Constant, ...] = ()
    types: tuple[Typedef, ...] = ()
    commands: tuple[Command, ...] = ()
    api: str | None = None
    comment: str | None = None
    depends: str | None = None


def decode_definitions(node: ET.Element, parent: str | None = None) -> Definitions:
    """Decode a `<require>` or `<remove>` block.

    Errors from nested nodes name `parent`, the enclosing feature or
    extension, when it is given.
    """
    try:
        return _decode_definitions(node)
    except DecodeError as err:
        if parent is None:
            raise
        raise err.within(parent) from err


def _decode_definitions(node: ET.Element) -> Definitions:
    return Definitions(
        constants=tuple(decode_constant(e) for e in node.findall("enum")),
        types=tuple(decode_typedef(t) for t in node.findall("type")),
        commands=tuple(
            decode_command(c, allow_reference=True) for c in node.findall("command")
        ),
        api=node.get("api"),
        comment=node.get("comment"),
        depends=node.get("depends"),
    )


def _decode_definition_blocks(
    node: ET.Element, tag: str, parent: str
) -> tuple[Definitions, ...] | None:
    blocks = node.findall(tag)
    if not blocks:
        return None
    return tuple(decode_definitions(block, parent) for block in blocks)


# ===--- Features ---=== #


class FeatureApi(Enum):
    VULKANSC = "vulkansc"
    VULKAN = "vulkan"


@dataclass(frozen=True)
class Feature:
    """An API version interface, e.g. VK_VERSION_1_0.

    Attributes:
        name: Version guard name, e.g. "VK_VERSION_1_0".
        number: Version number, e.g. "1.0".
        apis: APIs the feature is defined for, in attribute order.
        comment: Arbitrary string (unused).
        require: Require blocks, None when there are none.
        sort_order: Generator ordering hint, defaults to "0".
        protect: Additional preprocessor guard.
        depends: Raw dependency expression.
        remove: Remove blocks, None when there are none.
    """

    name: str
    number: str
    apis: tuple[FeatureApi, ...] = ()
    comment: str | None = None
    require: tuple[Definitions, ...] | None = None
    sort_order: str = "0"
    protect: str | None = None
    depends: str | None = None
    remove: tuple[Definitions, ...] | None = None


def decode_feature(node: ET.Element) -> Feature:
    name = _require(node.get("name"), entity="feature", key="name")
    raw_api = _require(node.get("api"), entity="feature", key="api", name=name)
    return Feature(
        name=name,
        number=_require(node.get("number"), entity="feature", key="number", name=name),
        apis=parse_choices(raw_api, FeatureApi, entity="feature", key="api", name=name),
        comment=node.get("comment"),
        require=_decode_definition_blocks(node, "require", name),
        sort_order=node.get("sortorder", "0"),
        protect=node.get("protect"),
        depends=node.get("depends"),
        remove=_decode_definition_blocks(node, "remove", name),
    )


# ===--- Extensions ---=== #


class Target(Enum):
    INSTANCE = "instance"
    DEVICE = "device"


@dataclass(frozen=True)
class VulkanApi:
    target: Target | None = None


@dataclass(frozen=True)
class VulkanScApi:
    target: Target | None = None


Api = VulkanScApi | VulkanApi


@dataclass(frozen=True)
class EnabledProfile:
    """Extension supported by the listed APIs (vulkansc first, then vulkan)."""

    apis: tuple[Api, ...] = ()


@dataclass(frozen=True)
class DisabledProfile:
    """Extension not (or no longer) defined for any API."""


Profile = EnabledProfile | DisabledProfile


@dataclass(frozen=True)
class Extension:
    """One `<extension>`.

    Attributes:
        name: Extension name, e.g. "VK_KHR_surface".
        number: Registered extension number.
        profile: Supported APIs and target, or disabled.
        sort_order: Generator ordering hint, defaults to "0".
        author: Author name (metadata only).
        contact: Responsible contact (metadata only).
        required_extensions: Names from the legacy `requires` attribute.
        requires_core: Minimum core version, defaults to "1.0".
        protect: Additional preprocessor guard.
        platform: Platform name the extension is specific to.
        comment: Arbitrary string (unused).
        require: Require blocks, None when there are none.
        depends: Raw dependency expression.
        promoted_to: Version or extension this one was promoted to.
        deprecated_by: Version or extension deprecating this one.
        obsoleted_by: Version or extension obsoleting this one.
        provisional: Released provisionally.
        special_use: Special purpose tokens, e.g. "debugging".
        remove: Remove blocks, None when there are none.
    """

    name: str
    number: str
    profile: Profile
    sort_order: str = "0"
    author: str | None = None
    contact: str | None = None
    required_extensions: tuple[str, ...] | None = None
    requires_core: str = "1.0"
    protect: str | None = None
    platform: str | None = None
    comment: str | None = None
    require: tuple[Definitions, ...] | None = None
    depends: str | None = None
    promoted_to: str | None = None
    deprecated_by: str | None = None
    obsoleted_by: str | None = None
    provisional: bool = False
    special_use: tuple[str, ...] | None = None
    remove: tuple[Definitions, ...] | None = None


def resolve_profile(
    supported: str, raw_target: str | None, name: str | None = None
) -> Profile:
    """Resolve the `supported` / `type` attribute pair of an extension.

    "disabled" wins outright and the target is never read. Otherwise the
    API list is built vulkansc first, then vulkan, regardless of token
    order in `supported`. Unknown tokens are ignored.

    Args:
        supported: Raw `supported` attribute.
        raw_target: Raw `type` attribute, or None.
        name: Extension name, for error context.

    Returns:
        DisabledProfile or EnabledProfile.

    Raises:
        DecodeError: UNRECOGNIZED_DISCRIMINANT for an unknown target.
    """
    if supported == "disabled":
        return DisabledProfile()
    tokens = set(split_list(supported) or ())
    target = parse_choice(raw_target, Target, entity="extension", key="type", name=name)
    apis: list[Api] = []
    if FeatureApi.VULKANSC.value in tokens:
        apis.append(VulkanScApi(target=target))
    if FeatureApi.VULKAN.value in tokens:
        apis.append(VulkanApi(target=target))
    return EnabledProfile(apis=tuple(apis))


def decode_extension(node: ET.Element) -> Extension:
    name = _require(node.get("name"), entity="extension", key="name")
    supported = _require(node.get("supported"), entity="extension", key="supported", name=name)
    return Extension(
        name=name,
        number=_require(node.get("number"), entity="extension", key="number", name=name),
        profile=resolve_profile(supported, node.get("type"), name),
        sort_order=node.get("sortorder", "0"),
        author=node.get("author"),
        contact=node.get("contact"),
        required_extensions=split_list(node.get("requires")),
        requires_core=node.get("requiresCore", "1.0"),
        protect=node.get("protect"),
        platform=node.get("platform"),
        comment=node.get("comment"),
        require=_decode_definition_blocks(node, "require", name),
        depends=node.get("depends"),
        promoted_to=node.get("promotedto"),
        deprecated_by=node.get("deprecatedby"),
        obsoleted_by=node.get("obsoletedby"),
        provisional=parse_bool(node.get("provisional")),
        special_use=split_list(node.get("specialuse")),
        remove=_decode_definition_blocks(node, "remove", name),
    )


# ===--- Registry assembly ---=== #


@dataclass(frozen=True)
class WrapperComments:
    """Comment attributes of the five wrapper blocks, kept for re-encoding."""

    platforms: str | None = None
    tags: str | None = None
    types: str | None = None
    commands: str | None = None
    extensions: str | None = None


@dataclass(frozen=True)
class Registry:
    """Complete decoded registry. Every collection is in document order.

    Attributes:
        comments: Top-level `<comment>` texts, e.g. the copyright notice.
        platforms: Platform names.
        tags: Author IDs.
        types: Type definitions.
        constants: `<enums>` groups.
        commands: Command definitions and aliases.
        features: API version interfaces.
        extensions: Extension interfaces.
        wrapper_comments: Comments of the wrapper blocks the collections
            were unwrapped from.
    """

    comments: tuple[str, ...] = ()
    platforms: tuple[Platform, ...] = ()
    tags: tuple[Tag, ...] = ()
    types: tuple[Typedef, ...] = ()
    constants: tuple[Constants, ...] = ()
    commands: tuple[Command, ...] = ()
    features: tuple[Feature, ...] = ()
    extensions: tuple[Extension, ...] = ()
    wrapper_comments: WrapperComments = field(default_factory=WrapperComments)


class _Wrapper(NamedTuple):
    comment: str | None
    items: tuple[object, ...]


# wrapper tag -> child tag
WRAPPER_CHILD_TAGS: dict[str, str] = {
    "platforms": "platform",
    "tags": "tag",
    "types": "type",
    "commands": "command",
    "extensions": "extension",
}

_MODELED_ROOT_TAGS = frozenset({"comment", "enums", "feature", *WRAPPER_CHILD_TAGS})


def _decode_wrapper(
    root: ET.Element, tag: str, decode: Callable[[ET.Element], object]
) -> _Wrapper:
    blocks = root.findall(tag)
    if not blocks:
        raise DecodeError(
            "MISSING_REQUIRED_FIELD",
            f"<registry> is missing required <{tag}> block",
            entity="registry",
            key=tag,
        )
    if len(blocks) > 1:
        raise DecodeError(
            "STRUCTURAL_MISMATCH",
            f"<registry> has {len(blocks)} <{tag}> blocks, expected one",
            entity="registry",
            key=tag,
        )
    block = blocks[0]
    child_tag = WRAPPER_CHILD_TAGS[tag]
    items = tuple(decode(child) for child in block.findall(child_tag))
    logger.debug("Decoded %d <%s> from <%s>", len(items), child_tag, tag)
    return _Wrapper(comment=block.get("comment"), items=items)


def decode_registry(root: ET.Element) -> Registry:
    """Decode a parsed vk.xml root element into a Registry.

    Any failure in a nested decode aborts the whole registry; no partial
    result is returned.

    Raises:
        DecodeError: For the first node that fails to decode.
    """
    if root.tag != "registry":
        raise DecodeError(
            "STRUCTURAL_MISMATCH",
            f"Expected <registry> root element, found <{root.tag}>",
            entity="registry",
            value=root.tag,
        )

    for child in root:
        if child.tag not in _MODELED_ROOT_TAGS:
            logger.debug("Skipping unmodeled <%s> block", child.tag)

    platforms = _decode_wrapper(root, "platforms", decode_platform)
    tags = _decode_wrapper(root, "tags", decode_tag)
    types = _decode_wrapper(root, "types", decode_typedef)
    commands = _decode_wrapper(root, "commands", decode_command)
    extensions = _decode_wrapper(root, "extensions", decode_extension)
    constants = tuple(decode_constants(node) for node in root.findall("enums"))
    features = tuple(decode_feature(node) for node in root.findall("feature"))
    logger.debug("Decoded %d <enums>, %d <feature>", len(constants), len(features))

    return Registry(
        comments=tuple("".join(node.itertext()) for node in root.findall("comment")),
        platforms=platforms.items,
        tags=tags.items,
        types=types.items,
        constants=constants,
        commands=commands.items,
        features=features,
        extensions=extensions.items,
        wrapper_comments=WrapperComments(
            platforms=platforms.comment,
            tags=tags.comment,
            types=types.comment,
            commands=commands.comment,
            extensions=extensions.comment,
        ),
    )


# ===--- Encoding ---=== #


def _element(tag: str, attributes: dict[str, str | None]) -> ET.Element:
    """Build an element, dropping attributes whose value is None."""
    return ET.Element(
        tag, {key: value for key, value in attributes.items() if value is not None}
    )


def _text_child(parent: ET.Element, tag: str, text: str | None) -> None:
    if text is None:
        return
    child = ET.SubElement(parent, tag)
    child.text = text
    child.tail = " "


def _flag(value: bool) -> str | None:
    return "true" if value else None


def _non_default(value: str, default: str) -> str | None:
    return None if value == default else value


def _choices_value(values: tuple[Enum, ...] | None) -> str | None:
    return join_list(v.value for v in values) if values is not None else None


def encode_platform(platform: Platform) -> ET.Element:
    return _element(
        "platform",
        {"name": platform.name, "protect": platform.protect, "comment": platform.comment},
    )


def encode_tag(tag: Tag) -> ET.Element:
    return _element(
        "tag", {"name": tag.name, "author": tag.author, "contact": tag.contact}
    )


def encode_member(member: Member) -> ET.Element:
    element = _element(
        "member",
        {
            "values": join_list(member.structure_types),
            "len": member.len,
            "altlen": member.altlen,
            "externsync": member.externsync,
            "optional": _flag(member.is_optional),
            "selector": member.selector,
            "selection": member.selection,
            "noautovalidity": member.noautovalidity,
            "limittype": member.limittype.value if member.limittype else None,
            "api": member.api,
        },
    )
    _text_child(element, "type", member.type)
    _text_child(element, "name", member.name)
    _text_child(element, "enum", member.enum)
    _text_child(element, "comment", member.comment)
    return element


def _category_attributes(category: Category | None) -> dict[str, str | None]:
    if isinstance(category, HandleCategory):
        return {"parent": category.parent, "objtypeenum": category.objtypeenum}
    if isinstance(category, StructCategory):
        return {
            "returnedonly": _flag(category.returned_only),
            "structextends": join_list(category.struct_extends),
            "allowduplicate": _flag(category.allow_duplicate),
        }
    if isinstance(category, UnionCategory):
        return {
            "returnedonly": _flag(category.returned_only),
            "structextends": join_list(category.struct_extends),
        }
    return {}


def encode_typedef(typedef: Typedef) -> ET.Element:
    category = typedef.category
    element = _element(
        "type",
        {
            "requires": typedef.requires,
            "name": typedef.name,
            "alias": typedef.alias,
            "api": typedef.api,
            "category": category.kind if category is not None else None,
            "comment": typedef.comment,
            **_category_attributes(category),
        },
    )
    if isinstance(category, (StructCategory, UnionCategory)):
        element.extend(encode_member(m) for m in category.members)
    return element


def encode_constant(constant: Constant) -> ET.Element:
    return _element(
        "enum",
        {
            "value": constant.value,
            "bitpos": constant.bitpos,
            "offset": constant.offset,
            "extnumber": constant.extnumber,
            "dir": constant.dir,
            "api": constant.api,
            "type": constant.type,
            "extends": constant.extends,
            "name": constant.name,
            "alias": constant.alias,
            "protect": constant.protect,
            "comment": constant.comment,
        },
    )


def encode_constants(group: Constants) -> ET.Element:
    element = _element(
        "enums",
        {
            "name": group.name,
            "type": group.type.value if group.type else None,
            "start": str(group.start) if group.start is not None else None,
            "end": str(group.end) if group.end is not None else None,
            "vendor": group.vendor,
            "comment": group.comment,
            "bitwidth": (
                str(group.bitwidth) if group.bitwidth != DEFAULT_BITWIDTH else None
            ),
        },
    )
    element.extend(encode_constant(c) for c in group.constants)
    return element


def format_render_pass(render_pass: tuple[RenderPass, ...] | None) -> str | None:
    if render_pass is None:
        return None
    if render_pass == RENDER_PASS_BOTH:
        return "both"
    return join_list(r.value for r in render_pass)


def encode_parameter(parameter: Parameter) -> ET.Element:
    element = _element(
        "param",
        {
            "len": parameter.len,
            "altlen": parameter.altlen,
            "optional": _flag(parameter.is_optional),
            "selector": parameter.selector,
            "noautovalidity": parameter.noautovalidity,
            "externsync": _flag(parameter.is_externsync),
            "api": parameter.api,
        },
    )
    _text_child(element, "type", parameter.type)
    _text_child(element, "name", parameter.name)
    return element


def encode_command(command: Command) -> ET.Element:
    element = _element(
        "command",
        {
            "name": command.name,
            "alias": command.alias,
            "queues": _choices_value(command.queues),
            "successcodes": join_list(command.success_codes),
            "errorcodes": join_list(command.error_codes),
            "renderpass": format_render_pass(command.render_pass),
            "cmdbufferlevel": _choices_value(command.command_buffer_levels),
            "pipeline": command.pipeline.value if command.pipeline else None,
            "api": command.api,
            "comment": command.comment,
        },
    )
    if command.prototype is not None:
        proto = ET.SubElement(element, "proto")
        _text_child(proto, "type", command.prototype.type)
        _text_child(proto, "name", command.prototype.name)
        element.extend(encode_parameter(p) for p in command.parameters or ())
    return element


def encode_definitions(definitions: Definitions, tag: str = "require") -> ET.Element:
    element = _element(
        tag,
        {
            "api": definitions.api,
            "depends": definitions.depends,
            "comment": definitions.comment,
        },
    )
    element.extend(encode_constant(c) for c in definitions.constants)
    element.extend(encode_typedef(t) for t in definitions.types)
    element.extend(encode_command(c) for c in definitions.commands)
    return element


def _extend_blocks(
    element: ET.Element, blocks: tuple[Definitions, ...] | None, tag: str
) -> None:
    element.extend(encode_definitions(block, tag) for block in blocks or ())


def encode_feature(feature: Feature) -> ET.Element:
    element = _element(
        "feature",
        {
            "api": _choices_value(feature.apis),
            "name": feature.name,
            "number": feature.number,
            "sortorder": _non_default(feature.sort_order, "0"),
            "protect": feature.protect,
            "depends": feature.depends,
            "comment": feature.comment,
        },
    )
    _extend_blocks(element, feature.require, "require")
    _extend_blocks(element, feature.remove, "remove")
    return element


def format_profile(profile: Profile) -> tuple[str, str | None]:
    """Return the `supported` and `type` attribute values for a profile."""
    if isinstance(profile, DisabledProfile):
        return "disabled", None
    supported = ",".join(
        FeatureApi.VULKANSC.value if isinstance(api, VulkanScApi) else FeatureApi.VULKAN.value
        for api in profile.apis
    )
    target = profile.apis[0].target if profile.apis else None
    return supported, target.value if target is not None else None


def encode_extension(extension: Extension) -> ET.Element:
    supported, target = format_profile(extension.profile)
    element = _element(
        "extension",
        {
            "name": extension.name,
            "number": extension.number,
            "sortorder": _non_default(extension.sort_order, "0"),
            "type": target,
            "author": extension.author,
            "contact": extension.contact,
            "requires": join_list(extension.required_extensions),
            "requiresCore": _non_default(extension.requires_core, "1.0"),
            "depends": extension.depends,
            "platform": extension.platform,
            "protect": extension.protect,
            "supported": supported,
            "promotedto": extension.promoted_to,
            "deprecatedby": extension.deprecated_by,
            "obsoletedby": extension.obsoleted_by,
            "provisional": _flag(extension.provisional),
            "specialuse": join_list(extension.special_use),
            "comment": extension.comment,
        },
    )
    _extend_blocks(element, extension.require, "require")
    _extend_blocks(element, extension.remove, "remove")
    return element


def _encode_wrapper(
    tag: str, wrapper: _Wrapper, encode: Callable[[object], ET.Element]
) -> ET.Element:
    element = _element(tag, {"comment": wrapper.comment})
    element.extend(encode(item) for item in wrapper.items)
    return element


def encode_registry(registry: Registry) -> ET.Element:
    """Encode a Registry back into a vk.xml shaped element tree.

    Wrapper blocks are rebuilt with their original comment attributes, so
    decode_registry(encode_registry(r)) == r.
    """
    wrapper_comments = registry.wrapper_comments
    root = ET.Element("registry")
    for comment in registry.comments:
        _text_child(root, "comment", comment)
    root.append(
        _encode_wrapper(
            "platforms",
            _Wrapper(wrapper_comments.platforms, registry.platforms),
            encode_platform,
        )
    )
    root.append(
        _encode_wrapper("tags", _Wrapper(wrapper_comments.tags, registry.tags), encode_tag)
    )
    root.append(
        _encode_wrapper(
            "types", _Wrapper(wrapper_comments.types, registry.types), encode_typedef
        )
    )
    root.extend(encode_constants(group) for group in registry.constants)
    root.append(
        _encode_wrapper(
            "commands",
            _Wrapper(wrapper_comments.commands, registry.commands),
            encode_command,
        )
    )
    root.extend(encode_feature(feature) for feature in registry.features)
    root.append(
        _encode_wrapper(
            "extensions",
            _Wrapper(wrapper_comments.extensions, registry.extensions),
            encode_extension,
        )
    )
    return root


# ===--- Loading & writing ---=== #


def load_registry(path: Path) -> Registry:
    """Parse a vk.xml file and decode it.

    Raises:
        OSError: The file cannot be read.
        ET.ParseError: The file is not well-formed XML.
        DecodeError: The document does not match the registry schema.
    """
    root = ET.parse(path).getroot()
    registry = decode_registry(root)
    logger.debug("Loaded registry from %s", path)
    return registry


def write_registry(registry: Registry, path: Path) -> None:
    tree = ET.ElementTree(encode_registry(registry))
    ET.indent(tree, space="    ")
    tree.write(path, encoding="utf-8", xml_declaration=True)
    logger.debug("Wrote registry to %s", path)


# ===--- Summary report ---=== #


@dataclass(frozen=True)
class RegistrySummary:
    """Counts rendered by the CLI after a successful decode.

    Attributes:
        source_label: Registry source, usually the vk.xml file name.
        platforms: Number of platforms.
        tags: Number of author tags.
        types: Number of type definitions.
        type_categories: (category, count) rows in CATEGORY_NAMES order,
            followed by ("none", count) for uncategorized types.
        constant_groups: Number of `<enums>` groups.
        constants: Total enumerants across all groups.
        commands: Number of command definitions.
        command_aliases: Number of command aliases.
        features: Number of features.
        extensions: Number of extensions.
        disabled_extensions: Extensions with a disabled profile.
    """

    source_label: str
    platforms: int
    tags: int
    types: int
    type_categories: tuple[tuple[str, int], ...]
    constant_groups: int
    constants: int
    commands: int
    command_aliases: int
    features: int
    extensions: int
    disabled_extensions: int


def build_registry_summary(registry: Registry, source_label: str) -> RegistrySummary:
    category_counts = {name: 0 for name in (*CATEGORY_NAMES, "none")}
    for typedef in registry.types:
        kind = typedef.category.kind if typedef.category is not None else "none"
        category_counts[kind] += 1

    aliases = sum(1 for command in registry.commands if command.is_alias)
    disabled = sum(
        1 for ext in registry.extensions if isinstance(ext.profile, DisabledProfile)
    )
    return RegistrySummary(
        source_label=source_label,
        platforms=len(registry.platforms),
        tags=len(registry.tags),
        types=len(registry.types),
        type_categories=tuple(category_counts.items()),
        constant_groups=len(registry.constants),
        constants=sum(len(group.constants) for group in registry.constants),
        commands=len(registry.commands) - aliases,
        command_aliases=aliases,
        features=len(registry.features),
        extensions=len(registry.extensions),
        disabled_extensions=disabled,
    )


def format_registry_summary(summary: RegistrySummary) -> str:
    """Render a RegistrySummary as a console report with one trailing newline.

    Category rows with a zero count are omitted.
    """
    lines: list[str] = [f"Registry decoded from {summary.source_label}:", ""]

    def _row(label: str, count: int, note: str = "") -> str:
        return f"  {label:<16}{count:>6}{note}"

    lines.append(_row("Platforms:", summary.platforms))
    lines.append(_row("Tags:", summary.tags))
    lines.append(_row("Types:", summary.types))
    for category, count in summary.type_categories:
        if count:
            lines.append(f"    {category:<14}{count:>6}")
    lines.append(
        _row("Enum groups:", summary.constant_groups, f"  ({summary.constants} enumerants)")
    )
    lines.append(
        _row("Commands:", summary.commands, f"  (+{summary.command_aliases} aliases)")
    )
    lines.append(_row("Features:", summary.features))
    disabled_note = (
        f"  ({summary.disabled_extensions} disabled)" if summary.disabled_extensions else ""
    )
    lines.append(_row("Extensions:", summary.extensions, disabled_note))
    lines.append("")
    return "\n".join(lines)


def print_registry_summary(summary: RegistrySummary) -> None:
    print(format_registry_summary(summary), end="")


# ===--- CLI config ---=== #


CONFIG_ERROR_CODES = {
    "PATH_NOT_FOUND",
    "OUTPUT_DIR_NOT_FOUND",
}


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in CONFIG_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


@dataclass(frozen=True)
class RunConfig:
    vk_xml: Path
    write_xml: Path | None
    verbose: bool


def validate_path_exists(path: Path, flag: str, suggestion: str | None = None) -> Path:
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        suggestion or "Provide an existing path for this flag.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Decode a Vulkan registry (vk.xml) and summarize its contents"
    )
    parser.add_argument("--vk-xml", type=Path, default=DEFAULT_VK_XML)
    parser.add_argument("--write-xml", type=Path, default=None)
    parser.add_argument("--verbose", action="store_true", default=False)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> RunConfig:
    vk_xml = validate_path_exists(
        args.vk_xml,
        "--vk-xml",
        "Clone Vulkan-Docs:\n"
        "  git clone https://github.com/KhronosGroup/Vulkan-Docs.git\n"
        "Or pass a custom path: --vk-xml /your/path/to/vk.xml",
    )
    write_xml = args.write_xml
    if write_xml is not None and not write_xml.parent.is_dir():
        raise ConfigError(
            "OUTPUT_DIR_NOT_FOUND",
            f"Directory for --write-xml does not exist: {write_xml.parent}",
            "Create the directory first or choose another output path.",
        )
    return RunConfig(vk_xml=vk_xml, write_xml=write_xml, verbose=args.verbose)


def build_config(argv: list[str] | None = None) -> RunConfig:
    return validate_config(parse_args(argv))


# ===--- Main ---=== #


def main(argv: list[str] | None = None) -> None:
    try:
        config = build_config(argv)
    except ConfigError as err:
        print(f"Config error [{err.code}]: {err.message}")
        if err.suggestion:
            print(f"Hint: {err.suggestion}")
        raise SystemExit(1) from err

    if config.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    try:
        registry = load_registry(config.vk_xml)
    except DecodeError as err:
        print(f"Decode error [{err.code}]: {err.message}")
        raise SystemExit(1) from err
    except (OSError, ET.ParseError) as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err

    print_registry_summary(build_registry_summary(registry, config.vk_xml.name))

    if config.write_xml is not None:
        try:
            write_registry(registry, config.write_xml)
        except OSError as err:
            print(f"Error: {err}")
            raise SystemExit(1) from err
        print(f"Wrote {config.write_xml}")


if __name__ == "__main__":
    main()
