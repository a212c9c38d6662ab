# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Typed BAIK AST.

`Term` is the single node type handed to the interpreter. Its payload is one of
a closed set of variant records; `node_type()` reports which one, and each
variant has exactly one accessor that returns its parts (or None for any other
variant). Downstream code is expected to go through `node_type()` plus the
matching accessor only.

Leaf values (Atom, Integer, Identifier, ...) each carry their own location,
computed independently from the Term that wraps them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple, Union

from baik.core.span import InputLocation


class NodeType(Enum):
	"""Kinds of Term."""

	ATOM = auto()
	BOOLEAN = auto()
	FLOAT = auto()
	INTEGER = auto()
	STRING = auto()
	TY = auto()
	ARRAY = auto()
	MAP = auto()
	BINARY = auto()
	UNARY = auto()
	CONSTRUCTOR = auto()
	CALL = auto()
	DECLARATION = auto()
	FUNCTION = auto()
	IF = auto()
	LOCAL = auto()
	METHOD_CALL = auto()
	PROPERTY_GET = auto()
	PROPERTY_SET = auto()
	TYPE_DEF = auto()
	TRAIT_DEF = auto()
	IMPL_DEF = auto()
	PUBLIC_METHOD = auto()
	PUBLIC_METHOD_SPEC = auto()
	PRIVATE_METHOD = auto()
	STATIC_METHOD = auto()
	STATIC_METHOD_SPEC = auto()


class BinaryOperator(Enum):
	BITWISE_AND = auto()
	BITWISE_OR = auto()
	BITWISE_XOR = auto()
	DIVIDE = auto()
	EQUAL = auto()
	EXPONENT = auto()
	GREATER_THAN = auto()
	GREATER_THAN_OR_EQUAL = auto()
	LESS_THAN = auto()
	LESS_THAN_OR_EQUAL = auto()
	LOGICAL_AND = auto()
	LOGICAL_OR = auto()
	MINUS = auto()
	MODULUS = auto()
	MULTIPLY = auto()
	NOT_EQUAL = auto()
	PLUS = auto()
	SHIFT_LEFT = auto()
	SHIFT_RIGHT = auto()

	def is_arithmetic(self) -> bool:
		return self in _ARITHMETIC_BINARY

	def is_logical(self) -> bool:
		return self not in _ARITHMETIC_BINARY

	def __str__(self) -> str:
		return _BINARY_SYMBOLS[self]


_ARITHMETIC_BINARY = frozenset(
	{
		BinaryOperator.BITWISE_AND,
		BinaryOperator.BITWISE_OR,
		BinaryOperator.BITWISE_XOR,
		BinaryOperator.DIVIDE,
		BinaryOperator.EXPONENT,
		BinaryOperator.MINUS,
		BinaryOperator.MODULUS,
		BinaryOperator.MULTIPLY,
		BinaryOperator.PLUS,
		BinaryOperator.SHIFT_LEFT,
		BinaryOperator.SHIFT_RIGHT,
	}
)

_BINARY_SYMBOLS = {
	BinaryOperator.BITWISE_AND: "&",
	BinaryOperator.BITWISE_OR: "|",
	BinaryOperator.BITWISE_XOR: "^",
	BinaryOperator.DIVIDE: "/",
	BinaryOperator.EQUAL: "==",
	BinaryOperator.EXPONENT: "**",
	BinaryOperator.GREATER_THAN: ">",
	BinaryOperator.GREATER_THAN_OR_EQUAL: ">=",
	BinaryOperator.LESS_THAN: "<",
	BinaryOperator.LESS_THAN_OR_EQUAL: "<=",
	BinaryOperator.LOGICAL_AND: "&&",
	BinaryOperator.LOGICAL_OR: "||",
	BinaryOperator.MINUS: "-",
	BinaryOperator.MODULUS: "%",
	BinaryOperator.MULTIPLY: "*",
	BinaryOperator.NOT_EQUAL: "!=",
	BinaryOperator.PLUS: "+",
	BinaryOperator.SHIFT_LEFT: "<<",
	BinaryOperator.SHIFT_RIGHT: ">>",
}


class UnaryOperator(Enum):
	LOGICAL_NOT = auto()
	MINUS = auto()
	PLUS = auto()

	def is_arithmetic(self) -> bool:
		return self is not UnaryOperator.LOGICAL_NOT

	def is_logical(self) -> bool:
		return self is UnaryOperator.LOGICAL_NOT

	def __str__(self) -> str:
		return _UNARY_SYMBOLS[self]


_UNARY_SYMBOLS = {
	UnaryOperator.LOGICAL_NOT: "!",
	UnaryOperator.MINUS: "-",
	UnaryOperator.PLUS: "+",
}


# ----- Leaf values -----


@dataclass(frozen=True)
class Atom:
	value: str
	location: InputLocation


@dataclass(frozen=True)
class Boolean:
	value: bool
	location: InputLocation


@dataclass(frozen=True)
class Integer:
	value: int
	radix: int
	location: InputLocation


@dataclass(frozen=True)
class Float:
	value: float
	location: InputLocation


@dataclass(frozen=True)
class String:
	"""String literal contents, escapes kept verbatim."""

	value: str
	location: InputLocation


@dataclass(frozen=True)
class Local:
	value: str
	location: InputLocation


@dataclass(frozen=True)
class Ty:
	"""Type name; dotted paths such as `My.Greeter` are kept as one name."""

	value: str
	location: InputLocation


@dataclass(frozen=True)
class Identifier:
	value: str
	location: InputLocation
	has_predicate: bool = False


@dataclass(frozen=True)
class TypeSpec:
	"""`A + B + C` style type list used by arguments, traits and return types."""

	types: Tuple[Ty, ...]
	location: InputLocation


@dataclass(frozen=True)
class Binary:
	value: BinaryOperator
	location: InputLocation

	def is_arithmetic(self) -> bool:
		return self.value.is_arithmetic()

	def is_logical(self) -> bool:
		return self.value.is_logical()

	def __str__(self) -> str:
		return str(self.value)


@dataclass(frozen=True)
class Unary:
	value: UnaryOperator
	location: InputLocation

	def is_arithmetic(self) -> bool:
		return self.value.is_arithmetic()

	def is_logical(self) -> bool:
		return self.value.is_logical()

	def __str__(self) -> str:
		return str(self.value)


Argument = Tuple[Identifier, TypeSpec]


@dataclass(frozen=True)
class Clause:
	"""One `(args) do ... end` clause of an anonymous function."""

	arguments: Tuple[Argument, ...]
	body: Tuple["Term", ...]
	location: InputLocation


@dataclass(frozen=True)
class Function:
	clauses: Tuple[Clause, ...]
	location: InputLocation


# ----- Composite payloads -----


@dataclass(frozen=True)
class ArrayNode:
	elements: Tuple["Term", ...]


@dataclass(frozen=True)
class MapNode:
	pairs: Tuple[Tuple["Term", "Term"], ...]


@dataclass(frozen=True)
class BinaryNode:
	op: Binary
	lhs: "Term"
	rhs: "Term"


@dataclass(frozen=True)
class UnaryNode:
	op: Unary
	operand: "Term"


@dataclass(frozen=True)
class ConstructorNode:
	ty: Ty
	properties: Tuple[Tuple[Identifier, "Term"], ...]


@dataclass(frozen=True)
class CallNode:
	callee: "Term"
	arguments: Tuple["Term", ...]


@dataclass(frozen=True)
class DeclarationNode:
	name: Identifier
	value: "Term"


@dataclass(frozen=True)
class IfNode:
	test: "Term"
	positives: Tuple["Term", ...]
	negatives: Tuple["Term", ...]


@dataclass(frozen=True)
class MethodCallNode:
	receiver: "Term"
	method: Identifier
	arguments: Tuple["Term", ...]


@dataclass(frozen=True)
class PropertyGetNode:
	name: Identifier


@dataclass(frozen=True)
class PropertySetNode:
	assignments: Tuple[Tuple[Identifier, "Term"], ...]


@dataclass(frozen=True)
class TypeDefNode:
	ty: Ty
	properties: Tuple[Argument, ...]
	body: Tuple["Term", ...]


@dataclass(frozen=True)
class TraitDefNode:
	ty: Ty
	requirements: Optional[TypeSpec]
	body: Tuple["Term", ...]


@dataclass(frozen=True)
class ImplDefNode:
	ty: Ty
	body: Tuple["Term", ...]


@dataclass(frozen=True)
class MethodNode:
	name: Identifier
	arguments: Tuple[Argument, ...]
	body: Tuple["Term", ...]


@dataclass(frozen=True)
class PublicMethodNode(MethodNode):
	pass


@dataclass(frozen=True)
class PrivateMethodNode(MethodNode):
	pass


@dataclass(frozen=True)
class StaticMethodNode(MethodNode):
	pass


@dataclass(frozen=True)
class MethodSpecNode:
	name: Identifier
	arguments: Tuple[Argument, ...]
	return_type: Optional[TypeSpec]


@dataclass(frozen=True)
class PublicMethodSpecNode(MethodSpecNode):
	pass


@dataclass(frozen=True)
class StaticMethodSpecNode(MethodSpecNode):
	pass


Payload = Union[
	Atom,
	Boolean,
	Float,
	Integer,
	String,
	Ty,
	Local,
	Function,
	ArrayNode,
	MapNode,
	BinaryNode,
	UnaryNode,
	ConstructorNode,
	CallNode,
	DeclarationNode,
	IfNode,
	MethodCallNode,
	PropertyGetNode,
	PropertySetNode,
	TypeDefNode,
	TraitDefNode,
	ImplDefNode,
	PublicMethodNode,
	PrivateMethodNode,
	StaticMethodNode,
	PublicMethodSpecNode,
	StaticMethodSpecNode,
]

# Exact payload class -> tag. Subclasses are looked up by their own class so
# PublicMethodNode never reports as a generic method.
_NODE_TYPES = {
	Atom: NodeType.ATOM,
	Boolean: NodeType.BOOLEAN,
	Float: NodeType.FLOAT,
	Integer: NodeType.INTEGER,
	String: NodeType.STRING,
	Ty: NodeType.TY,
	Local: NodeType.LOCAL,
	Function: NodeType.FUNCTION,
	ArrayNode: NodeType.ARRAY,
	MapNode: NodeType.MAP,
	BinaryNode: NodeType.BINARY,
	UnaryNode: NodeType.UNARY,
	ConstructorNode: NodeType.CONSTRUCTOR,
	CallNode: NodeType.CALL,
	DeclarationNode: NodeType.DECLARATION,
	IfNode: NodeType.IF,
	MethodCallNode: NodeType.METHOD_CALL,
	PropertyGetNode: NodeType.PROPERTY_GET,
	PropertySetNode: NodeType.PROPERTY_SET,
	TypeDefNode: NodeType.TYPE_DEF,
	TraitDefNode: NodeType.TRAIT_DEF,
	ImplDefNode: NodeType.IMPL_DEF,
	PublicMethodNode: NodeType.PUBLIC_METHOD,
	PublicMethodSpecNode: NodeType.PUBLIC_METHOD_SPEC,
	PrivateMethodNode: NodeType.PRIVATE_METHOD,
	StaticMethodNode: NodeType.STATIC_METHOD,
	StaticMethodSpecNode: NodeType.STATIC_METHOD_SPEC,
}


@dataclass(frozen=True)
class Term:
	"""An AST node: one variant payload plus the source location it came from."""

	payload: Payload
	location: InputLocation

	def __post_init__(self) -> None:
		if type(self.payload) not in _NODE_TYPES:
			raise TypeError(f"Unsupported Term payload {type(self.payload).__name__}")

	@staticmethod
	def input(source: str) -> List["Term"]:
		"""Parse an interactive statement stream."""
		from .parser import parse_input

		return parse_input(source)

	@staticmethod
	def file(source: str) -> List["Term"]:
		"""Parse a whole source file (expressions plus type/trait definitions)."""
		from .parser import parse_file

		return parse_file(source)

	def node_type(self) -> NodeType:
		return _NODE_TYPES[type(self.payload)]

	def _payload(self, cls: type) -> Optional[Payload]:
		p = self.payload
		return p if type(p) is cls else None

	# ----- Leaves -----

	def atom(self) -> Optional[Atom]:
		return self._payload(Atom)  # type: ignore[return-value]

	def boolean(self) -> Optional[Boolean]:
		return self._payload(Boolean)  # type: ignore[return-value]

	def float(self) -> Optional[Float]:
		return self._payload(Float)  # type: ignore[return-value]

	def integer(self) -> Optional[Integer]:
		return self._payload(Integer)  # type: ignore[return-value]

	def string(self) -> Optional[String]:
		return self._payload(String)  # type: ignore[return-value]

	def ty(self) -> Optional[Ty]:
		return self._payload(Ty)  # type: ignore[return-value]

	def local(self) -> Optional[Local]:
		return self._payload(Local)  # type: ignore[return-value]

	def function(self) -> Optional[Function]:
		return self._payload(Function)  # type: ignore[return-value]

	# ----- Composites -----

	def array(self) -> Optional[Tuple["Term", ...]]:
		p = self._payload(ArrayNode)
		return None if p is None else p.elements  # type: ignore[union-attr]

	def map(self) -> Optional[Tuple[Tuple["Term", "Term"], ...]]:
		p = self._payload(MapNode)
		return None if p is None else p.pairs  # type: ignore[union-attr]

	def binary(self) -> Optional[Tuple[Binary, "Term", "Term"]]:
		p = self._payload(BinaryNode)
		if p is None:
			return None
		return p.op, p.lhs, p.rhs  # type: ignore[union-attr]

	def unary(self) -> Optional[Tuple[Unary, "Term"]]:
		p = self._payload(UnaryNode)
		if p is None:
			return None
		return p.op, p.operand  # type: ignore[union-attr]

	def constructor(self) -> Optional[Tuple[Ty, Tuple[Tuple[Identifier, "Term"], ...]]]:
		p = self._payload(ConstructorNode)
		if p is None:
			return None
		return p.ty, p.properties  # type: ignore[union-attr]

	def call(self) -> Optional[Tuple["Term", Tuple["Term", ...]]]:
		p = self._payload(CallNode)
		if p is None:
			return None
		return p.callee, p.arguments  # type: ignore[union-attr]

	def declaration(self) -> Optional[Tuple[Identifier, "Term"]]:
		p = self._payload(DeclarationNode)
		if p is None:
			return None
		return p.name, p.value  # type: ignore[union-attr]

	def if_expr(self) -> Optional[Tuple["Term", Tuple["Term", ...], Tuple["Term", ...]]]:
		p = self._payload(IfNode)
		if p is None:
			return None
		return p.test, p.positives, p.negatives  # type: ignore[union-attr]

	def method_call(self) -> Optional[Tuple["Term", Identifier, Tuple["Term", ...]]]:
		p = self._payload(MethodCallNode)
		if p is None:
			return None
		return p.receiver, p.method, p.arguments  # type: ignore[union-attr]

	def property_get(self) -> Optional[Identifier]:
		p = self._payload(PropertyGetNode)
		return None if p is None else p.name  # type: ignore[union-attr]

	def property_set(self) -> Optional[Tuple[Tuple[Identifier, "Term"], ...]]:
		p = self._payload(PropertySetNode)
		return None if p is None else p.assignments  # type: ignore[union-attr]

	# ----- Definitions -----

	def typedef(self) -> Optional[Tuple[Ty, Tuple[Argument, ...], Tuple["Term", ...]]]:
		p = self._payload(TypeDefNode)
		if p is None:
			return None
		return p.ty, p.properties, p.body  # type: ignore[union-attr]

	def traitdef(self) -> Optional[Tuple[Ty, Optional[TypeSpec], Tuple["Term", ...]]]:
		p = self._payload(TraitDefNode)
		if p is None:
			return None
		return p.ty, p.requirements, p.body  # type: ignore[union-attr]

	def impldef(self) -> Optional[Tuple[Ty, Tuple["Term", ...]]]:
		p = self._payload(ImplDefNode)
		if p is None:
			return None
		return p.ty, p.body  # type: ignore[union-attr]

	def public_method(self) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Tuple["Term", ...]]]:
		return self._method(PublicMethodNode)

	def private_method(self) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Tuple["Term", ...]]]:
		return self._method(PrivateMethodNode)

	def static_method(self) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Tuple["Term", ...]]]:
		return self._method(StaticMethodNode)

	def public_method_spec(self) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Optional[TypeSpec]]]:
		return self._method_spec(PublicMethodSpecNode)

	def static_method_spec(self) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Optional[TypeSpec]]]:
		return self._method_spec(StaticMethodSpecNode)

	def _method(self, cls: type) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Tuple["Term", ...]]]:
		p = self._payload(cls)
		if p is None:
			return None
		return p.name, p.arguments, p.body  # type: ignore[union-attr]

	def _method_spec(self, cls: type) -> Optional[Tuple[Identifier, Tuple[Argument, ...], Optional[TypeSpec]]]:
		p = self._payload(cls)
		if p is None:
			return None
		return p.name, p.arguments, p.return_type  # type: ignore[union-attr]


__all__ = [
	"Argument",
	"Atom",
	"Binary",
	"BinaryOperator",
	"Boolean",
	"Clause",
	"Float",
	"Function",
	"Identifier",
	"Integer",
	"Local",
	"NodeType",
	"String",
	"Term",
	"Ty",
	"TypeSpec",
	"Unary",
	"UnaryOperator",
]
