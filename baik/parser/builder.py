# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Term builder: lark parse tree -> typed `Term` tree.

One conversion rule per grammar rule tag. Leaf rules are delegated to
`leaves`, flat `infix` nodes to the precedence climber. Anonymous punctuation
is already filtered out by lark, so every handler sees only named subtrees.

Chained method calls arrive flat (`call_method: receiver name args name args
...`) and are unrolled here into right-nested MethodCall Terms:
`a.b(1).c(2)` becomes MethodCall(c, receiver=MethodCall(b, receiver=a)).
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from lark import Token, Tree

from baik.core.span import InputLocation, location_of

from .ast import (
	Argument,
	ArrayNode,
	CallNode,
	Clause,
	ConstructorNode,
	DeclarationNode,
	Function,
	Identifier,
	IfNode,
	ImplDefNode,
	MapNode,
	MethodCallNode,
	PrivateMethodNode,
	PropertyGetNode,
	PropertySetNode,
	PublicMethodNode,
	PublicMethodSpecNode,
	StaticMethodNode,
	StaticMethodSpecNode,
	Term,
	TraitDefNode,
	TypeDefNode,
	TypeSpec,
	UnaryNode,
)
from .errors import NestingTooDeep
from .leaves import (
	build_atom,
	build_boolean,
	build_float,
	build_identifier,
	build_integer,
	build_local,
	build_string,
	build_ty,
	build_typespec,
	build_unary,
	mismatch,
	rule_name,
)
from .precedence import climb

DEFAULT_MAX_DEPTH = 100

_METHOD_NAME_RULES = {"ident", "methodnamewithpredicate"}


def _subtrees(node: Tree) -> List[Tree]:
	return [c for c in node.children if isinstance(c, Tree)]


def _child(node: Tree, rule: str) -> Optional[Tree]:
	return next((c for c in node.children if isinstance(c, Tree) and rule_name(c) == rule), None)


class TermBuilder:
	"""
	Converts parse-tree nodes into Terms.

	Conversion is plain recursion; `build` re-entering itself more than
	`max_depth` times raises `NestingTooDeep`.
	"""

	def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
		if max_depth < 1:
			raise ValueError("max_depth must be at least 1")
		self.max_depth = max_depth
		self._depth = 0
		self._rules: Dict[str, Callable[[Tree], Term]] = {
			"array": self._array,
			"map": self._map,
			"call_local": self._call_local,
			"call_method": self._call_method,
			"typename": self._typename,
			"constructor": self._constructor,
			"declaration": self._declaration,
			"atom": self._leaf(build_atom),
			"boolean": self._leaf(build_boolean),
			"float": self._leaf(build_float),
			"integer": self._leaf(build_integer),
			"string": self._leaf(build_string),
			"local": self._leaf(build_local),
			"infix": self._infix,
			"unary": self._unary,
			"if_expression": self._if_expression,
			"property_get": self._property_get,
			"property_set": self._property_set,
			"function": self._function,
			"typedef": self._typedef,
			"traitdef": self._traitdef,
			"impldef": self._impldef,
			"defpublicmethod": self._method(PublicMethodNode),
			"defprivatemethod": self._method(PrivateMethodNode),
			"defstaticmethod": self._method(StaticMethodNode),
			"defpublicspec": self._method_spec(PublicMethodSpecNode),
			"defstaticspec": self._method_spec(StaticMethodSpecNode),
		}

	def build(self, node: Tree | Token) -> Term:
		"""Convert one expression or definition node."""
		if not isinstance(node, Tree):
			raise mismatch(node)
		handler = self._rules.get(rule_name(node))
		if handler is None:
			raise mismatch(node)
		self.enter(location_of(node))
		try:
			return handler(node)
		finally:
			self.leave()

	def enter(self, location: InputLocation) -> None:
		"""
		Claim one nesting level for a node at `location`.

		`build` claims one level per node; the precedence climber claims one
		per Binary Term it folds, so operator chains and bracket nesting share
		the same `max_depth` budget.
		"""
		if self._depth >= self.max_depth:
			raise NestingTooDeep(self.max_depth, location)
		self._depth += 1

	def leave(self, levels: int = 1) -> None:
		self._depth -= levels

	def build_all(self, nodes: Sequence[Tree | Token]) -> Tuple[Term, ...]:
		return tuple(self.build(n) for n in nodes)

	# ----- Leaves -----

	@staticmethod
	def _leaf(convert: Callable[[Tree], object]) -> Callable[[Tree], Term]:
		def handler(node: Tree) -> Term:
			return Term(convert(node), location_of(node))  # type: ignore[arg-type]

		return handler

	def _typename(self, node: Tree) -> Term:
		return Term(build_ty(node), location_of(node))

	def _property_get(self, node: Tree) -> Term:
		return Term(PropertyGetNode(name=build_identifier(node)), location_of(node))

	# ----- Collections -----

	def _array(self, node: Tree) -> Term:
		return Term(ArrayNode(elements=self.build_all(node.children)), location_of(node))

	def _map(self, node: Tree) -> Term:
		pairs = []
		for pair in _subtrees(node):
			if rule_name(pair) != "map_pair":
				raise mismatch(pair)
			key_node, value_node = self._pair(pair)
			if rule_name(key_node) == "keyword":
				key = Term(build_atom(key_node), location_of(key_node))
			else:
				key = self.build(key_node)
			pairs.append((key, self.build(value_node)))
		return Term(MapNode(pairs=tuple(pairs)), location_of(node))

	@staticmethod
	def _pair(node: Tree) -> Tuple[Tree, Tree]:
		children = _subtrees(node)
		if len(children) != 2:
			raise mismatch(node)
		return children[0], children[1]

	def _keyword_values(self, nodes: Sequence[Tree], rule: str) -> Tuple[Tuple[Identifier, Term], ...]:
		"""`name: value` children of constructors and property sets."""
		out = []
		for child in nodes:
			if rule_name(child) != rule:
				raise mismatch(child)
			key_node, value_node = self._pair(child)
			out.append((build_identifier(key_node), self.build(value_node)))
		return tuple(out)

	def _constructor(self, node: Tree) -> Term:
		children = _subtrees(node)
		ty = build_ty(children[0])
		properties = self._keyword_values(children[1:], "constructor_property")
		return Term(ConstructorNode(ty=ty, properties=properties), location_of(node))

	def _property_set(self, node: Tree) -> Term:
		return Term(PropertySetNode(assignments=self._keyword_values(_subtrees(node), "property_assignment")), location_of(node))

	# ----- Calls -----

	def _arguments(self, nodes: Sequence[Tree]) -> Tuple[Term, ...]:
		args = []
		for arg in nodes:
			if rule_name(arg) != "call_argument":
				raise mismatch(arg)
			value = next(iter(_subtrees(arg)), None)
			if value is None:
				raise mismatch(arg)
			args.append(self.build(value))
		return tuple(args)

	def _call_local(self, node: Tree) -> Term:
		children = _subtrees(node)
		callee = self.build(children[0])
		return Term(CallNode(callee=callee, arguments=self._arguments(children[1:])), location_of(node))

	def _call_method(self, node: Tree) -> Term:
		children = _subtrees(node)
		if len(children) < 2:
			raise mismatch(node)
		receiver = self.build(children[0])
		return self._unroll(receiver, children[1:])

	def _unroll(self, receiver: Term, rest: Sequence[Tree]) -> Term:
		"""
		Consume one method name plus the `call_argument` nodes after it, wrap
		`receiver`, and continue with the result as the next receiver.

		Each MethodCall Term is located at its receiver.
		"""
		i = 0
		while i < len(rest):
			name_node = rest[i]
			if rule_name(name_node) not in _METHOD_NAME_RULES:
				raise mismatch(name_node)
			i += 1
			start = i
			while i < len(rest) and rule_name(rest[i]) == "call_argument":
				i += 1
			call = MethodCallNode(
				receiver=receiver,
				method=build_identifier(name_node),
				arguments=self._arguments(rest[start:i]),
			)
			receiver = Term(call, receiver.location)
		return receiver

	# ----- Expressions -----

	def _declaration(self, node: Tree) -> Term:
		children = _subtrees(node)
		if len(children) != 3 or rule_name(children[1]) != "assign":
			raise mismatch(node)
		name = build_identifier(children[0])
		return Term(DeclarationNode(name=name, value=self.build(children[2])), location_of(node))

	def _infix(self, node: Tree) -> Term:
		return climb(node, self)

	def _unary(self, node: Tree) -> Term:
		children = _subtrees(node)
		if len(children) != 2:
			raise mismatch(node)
		op = build_unary(children[0])
		return Term(UnaryNode(op=op, operand=self.build(children[1])), location_of(node))

	def _block(self, node: Tree) -> Tuple[Term, ...]:
		if rule_name(node) != "block":
			raise mismatch(node)
		return self.build_all(node.children)

	def _if_expression(self, node: Tree) -> Term:
		children = _subtrees(node)
		if len(children) not in (2, 3):
			raise mismatch(node)
		test = self.build(children[0])
		positives = self._block(children[1])
		negatives: Tuple[Term, ...] = ()
		if len(children) == 3:
			alternative = children[2]
			if rule_name(alternative) == "if_expression":
				negatives = (self.build(alternative),)
			else:
				negatives = self._block(alternative)
		return Term(IfNode(test=test, positives=positives, negatives=negatives), location_of(node))

	# ----- Functions and definitions -----

	def _argument_list(self, node: Tree) -> Tuple[Argument, ...]:
		if rule_name(node) != "argument_list":
			raise mismatch(node)
		args = []
		for arg in _subtrees(node):
			if rule_name(arg) != "argument":
				raise mismatch(arg)
			parts = _subtrees(arg)
			name = build_identifier(parts[0])
			if len(parts) == 2:
				spec = build_typespec(parts[1])
			else:
				# Untyped argument: empty type list positioned right after the name.
				end = name.location.end if name.location.end is not None else name.location.start
				spec = TypeSpec(types=(), location=InputLocation.pos(end))
			args.append((name, spec))
		return tuple(args)

	def _function(self, node: Tree) -> Term:
		clauses = []
		for clause in _subtrees(node):
			if rule_name(clause) != "function_clause":
				raise mismatch(clause)
			arg_list, block = _subtrees(clause)
			clauses.append(
				Clause(
					arguments=self._argument_list(arg_list),
					body=self._block(block),
					location=location_of(clause),
				)
			)
		loc = location_of(node)
		return Term(Function(clauses=tuple(clauses), location=loc), loc)

	def _definition_body(self, node: Tree) -> Tuple[Term, ...]:
		body = _child(node, "definition_block")
		return () if body is None else self.build_all(body.children)

	def _typedef(self, node: Tree) -> Term:
		ty = build_ty(_subtrees(node)[0])
		arg_list = _child(node, "argument_list")
		properties = () if arg_list is None else self._argument_list(arg_list)
		payload = TypeDefNode(ty=ty, properties=properties, body=self._definition_body(node))
		return Term(payload, location_of(node))

	def _traitdef(self, node: Tree) -> Term:
		ty = build_ty(_subtrees(node)[0])
		reqs = _child(node, "typespec")
		requirements = None if reqs is None else build_typespec(reqs)
		payload = TraitDefNode(ty=ty, requirements=requirements, body=self._definition_body(node))
		return Term(payload, location_of(node))

	def _impldef(self, node: Tree) -> Term:
		ty = build_ty(_subtrees(node)[0])
		return Term(ImplDefNode(ty=ty, body=self._definition_body(node)), location_of(node))

	def _method(self, cls: type) -> Callable[[Tree], Term]:
		def handler(node: Tree) -> Term:
			children = _subtrees(node)
			if len(children) != 3:
				raise mismatch(node)
			name_node, arg_list, block = children
			payload = cls(
				name=build_identifier(name_node),
				arguments=self._argument_list(arg_list),
				body=self._block(block),
			)
			return Term(payload, location_of(node))

		return handler

	def _method_spec(self, cls: type) -> Callable[[Tree], Term]:
		def handler(node: Tree) -> Term:
			children = _subtrees(node)
			name = build_identifier(children[0])
			arguments = self._argument_list(children[1])
			return_type: Optional[TypeSpec] = None
			if not name.has_predicate:
				ret = _child(node, "return_type")
				if ret is None:
					raise mismatch(node)
				return_type = build_typespec(_subtrees(ret)[0])
			payload = cls(name=name, arguments=arguments, return_type=return_type)
			return Term(payload, location_of(node))

		return handler


__all__ = ["DEFAULT_MAX_DEPTH", "TermBuilder"]
