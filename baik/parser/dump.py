# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSON-ready rendering of Term trees.

This walks Terms exactly the way an interpreter would: `node_type()` to pick
the variant, then the matching accessor. Nothing here touches payload
internals.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from .ast import Argument, Identifier, NodeType, Term, TypeSpec


def _identifier(ident: Identifier) -> str:
	return ident.value


def _typespec(spec: Optional[TypeSpec]) -> Optional[List[str]]:
	if spec is None:
		return None
	return [ty.value for ty in spec.types]


class _Dumper:
	def __init__(self, *, locations: bool) -> None:
		self.locations = locations
		self._variants: Dict[NodeType, Callable[[Term], Dict[str, Any]]] = {
			NodeType.ATOM: lambda t: {"value": t.atom().value},
			NodeType.BOOLEAN: lambda t: {"value": t.boolean().value},
			NodeType.FLOAT: lambda t: {"value": t.float().value},
			NodeType.INTEGER: lambda t: {"value": t.integer().value, "radix": t.integer().radix},
			NodeType.STRING: lambda t: {"value": t.string().value},
			NodeType.TY: lambda t: {"value": t.ty().value},
			NodeType.LOCAL: lambda t: {"value": t.local().value},
			NodeType.ARRAY: lambda t: {"elements": self.terms(t.array())},
			NodeType.MAP: lambda t: {"pairs": [[self.term(k), self.term(v)] for k, v in t.map()]},
			NodeType.BINARY: self._binary,
			NodeType.UNARY: self._unary,
			NodeType.CONSTRUCTOR: self._constructor,
			NodeType.CALL: self._call,
			NodeType.DECLARATION: self._declaration,
			NodeType.FUNCTION: self._function,
			NodeType.IF: self._if,
			NodeType.METHOD_CALL: self._method_call,
			NodeType.PROPERTY_GET: lambda t: {"name": _identifier(t.property_get())},
			NodeType.PROPERTY_SET: lambda t: {"assignments": self.named(t.property_set())},
			NodeType.TYPE_DEF: self._typedef,
			NodeType.TRAIT_DEF: self._traitdef,
			NodeType.IMPL_DEF: self._impldef,
			NodeType.PUBLIC_METHOD: lambda t: self._method(*t.public_method()),
			NodeType.PRIVATE_METHOD: lambda t: self._method(*t.private_method()),
			NodeType.STATIC_METHOD: lambda t: self._method(*t.static_method()),
			NodeType.PUBLIC_METHOD_SPEC: lambda t: self._method_spec(*t.public_method_spec()),
			NodeType.STATIC_METHOD_SPEC: lambda t: self._method_spec(*t.static_method_spec()),
		}

	def term(self, term: Term) -> Dict[str, Any]:
		kind = term.node_type()
		data: Dict[str, Any] = {"node": kind.name.lower()}
		if self.locations:
			data["location"] = str(term.location)
		data.update(self._variants[kind](term))
		return data

	def terms(self, terms: Iterable[Term]) -> List[Dict[str, Any]]:
		return [self.term(t) for t in terms]

	def named(self, pairs: Iterable[tuple]) -> List[Dict[str, Any]]:
		return [{"name": _identifier(name), "value": self.term(value)} for name, value in pairs]

	@staticmethod
	def arguments(args: Iterable[Argument]) -> List[Dict[str, Any]]:
		return [{"name": _identifier(name), "types": _typespec(spec)} for name, spec in args]

	def _binary(self, term: Term) -> Dict[str, Any]:
		op, lhs, rhs = term.binary()
		return {"op": str(op), "lhs": self.term(lhs), "rhs": self.term(rhs)}

	def _unary(self, term: Term) -> Dict[str, Any]:
		op, operand = term.unary()
		return {"op": str(op), "operand": self.term(operand)}

	def _constructor(self, term: Term) -> Dict[str, Any]:
		ty, properties = term.constructor()
		return {"type": ty.value, "properties": self.named(properties)}

	def _call(self, term: Term) -> Dict[str, Any]:
		callee, args = term.call()
		return {"callee": self.term(callee), "arguments": self.terms(args)}

	def _declaration(self, term: Term) -> Dict[str, Any]:
		name, value = term.declaration()
		return {"name": _identifier(name), "value": self.term(value)}

	def _function(self, term: Term) -> Dict[str, Any]:
		fn = term.function()
		return {
			"clauses": [
				{"arguments": self.arguments(clause.arguments), "body": self.terms(clause.body)}
				for clause in fn.clauses
			]
		}

	def _if(self, term: Term) -> Dict[str, Any]:
		test, positives, negatives = term.if_expr()
		return {"test": self.term(test), "positives": self.terms(positives), "negatives": self.terms(negatives)}

	def _method_call(self, term: Term) -> Dict[str, Any]:
		receiver, method, args = term.method_call()
		return {"receiver": self.term(receiver), "method": _identifier(method), "arguments": self.terms(args)}

	def _typedef(self, term: Term) -> Dict[str, Any]:
		ty, properties, body = term.typedef()
		return {"type": ty.value, "properties": self.arguments(properties), "body": self.terms(body)}

	def _traitdef(self, term: Term) -> Dict[str, Any]:
		ty, requirements, body = term.traitdef()
		return {"type": ty.value, "requirements": _typespec(requirements), "body": self.terms(body)}

	def _impldef(self, term: Term) -> Dict[str, Any]:
		ty, body = term.impldef()
		return {"type": ty.value, "body": self.terms(body)}

	def _method(self, name: Identifier, args: Iterable[Argument], body: Iterable[Term]) -> Dict[str, Any]:
		return {"name": _identifier(name), "arguments": self.arguments(args), "body": self.terms(body)}

	def _method_spec(self, name: Identifier, args: Iterable[Argument], return_type: Optional[TypeSpec]) -> Dict[str, Any]:
		return {"name": _identifier(name), "arguments": self.arguments(args), "return_type": _typespec(return_type)}


def term_to_data(term: Term, *, locations: bool = True) -> Dict[str, Any]:
	"""
	Render one Term tree as plain dicts/lists.

	Every node gets `node` (lowercase NodeType name) and, unless
	`locations=False`, `location` (`"start:end"` or `"pos"`).
	"""
	return _Dumper(locations=locations).term(term)


def terms_to_data(terms: Iterable[Term], *, locations: bool = True) -> List[Dict[str, Any]]:
	return _Dumper(locations=locations).terms(terms)


__all__ = ["term_to_data", "terms_to_data"]
