# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from baik.parser import GrammarMismatch, NodeType, parse_file


def test_traitdef_with_bounds() -> None:
	terms = parse_file("trait Integer: Add + Subtract")
	assert terms[0].node_type() is NodeType.TRAIT_DEF
	ty, reqs, body = terms[0].traitdef()
	assert ty.value == "Integer"
	assert reqs is not None
	assert [t.value for t in reqs.types] == ["Add", "Subtract"]
	assert body == ()


def test_traitdef_without_bounds() -> None:
	ty, reqs, body = parse_file("trait Printable")[0].traitdef()
	assert ty.value == "Printable"
	assert reqs is None
	assert body == ()


def test_typedef_without_arguments_or_body() -> None:
	ty, props, body = parse_file("type Unit")[0].typedef()
	assert ty.value == "Unit"
	assert props == ()
	assert body == ()


def test_typedef() -> None:
	ty, props, body = parse_file("type Delorean(speed: Integer)")[0].typedef()
	assert ty.value == "Delorean"
	assert len(props) == 1
	assert body == ()
	key, value = props[0]
	assert key.value == "speed"
	assert value.types[0].value == "Integer"


def test_typedef_with_impl() -> None:
	source = """
		type Delorean(speed: Integer) do
			impl TimeMachine
		end
	"""
	terms = parse_file(source)
	ty, props, body = terms[0].typedef()
	assert ty.value == "Delorean"
	assert len(props) == 1
	assert len(body) == 1

	assert body[0].node_type() is NodeType.IMPL_DEF
	tr, impl_body = body[0].impldef()
	assert tr.value == "TimeMachine"
	assert impl_body == ()


def test_typedef_with_methods() -> None:
	source = """
		type Delorean(speed) do
			defs new() do
				Delorean { speed: 0 }
			end
		end
	"""
	ty, props, body = parse_file(source)[0].typedef()
	assert ty.value == "Delorean"
	assert len(props) == 1
	key, spec = props[0]
	assert key.value == "speed"
	assert spec.types == ()
	assert len(body) == 1

	assert body[0].node_type() is NodeType.STATIC_METHOD
	name, args, block = body[0].static_method()
	assert name.value == "new"
	assert args == ()
	assert len(block) == 1
	assert block[0].node_type() is NodeType.CONSTRUCTOR


def test_impl_with_public_and_private_methods() -> None:
	source = """
		type Greeter(name: String) do
			impl Greeting do
				def greet(other: String + Atom) do
					"hi"
				end
				defp secret?() { benar }
			end
		end
	"""
	_ty, _props, body = parse_file(source)[0].typedef()
	_tr, impl_body = body[0].impldef()
	assert [m.node_type() for m in impl_body] == [NodeType.PUBLIC_METHOD, NodeType.PRIVATE_METHOD]

	name, args, block = impl_body[0].public_method()
	assert name.value == "greet"
	arg_name, arg_spec = args[0]
	assert arg_name.value == "other"
	assert [t.value for t in arg_spec.types] == ["String", "Atom"]
	assert block[0].string().value == "hi"

	name, args, block = impl_body[1].private_method()
	assert name.value == "secret?"
	assert name.has_predicate is True
	assert args == ()
	assert block[0].boolean().value is True


def test_trait_method_specs() -> None:
	source = """
		trait Comparable do
			def compare(other: Self): Integer
			def valid?(x)
			defs zero(): Self
		end
	"""
	ty, reqs, body = parse_file(source)[0].traitdef()
	assert ty.value == "Comparable"
	assert reqs is None
	assert [m.node_type() for m in body] == [
		NodeType.PUBLIC_METHOD_SPEC,
		NodeType.PUBLIC_METHOD_SPEC,
		NodeType.STATIC_METHOD_SPEC,
	]

	name, args, rtype = body[0].public_method_spec()
	assert name.value == "compare"
	assert args[0][0].value == "other"
	assert [t.value for t in rtype.types] == ["Integer"]

	name, args, rtype = body[1].public_method_spec()
	assert name.value == "valid?"
	assert name.has_predicate is True
	assert len(args) == 1
	assert rtype is None

	name, args, rtype = body[2].static_method_spec()
	assert name.value == "zero"
	assert args == ()
	assert [t.value for t in rtype.types] == ["Self"]


def test_spec_without_return_type_needs_predicate_name() -> None:
	with pytest.raises(GrammarMismatch):
		parse_file("trait T do\n\tdef compare(other)\nend")


def test_file_mixes_definitions_and_expressions() -> None:
	source = """
		trait Named
		type Person(name: String) do
			impl Named
		end
		doc = Person { name: "Emmett" }
		doc.name()
	"""
	terms = parse_file(source)
	assert [t.node_type() for t in terms] == [
		NodeType.TRAIT_DEF,
		NodeType.TYPE_DEF,
		NodeType.DECLARATION,
		NodeType.METHOD_CALL,
	]


def test_method_with_brace_body_and_multiple_arguments() -> None:
	source = "type P do\n\tdef add(a: Integer, b) { a + b }\nend"
	_ty, _props, body = parse_file(source)[0].typedef()
	name, args, block = body[0].public_method()
	assert name.value == "add"
	assert [a.value for a, _spec in args] == ["a", "b"]
	assert [len(spec.types) for _a, spec in args] == [1, 0]
	assert block[0].node_type() is NodeType.BINARY
