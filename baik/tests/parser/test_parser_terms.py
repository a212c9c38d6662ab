# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from baik.core.span import InputLocation
from baik.parser import NodeType, Term, parse_file, parse_input
from baik.parser.ast import UnaryOperator


def test_input_preserves_statement_order() -> None:
	terms = parse_input("1 :two 'three' four")
	assert [t.node_type() for t in terms] == [NodeType.INTEGER, NodeType.ATOM, NodeType.STRING, NodeType.LOCAL]


def test_empty_source_yields_no_terms() -> None:
	assert parse_input("") == []
	assert parse_file("  # only a comment\n") == []


def test_term_class_entry_points() -> None:
	assert Term.input("1") == parse_input("1")
	assert Term.file("trait T") == parse_file("trait T")


def test_array() -> None:
	term = parse_input('[ 1, :two, "three" ]')[0]
	assert term.node_type() is NodeType.ARRAY
	array = term.array()
	assert len(array) == 3
	assert array[0].integer().value == 1
	assert array[1].atom().value == "two"
	assert array[2].string().value == "three"


def test_array_empty_and_trailing_comma() -> None:
	assert parse_input("[]")[0].array() == ()
	assert len(parse_input("[1, 2,]")[0].array()) == 2


def test_map_with_keyword_and_arrow_keys() -> None:
	term = parse_input('{ baik: "Lang", "speed" => 88 }')[0]
	assert term.node_type() is NodeType.MAP
	pairs = term.map()
	assert len(pairs) == 2
	key0, value0 = pairs[0]
	assert key0.atom().value == "baik"
	assert key0.location == InputLocation.span(2, 7)
	assert value0.string().value == "Lang"
	key1, value1 = pairs[1]
	assert key1.string().value == "speed"
	assert value1.integer().value == 88


def test_map_empty() -> None:
	assert parse_input("{ }")[0].map() == ()


def test_call() -> None:
	term = parse_input('hello("Baik", "Lang")')[0]
	assert term.node_type() is NodeType.CALL
	callee, arguments = term.call()
	assert callee.local().value == "hello"
	assert [a.string().value for a in arguments] == ["Baik", "Lang"]


def test_call_no_args() -> None:
	callee, arguments = parse_input("hello()")[0].call()
	assert callee.local().value == "hello"
	assert arguments == ()


def test_call_argument_can_be_any_expression() -> None:
	_callee, arguments = parse_input("f(x = 1, 2 + 3, [])")[0].call()
	assert [a.node_type() for a in arguments] == [NodeType.DECLARATION, NodeType.BINARY, NodeType.ARRAY]


def test_constructor_empty() -> None:
	ty, properties = parse_input("Character {}")[0].constructor()
	assert ty.value == "Character"
	assert properties == ()


def test_constructor() -> None:
	term = parse_input('Character { name: "Baik Lang" }')[0]
	assert term.node_type() is NodeType.CONSTRUCTOR
	ty, properties = term.constructor()
	assert ty.value == "Character"
	assert len(properties) == 1
	key, value = properties[0]
	assert key.value == "name"
	assert value.string().value == "Baik Lang"


def test_declaration() -> None:
	term = parse_input("speed = 88")[0]
	assert term.node_type() is NodeType.DECLARATION
	name, value = term.declaration()
	assert name.value == "speed"
	assert value.integer().value == 88
	assert term.location == InputLocation.span(0, 10)


def test_declaration_is_right_nested() -> None:
	name, value = parse_input("a = b = 1")[0].declaration()
	assert name.value == "a"
	inner_name, inner_value = value.declaration()
	assert inner_name.value == "b"
	assert inner_value.integer().value == 1


def test_unary() -> None:
	term = parse_input("+123")[0]
	assert term.node_type() is NodeType.UNARY
	op, operand = term.unary()
	assert op.value is UnaryOperator.PLUS
	assert operand.integer().value == 123


def test_unary_not_and_minus() -> None:
	op, operand = parse_input("!benar")[0].unary()
	assert op.value is UnaryOperator.LOGICAL_NOT
	assert op.is_logical()
	assert operand.boolean().value is True
	op, operand = parse_input("-x")[0].unary()
	assert op.value is UnaryOperator.MINUS
	assert op.is_arithmetic()
	assert operand.local().value == "x"


def test_if() -> None:
	term = parse_input(" jika benar { 123 } ")[0]
	assert term.node_type() is NodeType.IF
	test, positives, negatives = term.if_expr()
	assert test.boolean().value is True
	assert len(positives) == 1
	assert positives[0].integer().value == 123
	assert negatives == ()


def test_if_else() -> None:
	_test, positives, negatives = parse_input(" jika benar { 123 } lainnya { 456 }")[0].if_expr()
	assert len(positives) == 1
	assert len(negatives) == 1
	assert negatives[0].integer().value == 456


def test_if_else_if_chain_nests_in_negatives() -> None:
	source = "jika a { 1 } lainnya jika b { 2 } lainnya { 3 }"
	_test, _positives, negatives = parse_input(source)[0].if_expr()
	assert len(negatives) == 1
	inner_test, inner_positives, inner_negatives = negatives[0].if_expr()
	assert inner_test.local().value == "b"
	assert inner_positives[0].integer().value == 2
	assert inner_negatives[0].integer().value == 3


def test_if_with_do_end_body() -> None:
	_test, positives, negatives = parse_input("jika x > 1 do\n  a\n  b\nend")[0].if_expr()
	assert [p.local().value for p in positives] == ["a", "b"]
	assert negatives == ()


def test_property_get_and_set() -> None:
	get = parse_input("@speed")[0]
	assert get.node_type() is NodeType.PROPERTY_GET
	assert get.property_get().value == "speed"

	put = parse_input('@{ speed: 88, name: "Doc", }')[0]
	assert put.node_type() is NodeType.PROPERTY_SET
	assignments = put.property_set()
	assert [(k.value, v.node_type()) for k, v in assignments] == [
		("speed", NodeType.INTEGER),
		("name", NodeType.STRING),
	]


def test_anonymous_function_clauses() -> None:
	term = parse_input('fn (speed) do "WAT" end (speed: Float) do "WAT" end')[0]
	assert term.node_type() is NodeType.FUNCTION
	clauses = term.function().clauses
	assert len(clauses) == 2
	assert len(clauses[0].arguments) == 1
	assert len(clauses[0].body) == 1
	assert len(clauses[1].arguments) == 1
	assert len(clauses[1].body) == 1

	name0, spec0 = clauses[0].arguments[0]
	assert name0.value == "speed"
	assert spec0.types == ()
	name1, spec1 = clauses[1].arguments[0]
	assert name1.value == "speed"
	assert [ty.value for ty in spec1.types] == ["Float"]


def test_untyped_argument_spec_sits_after_name() -> None:
	clause = parse_input("fn (speed) { 1 }")[0].function().clauses[0]
	name, spec = clause.arguments[0]
	assert name.location == InputLocation.span(4, 9)
	assert spec.location == InputLocation.pos(9)


def test_accessors_return_none_for_other_variants() -> None:
	term = parse_input("1")[0]
	assert term.integer() is not None
	others = [
		term.atom(),
		term.boolean(),
		term.float(),
		term.string(),
		term.ty(),
		term.array(),
		term.map(),
		term.binary(),
		term.unary(),
		term.constructor(),
		term.call(),
		term.declaration(),
		term.function(),
		term.if_expr(),
		term.local(),
		term.method_call(),
		term.property_get(),
		term.property_set(),
		term.typedef(),
		term.traitdef(),
		term.impldef(),
		term.public_method(),
		term.public_method_spec(),
		term.private_method(),
		term.static_method(),
		term.static_method_spec(),
	]
	assert all(view is None for view in others)


def test_comments_are_ignored() -> None:
	terms = parse_input("# leading\n1 # trailing\n# closing")
	assert len(terms) == 1
	assert terms[0].integer().value == 1
