import pytest
from hypothesis import given, strategies as st

from tack.errors import TackSyntaxError
from tack.reader.parser import Reader, lex, parse
from tack.types.quotation import Definition, Quotation
from tack.types.values import source_form
from tack.types.word import Word, is_name


def _kinds(source):
    return [(tok.kind, tok.text) for tok in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("word", "a")]),
        ("{ a b }", [("lbrace", "{"), ("word", "a"), ("word", "b"), ("rbrace", "}")]),
        ("{a}", [("lbrace", "{"), ("word", "a"), ("rbrace", "}")]),
        ('"hello world"', [("string", '"hello world"')]),
        ('"a\\"b"', [("string", '"a\\"b"')]),
        ("# comment\n a b", [("word", "a"), ("word", "b")]),
        ("#!/usr/bin/env tack\n1", [("word", "1")]),
        ("#ff", [("word", "#ff")]),
        ("x = 1", [("word", "x"), ("word", "="), ("word", "1")]),
        ("", []),
        ("   \n\t", []),
    ],
)
def test_lex(source, expected):
    assert _kinds(source) == expected


def test_token_offsets():
    toks = list(lex('  foo "x"'))
    assert (toks[0].offset, toks[0].end) == (2, 5)
    assert (toks[1].offset, toks[1].end) == (6, 9)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42", 42),
        ("-7", -7),
        ("+3", 3),
        ("3.5", 3.5),
        ("1.5e2", 150.0),
        ("#ff", 255),
        ("#10", 16),
        ("true", True),
        ("false", False),
        ('"tab\\there"', "tab\there"),
        ('"line\\n"', "line\n"),
        ('"q\\"uote"', 'q"uote'),
        ("foo", Word("foo")),
        ("-rot", Word("-rot")),
        ("2dup", Word("2dup")),
        ("1.", Word("1.")),
    ],
)
def test_atoms(source, expected):
    (value,) = parse(source)
    assert value == expected
    assert type(value) is type(expected)


def test_quotations_nest():
    q = parse("{ 1 { 2 foo } bar }")
    assert q == Quotation([Quotation([1, Quotation([2, Word("foo")]), Word("bar")])])


def test_parse_add_quotation():
    (q,) = parse("{ 1 2 add }")
    assert isinstance(q, Quotation)
    assert list(q) == [1, 2, Word("add")]


def test_definition_at_top_level():
    (form,) = parse("square = { dup * }")
    assert isinstance(form, Definition)
    assert form.name == Word("square")
    assert form.body == Quotation([Word("dup"), Word("*")])


def test_definition_of_a_literal():
    (form,) = parse('greeting = "hi"')
    assert form == Definition(Word("greeting"), "hi")


def test_equals_inside_quotation_is_a_word():
    (q,) = parse("{ a = b }")
    assert list(q) == [Word("a"), Word("="), Word("b")]


def test_equals_alone_is_a_word():
    assert list(parse("1 1 =")) == [1, 1, Word("=")]


def test_number_before_equals_is_not_a_definition():
    assert list(parse("1 = 2")) == [1, Word("="), 2]


@pytest.mark.parametrize(
    "source,message,line,column",
    [
        ("{ 1 2", "missing }", 1, 1),
        ("1 }", "missing {", 1, 3),
        ('"abc', 'missing "', 1, 1),
        ("a\n  #zz", "invalid hex literal #zz", 2, 3),
        ('"bad \\q"', "bad escape \\q", 1, 6),
        ("x =", "missing definition body for x", 1, 3),
    ],
)
def test_syntax_errors(source, message, line, column):
    with pytest.raises(TackSyntaxError) as info:
        parse(source)
    err = info.value
    assert err.message == message
    assert (err.line, err.column) == (line, column)
    assert err.payload.startswith("SyntaxError: " + message)


def test_reader_is_incremental():
    reader = Reader("1 { 2 } rest")
    assert reader.read_form() == 1
    assert reader.read_form() == Quotation([2])
    assert reader.remaining == " rest"
    assert reader.read_form() == Word("rest")
    assert reader.read_form() is None


def test_reader_iterates():
    assert list(Reader("a b")) == [Word("a"), Word("b")]


def test_source_form_reads_back():
    q = parse('{ 1 -2 3.5 "a\\n\\"b" true { x } }')
    assert parse(source_form(q)) == q


words = st.from_regex(r"[a-z][a-z0-9\-]{0,6}", fullmatch=True).filter(
    lambda s: s not in ("true", "false")
)
leaves = st.one_of(
    st.integers(min_value=-10**6, max_value=10**6),
    st.booleans(),
    st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=8),
    words.map(Word),
)
forms = st.recursive(leaves, lambda children: st.lists(children, max_size=4).map(Quotation), max_leaves=12)


@given(st.lists(forms, max_size=5))
def test_source_form_round_trips(items):
    q = Quotation(items)
    assert parse(" ".join(source_form(item) for item in q)) == q


@pytest.mark.parametrize(
    "source,expected",
    [
        ("foo;bar", [("word", "foo"), ("word", "bar")]),
        ("1 2 ; +", [("word", "1"), ("word", "2"), ("word", "+")]),
        ('"a;b";', [("string", '"a;b"')]),
        ("k= 1", [("word", "k"), ("word", "="), ("word", "1")]),
        ("k=1", [("word", "k"), ("word", "="), ("word", "1")]),
        ("a==b", [("word", "a"), ("word", "=="), ("word", "b")]),
        ("!= <= >= ==", [("word", "!="), ("word", "<="), ("word", ">="), ("word", "==")]),
    ],
)
def test_separators_and_assignment_breaks(source, expected):
    assert _kinds(source) == expected


def test_split_word_offsets():
    toks = list(lex(" k=10"))
    assert [(t.text, t.offset, t.end) for t in toks] == [("k", 1, 2), ("=", 2, 3), ("10", 3, 5)]


@pytest.mark.parametrize("source", ["k= 1", "k=1", "k =1", "k = 1;"])
def test_attached_equals_defines(source):
    assert list(parse(source)) == [Definition(Word("k"), 1)]


def test_semicolon_separates_statements():
    assert list(parse("sq = { dup * };5 sq")) == [
        Definition(Word("sq"), Quotation([Word("dup"), Word("*")])),
        5,
        Word("sq"),
    ]


def test_word_names_are_interned():
    assert Word("dup") is Word("dup")
    assert Word("dup") != Word("drop")


@pytest.mark.parametrize("name", ["", "a b", "{", "x}", 'say"', "a;b"])
def test_word_rejects_unreadable_names(name):
    assert not is_name(name)
    with pytest.raises(ValueError):
        Word(name)
