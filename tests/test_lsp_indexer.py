from lsprotocol.types import DiagnosticSeverity

from tack_lsp.indexer import build_index, builtin_signatures, signature_of
from tack_lsp.server import DocumentState, diagnostics_for, hover_text, word_at


SOURCE = """# squares
square = { dup * }
limit = 10
square limit
"""


def test_definitions_are_indexed_with_positions():
    idx = build_index(SOURCE)
    assert set(idx.symbols) == {"square", "limit"}
    square = idx.symbols["square"]
    assert (square.line, square.col, square.kind) == (1, 0, "word")
    assert square.signature == "square ( 1 -- 1 ) = { dup * }"
    assert idx.symbols["limit"].kind == "value"
    assert idx.errors == []
    assert idx.brace_balance == 0


def test_nested_equals_is_not_a_definition():
    idx = build_index("f = { a = b }")
    assert set(idx.symbols) == {"f"}


def test_syntax_error_positions_are_zero_based():
    idx = build_index("ok = { 1 }\nbad = { 2")
    assert len(idx.errors) == 1
    err = idx.errors[0]
    assert err.message == "missing }"
    assert (err.line, err.col) == (1, 6)
    assert idx.brace_balance == 1


def test_diagnostics():
    diags = diagnostics_for(build_index('"open'))
    assert len(diags) == 1
    assert diags[0].severity == DiagnosticSeverity.Error
    assert diags[0].message == 'missing "'
    assert diagnostics_for(build_index(SOURCE)) == []


def test_builtin_signatures():
    sigs = builtin_signatures()
    assert sigs["pick"] == "pick ( xn ... x0 n -- xn ... x0 xn )"
    assert sigs["swap"] == "swap ( 2 -- 2 ) = { 1 roll }"
    assert signature_of("no-such-word") is None


def test_hover_prefers_local_definitions():
    state = DocumentState(text=SOURCE, index=build_index(SOURCE))
    assert hover_text(state, "square").startswith("square ( 1 -- 1 )")
    assert "(defined at 2:1)" in hover_text(state, "square")
    assert hover_text(state, "dup") == "dup ( 1 -- 2 ) = { 0 pick }"
    assert hover_text(state, "unknown") is None


def test_word_at():
    text = "square = { dup * }\n"
    assert word_at(text, 0, 2) == "square"
    assert word_at(text, 0, 11) == "dup"
    assert word_at(text, 0, 10) is None
    assert word_at(text, 5, 0) is None
