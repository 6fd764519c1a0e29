"""
Conformance: Let Statements - binding names to expressions
"""
import pytest


# Each test case is a tuple: (description, monkey_source, expected_outcome)
# expected_outcome is "valid", "error: <diagnostic text>" or
# "renders: <canonical program text>"

CASES = [
    ("let_int", "let x = 5;", "renders: let x = 5;"),
    ("let_expression", "let y = x + 1;", "renders: let y = (x + 1);"),
    ("let_without_semicolon", "let z = true", "renders: let z = true;"),
    ("let_function", "let add = function(a, b) { a + b };", "renders: let add = function(a, b) (a + b);"),
    ("let_sequence", "let a = 1; let b = a;", "renders: let a = 1;let b = a;"),
    ("let_missing_name", "let = 5;", "error: expected next token to be IDENT, got ASSIGN"),
    ("let_missing_assign", "let x 5;", "error: expected next token to be ASSIGN, got INT"),
    ("let_keyword_as_name", "let if = 1;", "error: expected next token to be IDENT, got IF"),
]


@pytest.mark.parametrize("description,source,expected", CASES, ids=[c[0] for c in CASES])
def test_stmt_let(runner, description, source, expected):
    """Let statements bind an identifier to an expression."""
    result = runner.validate(source)
    if expected == "valid":
        assert result.valid, f"Expected valid but got errors: {result.diagnostics}"
    elif expected.startswith("renders: "):
        assert result.valid, f"Expected valid but got errors: {result.diagnostics}"
        assert result.rendered == expected.removeprefix("renders: ")
    else:
        assert not result.valid, f"Expected error but got valid"
        error_text = expected.removeprefix("error: ")
        assert any(error_text.lower() in d.lower() for d in result.diagnostics), \
            f"Expected '{error_text}' in diagnostics: {result.diagnostics}"
