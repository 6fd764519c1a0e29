#!/usr/bin/env python3
"""
Monkey Token Registry Validator

Validates spec/registry/tokens.yaml against spec/registry/schema.json and
cross-checks it with the lexer and parser tables in monkeylib.parser.

Usage:
    python spec/registry/validate.py
"""

import json
import sys
from collections import defaultdict
from pathlib import Path

import jsonschema
import yaml

from monkeylib.parser import KEYWORDS, PRECEDENCES, Lexer, Parser, TokenKind


def resolve_path(relative_path: str) -> Path:
    """Resolve path relative to script location."""
    script_dir = Path(__file__).parent
    return (script_dir / relative_path).resolve()


def load_yaml(path: Path) -> dict:
    """Load YAML file."""
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        print(f"ERROR: File not found: {path}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Invalid YAML in {path}: {e}")
        sys.exit(1)


def load_json(path: Path) -> dict:
    """Load JSON file."""
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"ERROR: File not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"ERROR: Invalid JSON in {path}: {e}")
        sys.exit(1)


def validate_schema(data: dict, schema: dict) -> list:
    """Validate data against JSON schema. Returns list of errors."""
    errors = []
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {' -> '.join(str(p) for p in e.path)}")
    except jsonschema.SchemaError as e:
        errors.append(f"Invalid schema: {e.message}")

    return errors


def check_token_kinds(tokens: dict) -> list:
    """Every TokenKind has exactly one registry entry, and nothing else does."""
    errors = []
    known = {kind.name for kind in TokenKind}

    for name in sorted(known - set(tokens)):
        errors.append(f"TokenKind.{name} is missing from the registry")
    for name in sorted(set(tokens) - known):
        errors.append(f"Registry entry '{name}' is not a TokenKind")

    return errors


def check_keywords(tokens: dict) -> list:
    """Keyword entries and the lexer's keyword table agree."""
    errors = []
    registry_keywords = {
        token_def['lexeme']: name
        for name, token_def in tokens.items()
        if token_def.get('category') == 'keyword'
    }
    table_keywords = {text: kind.name for text, kind in KEYWORDS.items()}

    if registry_keywords != table_keywords:
        for text in sorted(set(registry_keywords) ^ set(table_keywords)):
            errors.append(f"Keyword '{text}' is in only one of registry / KEYWORDS")
        for text in sorted(set(registry_keywords) & set(table_keywords)):
            if registry_keywords[text] != table_keywords[text]:
                errors.append(
                    f"Keyword '{text}' maps to {table_keywords[text]}, "
                    f"registry says {registry_keywords[text]}"
                )

    return errors


def check_lexemes(tokens: dict) -> list:
    """Each operator/delimiter/keyword lexeme lexes to a single token of its kind."""
    errors = []

    for name, token_def in tokens.items():
        lexeme = token_def.get('lexeme')
        if lexeme is None:
            continue
        produced = [tok.kind.name for tok in Lexer(lexeme)]
        if produced != [name]:
            errors.append(f"Lexeme {lexeme!r} lexes as {produced}, expected [{name}]")

    return errors


def check_precedences(tokens: dict) -> list:
    """Registry binding powers match the parser's precedence table."""
    errors = []
    table = {kind.name: prec.name for kind, prec in PRECEDENCES.items()}
    registry = {
        name: token_def['precedence']
        for name, token_def in tokens.items()
        if 'precedence' in token_def
    }

    for name in sorted(set(table) | set(registry)):
        if table.get(name) != registry.get(name):
            errors.append(
                f"Precedence of {name}: parser has {table.get(name)}, "
                f"registry has {registry.get(name)}"
            )

    return errors


def check_roles(tokens: dict) -> list:
    """Registry prefix/infix roles match the handlers the parser registers."""
    errors = []
    parser = Parser(Lexer(""))
    prefix = {kind.name for kind in parser.prefix_kinds()}
    infix = {kind.name for kind in parser.infix_kinds()}

    for name, token_def in tokens.items():
        roles = set(token_def.get('roles', []))
        if ('prefix' in roles) != (name in prefix):
            errors.append(f"{name}: prefix role disagrees with the parser's prefix table")
        if ('infix' in roles) != (name in infix):
            errors.append(f"{name}: infix role disagrees with the parser's infix table")
        if 'infix' in roles and 'precedence' not in token_def:
            errors.append(f"{name}: infix token has no precedence")

    return errors


def run_checks(registry_data: dict, schema: dict) -> list:
    """Run every check. Returns the combined error list."""
    errors = validate_schema(registry_data, schema)
    if errors:
        return errors

    tokens = registry_data.get('tokens', {})
    errors.extend(check_token_kinds(tokens))
    errors.extend(check_keywords(tokens))
    errors.extend(check_lexemes(tokens))
    errors.extend(check_precedences(tokens))
    errors.extend(check_roles(tokens))
    return errors


def generate_summary(tokens: dict) -> dict:
    """Generate summary statistics."""
    summary = {
        'total': len(tokens),
        'by_category': defaultdict(int),
        'by_precedence': defaultdict(int),
    }

    for token_def in tokens.values():
        summary['by_category'][token_def.get('category', 'unknown')] += 1
        if 'precedence' in token_def:
            summary['by_precedence'][token_def['precedence']] += 1

    return summary


def print_summary(summary: dict):
    """Print validation summary."""
    print("=" * 70)
    print("VALIDATION SUMMARY")
    print("=" * 70)
    print(f"\nTotal token kinds: {summary['total']}")

    print("\nBy category:")
    for category, count in sorted(summary['by_category'].items()):
        print(f"  {category:30s} {count:3d}")

    print("\nBy precedence:")
    for precedence, count in sorted(summary['by_precedence'].items()):
        print(f"  {precedence:30s} {count:3d}")

    print()


def main():
    """Main validation routine."""
    print("Monkey Token Registry Validator")
    print("-" * 70)
    print()

    tokens_path = resolve_path("tokens.yaml")
    schema_path = resolve_path("schema.json")

    print(f"Loading tokens from: {tokens_path}")
    registry_data = load_yaml(tokens_path)

    print(f"Loading schema from: {schema_path}")
    schema = load_json(schema_path)
    print()

    all_errors = run_checks(registry_data, schema)

    if all_errors:
        print("ERRORS:")
        for error in all_errors:
            print(f"  ✗ {error}")
        print()

    summary = generate_summary(registry_data.get('tokens', {}))
    print_summary(summary)

    if all_errors:
        print("Validation FAILED with errors.")
        sys.exit(1)
    print("Validation PASSED.")
    sys.exit(0)


if __name__ == '__main__':
    main()
