#!/usr/bin/env python3
"""Verify the built-in plural rule table against Babel CLDR data.

Evaluates every table rule on a range of counts and compares the
partition it induces with CLDR's plural categories for the same locale.
Reports locales whose gettext-style rule groups counts differently.

This script is informational by default: some gettext rules are known to
differ from CLDR (e.g. Irish groups 0 with 3-6). Babel's CLDR data is the
reference; the table is what the engine actually uses.

Checks:
    1. Structural: Table rules that fail to compile.
    2. Disagreements: Rule index and CLDR category do not map one-to-one.
    3. Unsupported: Babel has no CLDR data for a table locale. Shown only
       with --verbose.

Exit codes:
    0: No structural errors (disagreements are warnings unless --strict).
    1: Structural errors, Babel missing, or disagreements with --strict.

Usage:
    verify_plural_rules.py [--verbose] [--strict] [--max-count N] [LOCALE ...]

Python 3.13+. Requires Babel.
"""

from __future__ import annotations

import argparse
import sys


def _check_compilation(expressions: list[str]) -> list[str]:
    """Compile every distinct table rule."""
    from lexiconengine.diagnostics import RuleCompilationError  # noqa: PLC0415
    from lexiconengine.runtime import compile_rule, locales_for_rule  # noqa: PLC0415

    errors: list[str] = []
    for expression in expressions:
        try:
            compile_rule(expression)
        except RuleCompilationError as error:
            locales = ", ".join(locales_for_rule(expression))
            errors.append(f"  [{locales}] {error}")
    return errors


def _check_disagreements(
    locales: list[str], max_count: int
) -> tuple[list[str], list[str]]:
    """Audit locales against CLDR.

    Returns:
        Tuple of (disagreements, unsupported locales).
    """
    from lexiconengine.runtime.cldr_audit import audit_plural_rules  # noqa: PLC0415

    disagreements: list[str] = []
    unsupported: list[str] = []

    for result in audit_plural_rules(locales, range(max_count + 1)):
        if not result.supported:
            unsupported.append(f"  {result.locale}: no CLDR data in Babel")
            continue
        if result.mismatches:
            shown = ", ".join(str(n) for n in result.mismatches[:5])
            more = "" if len(result.mismatches) <= 5 else ", ..."
            disagreements.append(
                f"  {result.locale}: {result.expression!r} disagrees at n={shown}{more}"
            )
    return disagreements, unsupported


def _print_section(header: str, explanation: str, lines: list[str]) -> None:
    """Print a report section if non-empty."""
    if not lines:
        return
    print(f"{header} ({len(lines)}):")
    print(f"  ({explanation})")
    for line in lines:
        print(line)
    print()


def _print_report(
    *,
    errors: list[str],
    disagreements: list[str],
    unsupported: list[str],
    locale_count: int,
    rule_count: int,
    max_count: int,
    verbose: bool,
) -> None:
    """Print formatted report."""
    print("Plural Rule Table Verification")
    print("=" * 50)
    print(f"Locales audited:  {locale_count}")
    print(f"Distinct rules:   {rule_count}")
    print(f"Counts sampled:   0..{max_count}")
    print()

    _print_section(
        "[ERROR] Structural errors",
        "Table rule does not compile",
        errors,
    )
    _print_section(
        "[WARN] CLDR disagreements",
        "Rule indices do not map one-to-one onto CLDR categories",
        disagreements,
    )

    if unsupported:
        if verbose:
            _print_section(
                "[INFO] Unsupported locales",
                "Babel has no CLDR data; rule cannot be cross-checked",
                unsupported,
            )
        else:
            print(
                f"[INFO] {len(unsupported)} locale(s) without CLDR data."
                " Use --verbose to list."
            )
            print()

    if not (errors or disagreements or unsupported):
        print("[OK] All checks passed. No disagreements found.")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Verify the built-in plural rule table against Babel CLDR data.",
    )
    parser.add_argument(
        "locales",
        nargs="*",
        help="Locales to audit (default: every locale in the table).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="List locales Babel has no CLDR data for.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat CLDR disagreements as failures.",
    )
    parser.add_argument(
        "--max-count",
        type=int,
        default=200,
        help="Largest count to evaluate (default: 200).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run plural rule verification checks."""
    args = _parse_args(argv)

    from lexiconengine.core import is_babel_available  # noqa: PLC0415

    if not is_babel_available():
        print("[ERROR] Babel not installed. Install with: pip install lexiconengine[babel]")
        return 1

    from lexiconengine.diagnostics import InvalidLocaleNameError  # noqa: PLC0415
    from lexiconengine.runtime import PLURAL_RULES, RULES_BY_LOCALE  # noqa: PLC0415

    locales = args.locales or sorted(RULES_BY_LOCALE)
    errors = _check_compilation(sorted(PLURAL_RULES))
    disagreements: list[str] = []
    unsupported: list[str] = []
    try:
        if not errors:
            disagreements, unsupported = _check_disagreements(locales, args.max_count)
    except InvalidLocaleNameError as error:
        print(f"[ERROR] {error}")
        return 1

    _print_report(
        errors=errors,
        disagreements=disagreements,
        unsupported=unsupported,
        locale_count=len(set(locales)),
        rule_count=len(PLURAL_RULES),
        max_count=args.max_count,
        verbose=args.verbose,
    )

    if errors:
        print(f"[FAIL] {len(errors)} structural error(s) found.")
        print("[EXIT-CODE] 1")
        return 1

    if disagreements and args.strict:
        print(f"[FAIL] {len(disagreements)} disagreement(s) with CLDR (--strict).")
        print("[EXIT-CODE] 1")
        return 1

    if disagreements or unsupported:
        print(
            f"[PASS] {len(disagreements)} disagreement(s),"
            f" {len(unsupported)} unsupported."
        )
    else:
        print("[PASS] All checks passed.")
    print("[EXIT-CODE] 0")
    return 0


if __name__ == "__main__":
    sys.exit(main())
