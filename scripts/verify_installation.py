#!/usr/bin/env python3
"""
Installation Check Script
Verifies that third-party dependencies import and that the packaged
resources (analysis schema, prompt template) are present.
"""

import json
import sys
from importlib import import_module
from pathlib import Path

DEPENDENCIES = [
    ("google.genai", "Google Gen AI SDK"),
    ("httpx", "HTTPX"),
    ("jinja2", "Jinja2"),
    ("jsonschema", "JSON Schema"),
    ("dotenv", "python-dotenv"),
    ("pydantic", "Pydantic"),
    ("structlog", "Structlog"),
    ("rich", "Rich"),
]

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "src"

RESOURCES = [
    (PACKAGE_ROOT / "schemas" / "analysis_result_schema.json", "Analysis schema"),
    (PACKAGE_ROOT / "prompts" / "analysis" / "portfolio_audit.j2", "Audit prompt"),
]


def check_imports() -> list[str]:
    """Import every dependency, returning the display names that failed."""
    failed = []
    for module_name, display_name in DEPENDENCIES:
        try:
            import_module(module_name)
            print(f"[OK] {display_name}")
        except ImportError as e:
            print(f"[FAILED] {display_name}: {e}")
            failed.append(display_name)
    return failed


def check_resources() -> list[str]:
    """Check packaged resources exist; JSON resources must also parse."""
    failed = []
    for path, display_name in RESOURCES:
        if not path.exists():
            print(f"[FAILED] {display_name}: missing {path}")
            failed.append(display_name)
            continue
        if path.suffix == ".json":
            try:
                json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                print(f"[FAILED] {display_name}: {e}")
                failed.append(display_name)
                continue
        print(f"[OK] {display_name}")
    return failed


def verify_installation() -> None:
    print("Verifying installation...\n")
    failed = check_imports() + check_resources()

    print(f"\n{'=' * 60}")
    if failed:
        print(f"[ERROR] {len(failed)} checks failed:")
        for name in failed:
            print(f"   - {name}")
        sys.exit(1)

    print("[SUCCESS] Installation verified")
    sys.exit(0)


if __name__ == "__main__":
    verify_installation()
