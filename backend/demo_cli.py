#!/usr/bin/env python3
"""
Clinical Text Analyzer - Interactive Demo CLI

Paste a clinical note and see the rule-based analysis: entities, sentiment,
key phrases, candidate diagnoses, severity and recommended actions.

Usage:
    python demo_cli.py                    # Interactive mode
    python demo_cli.py --file note.txt    # Analyze file
    python demo_cli.py --sample           # Use sample note
    python demo_cli.py --sample --json    # Print the raw result as JSON
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from app.core.config import settings
from app.services.care_recommendations import recommend_actions, severity_level
from app.services.nlp import AnalysisResult
from app.services.text_analyzer import analyze_clinical_text

# ============================================================================
# Sample Clinical Note
# ============================================================================

SAMPLE_NOTE = """
Patient presents with persistent headache and dizziness for 3 days.
Reports throbbing pain behind the eyes with nausea. Blood pressure 165/102 mmHg on arrival.
History of hypertension, currently on lisinopril 10 mg daily.
Denies chest pain. Sleep has been poor due to stress at work.
Plan: repeat blood pressure check, ECG, and follow-up in one week.
"""

# ============================================================================
# Display Functions
# ============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    BOLD = '\033[1m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GRAY = '\033[90m'
    END = '\033[0m'

LEVEL_COLORS = {
    "high": Colors.RED,
    "medium": Colors.YELLOW,
    "low": Colors.GREEN,
}

def print_header(text: str, char: str = "="):
    """Print a formatted header."""
    width = 80
    print()
    print(f"{Colors.BOLD}{Colors.CYAN}{char * width}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{text.center(width)}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{char * width}{Colors.END}")

def print_subheader(text: str):
    """Print a formatted subheader."""
    print()
    print(f"{Colors.BOLD}{Colors.YELLOW}{'─' * 80}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.YELLOW}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.YELLOW}{'─' * 80}{Colors.END}")

def print_item(label: str, value: str, indent: int = 2):
    """Print a labeled item."""
    spaces = " " * indent
    print(f"{spaces}{Colors.GRAY}{label}:{Colors.END} {value}")

def display_results(result: AnalysisResult):
    """Render an analysis result for the terminal."""
    print_subheader(f"ENTITIES ({len(result.entities)})")
    if not result.entities:
        print("  None found.")
    for entity in result.entities:
        print_item(entity.category.value.ljust(14), f"{entity.text} ({entity.confidence:.2f})")

    print_subheader("SENTIMENT")
    tone = "concerning" if result.sentiment.score < 0 else "reassuring" if result.sentiment.score > 0 else "neutral"
    print_item("Score", f"{result.sentiment.score:+.2f} ({tone})")
    print_item("Magnitude", f"{result.sentiment.magnitude:.2f}")

    print_subheader("KEY PHRASES")
    for i, phrase in enumerate(result.key_phrases, 1):
        print(f"  {i}. {phrase}")

    print_subheader("SUGGESTED DIAGNOSES")
    if not result.suggested_diagnoses:
        print("  None.")
    for diagnosis in result.suggested_diagnoses:
        print(f"  - {diagnosis}")

    level = severity_level(result.severity)
    color = LEVEL_COLORS[level.value]
    print_subheader("SEVERITY")
    print(f"  {color}{Colors.BOLD}{level.value.upper()} ({result.severity}/10){Colors.END}")

    print_subheader("RECOMMENDED ACTIONS")
    for action in recommend_actions(result):
        print(f"  {Colors.GREEN}✓{Colors.END} {action}")
    print()

def run(note: str, as_json: bool, title: str):
    """Analyze a note and print the result."""
    result = analyze_clinical_text(note)
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
        return
    print_header(title)
    display_results(result)

# ============================================================================
# Interactive Mode
# ============================================================================

def read_pasted_note() -> str:
    """Read a multi-line note, ended by the first blank line."""
    lines = []
    while True:
        line = input()
        if not line.strip():
            break
        lines.append(line)
    return "\n".join(lines).strip()

def interactive_mode():
    """Run interactive demo mode."""
    print_header("CLINICAL TEXT ANALYZER - INTERACTIVE DEMO")
    print("""
  {bold}Commands:{end}
    paste     - Enter multi-line note (end with blank line)
    sample    - Use the sample clinical note
    help      - Show this help
    quit      - Exit

""".format(bold=Colors.BOLD, end=Colors.END))

    while True:
        try:
            cmd = input(f"{Colors.BOLD}demo>{Colors.END} ").strip().lower()

            if cmd in ('quit', 'exit', 'q'):
                print("\nGoodbye!")
                break

            elif cmd == 'help':
                print("""
  Commands:
    paste   - Enter a clinical note (paste multi-line, end with blank line)
    sample  - Analyze the built-in sample note
    help    - Show this help message
    quit    - Exit the demo
""")

            elif cmd == 'sample':
                print(f"\n{Colors.GRAY}{'─' * 80}{Colors.END}")
                print(SAMPLE_NOTE.strip())
                print(f"{Colors.GRAY}{'─' * 80}{Colors.END}")
                run(SAMPLE_NOTE, as_json=False, title="ANALYZING SAMPLE CLINICAL NOTE")

            elif cmd == 'paste':
                print("  Paste your clinical note below (end with a blank line):")
                print(f"  {Colors.GRAY}{'─' * 60}{Colors.END}")
                note = read_pasted_note()
                if note:
                    run(note, as_json=False, title="ANALYZING YOUR CLINICAL NOTE")
                else:
                    print("  No note provided.")

            elif cmd:
                print(f"  Unknown command: {cmd}. Type 'help' for available commands.")

        except KeyboardInterrupt:
            print("\n\nGoodbye!")
            break
        except EOFError:
            print("\nGoodbye!")
            break

# ============================================================================
# Main Entry Point
# ============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Clinical Text Analyzer - Interactive Demo CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demo_cli.py                  # Interactive mode
  python demo_cli.py --sample         # Analyze sample note
  python demo_cli.py --file note.txt  # Analyze file
  python demo_cli.py --sample --json  # Raw JSON result
"""
    )
    parser.add_argument('--file', '-f', help='Path to clinical note file')
    parser.add_argument('--sample', '-s', action='store_true', help='Use sample clinical note')
    parser.add_argument('--json', '-j', action='store_true', help='Print the result as JSON')

    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level)

    if args.sample:
        run(SAMPLE_NOTE, as_json=args.json, title="ANALYZING SAMPLE CLINICAL NOTE")
    elif args.file:
        path = Path(args.file)
        if not path.exists():
            print(f"Error: File not found: {args.file}")
            sys.exit(1)

        run(path.read_text(), as_json=args.json, title=f"ANALYZING: {path.name}")
    else:
        interactive_mode()

if __name__ == "__main__":
    main()
