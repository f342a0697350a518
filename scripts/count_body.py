"""
Count the body words of a manuscript from the command line.

Usage:
    python scripts/count_body.py path/to/paper.docx
    python scripts/count_body.py paper.pdf --debug --citations 20
    python scripts/count_body.py notes.txt --json

Prints the body word count, raw count, citation and table totals, and the
most frequent citations. Exit status 1 if the document cannot be read.
"""

import argparse
import json
import os
import sys

import pyperclip

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bodycount import BodyCountPipeline, PipelineConfig
from bodycount.readers import DocumentUnreadable, read_document


def copy_to_clipboard(text: str) -> bool:
    """Copy text to clipboard"""
    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException as e:
        print(f"Clipboard error: {e}")
        return False


def run(path: str, config: PipelineConfig):
    content = read_document(path)
    pipeline = BodyCountPipeline(config)
    if isinstance(content, str):
        return pipeline.run_text(content)
    return pipeline.run_blocks(content)


def print_report(result, top_n: int):
    print("=" * 60)
    print("BODY WORD COUNT")
    print("=" * 60)
    print(f"  Body words:        {result.word_count}")
    print(f"  Raw words:         {result.raw_word_count}")
    print(f"  Citation words:    {result.citation_words_removed}")
    print(f"  Citations:         {result.citation_count} ({len(result.citations)} unique)")
    print(f"  Tables excluded:   {result.table_count}")
    print(f"  Started by:        {result.started_by}"
          + (f" ({result.start_heading})" if result.start_heading else ""))
    print(f"  End heading:       {result.end_heading or '-'}")

    if result.citations and top_n > 0:
        print(f"\nTop Citations ({min(top_n, len(result.citations))} of {len(result.citations)}):")
        for entry in result.citations[:top_n]:
            print(f"  x{entry.occurrences:<3} {entry.words:>3}w  {entry.text}")
    print("=" * 60)


def main() -> int:
    parser = argparse.ArgumentParser(description="Count the body words of an academic manuscript.")
    parser.add_argument("path", help="Path to a .docx, .pdf, .txt or .md file")
    parser.add_argument("--headings-only", action="store_true",
                        help="Disable the length-based body start fallback")
    parser.add_argument("--citations", type=int, default=10, metavar="N",
                        help="Number of citations to list (default 10)")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--copy", action="store_true", help="Copy the body text to the clipboard")
    parser.add_argument("--debug", action="store_true", help="Print the debug summary")
    args = parser.parse_args()

    config = PipelineConfig.headings_only() if args.headings_only else PipelineConfig.default()
    config.debug = args.debug

    try:
        result, debug = run(args.path, config)
    except DocumentUnreadable as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report(result, args.citations)

    if args.debug:
        print(debug.summary())

    if args.copy:
        if copy_to_clipboard(result.body_text):
            print("Body text copied to clipboard.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
