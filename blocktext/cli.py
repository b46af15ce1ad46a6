# blocktext/cli.py
# CLI: parse block notation from a file (or stdin) and print the tree as JSON.

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .errors import BlockTextError, SchemaValidationError
from .languages import available_languages
from .nodes import scripts_to_json
from .pipeline import ParseOptions, parse
from .schema import validate_scripts

logger = logging.getLogger(__name__)


def _load_text(source: Optional[str]) -> str:
    if not source or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="blocktext",
        description="Parse block-program notation into a JSON syntax tree.",
    )
    p.add_argument("source", nargs="?", help="Notation file (default: stdin).")
    p.add_argument("--lang", dest="languages", action="append", default=[],
                   help="Translation to merge after English (repeatable, last wins).")
    p.add_argument("--inline", action="store_true", help="Treat the input as one inline line.")
    p.add_argument("--validate", action="store_true", help="Check output against the bundled schema.")
    p.add_argument("--out", metavar="PATH", help="Write JSON to PATH instead of stdout.")
    p.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2).")
    p.add_argument("--list-languages", action="store_true", help="Print packaged language codes and exit.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_languages:
        for code in available_languages():
            print(code)
        return 0

    if args.source and args.source != "-" and not Path(args.source).is_file():
        print(f"blocktext: input not found: {args.source}", file=sys.stderr)
        return 2

    options = ParseOptions(languages=["en", *args.languages], inline=args.inline)
    try:
        scripts = parse(_load_text(args.source), options)
        data = scripts_to_json(scripts)
        if args.validate:
            validate_scripts(data)
    except SchemaValidationError as e:
        print(f"blocktext: {e}", file=sys.stderr)
        return 1
    except BlockTextError as e:
        print(f"blocktext: {e}", file=sys.stderr)
        return 2

    text = json.dumps(data, ensure_ascii=False, sort_keys=True, indent=args.indent) + "\n"
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logger.info("wrote %d script(s) to %s", len(scripts), out_path)
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
