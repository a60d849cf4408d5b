from __future__ import annotations

import argparse
import json
from pathlib import Path

from app.modules.vocab.importer import import_vocabulary, serialize


def _load_text(args: argparse.Namespace) -> str:
    if args.text and args.file:
        raise SystemExit("Provide either --text or FILE, not both")
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if args.text:
        return args.text
    raise SystemExit("FILE or --text is required")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="vocab-import", description="Vocabulary import CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    imp = sub.add_parser(
        "import", help="Parse 'term: definition: example' lines into records"
    )
    imp.add_argument("file", nargs="?", help="Path to a .txt vocabulary file")
    imp.add_argument("--text", "-t", help="Inline vocabulary text")
    imp.add_argument(
        "--json", action="store_true", help="Print records as JSON instead of lines"
    )

    args = parser.parse_args(argv)
    if args.cmd == "import":
        result = import_vocabulary(_load_text(args))
        if not result.ok:
            print(result.message)
            return 1
        if args.json:
            print(
                json.dumps(
                    [r.model_dump() for r in result.records],
                    indent=2,
                    ensure_ascii=False,
                )
            )
        else:
            print(serialize(result.records))
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
