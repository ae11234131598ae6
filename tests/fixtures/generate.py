"""Tiny generator used by the CLI tests.

Writes generated.txt and generated/{hello,world}.txt next to the current
working directory. `--planet NAME` changes the second line of generated.txt;
`--skip PATH` leaves one file out.
"""

import argparse
from pathlib import Path


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--planet", default="world")
    parser.add_argument("--skip", action="append", default=[])
    args = parser.parse_args()

    outputs = {
        "generated.txt": f"hello\n{args.planet}",
        "generated/hello.txt": "hello",
        "generated/world.txt": "world",
    }
    for rel, text in outputs.items():
        if rel in args.skip:
            continue
        path = Path(rel)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
