#!/usr/bin/env python3
"""Regenerate the tutorial's FlatBuffers helpers before building.

Run from this directory (or call it from your packaging hook)::

    python build.py
"""

from pathlib import Path

from flatcgen import Args, run

HERE = Path(__file__).parent


def main() -> None:
    run(Args(
        inputs=[HERE / "flatbuffers" / "monster.fbs"],
        out_dir=HERE / "target" / "flatbuffers",
    ))


if __name__ == "__main__":
    main()
