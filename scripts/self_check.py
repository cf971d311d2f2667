#!/usr/bin/env python3
"""Plan a small batch of mentions and verify the offsets.

This is a smoke test you can run locally or inside Docker; it makes no
network requests.
"""

from __future__ import annotations

import sys
from pathlib import Path


def _add_src_to_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    src = repo_root / "src"
    sys.path.insert(0, str(src))


def _verify() -> None:
    from mentions import FixedAffixTemplate, build_payloads
    from utils.tg_text import utf16_len

    payloads = build_payloads(0, [1, 2, 3], FixedAffixTemplate(prefix="A", suffix="B"))
    if len(payloads) != 1:
        raise RuntimeError(f"Expected one payload, got {len(payloads)}")

    payload = payloads[0]
    offsets = [m.offset for m in payload.mentions]
    if utf16_len(payload.text) != 5 or offsets != [1, 2, 3]:
        raise RuntimeError(f"Unexpected plan: text={payload.text!r} offsets={offsets}")

    print("OK: offsets verified.")
    print(f"Payload: {payload.to_dict()}")


def main() -> None:
    _add_src_to_path()
    _verify()


if __name__ == "__main__":
    main()
