"""Randomized invariants for the decoder and renderer.

Generates random well-formed items (with non-shortest argument widths,
indefinite lengths, tags and embedded byte strings) and random garbage,
then checks the properties every caller relies on:

  - size law: the root's size() is exactly the encoded length
  - back-to-back items decode independently at end_offset
  - every strict prefix of an item fails with TooFewBytes
  - garbage either decodes or raises CborError, never anything else
  - rendering never raises on a decoded tree

Seed and trial count come from CBORVIEW_SEED / CBORVIEW_TRIALS.
"""

from __future__ import annotations

import os
import random
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cborview import CborError, TooFewBytes, decode, from_bytes, render_text

SEED = int(os.environ.get("CBORVIEW_SEED", "1337"))
TRIALS = int(os.environ.get("CBORVIEW_TRIALS", "300"))
MAX_GEN_DEPTH = 4
MAX_ITEMS = 4

_WIDTH_INFO = {1: 24, 2: 25, 4: 26, 8: 27}


def head(rng: random.Random, major: int, arg: int) -> bytes:
    """Header for `arg`, in any width that can hold it (not only the shortest)."""
    widths = [w for w in (1, 2, 4, 8) if arg < 256 ** w]
    if arg <= 23:
        widths.append(0)
    w = rng.choice(widths)
    if w == 0:
        return bytes([(major << 5) | arg])
    return bytes([(major << 5) | _WIDTH_INFO[w]]) + arg.to_bytes(w, "big")


def rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(n))


def gen_scalar(rng: random.Random) -> bytes:
    r = rng.random()
    if r < 0.2:
        return head(rng, 0, rng.choice([0, 23, 24, 255, 256, 2**32, 2**64 - 1]))
    if r < 0.35:
        return head(rng, 1, rng.randint(0, 70000))
    if r < 0.55:
        text = "".join(chr(rng.randint(0x20, 0x7E)) for _ in range(rng.randint(0, 8)))
        raw = text.encode("utf-8")
        return head(rng, 3, len(raw)) + raw
    if r < 0.7:
        raw = rand_bytes(rng, rng.randint(0, 20))
        return head(rng, 2, len(raw)) + raw
    if r < 0.8:
        return bytes([rng.choice([0xF4, 0xF5, 0xF6, 0xF7])])
    if r < 0.9:
        width = rng.choice([2, 4, 8])
        return bytes([{2: 0xF9, 4: 0xFA, 8: 0xFB}[width]]) + rand_bytes(rng, width)
    if r < 0.95:
        return bytes([0xE0 | rng.randint(0, 19)])
    return b"\xf8" + bytes([rng.randint(32, 255)])


def gen_item(rng: random.Random, depth: int = 0) -> bytes:
    if depth >= MAX_GEN_DEPTH or rng.random() < 0.4:
        return gen_scalar(rng)
    r = rng.random()
    n = rng.randint(0, MAX_ITEMS)
    if r < 0.3:
        items = [gen_item(rng, depth + 1) for _ in range(n)]
        if rng.random() < 0.3:
            return b"\x9f" + b"".join(items) + b"\xff"
        return head(rng, 4, n) + b"".join(items)
    if r < 0.6:
        pairs = [gen_item(rng, depth + 1) + gen_item(rng, depth + 1) for _ in range(n)]
        if rng.random() < 0.3:
            return b"\xbf" + b"".join(pairs) + b"\xff"
        return head(rng, 5, n) + b"".join(pairs)
    if r < 0.75:
        return head(rng, 6, rng.randint(0, 70000)) + gen_item(rng, depth + 1)
    if r < 0.9:
        # Byte string carrying an embedded item.
        inner = gen_item(rng, depth + 1)
        return head(rng, 2, len(inner)) + inner
    chunks = []
    for _ in range(n):
        raw = rand_bytes(rng, rng.randint(0, 5))
        chunks.append(head(rng, 2, len(raw)) + raw)
    return b"\x5f" + b"".join(chunks) + b"\xff"


class TestInvariants(unittest.TestCase):
    def setUp(self):
        self.rng = random.Random(SEED)

    def test_size_law(self):
        for trial in range(TRIALS):
            item = gen_item(self.rng)
            with self.subTest(trial=trial, item=item.hex()):
                node = from_bytes(item)
                self.assertEqual(node.size(), len(item))

    def test_back_to_back(self):
        for trial in range(TRIALS):
            a, b = gen_item(self.rng), gen_item(self.rng)
            with self.subTest(trial=trial, a=a.hex(), b=b.hex()):
                buf = a + b
                first = decode(buf, 0)
                self.assertEqual(first.end_offset, len(a))
                second = decode(buf, first.end_offset)
                self.assertEqual(second.end_offset, len(buf))

    def test_strict_prefixes_are_truncated(self):
        for trial in range(TRIALS // 3):
            item = gen_item(self.rng)
            for cut in range(len(item)):
                with self.subTest(trial=trial, item=item.hex(), cut=cut):
                    with self.assertRaises(TooFewBytes) as ctx:
                        from_bytes(item[:cut])
                    self.assertGreaterEqual(ctx.exception.missing, 1)

    def test_render_never_raises(self):
        for trial in range(TRIALS):
            item = gen_item(self.rng)
            with self.subTest(trial=trial, item=item.hex()):
                text = render_text(from_bytes(item), show_offsets=self.rng.random() < 0.5)
                self.assertIsInstance(text, str)

    def test_garbage_fails_cleanly(self):
        for trial in range(TRIALS * 3):
            data = rand_bytes(self.rng, self.rng.randint(0, 24))
            with self.subTest(trial=trial, data=data.hex()):
                try:
                    node = from_bytes(data)
                except CborError:
                    continue
                self.assertEqual(node.size(), len(data))
                render_text(node)


if __name__ == "__main__":
    unittest.main()
