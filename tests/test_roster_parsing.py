from __future__ import annotations

import unittest

from hrdraw.entities import Participant
from hrdraw.errors import EncodingUnrecognized
from hrdraw.roster import (
    count_names,
    decode_roster_bytes,
    drop_duplicate_names,
    has_duplicate_names,
    names_from_rows,
    split_names,
)


class SplitNamesTests(unittest.TestCase):
    def test_mixed_separators(self) -> None:
        self.assertEqual(split_names("A,B\nC"), ["A", "B", "C"])

    def test_empty_tokens_and_whitespace_dropped(self) -> None:
        self.assertEqual(split_names(" , ,A"), ["A"])
        self.assertEqual(split_names("\n\n,,\n"), [])

    def test_windows_line_endings_are_trimmed(self) -> None:
        self.assertEqual(split_names("Ann\r\nBob\r\n"), ["Ann", "Bob"])

    def test_non_string_raises(self) -> None:
        with self.assertRaises(TypeError):
            split_names(None)  # type: ignore[arg-type]


class DecodeRosterBytesTests(unittest.TestCase):
    def test_utf8(self) -> None:
        self.assertEqual(decode_roster_bytes("王小明\n".encode("utf-8")), "王小明\n")

    def test_utf8_bom_is_dropped(self) -> None:
        data = "\ufeffAnn\nBob".encode("utf-8")
        self.assertEqual(decode_roster_bytes(data), "Ann\nBob")

    def test_big5_fallback(self) -> None:
        data = "王小明,業務部\r\n李大華".encode("cp950")
        with self.assertRaises(UnicodeDecodeError):
            data.decode("utf-8")
        self.assertEqual(decode_roster_bytes(data), "王小明,業務部\r\n李大華")

    def test_unrecognised_bytes_raise(self) -> None:
        with self.assertRaises(EncodingUnrecognized) as ctx:
            decode_roster_bytes(b"\xff\xfe\xfd", fallback_encoding="ascii")
        self.assertEqual(ctx.exception.encodings, ("utf-8", "ascii"))
        self.assertIsInstance(ctx.exception, ValueError)

    def test_unknown_fallback_encoding_raises(self) -> None:
        with self.assertRaises(EncodingUnrecognized):
            decode_roster_bytes(b"\xff", fallback_encoding="no-such-codec")


class NamesFromRowsTests(unittest.TestCase):
    def test_first_column_only(self) -> None:
        text = "Ann,Sales,2020\r\nBob\n\n  ,empty first column\rCid , HR"
        self.assertEqual(names_from_rows(text), ["Ann", "Bob", "Cid"])


class DuplicateHelpersTests(unittest.TestCase):
    def test_count_names_keeps_first_seen_order(self) -> None:
        counts = count_names(["B", "A", "B", "C", "B"])
        self.assertEqual(list(counts.items()), [("B", 3), ("A", 1), ("C", 1)])

    def test_has_duplicate_names(self) -> None:
        self.assertTrue(has_duplicate_names(["A", "B", "A"]))
        self.assertFalse(has_duplicate_names(["A", "B"]))
        self.assertFalse(has_duplicate_names([]))

    def test_drop_duplicate_names_keeps_first_occurrence(self) -> None:
        people = [
            Participant("1", "A"),
            Participant("2", "B"),
            Participant("3", "A"),
            Participant("4", "C"),
            Participant("5", "B"),
        ]
        unique = drop_duplicate_names(people)
        self.assertEqual([p.id for p in unique], ["1", "2", "4"])


if __name__ == "__main__":
    unittest.main()
