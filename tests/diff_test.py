import unittest

from keymap_layers.diff import Mismatch, diff_labels, format_report


class TestDiffLabels(unittest.TestCase):
    def test_identical_sequences(self):
        for labels in ([], ["A"], ["A", "", "TRANS"] * 30):
            self.assertEqual(diff_labels(labels, list(labels)), [])

    def test_single_mismatch(self):
        mismatches = diff_labels(["A", "B"], ["A", "C"])
        self.assertEqual(len(mismatches), 1)
        self.assertEqual(mismatches[0].position, 1)
        self.assertEqual(mismatches[0].left, "B")
        self.assertEqual(mismatches[0].right, "C")
        self.assertEqual(mismatches[0].description, "Left row 1, column 3 (index 1)")

    def test_shorter_side_is_padded(self):
        mismatches = diff_labels(["A"], ["A", "", "X"])
        self.assertEqual([m.position for m in mismatches], [2])
        self.assertEqual(mismatches[0].left, "")

    def test_out_of_layout_position(self):
        mismatches = diff_labels([""] * 81, [""] * 80 + ["Z"])
        self.assertEqual(mismatches[0].description, "index 80")


class TestFormatReport(unittest.TestCase):
    def test_match(self):
        lines = format_report("QWERTY", "QWERTY", ["A", "B"], ["A", "B"], [])
        self.assertEqual(lines, ["QWERTY layer matches QWERTY (2 bindings)."])

    def test_mismatch_lines(self):
        mismatch = Mismatch(position=1, description="Left row 1, column 3 (index 1)", left="B", right="")
        lines = format_report("Symbol", "Symbol", ["A", "B"], ["A"], [mismatch])
        self.assertEqual(lines[0], "Symbol layer differs from Symbol (1 mismatches):")
        self.assertEqual(lines[1], "  Binding counts differ: left=2, right=1")
        self.assertEqual(
            lines[2],
            "  Left row 1, column 3 (index 1)   | left: B          | right: ∅         ",
        )


if __name__ == "__main__":
    unittest.main()
