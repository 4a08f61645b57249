import re
import unittest

from xlf_translator.core.preprocessor import preprocess_text


class TestPreprocessor(unittest.TestCase):
    def test_collapses_internal_whitespace(self):
        self.assertEqual(preprocess_text("Hello   \t world\n\nagain"), "Hello world again")

    def test_trims_edges(self):
        self.assertEqual(preprocess_text("  <g id=\"1\">Start</g>  "), "<g id=\"1\">Start</g>")

    def test_blank_input_becomes_empty(self):
        for text in ["", "   ", "\n\t \r\n"]:
            self.assertEqual(preprocess_text(text), "")

    def test_short_text_is_kept(self):
        self.assertEqual(preprocess_text(" OK "), "OK")

    def test_output_has_no_whitespace_runs(self):
        samples = ["a  b", " x\ty\nz ", "Click  continue", "line<br/>\n   next"]
        for text in samples:
            result = preprocess_text(text)
            self.assertIsNone(re.search(r"\s{2,}", result))
            self.assertEqual(result, result.strip())

    def test_is_idempotent(self):
        for text in ["  Hello \n world  ", "", "single", "<strong> bold </strong>   text"]:
            once = preprocess_text(text)
            self.assertEqual(preprocess_text(once), once)


if __name__ == '__main__':
    unittest.main()
