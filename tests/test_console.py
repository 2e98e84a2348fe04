import unittest
from io import StringIO
from unittest.mock import patch

from nativepkg.console import Console


class TestConsole(unittest.TestCase):
    def test_default_level_is_silent(self):
        console = Console()
        with patch("sys.stdout", new=StringIO()) as fake_out, patch("sys.stderr", new=StringIO()) as fake_err:
            console.info("hello")
            console.error("boom")
            console.debug("details")
        self.assertEqual(fake_out.getvalue(), "")
        self.assertEqual(fake_err.getvalue(), "")

    def test_info_level(self):
        console = Console("info")
        with patch("sys.stdout", new=StringIO()) as fake_out, patch("sys.stderr", new=StringIO()) as fake_err:
            console.info("hello")
            console.error("boom")
            console.debug("details")
        self.assertEqual(fake_out.getvalue(), "[INFO] hello\n")
        self.assertEqual(fake_err.getvalue(), "[ERROR] boom\n")

    def test_debug_level(self):
        console = Console("debug")
        with patch("sys.stdout", new=StringIO()) as fake_out:
            console.debug("details")
        self.assertIn("[DEBUG] details", fake_out.getvalue())

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            Console("loud")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
