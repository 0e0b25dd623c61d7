import io
import shutil
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from contextify.exceptions import FileReadError, OutputError
from contextify.report import (
    SEPARATOR,
    format_size,
    read_content,
    render_header,
    serialize,
    write_report,
)
from contextify.walk import AggregateStats, FileEntry


class TestFormatSize(unittest.TestCase):
    def test_thresholds(self):
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(512), "512 B")
        self.assertEqual(format_size(1023), "1023 B")
        self.assertEqual(format_size(1024), "1.00 KB")
        self.assertEqual(format_size(2048), "2.00 KB")
        self.assertEqual(format_size(1536), "1.50 KB")
        self.assertEqual(format_size(3 * 1024 * 1024), "3.00 MB")


class TestSerialize(unittest.TestCase):
    def setUp(self):
        self.stats = AggregateStats()
        self.stats.add_file(5, ".txt")
        self.stats.add_file(100, ".png")
        self.stats.add_file(7, ".py")
        self.stats.add_file(3, ".py")
        self.entries = [
            FileEntry(Path("/p/a.txt"), "a.txt", 5, ".txt"),
            FileEntry(Path("/p/bad.py"), "bad.py", 7, ".py"),
            FileEntry(Path("/p/pkg/c.py"), "pkg/c.py", 3, ".py"),
        ]
        self.contents = {"/p/a.txt": "hello", "/p/pkg/c.py": "print(1)\n"}

    def reader(self, path):
        try:
            return self.contents[path.as_posix()]
        except KeyError:
            raise FileReadError(f"Could not read {path}: denied")

    def test_header(self):
        header = render_header(self.stats)
        self.assertTrue(header.startswith("Project Overview\n================\n\n"))
        self.assertIn("Total Files: 4\n", header)
        self.assertIn("Total Size: 115 B\n", header)
        self.assertIn("File Types: .py (2), .png (1), .txt (1)\n", header)
        self.assertIn("Technologies: Python\n", header)

    def test_header_without_detections(self):
        header = render_header(AggregateStats())
        self.assertIn("Total Files: 0\n", header)
        self.assertIn("File Types: None\n", header)
        self.assertIn("Technologies: None detected\n", header)

    def test_layout_and_read_failure_recovery(self):
        err = io.StringIO()
        with redirect_stderr(err):
            doc = serialize(self.stats, "├── a.txt\n└── bad.py\n", self.entries, reader=self.reader)

        self.assertIn("bad.py", err.getvalue())
        header_end = doc.index("Folder Structure (Tree)")
        tree_start = doc.index("Legend: ✗ = Excluded from output\n\n")
        self.assertLess(header_end, tree_start)
        self.assertIn("\n├── a.txt\n└── bad.py\n\n==============\n", doc)

        body = doc.split("\n==============\n", 1)[1]
        self.assertEqual(
            body,
            f"a.txt\n{SEPARATOR}\nhello\n{SEPARATOR}\n"
            f"pkg/c.py\n{SEPARATOR}\nprint(1)\n\n{SEPARATOR}\n",
        )
        self.assertEqual(len(SEPARATOR), 57)

    def test_output_is_deterministic(self):
        first = serialize(self.stats, "", self.entries[:1], reader=self.reader)
        second = serialize(self.stats, "", self.entries[:1], reader=self.reader)
        self.assertEqual(first, second)


class TestFileIO(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_read_content_replaces_invalid_utf8(self):
        target = self.test_dir / "latin.txt"
        target.write_bytes(b"caf\xe9 ok")
        self.assertEqual(read_content(target), "caf\ufffd ok")

    def test_read_content_missing_file(self):
        with self.assertRaises(FileReadError):
            read_content(self.test_dir / "gone.txt")

    def test_write_report_creates_parents_and_overwrites(self):
        out = self.test_dir / "nested" / "dir" / "out.txt"
        written = write_report("first", out)
        self.assertEqual(written, out.resolve())
        write_report("second\n", out)
        self.assertEqual(out.read_bytes(), b"second\n")

    def test_write_report_failure(self):
        blocker = self.test_dir / "file"
        blocker.write_text("x")
        with self.assertRaises(OutputError):
            write_report("text", blocker / "out.txt")


if __name__ == "__main__":
    unittest.main()
