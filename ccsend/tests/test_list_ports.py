import contextlib
import io
import unittest
from unittest import mock


class TestListPorts(unittest.TestCase):
    def _run(self, argv, names=None, error=None):
        fake_mido = mock.Mock()
        if error is not None:
            fake_mido.get_output_names.side_effect = error
        else:
            fake_mido.get_output_names.return_value = names
        stdout, stderr = io.StringIO(), io.StringIO()
        with mock.patch.dict("sys.modules", {"mido": fake_mido}):
            from tools.list_ports import main

            with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
                code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_marks_ports_matching_filter(self):
        code, stdout, _ = self._run(["--port", "OP-XY"], names=["Midi Through", "OP-XY MIDI"])
        self.assertEqual(code, 0)
        self.assertIn("Output ports (2):", stdout)
        self.assertIn("  [0] Midi Through", stdout)
        self.assertIn(" *[1] OP-XY MIDI", stdout)

    def test_no_ports(self):
        code, stdout, _ = self._run([], names=[])
        self.assertEqual(code, 0)
        self.assertIn("(none found)", stdout)

    def test_backend_error(self):
        code, _, stderr = self._run([], error=OSError("no backend"))
        self.assertEqual(code, 1)
        self.assertIn("failed to query MIDI outputs", stderr)


if __name__ == "__main__":
    unittest.main()
