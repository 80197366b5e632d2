"""Pytest tests for the printout command line wrapper."""

import io
import logging
from unittest.mock import patch

import pytest

import printout

RECEIPT = b'<Printout><Text align="center">Hi</Text><NewLine/></Printout>'
ENCODED_RECEIPT = (
    b"\x1bt\x00\x1c&"
    + b"\x1d!\x00\x1bE\x00\x1ba\x01\x1bM\x00Hi"
    + b"\n"
    + b"\x1b@"
)


@pytest.fixture(autouse=True)
def mock_config(tmp_path):
    """Force default options regardless of the local .env."""
    with patch("printout.config") as mock_cfg:
        mock_cfg.ENCODING = "UTF8"
        mock_cfg.CODEPAGE = 0
        mock_cfg.COL_WIDTH = 32
        mock_cfg.CUT = False
        mock_cfg.BEEP = False
        mock_cfg.TAILING_LINE = False
        mock_cfg.LOG_DIR = str(tmp_path / "logs")
        mock_cfg.LOG_LEVEL = "INFO"
        yield mock_cfg


@pytest.fixture
def markup_file(tmp_path):
    path = tmp_path / "receipt.xml"
    path.write_bytes(RECEIPT)
    return path


class TestMain:
    """Tests for printout.main."""

    def test_writes_output_file(self, markup_file, tmp_path):
        out = tmp_path / "receipt.bin"
        assert printout.main([str(markup_file), "-o", str(out)]) == 0
        assert out.read_bytes() == ENCODED_RECEIPT

    def test_writes_stdout(self, markup_file, capsysbinary):
        assert printout.main([str(markup_file)]) == 0
        assert capsysbinary.readouterr().out == ENCODED_RECEIPT

    def test_reads_stdin(self, tmp_path):
        out = tmp_path / "out.bin"
        fake_stdin = io.TextIOWrapper(io.BytesIO(RECEIPT))
        with patch("sys.stdin", fake_stdin):
            assert printout.main(["-", "-o", str(out)]) == 0
        assert out.read_bytes() == ENCODED_RECEIPT

    def test_option_flags(self, markup_file, tmp_path):
        out = tmp_path / "out.bin"
        argv = [str(markup_file), "-o", str(out), "--cut", "--beep", "--tailing-line", "--codepage", "6"]
        assert printout.main(argv) == 0
        data = out.read_bytes()
        assert data.startswith(b"\x1bt\x06\x1c.")
        assert data.endswith(b"\x1bi\x1bB\x03\x02\n\n\n\n\x1b@")

    def test_config_defaults_used(self, markup_file, tmp_path, mock_config):
        mock_config.CUT = True
        out = tmp_path / "out.bin"
        assert printout.main([str(markup_file), "-o", str(out)]) == 0
        assert out.read_bytes().endswith(b"\x1bi\x1b@")

    def test_flag_disables_config_default(self, markup_file, tmp_path, mock_config):
        mock_config.CUT = True
        out = tmp_path / "out.bin"
        assert printout.main([str(markup_file), "-o", str(out), "--no-cut"]) == 0
        assert out.read_bytes() == ENCODED_RECEIPT

    def test_encoding_error_returns_1(self, markup_file, capsys):
        assert printout.main([str(markup_file), "--encoding", "nope"]) == 1
        assert "Unsupported text encoding" in capsys.readouterr().err

    def test_malformed_markup_returns_1(self, tmp_path, capsys):
        bad = tmp_path / "bad.xml"
        bad.write_bytes(b"<Printout>")
        assert printout.main([str(bad)]) == 1
        assert "Malformed markup" in capsys.readouterr().err

    def test_invalid_col_width_returns_1(self, markup_file, capsys):
        assert printout.main([str(markup_file), "--col-width", "0"]) == 1
        assert "col_width" in capsys.readouterr().err

    def test_unwritable_output_returns_1(self, markup_file, tmp_path, capsys):
        out = tmp_path / "missing" / "out.bin"
        assert printout.main([str(markup_file), "-o", str(out)]) == 1
        assert "cannot write" in capsys.readouterr().err
        assert not out.exists()

    def test_missing_file_returns_1(self, tmp_path, capsys):
        assert printout.main([str(tmp_path / "missing.xml")]) == 1
        assert "cannot read" in capsys.readouterr().err

    def test_wrong_root_writes_nothing(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)
        src = tmp_path / "other.xml"
        src.write_bytes(b"<Receipt/>")
        out = tmp_path / "out.bin"
        assert printout.main([str(src), "-o", str(out)]) == 0
        assert out.read_bytes() == b""
        assert "nothing written" in caplog.text


def test_setup_logging_creates_log_dir(mock_config, tmp_path):
    with patch("printout.logging.basicConfig") as basic_config:
        printout.setup_logging()
    assert (tmp_path / "logs").is_dir()
    basic_config.assert_called_once()
