"""Tests for the mime-guess command line."""

import io
import json
import sys
import threading
from pathlib import Path
from unittest.mock import patch

from mimeguess.errors import ElementTypeMismatch
from mimeguess.load_config import load_config
from mimeguess.mime_guess import build_parser, main, run_guess
from mimeguess.read_input import iter_lines, read_json
from mimeguess.render import write_results
from mimeguess.result_item import ErrorValue, MimeRecord
from mimeguess.span import Span, Spanned


def _run(
    argv: list[str], stdin: bytes, cancel: threading.Event | None = None
) -> tuple[int, str, str]:
    """Run the command over ``stdin`` and capture its streams."""
    args = build_parser().parse_args(argv)
    out, err = io.StringIO(), io.StringIO()
    config = load_config(args.config)
    code = run_guess(args, config, io.BytesIO(stdin), out, err, cancel)
    return code, out.getvalue(), err.getvalue()


def test_iter_lines_spans() -> None:
    """Verify each line is tagged with its byte range."""
    lines = list(iter_lines(io.BytesIO(b"video.mkv\r\naudio.mp3\n\nlast")))
    assert lines == [
        Spanned("video.mkv", Span(0, 9)),
        Spanned("audio.mp3", Span(11, 20)),
        Spanned("", Span(21, 21)),
        Spanned("last", Span(22, 26)),
    ]


def test_read_json() -> None:
    """Verify a JSON document is wrapped with a span covering the input."""
    assert read_json(io.BytesIO(b'"a.mkv"')) == Spanned("a.mkv", Span(0, 7))
    assert read_json(io.BytesIO(b"[1]")).value == [Spanned(1, Span(1, 2))]


def test_read_json_element_spans() -> None:
    """Verify array elements carry their own byte ranges."""
    doc = read_json(io.BytesIO(b' [ "a.mkv" ,7, {"k": [1, 2]}]\n'))
    assert doc.value == [
        Spanned("a.mkv", Span(3, 10)),
        Spanned(7, Span(12, 13)),
        Spanned({"k": [1, 2]}, Span(15, 28)),
    ]
    assert read_json(io.BytesIO(b"[]")).value == []


def test_read_json_element_spans_are_bytes() -> None:
    """Verify spans count UTF-8 bytes rather than characters."""
    doc = read_json(io.BytesIO('["\u00e9.mkv", 1]'.encode()))
    assert doc.value == [
        Spanned("\u00e9.mkv", Span(1, 9)),
        Spanned(1, Span(11, 12)),
    ]


def test_iter_lines_undecodable() -> None:
    """Verify invalid UTF-8 lines are passed on as raw bytes."""
    lines = list(iter_lines(io.BytesIO(b"\xff.mkv\nok.mp3\n")))
    assert lines == [
        Spanned(b"\xff.mkv", Span(0, 5)),
        Spanned("ok.mp3", Span(6, 12)),
    ]


def test_line_stream_undecodable_name() -> None:
    """Verify an undecodable name is an inline error, not an altered row."""
    code, out, err = _run(["--format", "json"], b"\xff.mkv\nok.mp3\n")
    rows = [json.loads(line) for line in out.splitlines()]
    assert code == 0
    assert rows == [
        {"error": "can't convert binary to string", "span": [0, 5]},
        {"name": "ok.mp3", "type": "audio/mpeg"},
    ]
    assert err == ""


def test_write_results_table() -> None:
    """Verify table rows go to stdout and inline errors to stderr."""
    items = [
        MimeRecord("a.mkv", "video/x-matroska", Span(0, 5)),
        ErrorValue(ElementTypeMismatch("can't convert int to string"), Span(6, 7)),
    ]
    out, err = io.StringIO(), io.StringIO()
    assert write_results(items, out, err) == (1, 1)
    assert out.getvalue() == "a.mkv\tvideo/x-matroska\n"
    assert err.getvalue() == "error: can't convert int to string (at 6..7)\n"


def test_scalar_json_input() -> None:
    """Verify a JSON string resolves to a bare MIME type."""
    code, out, _ = _run(["--json"], b'"video.mkv"')
    assert code == 0
    assert out == "video/x-matroska\n"


def test_scalar_unknown() -> None:
    """Verify a name without an extension resolves to unknown."""
    code, out, _ = _run(["--json"], b'"noext"')
    assert code == 0
    assert out == "unknown\n"


def test_line_stream_paths() -> None:
    """Verify each stdin line becomes a name/type row."""
    code, out, err = _run([], b"video.mkv\naudio.mp3\n")
    assert code == 0
    assert out == "video.mkv\tvideo/x-matroska\naudio.mp3\taudio/mpeg\n"
    assert err == ""


def test_json_list_extensions() -> None:
    """Verify the extension switch and JSON row output."""
    code, out, _ = _run(["--json", "-e", "--format", "json"], b'["mkv", "mp3"]')
    assert code == 0
    assert [json.loads(line) for line in out.splitlines()] == [
        {"name": "mkv", "type": "video/x-matroska"},
        {"name": "mp3", "type": "audio/mpeg"},
    ]


def test_json_list_with_non_string() -> None:
    """Verify a non-string element is reported in place without failing the call."""
    code, out, _ = _run(
        ["--json", "--format", "json"], b'["video.mkv", 5, "audio.mp3"]'
    )
    rows = [json.loads(line) for line in out.splitlines()]
    assert code == 0
    assert rows[0] == {"name": "video.mkv", "type": "video/x-matroska"}
    assert rows[1] == {"error": "can't convert int to string", "span": [14, 15]}
    assert rows[2] == {"name": "audio.mp3", "type": "audio/mpeg"}


def test_unsupported_json_input() -> None:
    """Verify a number as the whole input fails with a type mismatch."""
    code, out, err = _run(["--json"], b"42")
    assert code == 1
    assert out == ""
    assert "Only string input is supported" in err


def test_invalid_json_input() -> None:
    """Verify malformed JSON is reported instead of raising."""
    code, _, err = _run(["--json"], b"[not json")
    assert code == 1
    assert "not valid JSON" in err


def test_cancelled_run() -> None:
    """Verify a cancelled stream stops and reports the interruption."""
    cancel = threading.Event()
    cancel.set()
    code, out, err = _run([], b"video.mkv\n", cancel)
    assert code == 130
    assert out == ""
    assert "Interrupted" in err


def test_config_default_mode_and_extra_types(tmp_path: Path) -> None:
    """Verify the config can switch the default mode and add types."""
    config_file = tmp_path / "config.yml"
    config_file.write_text(
        "lookup:\n"
        "  default_mode: extension\n"
        "  extra_types:\n"
        "    nu: [text/x-nushell]\n",
        encoding="utf-8",
    )
    code, out, _ = _run(["--config", str(config_file)], b"nu\nmkv\n")
    assert code == 0
    assert out == "nu\ttext/x-nushell\nmkv\tvideo/x-matroska\n"


def test_main_integration() -> None:
    """Test the main function with mocked arguments and stdin."""
    stdin = io.TextIOWrapper(io.BytesIO(b"a.pdf\nb\n"), encoding="utf-8")
    stdout = io.StringIO()
    test_args = ["mime-guess", "--format", "json", "--log-level", "WARNING"]

    with (
        patch.object(sys, "argv", test_args),
        patch.object(sys, "stdin", stdin),
        patch.object(sys, "stdout", stdout),
        patch("mimeguess.mime_guess.configure_logging") as configure,
    ):
        ret = main()
        assert ret == 0

    configure.assert_called_once_with("WARNING")
    assert [json.loads(line) for line in stdout.getvalue().splitlines()] == [
        {"name": "a.pdf", "type": "application/pdf"},
        {"name": "b", "type": "unknown"},
    ]


def test_main_bad_config(tmp_path: Path) -> None:
    """Test that an invalid config file exits with status 1."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("lookup:\n  default_mode: magic\n", encoding="utf-8")
    test_args = ["mime-guess", "--config", str(config_file)]

    with patch.object(sys, "argv", test_args):
        assert main() == 1
