from __future__ import annotations

import re

from order_ingest.cli.main import main as cli_main

SUMMARY_RE = re.compile(
    r"^SUMMARY file=\S+ rows=\d+ valid=\d+ invalid=\d+ row_errors=\d+ "
    r"missing=(-|[a-z_,]+) stripped=\d+ ready=(true|false) submitted=(true|false)$"
)


def _summary_lines(out: str) -> list[str]:
    return [line for line in out.splitlines() if line.startswith("SUMMARY ")]


def test_summary_line_format(write_config, write_csv, mixed_csv_text, capsys):
    cli_main(["check", str(write_csv("mixed.csv", mixed_csv_text))])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    assert SUMMARY_RE.match(lines[0])


def test_summary_line_on_missing_columns(write_config, write_csv, capsys):
    cli_main(["check", str(write_csv("bad.csv", "id,latitude\n1,40.7\n"))])
    lines = _summary_lines(capsys.readouterr().out)
    assert len(lines) == 1
    assert SUMMARY_RE.match(lines[0])
    assert "missing=longitude,subtotal" in lines[0]


def test_every_line_labeled(write_config, write_csv, mixed_csv_text, capsys):
    cli_main(["check", str(write_csv("mixed.csv", mixed_csv_text))])
    for line in capsys.readouterr().out.splitlines():
        assert line.split(" ", 1)[0] in {"INFO", "WARN", "ERROR", "SUMMARY"}
