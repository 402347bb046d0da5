"""
Tests for the command-line interface.

All runs use --offline, so no network is touched.
"""

import json
from decimal import Decimal

import pytest

from domain_availability.checkers import OfflineChecker
from domain_availability.cli import (
    EXIT_AVAILABLE,
    EXIT_INVALID_INPUT,
    EXIT_NONE_AVAILABLE,
    format_result,
    main,
    normalize_domains,
    read_domains_file,
)
from domain_availability.models import CheckResult


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DOMAIN_CHECKER_MOCK", "MAINREG_API_KEY", "MAINREG_API_SECRET",
        "WHOIS_TIMEOUT", "WHOIS_FOLLOW", "LOG_LEVEL", "LOG_FORMAT",
    ):
        monkeypatch.setenv(name, "")
    # Keep the text log quiet on stderr for these runs
    monkeypatch.setenv("LOG_LEVEL", "error")


def expected_exit(domains: list[str]) -> int:
    checker = OfflineChecker()
    return EXIT_AVAILABLE if any(checker.is_available(d) for d in domains) else EXIT_NONE_AVAILABLE


class TestCheckCommand:

    def test_json_output_matches_offline_checker(self, capsys) -> None:
        domains = ["example.com", "brandly.io", "foo.rare"]
        code = main(["check", "--offline", "--json", *domains])

        payload = json.loads(capsys.readouterr().out)
        checker = OfflineChecker()

        assert [item["domain"] for item in payload] == domains
        assert [item["available"] for item in payload] == [checker.is_available(d) for d in domains]
        assert [item["price"] for item in payload] == [12, 35, 15]
        assert all(item["currency"] == "EUR" for item in payload)
        assert code == expected_exit(domains)

    def test_input_is_normalized(self, capsys) -> None:
        main(["check", "--offline", "--json", "  Example.COM "])
        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["domain"] == "example.com"

    def test_text_output_has_summary(self, capsys) -> None:
        main(["check", "--offline", "a.com", "b.net"])
        out = capsys.readouterr().out
        assert "a.com: " in out
        assert "b.net: " in out
        assert "Summary:" in out

    def test_invalid_domain_exits_with_two(self, capsys) -> None:
        code = main(["check", "--offline", "example.com", "no-tld"])
        captured = capsys.readouterr()
        assert code == EXIT_INVALID_INPUT
        assert "no-tld" in captured.err
        assert captured.out == ""


class TestCheckListCommand:

    def test_reads_file_and_writes_output(self, tmp_path, capsys) -> None:
        source = tmp_path / "domains.txt"
        source.write_text("# candidates\nexample.com\n\nbrandly.io\n", encoding="utf-8")
        output = tmp_path / "out" / "results.json"

        code = main(["check-list", "--offline", str(source), "-o", str(output)])

        written = json.loads(output.read_text(encoding="utf-8"))
        assert [item["domain"] for item in written] == ["example.com", "brandly.io"]
        assert code == expected_exit(["example.com", "brandly.io"])
        assert "Results written to" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        code = main(["check-list", "--offline", str(tmp_path / "missing.txt")])
        assert code == EXIT_INVALID_INPUT
        assert "File not found" in capsys.readouterr().err

    def test_empty_file(self, tmp_path) -> None:
        source = tmp_path / "domains.txt"
        source.write_text("# nothing here\n", encoding="utf-8")
        assert main(["check-list", "--offline", str(source)]) == EXIT_INVALID_INPUT


class TestHelpers:

    def test_normalize_domains(self) -> None:
        domains, errors = normalize_domains(["A.com", "", "b.io", "bad domain.com"])
        assert domains == ["a.com", "b.io"]
        assert len(errors) == 2

    def test_read_domains_file(self, tmp_path) -> None:
        source = tmp_path / "d.txt"
        source.write_text("  a.com  \n#b.com\n\nc.de\n", encoding="utf-8")
        assert read_domains_file(source) == ["a.com", "c.de"]

    def test_format_result(self) -> None:
        line = format_result(CheckResult(domain="a.io", available=True, price=Decimal("35"), currency="EUR"))
        assert line == "a.io: AVAILABLE (~35 EUR)"

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
