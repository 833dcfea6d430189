import json
from pathlib import Path

from click.testing import CliRunner

from rubydefs.cli import main

SAMPLE = Path(__file__).parent / "samples" / "sample.rb"


def _run(*args, env=None):
    runner = CliRunner()
    return runner.invoke(main, [*args], env=env or {})


def test_cli_prints_definitions():
    result = _run(str(SAMPLE))
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[:3] == [
        "Defn: module Opus::Foo",
        "Defn: class Bar",
        "Defn: const bar",
    ]
    assert "Defn: def add_one" in lines
    assert not any(line.startswith("C: ") for line in lines)


def test_cli_signatures_and_comments():
    result = _run("--signatures", "--comments", str(SAMPLE))
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "Defn: def add_one(x: Integer): Integer" in lines
    assert "C: 1: # Here is one comment" in lines
    assert "C: 22: # here is a Sorbet metaprogrammed method" in lines


def test_cli_reads_settings_from_environment():
    result = _run(str(SAMPLE), env={"RUBYDEFS_SIGNATURES": "true"})
    assert result.exit_code == 0, result.output
    assert "Defn: def self.do_the_thing: void" in result.output.splitlines()

    # an explicit flag beats the environment
    result = _run("--no-signatures", str(SAMPLE), env={"RUBYDEFS_SIGNATURES": "true"})
    assert "Defn: def self.do_the_thing" in result.output.splitlines()


def test_cli_json_output():
    result = _run("--format", "json", "--comments", str(SAMPLE))
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert len(data) == 1
    defs = data[0]["definitions"]
    assert defs[0] == {"kind": "module", "name": "Opus::Foo", "line": 2}
    add_one = next(d for d in defs if d["name"] == "add_one")
    assert add_one["signature"] == {"params": {"x": "Integer"}, "returns": "Integer"}
    assert len(data[0]["comments"]) == 8


def test_cli_multiple_files(tmp_path):
    other = tmp_path / "other.rb"
    other.write_text("class Other\n  attr_writer :x\nend\n")
    result = _run(str(SAMPLE), str(other))
    assert result.exit_code == 0, result.output
    assert f"==> {other} <==" in result.output
    assert "Defn: attr_writer x" in result.output


def test_cli_missing_file(tmp_path):
    result = _run(str(tmp_path / "nope.rb"))
    assert result.exit_code == 2
