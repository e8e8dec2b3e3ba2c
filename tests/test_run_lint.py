"""CLI tests."""

import json

import pytest
import yaml

from openapi_linter.linter.run_lint import find_spec_files, main


@pytest.fixture
def spec_dir(tmp_path, minimal_spec):
    clean = tmp_path / "clean.yaml"
    clean.write_text(yaml.safe_dump(minimal_spec), encoding="utf-8")

    old = dict(minimal_spec, openapi="2.0")
    old_file = tmp_path / "old.json"
    old_file.write_text(json.dumps(old), encoding="utf-8")

    broken = dict(minimal_spec)
    broken["components"] = {"schemas": {"Pet": {"required": ["id"], "properties": {}}}}
    broken_file = tmp_path / "nested" / "broken.yml"
    broken_file.parent.mkdir()
    broken_file.write_text(yaml.safe_dump(broken), encoding="utf-8")

    (tmp_path / "notes.txt").write_text("not a spec", encoding="utf-8")
    return tmp_path


def test_no_arguments_prints_usage(capsys):
    exit_code = main([])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Usage:" in captured.err
    assert "--strict" in captured.err


def test_clean_file_passes(spec_dir, capsys):
    exit_code = main([str(spec_dir / "clean.yaml")])
    out = capsys.readouterr().out

    assert exit_code == 0
    assert "Validating OpenAPI spec:" in out
    assert "OpenAPI spec is valid!" in out
    assert "Summary: 0 errors, 0 warnings" in out


def test_warnings_pass_unless_strict(spec_dir, capsys):
    assert main([str(spec_dir / "old.json")]) == 0
    out = capsys.readouterr().out
    assert "Found 1 warning(s):" in out
    assert "OpenAPI version 2.0 might have compatibility issues" in out

    assert main(["--strict", str(spec_dir / "old.json")]) == 1


def test_errors_fail_with_source_location(spec_dir, capsys):
    exit_code = main([str(spec_dir / "nested" / "broken.yml")])
    out = capsys.readouterr().out

    assert exit_code == 1
    assert "Found 1 error(s):" in out
    assert "Required property 'id' not defined in schema at /components/schemas/Pet" in out
    assert "yaml_path=/components/schemas/Pet/required/0" in out


def test_unparsable_file(tmp_path, capsys):
    spec_file = tmp_path / "bad.json"
    spec_file.write_text("{", encoding="utf-8")

    assert main([str(spec_file)]) == 1
    out = capsys.readouterr().out
    assert "Failed to load spec file:" in out
    assert "Summary: 1 errors, 0 warnings" in out


def test_json_format(spec_dir, capsys):
    exit_code = main(["--format", "json", str(spec_dir)])
    output = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert output["files"] == 3
    assert output["errors"] == 1
    assert output["warnings"] == 2
    assert output["passed"] is False
    by_name = {entry["file"].rsplit("/", 1)[-1]: entry for entry in output["results"]}
    assert by_name["clean.yaml"]["passed"] is True
    assert by_name["broken.yml"]["errors"][0]["code"] == "required-property-mismatch"


def test_github_actions_format(spec_dir, capsys):
    main(["--format", "github-actions", str(spec_dir / "nested" / "broken.yml")])
    out = capsys.readouterr().out.splitlines()

    assert out[0].startswith("::error file=")
    assert out[0].endswith("::Required property 'id' not defined in schema at /components/schemas/Pet")
    assert out[1].startswith("::warning file=")


def test_find_spec_files(spec_dir):
    found = find_spec_files([str(spec_dir), str(spec_dir / "clean.yaml")])
    assert sorted(p.name for p in found) == ["broken.yml", "clean.yaml", "old.json"]
