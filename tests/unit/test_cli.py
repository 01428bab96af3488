# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from resttemplate.cli.main import build_parser, load_template, main, parse_assignments
from resttemplate.errors import TemplateError


def test_build_parser():
    parser = build_parser()
    args = parser.parse_args(["template.json", "p=1", "x=X", "--full-response"])
    assert args.template == "template.json"
    assert args.arguments == ["p=1", "x=X"]
    assert args.full_response is True
    assert args.ignore_ssl_errors is False


def test_parse_assignments():
    assert parse_assignments(["p=1", "q=a=b", "empty="]) == {"p": "1", "q": "a=b", "empty": ""}
    with pytest.raises(ValueError):
        parse_assignments(["novalue"])


def test_load_template_requires_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(TemplateError):
        load_template(str(path))


@pytest.fixture
def template_file(tmp_path, template_descriptor):
    path = tmp_path / "request-template.json"
    path.write_text(json.dumps(template_descriptor), encoding="utf-8")
    return path


def _patch_client(monkeypatch, client):
    monkeypatch.setattr("resttemplate.builder.create_default_http_client", lambda settings=None: client)


def test_main_invokes_template(monkeypatch, capsys, template_file, echo_client):
    _patch_client(monkeypatch, echo_client)
    code = main([str(template_file), "p=7", "a=5", "b=false"])
    assert code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["path"] == "/7"
    assert output["body"] == {"a": 5, "b": False}


def test_main_full_response(monkeypatch, capsys, template_file, echo_client):
    _patch_client(monkeypatch, echo_client)
    assert main([str(template_file), "p=1", "--full-response"]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output["status_code"] == 200
    assert output["body"]["path"] == "/1"


def test_main_reports_variable_errors(monkeypatch, capsys, tmp_path, echo_client):
    _patch_client(monkeypatch, echo_client)
    path = tmp_path / "required.json"
    path.write_text(json.dumps({"url": "http://api.test/{!p}"}), encoding="utf-8")
    assert main([str(path)]) == 2
    assert "Missing required variable: p" in capsys.readouterr().err


def test_main_reports_application_errors(monkeypatch, capsys, template_file, echo_client_factory):
    _patch_client(monkeypatch, echo_client_factory(status=404))
    assert main([str(template_file), "p=1"]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["status_code"] == 404
    assert isinstance(output["message"], str)
