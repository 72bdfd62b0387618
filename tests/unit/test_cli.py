"""
Unit tests for the ecpdksap command-line entry point.
"""

import json

import pytest

from ecpdksap.cli import main


def _run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out


def _keygen(capsys, version="v1"):
    code, out = _run(capsys, "keygen", "--version", version)
    assert code == 0
    return json.loads(out)


def test_keygen(capsys):
    keys = _keygen(capsys, "v2")
    assert keys["version"] == "v2"
    assert len(keys["k"]) == 64
    assert len(keys["K"]) == 128


def test_keygen_unknown_version():
    with pytest.raises(SystemExit):
        main(["keygen", "--version", "v5"])


def test_send_then_receive_scan(capsys):
    keys = _keygen(capsys)
    code, out = _run(
        capsys,
        "send",
        json.dumps({"K": keys["K"], "V": keys["V"], "Version": "v1", "ViewTagVersion": "v0-2bytes"}),
    )
    assert code == 0
    sent = json.loads(out)

    request = {
        "k": keys["k"],
        "v": keys["v"],
        "Rs": [sent["R"]],
        "ViewTags": [sent["view_tag"]],
        "Version": "v1",
        "ViewTagVersion": "v0-2bytes",
    }
    code, out = _run(capsys, "receive-scan-using-vtag", json.dumps(request))
    assert code == 0
    result = json.loads(out)
    assert result["matches"][0]["public_key"] == sent["public_key"]

    # Same request without filtering
    request.pop("ViewTags")
    request["ViewTagVersion"] = "none"
    code, out = _run(capsys, "receive-scan", "--workers", "2", json.dumps(request))
    assert code == 0
    assert json.loads(out)["matches"][0]["public_key"] == sent["public_key"]


def test_vtag_scan_requires_tags(capsys):
    keys = _keygen(capsys)
    request = {"k": keys["k"], "v": keys["v"], "Rs": [], "Version": "v1"}
    code, _ = _run(capsys, "receive-scan-using-vtag", json.dumps(request))
    assert code == 1


def test_invalid_json(capsys):
    code, out = _run(capsys, "send", "{not json")
    assert code == 1
    assert out == ""


def test_malformed_key_exit_code(capsys):
    keys = _keygen(capsys)
    code, _ = _run(capsys, "send", json.dumps({"K": "0x12", "V": keys["V"], "Version": "v1"}))
    assert code == 2


def test_abort_flag(capsys):
    keys = _keygen(capsys)
    request = {"k": keys["k"], "v": keys["v"], "Rs": ["nope"], "Version": "v1"}

    code, out = _run(capsys, "receive-scan", json.dumps(request))
    assert code == 0
    assert json.loads(out)["errors"][0]["kind"] == "malformed_encoding"

    code, _ = _run(capsys, "receive-scan", "--on-error", "abort", json.dumps(request))
    assert code == 2
