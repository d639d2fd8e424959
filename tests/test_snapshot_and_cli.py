"""Tests for snapshot loading and the funnel-readiness CLI."""

import json

import pytest
import yaml

from funnel_readiness.cli import EXIT_BLOCKED, EXIT_LOAD_ERROR, EXIT_READY, main
from funnel_readiness.exceptions import SnapshotLoadError
from funnel_readiness.snapshot import load_snapshot


def _snapshot(synced: bool = True) -> dict:
    return {
        "funnel": {
            "id": "F1",
            "name": "Launch",
            "steps": [
                {
                    "id": "S1",
                    "kind": "checkout",
                    "config": {"items": [{"priceId": "P1", "quantity": 1}]},
                },
                {"id": "ty", "kind": "thank_you"},
            ],
        },
        "prices": [
            {
                "id": "P1",
                "billing": {"type": "one_time"},
                "stripePriceId": "price_1" if synced else None,
            }
        ],
    }


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch):
    monkeypatch.delenv("FUNNEL_READINESS_ENVIRONMENT", raising=False)
    monkeypatch.delenv("FUNNEL_READINESS_LOG_LEVEL", raising=False)


class TestLoadSnapshot:
    def test_json(self, tmp_path):
        path = tmp_path / "funnel.json"
        path.write_text(json.dumps(_snapshot()))

        snapshot = load_snapshot(path)

        assert snapshot.funnel.id == "F1"
        assert [p.id for p in snapshot.prices] == ["P1"]

    def test_yaml(self, tmp_path):
        path = tmp_path / "funnel.yaml"
        path.write_text(yaml.safe_dump(_snapshot()))

        snapshot = load_snapshot(str(path))

        assert [s.id for s in snapshot.funnel.steps] == ["S1", "ty"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError, match="Cannot read snapshot"):
            load_snapshot(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(SnapshotLoadError, match="Cannot parse snapshot") as exc_info:
            load_snapshot(path)
        assert exc_info.value.path == str(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(SnapshotLoadError, match="must contain a mapping"):
            load_snapshot(path)

    def test_invalid_model(self, tmp_path):
        data = _snapshot()
        data["funnel"]["steps"][0]["kind"] = "quiz"
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps(data))

        with pytest.raises(SnapshotLoadError, match="Invalid snapshot"):
            load_snapshot(path)


class TestCli:
    def test_ready_funnel(self, tmp_path, capsys):
        path = tmp_path / "funnel.json"
        path.write_text(json.dumps(_snapshot()))

        exit_code = main(["check", str(path)])

        assert exit_code == EXIT_READY
        assert "**Status:** READY" in capsys.readouterr().out

    def test_blocked_funnel(self, tmp_path, capsys):
        path = tmp_path / "funnel.json"
        path.write_text(json.dumps(_snapshot(synced=False)))

        exit_code = main(["check", str(path)])

        out = capsys.readouterr().out
        assert exit_code == EXIT_BLOCKED
        assert "**Status:** BLOCKED" in out
        assert "No Stripe Integration" in out

    def test_json_output(self, tmp_path, capsys):
        path = tmp_path / "funnel.yaml"
        path.write_text(yaml.safe_dump(_snapshot(synced=False)))

        exit_code = main(["check", str(path), "--json"])

        result = json.loads(capsys.readouterr().out)
        assert exit_code == EXIT_BLOCKED
        assert result["publishBlocked"] is True
        assert result["globalIssues"][0]["id"] == "no-stripe-sync"
        assert [i["id"] for i in result["steps"]["S1"]["issues"]] == ["unsync-P1"]

    def test_load_error(self, tmp_path, capsys):
        exit_code = main(["check", str(tmp_path / "missing.json")])

        assert exit_code == EXIT_LOAD_ERROR
        assert "ERROR: Cannot read snapshot" in capsys.readouterr().err

    def test_requires_subcommand(self):
        with pytest.raises(SystemExit):
            main([])
