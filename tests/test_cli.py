import json

from recipe_magic_core import cli
from recipe_magic_core.errors import WebhookError


def test_cli_parses_file(tmp_path, capsys, sample_output):
    path = tmp_path / "salida.txt"
    path.write_text(sample_output, encoding="utf-8")

    assert cli.main(["--file", str(path)]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["display_name"] == ""
    assert out["draft"]["title"] == "Chicken Biryani"
    assert out["draft"]["servings"] == 4


def test_cli_calls_webhook(capsys, monkeypatch, sample_output):
    monkeypatch.setattr(cli, "generate_recipe_text", lambda prompt: sample_output)

    assert cli.main(["write a recipe of Biryani"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["display_name"] == "Biryani"
    assert out["draft"]["cuisine_type"] == "Indian"


def test_cli_webhook_error(capsys, monkeypatch):
    def failing(prompt):
        raise WebhookError("timeout")

    monkeypatch.setattr(cli, "generate_recipe_text", failing)

    assert cli.main(["soup"]) == 1
    assert "timeout" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    missing = tmp_path / "no-existe.txt"

    assert cli.main(["--file", str(missing)]) == 1
    assert "no-existe.txt" in capsys.readouterr().err
