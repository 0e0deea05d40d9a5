"""CLI tests for the materials command group."""
import json
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from wechat_media.main import app
from wechat_media.config import get_config
from wechat_media.models.materials import MaterialItem
from wechat_media.utils.errors import NetworkError

runner = CliRunner()

ITEMS = [
    MaterialItem(media_id="m1", name="a.jpg", url="http://mmbiz/a"),
    MaterialItem(media_id="m2", name="b.jpg", url="http://mmbiz/b"),
]


def _invoke(args, service, fake_config):
    with patch("wechat_media.commands.materials_cmd.get_config", return_value=fake_config), \
         patch("wechat_media.commands.materials_cmd.TokenService"), \
         patch("wechat_media.commands.materials_cmd.WeChatClient"), \
         patch("wechat_media.commands.materials_cmd.MaterialService", return_value=service):
        return runner.invoke(app, args)


def test_list_json(fake_config):
    service = MagicMock()
    service.list_image_assets.return_value = ITEMS

    result = _invoke(["materials", "list", "--output", "json"], service, fake_config)
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert [row["media_id"] for row in data] == ["m1", "m2"]


def test_list_text_one_line_per_asset(fake_config):
    service = MagicMock()
    service.list_image_assets.return_value = ITEMS

    result = _invoke(["materials", "list", "--output", "text"], service, fake_config)
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        "media_id=m1 name=a.jpg url=http://mmbiz/a",
        "media_id=m2 name=b.jpg url=http://mmbiz/b",
    ]


def test_list_empty(fake_config):
    service = MagicMock()
    service.list_image_assets.return_value = []

    result = _invoke(["materials", "list", "--output", "json"], service, fake_config)
    assert result.exit_code == 0
    assert result.stdout == ""
    assert "No image materials found." in result.stderr


def test_list_failure_exits_nonzero(fake_config):
    service = MagicMock()
    service.list_image_assets.side_effect = NetworkError("Material listing failed: network error")

    result = _invoke(["materials", "list"], service, fake_config)
    assert result.exit_code == 1
    assert json.loads(result.stdout)["code"] == "CONNECTION_ERROR"


def test_missing_secret_makes_no_network_call(tmp_path, monkeypatch):
    monkeypatch.delenv("WECHAT_APPID", raising=False)
    monkeypatch.delenv("WECHAT_SECRET", raising=False)
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "config.yaml"
    config_file.write_text("appid: wx123\n")
    get_config.cache_clear()

    with patch("wechat_media.commands.materials_cmd.TokenService") as token_service, \
         patch("wechat_media.commands.materials_cmd.WeChatClient") as client:
        result = runner.invoke(app, ["materials", "list", "--config", str(config_file)])

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["code"] == "CONFIG_ERROR"
    assert "secret" in data["message"]
    token_service.assert_not_called()
    client.assert_not_called()
