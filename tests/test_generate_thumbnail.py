"""Tests for the one-shot command-line script."""

import pytest

import generate_thumbnail
from tests.conftest import make_png
from thumbstudio.errors import EditFailed
from thumbstudio.niches import Niche


def parse(*argv):
    return generate_thumbnail.build_parser().parse_args(list(argv))


class TestParser:
    """Tests for build_parser."""

    def test_defaults(self):
        args = parse("Black Holes")

        assert args.topic == "Black Holes"
        assert args.category == "mystery"
        assert args.edit == []
        assert args.hook is None and args.font is None

    def test_repeatable_edits(self):
        args = parse("Black Holes", "-e", "Add purple mist", "--edit", "More glow")
        assert args.edit == ["Add purple mist", "More glow"]

    def test_font_choices(self):
        with pytest.raises(SystemExit):
            parse("Black Holes", "--font", "papyrus")


@pytest.mark.asyncio
class TestRun:
    """Tests for run()."""

    async def test_generate_edit_export(self, studio, fake_client, tmp_path):
        bg = tmp_path / "bg.png"
        bg.write_bytes(make_png(size=(16, 9)))
        args = parse(
            "Best Setup 2024", "-c", "gaming", "--background", str(bg),
            "--edit", "More glow", "--hook", "Insane Setup", "--font", "anton",
            "-o", str(tmp_path),
        )

        path = await generate_thumbnail.run(args, studio)

        assert path is not None and path.exists()
        assert studio.state.niche is Niche.GAMING
        assert studio.state.assets.background.source == "bg.png"
        assert studio.state.hook == "Insane Setup"
        assert studio.state.font == "anton"
        fake_client.edit.assert_awaited_once()

    async def test_edit_failure_stops(self, studio, fake_client, capsys):
        fake_client.edit.side_effect = EditFailed("Failed to edit thumbnail.")
        args = parse("Best Setup 2024", "--edit", "More glow")

        assert await generate_thumbnail.run(args, studio) is None
        assert "ERROR: Failed to edit thumbnail." in capsys.readouterr().out

    async def test_assets_reach_the_generator(self, studio, fake_client, tmp_path):
        icon = tmp_path / "logo.png"
        obj = tmp_path / "coin.png"
        icon.write_bytes(make_png(size=(8, 8)))
        obj.write_bytes(make_png(size=(8, 8)))
        args = parse("Compound Interest", "-c", "finance", "--icon", str(icon), "--object", str(obj), "-o", str(tmp_path))

        assert await generate_thumbnail.run(args, studio) is not None

        assets = fake_client.generate.call_args[0][2]
        assert assets.count == 2
        assert assets.icon.source == "logo.png"
        assert assets.object.source == "coin.png"
