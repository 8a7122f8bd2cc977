"""Tests for the MCP tool handlers."""

import re

import pytest

import mcp_server
from tests.conftest import make_png
from thumbstudio.assets import to_data_url
from thumbstudio.errors import GenerationFailed
from thumbstudio.studio import StudioState


@pytest.mark.asyncio
class TestTools:
    """Tests for run_tool / handle_tool."""

    async def test_tool_list_covers_handlers(self, studio):
        names = {t.name for t in mcp_server.TOOLS}
        assert names == {
            "studio_status", "list_options", "set_topic", "upload_asset", "clear_asset",
            "generate_thumbnail", "edit_thumbnail", "set_hook", "set_font", "export_thumbnail",
        }

    async def test_status_before_anything(self, studio):
        text = await mcp_server.run_tool(studio, "studio_status", {})

        assert "Topic: (not set)" in text
        assert "No image yet" in text

    async def test_list_options(self, studio):
        text = await mcp_server.run_tool(studio, "list_options", {})

        assert "Gaming & Esports" in text
        assert "bebas: Bebas Neue (word gap 30px)" in text

    async def test_full_session(self, studio, tmp_path):
        await mcp_server.run_tool(studio, "set_topic", {"topic": "Best Setup 2024", "category": "Gaming & Esports"})
        await mcp_server.run_tool(studio, "upload_asset", {"role": "icon", "data_url": to_data_url(make_png(size=(8, 8)))})

        generated = await mcp_server.run_tool(studio, "generate_thumbnail", {})
        assert 'Hook: "INSANE SETUP"' in generated

        edited = await mcp_server.run_tool(studio, "edit_thumbnail", {"instruction": "More glow"})
        assert edited.startswith("Edit applied")

        await mcp_server.run_tool(studio, "set_hook", {"hook": "Mind Blown"})
        await mcp_server.run_tool(studio, "set_font", {"font": "anton"})
        status = await mcp_server.run_tool(studio, "studio_status", {})
        assert "icon: data-url" in status
        assert 'Hook: "Mind Blown"' in status
        assert "Font: anton" in status

        exported = await mcp_server.run_tool(studio, "export_thumbnail", {"output_dir": str(tmp_path)})
        assert re.search(r"yt-thumbnail-\d+\.png", exported)

    async def test_clear_asset(self, studio):
        await mcp_server.run_tool(studio, "upload_asset", {"role": "icon", "data_url": to_data_url(make_png(size=(8, 8)))})

        text = await mcp_server.run_tool(studio, "clear_asset", {"role": "icon"})

        assert text == "Asset removed: icon"
        assert studio.state.assets.count == 0

    async def test_generate_without_topic(self, studio):
        text = await mcp_server.run_tool(studio, "generate_thumbnail", {})
        assert text == "ERROR: Please enter a video title first."

    async def test_generate_failure_message_verbatim(self, studio, fake_client):
        fake_client.generate.side_effect = GenerationFailed("Failed to generate thumbnail image.")
        await mcp_server.run_tool(studio, "set_topic", {"topic": "Gold"})

        text = await mcp_server.run_tool(studio, "generate_thumbnail", {})

        assert text == "ERROR: Failed to generate thumbnail image."

    async def test_edit_requires_image(self, studio):
        text = await mcp_server.run_tool(studio, "edit_thumbnail", {"instruction": "More glow"})
        assert text.startswith("ERROR: No image yet")

    async def test_export_requires_image(self, studio):
        text = await mcp_server.run_tool(studio, "export_thumbnail", {})
        assert text == "ERROR: Generate a thumbnail first."

    async def test_bad_input_becomes_error_text(self, studio):
        assert (await mcp_server.run_tool(studio, "set_font", {"font": "papyrus"})).startswith("ERROR: Unknown font")
        assert (await mcp_server.run_tool(studio, "upload_asset", {"role": "logo", "path": "x.png"})).startswith("ERROR:")
        assert (await mcp_server.run_tool(studio, "upload_asset", {"role": "icon"})) == "ERROR: path or data_url is required"

    async def test_busy_generation_is_blocked(self, studio):
        studio.state = StudioState(topic="Gold", is_generating=True)

        text = await mcp_server.run_tool(studio, "generate_thumbnail", {})

        assert "BLOCKED" in text

    async def test_unknown_tool(self, studio):
        assert await mcp_server.run_tool(studio, "make_coffee", {}) == "ERROR: Unknown tool 'make_coffee'"
