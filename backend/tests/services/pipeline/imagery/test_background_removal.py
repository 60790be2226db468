"""
Tests for alchemist.services.pipeline.imagery.background_removal
"""

import pytest

from alchemist.core import BackgroundRemovalError, build_data_uri
from alchemist.services.pipeline.imagery import remove_image_background
from alchemist.services.pipeline.schemas import GeneratedImage


@pytest.mark.asyncio
class TestRemoveImageBackground:

    async def test_sends_image_and_instruction(self, engine, responses, png_bytes, png_data_uri):
        engine.generate.return_value = responses.ok(
            raw_response=responses.sdk(responses.inline(b"transparent", "image/png"))
        )
        original = GeneratedImage(image_data_uri=png_data_uri)

        processed = await remove_image_background(engine, original)

        assert processed.image_data_uri == build_data_uri("image/png", b"transparent")
        assert original.image_data_uri == png_data_uri
        contents = engine.generate.call_args.kwargs["contents"]
        assert contents[0].inline_data.data == png_bytes
        assert contents[0].inline_data.mime_type == "image/png"
        assert "transparent" in contents[1].lower()

    async def test_invalid_input(self, engine):
        with pytest.raises(BackgroundRemovalError):
            await remove_image_background(engine, GeneratedImage(image_data_uri="not a data uri"))
        engine.generate.assert_not_called()

    async def test_non_image_input(self, engine):
        uri = build_data_uri("text/plain", b"hello")
        with pytest.raises(BackgroundRemovalError, match="image"):
            await remove_image_background(engine, GeneratedImage(image_data_uri=uri))

    async def test_no_image_returned(self, engine, responses, png_data_uri):
        engine.generate.return_value = responses.ok(raw_response=responses.sdk(text="Sorry"))
        with pytest.raises(BackgroundRemovalError) as excinfo:
            await remove_image_background(engine, GeneratedImage(image_data_uri=png_data_uri))
        assert excinfo.value.stage == "background_removal"

    async def test_call_failure(self, engine, responses, png_data_uri):
        engine.generate.return_value = responses.failed("quota")
        with pytest.raises(BackgroundRemovalError, match="quota"):
            await remove_image_background(engine, GeneratedImage(image_data_uri=png_data_uri))
