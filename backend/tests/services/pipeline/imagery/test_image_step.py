"""
Tests for alchemist.services.pipeline.imagery.image_step
"""

import base64

import pytest

from alchemist.core import ImageGenerationError, parse_data_uri
from alchemist.services.pipeline.imagery import generate_image
from alchemist.services.pipeline.schemas import ImageRequest


@pytest.mark.asyncio
class TestGenerateImage:

    async def test_first_image_part_becomes_data_uri(self, engine, responses, png_bytes):
        raw = responses.sdk(
            responses.inline(b"ignored text blob", "text/plain"),
            responses.inline(png_bytes, "image/png"),
            responses.inline(b"second", "image/jpeg"),
        )
        engine.generate.return_value = responses.ok(raw_response=raw)

        image = await generate_image(engine, ImageRequest(prompt="A red fox"))

        mime_type, _params, payload = parse_data_uri(image.image_data_uri)
        assert mime_type == "image/png"
        assert payload == png_bytes
        assert engine.generate.call_args.kwargs["config"].response_modalities == ["TEXT", "IMAGE"]

    async def test_base64_text_payload(self, engine, responses, png_bytes):
        raw = responses.sdk(responses.inline(base64.b64encode(png_bytes).decode(), "image/png"))
        engine.generate.return_value = responses.ok(raw_response=raw)

        image = await generate_image(engine, ImageRequest(prompt="A red fox"))

        assert parse_data_uri(image.image_data_uri)[2] == png_bytes

    async def test_missing_mime_defaults_to_png(self, engine, responses, png_bytes):
        engine.generate.return_value = responses.ok(raw_response=responses.sdk(responses.inline(png_bytes, None)))
        image = await generate_image(engine, ImageRequest(prompt="A red fox"))
        assert image.image_data_uri.startswith("data:image/png;base64,")

    async def test_no_image_part(self, engine, responses):
        engine.generate.return_value = responses.ok(raw_response=responses.sdk(text="I cannot draw that"))
        with pytest.raises(ImageGenerationError, match="did not return an image"):
            await generate_image(engine, ImageRequest(prompt="A red fox"))

    async def test_call_failure(self, engine, responses):
        engine.generate.return_value = responses.failed("blocked", "ValueError")
        with pytest.raises(ImageGenerationError) as excinfo:
            await generate_image(engine, ImageRequest(prompt="A red fox"))
        assert excinfo.value.stage == "image"

    async def test_blank_prompt(self, engine):
        with pytest.raises(ImageGenerationError, match="empty"):
            await generate_image(engine, ImageRequest(prompt="   "))
        engine.generate.assert_not_called()
