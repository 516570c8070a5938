import base64
import unittest

from src.media_import.domain.errors import InvalidInputFormat
from src.media_import.domain.models import InlinePayloadReference
from src.media_import.infrastructure.inline_decoder import InlineDecoder
from tests.utils.tempdir import managed_temp_dir


class InlineDecoderTests(unittest.TestCase):
    def test_decode_writes_bytes_with_timestamped_name(self):
        content = b"\x89PNG\r\n\x1a\nfake"
        reference = InlinePayloadReference(mime_type="image/png", payload=base64.b64encode(content).decode())
        decoder = InlineDecoder(clock=lambda: 1700000000.123)

        with managed_temp_dir("inline_ok") as tmp:
            staged = decoder.decode(reference, tmp)

            self.assertEqual(staged.name, "image-1700000000123.png")
            self.assertEqual(staged.mime_type, "image/png")
            self.assertEqual(staged.size_bytes, len(content))
            self.assertEqual(staged.local_path.read_bytes(), content)

    def test_invalid_base64_raises_invalid_input_format(self):
        decoder = InlineDecoder()
        with managed_temp_dir("inline_bad") as tmp:
            with self.assertRaises(InvalidInputFormat):
                decoder.decode(InlinePayloadReference(mime_type="image/png", payload="abc"), tmp)
