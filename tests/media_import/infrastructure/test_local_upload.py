import unittest

from src.media_import.domain.models import FileInfo, StagedFile
from src.media_import.infrastructure.local_upload import LocalUploadService
from src.media_import.infrastructure.registry_sqlite import SQLiteMediaRegistry
from tests.utils.tempdir import managed_temp_dir


class FailingRegistry:
    async def create(self, payload, user):
        raise RuntimeError("db write failed")


class LocalUploadServiceTests(unittest.IsolatedAsyncioTestCase):
    async def test_upload_copies_file_and_registers_record(self):
        with managed_temp_dir("upload_ok") as tmp:
            staged_path = tmp / "staged.bin"
            staged_path.write_bytes(b"abc")
            registry = SQLiteMediaRegistry(tmp / "media.db")
            try:
                service = LocalUploadService(registry, tmp / "uploads")
                record = await service.upload(
                    StagedFile(name="a-b-photo.JPG", mime_type="image/jpeg", size_bytes=3, local_path=staged_path),
                    FileInfo(name="Cover", alternative_text="alt", caption="cap"),
                    user="editor",
                )

                self.assertEqual(record.name, "Cover")
                self.assertEqual(record.ext, ".jpg")
                self.assertEqual(record.mime, "image/jpeg")
                self.assertEqual(record.size, 3)
                self.assertEqual(record.alternative_text, "alt")
                self.assertEqual(record.caption, "cap")
                self.assertEqual(record.created_by, "editor")
                self.assertTrue(record.hash.startswith("a-b-photo_"))

                stored = list((tmp / "uploads").iterdir())
                self.assertEqual([p.name for p in stored], [f"{record.hash}.jpg"])
                self.assertEqual(stored[0].read_bytes(), b"abc")
                self.assertTrue(staged_path.exists())
            finally:
                registry.close()

    async def test_registry_failure_removes_stored_copy(self):
        with managed_temp_dir("upload_fail") as tmp:
            staged_path = tmp / "staged.bin"
            staged_path.write_bytes(b"abc")
            service = LocalUploadService(FailingRegistry(), tmp / "uploads")

            with self.assertRaises(RuntimeError):
                await service.upload(
                    StagedFile(name="x.png", mime_type="image/png", size_bytes=3, local_path=staged_path),
                    FileInfo(name="x.png"),
                    user=None,
                )

            self.assertEqual(list((tmp / "uploads").iterdir()), [])
