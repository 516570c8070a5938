import base64
import unittest
from unittest.mock import patch

from src.config.settings import MediaImportSettings
from src.media_import.resolve import find_or_import_file, find_or_import_file_async
from tests.utils.tempdir import leftover_entries, managed_temp_dir

PNG_PAYLOAD = "data:image/png;base64," + base64.b64encode(b"\x89PNG-entrypoint").decode()


def make_settings(tmp, allowed=("images",)) -> MediaImportSettings:
    staging = tmp / "staging"
    staging.mkdir()
    return MediaImportSettings(
        allowed_file_types=allowed,
        staging_root=staging,
        db_path=tmp / "media.db",
        upload_dir=tmp / "uploads",
    )


class ResolveEntrypointAsyncTests(unittest.IsolatedAsyncioTestCase):
    async def test_inline_import_then_lookup_by_id_and_name(self):
        with managed_temp_dir("entry_inline") as tmp:
            settings = make_settings(tmp)

            imported = await find_or_import_file_async(PNG_PAYLOAD, "editor", settings=settings)
            self.assertIsNotNone(imported)
            self.assertEqual(imported.ext, ".png")
            self.assertEqual(imported.created_by, "editor")
            self.assertEqual(imported.size, len(b"\x89PNG-entrypoint"))

            by_id = await find_or_import_file_async(imported.id, "editor", settings=settings)
            by_name = await find_or_import_file_async({"name": imported.name}, "editor", settings=settings)
            self.assertEqual(by_id, imported)
            self.assertEqual(by_name, imported)
            self.assertEqual(leftover_entries(tmp / "staging"), [])

    async def test_allowed_types_override_hides_found_record(self):
        with managed_temp_dir("entry_override") as tmp:
            settings = make_settings(tmp)
            imported = await find_or_import_file_async(PNG_PAYLOAD, None, settings=settings)

            hidden = await find_or_import_file_async(
                imported.id, None, allowed_file_types=["videos"], settings=settings
            )
            self.assertIsNone(hidden)

    async def test_explicit_paths_win_over_settings(self):
        with managed_temp_dir("entry_paths") as tmp:
            settings = make_settings(tmp)
            imported = await find_or_import_file_async(
                PNG_PAYLOAD,
                None,
                db_path=tmp / "other.db",
                upload_dir=tmp / "other_uploads",
                settings=settings,
            )

            self.assertTrue((tmp / "other.db").exists())
            self.assertFalse((tmp / "media.db").exists())
            self.assertEqual(len(list((tmp / "other_uploads").iterdir())), 1)
            self.assertIsNotNone(imported)


class ResolveEntrypointSyncTests(unittest.TestCase):
    def test_sync_wrapper_uses_settings_from_env_when_not_given(self):
        with managed_temp_dir("entry_sync") as tmp:
            env = {
                "MEDIA_IMPORT_DB_PATH": str(tmp / "env.db"),
                "MEDIA_IMPORT_UPLOAD_DIR": str(tmp / "env_uploads"),
                "MEDIA_IMPORT_ALLOWED_FILE_TYPES": "images",
            }
            with patch.dict("os.environ", env):
                record = find_or_import_file(PNG_PAYLOAD, "cli")

            self.assertIsNotNone(record)
            self.assertEqual(record.created_by, "cli")
            self.assertTrue((tmp / "env.db").exists())
