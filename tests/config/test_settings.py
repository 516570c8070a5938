import unittest
from pathlib import Path
from unittest.mock import patch

from src.config.settings import DEFAULT_DB_PATH, MediaImportSettings


class MediaImportSettingsTests(unittest.TestCase):
    def test_defaults_when_environment_is_empty(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = MediaImportSettings.from_env()

        self.assertEqual(settings.allowed_file_types, ("any",))
        self.assertEqual(settings.staging_prefix, "media-import-")
        self.assertIsNone(settings.staging_root)
        self.assertEqual(settings.db_path, DEFAULT_DB_PATH)
        self.assertIsNone(settings.fetch_timeout_seconds)

    def test_values_are_read_from_environment(self):
        env = {
            "MEDIA_IMPORT_ALLOWED_FILE_TYPES": " Images, videos ,,",
            "MEDIA_IMPORT_STAGING_PREFIX": "unit-",
            "MEDIA_IMPORT_STAGING_ROOT": "/var/tmp/staging",
            "MEDIA_IMPORT_DB_PATH": "db/media.db",
            "MEDIA_IMPORT_UPLOAD_DIR": "files",
            "MEDIA_IMPORT_FETCH_TIMEOUT": "12.5",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = MediaImportSettings.from_env()

        self.assertEqual(settings.allowed_file_types, ("images", "videos"))
        self.assertEqual(settings.staging_prefix, "unit-")
        self.assertEqual(settings.staging_root, Path("/var/tmp/staging"))
        self.assertEqual(settings.db_path, Path("db/media.db"))
        self.assertEqual(settings.upload_dir, Path("files"))
        self.assertEqual(settings.fetch_timeout_seconds, 12.5)
