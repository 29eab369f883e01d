"""
Unit tests for the catalog JSON log format
"""

import json
import logging
from logging.handlers import RotatingFileHandler

from catalog_service.app.utils.logging import (
    CatalogJSONFormatter,
    setup_catalog_logging,
)


def _record(**extra):
    record = logging.makeLogRecord(
        {
            "name": "catalog_test",
            "levelname": "WARNING",
            "msg": "Category %s",
            "args": ("saved",),
        }
    )
    record.__dict__.update(extra)
    return record


class TestCatalogJSONFormatter:
    def test_extra_fields_are_top_level_keys(self):
        entry = json.loads(
            CatalogJSONFormatter().format(
                _record(category_id="main-1", event_type="category_saved")
            )
        )

        assert entry["message"] == "Category saved"
        assert entry["service"] == "catalog_service"
        assert entry["logger"] == "catalog_test"
        assert entry["category_id"] == "main-1"
        assert entry["event_type"] == "category_saved"
        assert "msg" not in entry
        assert "args" not in entry

    def test_excluded_fields_are_dropped(self):
        formatter = CatalogJSONFormatter(exclude_fields=["user_id"])

        entry = json.loads(formatter.format(_record(user_id="admin-user")))

        assert "user_id" not in entry


class TestSetupCatalogLogging:
    def test_repeated_setup_does_not_stack_handlers(self):
        setup_catalog_logging("catalog_test_repeat")
        logger = setup_catalog_logging("catalog_test_repeat", log_level="debug")

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.propagate is False

    def test_file_logging_adds_error_log(self, tmp_path):
        logger = setup_catalog_logging(
            "catalog_test_files", enable_file_logging=True, log_dir=str(tmp_path)
        )
        file_handlers = [
            h for h in logger.handlers if isinstance(h, RotatingFileHandler)
        ]

        assert sorted(h.level for h in file_handlers) == [logging.INFO, logging.ERROR]
        assert (tmp_path / "catalog_test_files_errors.log").exists()

        for handler in file_handlers:
            handler.close()
        logger.handlers.clear()
