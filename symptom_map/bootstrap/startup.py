from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config
from PySide6.QtWidgets import QMessageBox

from symptom_map.application.errors import QuadrantGeometryError
from symptom_map.domain.quadrants import validate_quadrant_table

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "infrastructure" / "db" / "migrations"


def check_startup_prerequisites(db_file: Path) -> bool:
    if not MIGRATIONS_DIR.exists():
        QMessageBox.critical(
            None,
            "Error",
            "The migrations directory is missing. Check the installation.",
        )
        return False
    try:
        test_file = db_file.parent / ".write_test"
        test_file.write_text("ok", encoding="utf-8")
        test_file.unlink(missing_ok=True)
    except OSError:
        QMessageBox.critical(
            None,
            "Error",
            f"No write access to the database directory: {db_file.parent}",
        )
        return False
    return True


def build_alembic_config(root_dir: Path, database_url: str) -> Config:
    ini_path = root_dir / "alembic.ini"
    cfg = Config(str(ini_path)) if ini_path.exists() else Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url)
    # Application logging is configured already; keep alembic.ini from replacing it.
    cfg.attributes["configure_logger"] = False
    return cfg


def run_migrations(root_dir: Path, database_url: str, log_dir: Path, db_file: Path) -> bool:
    try:
        command.upgrade(build_alembic_config(root_dir, database_url), "head")
        return True
    except Exception:  # noqa: BLE001
        logger = logging.getLogger(__name__)
        logger.exception("Failed to run migrations")
        try:
            error_path = log_dir / "migration_error.log"
            error_path.parent.mkdir(parents=True, exist_ok=True)
            with error_path.open("a", encoding="utf-8") as handle:
                handle.write("\n--- Migration error ---\n")
                handle.write(f"DB: {db_file}\n")
                handle.write(f"Migrations: {MIGRATIONS_DIR}\n")
                handle.write(traceback.format_exc())
        except OSError:
            logger.exception("Failed to write migration error log")
        QMessageBox.critical(
            None,
            "Error",
            "Could not apply database migrations.\n"
            f"Details: {log_dir / 'migration_error.log'}",
        )
        return False


def check_quadrant_geometry() -> bool:
    try:
        validate_quadrant_table()
    except QuadrantGeometryError as exc:
        logging.getLogger(__name__).exception("Invalid quadrant table")
        QMessageBox.critical(None, "Error", f"Body map configuration is invalid: {exc}")
        return False
    return True


def initialize_database(
    *,
    root_dir: Path,
    db_file: Path,
    database_url: str,
    log_dir: Path,
) -> bool:
    if not check_startup_prerequisites(db_file):
        return False
    return run_migrations(root_dir, database_url, log_dir, db_file)


def seed_core_data(container: Any) -> None:
    try:
        added = container.symptom_seed_service.seed_defaults_if_empty()
    except Exception:  # noqa: BLE001
        logging.getLogger(__name__).exception("Failed to seed symptom defaults")
        return
    if added:
        logging.getLogger(__name__).info("Seeded %s symptom rows", added)
