from __future__ import annotations

import atexit
import importlib
import logging
import weakref
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.clock import Clock
from .common.error_handlers import register_error_handlers
from .container import Container, build_container
from .core.enums import Role
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .departments.controller import register as register_departments
from .employees.controller import register as register_employees
from .users.controller import register as register_users
from .users.tokens import init_jwt

logger = logging.getLogger(__name__)

# containers still alive at interpreter exit get closed once
_LIVE_CONTAINERS: weakref.WeakValueDictionary[int, Container] = weakref.WeakValueDictionary()


@atexit.register
def _close_live_containers() -> None:
    for container in list(_LIVE_CONTAINERS.values()):
        container.close()


_SETTINGS = (
    "SECRET_KEY",
    "JWT_SECRET_KEY",
    "DB_BACKEND",
    "DB_CONFIG",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "AUTO_INIT_DB",
    "AUTO_SEED_DB",
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD",
)


def _load_settings(overrides: Optional[dict]) -> dict:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name, None) for name in _SETTINGS}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def create_app(settings_overrides: Optional[dict] = None, *, clock: Optional[Clock] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_overrides)

    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))
    app.config["JWT_SECRET_KEY"] = settings.get("JWT_SECRET_KEY") or settings["SECRET_KEY"]

    backend = str(settings.get("DB_BACKEND") or "mysql").lower()
    db_config = dict(settings.get("DB_CONFIG") or {})

    if backend == "mysql":
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings["SETTINGS_MODULE"],
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if settings.get("AUTO_INIT_DB"):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if settings.get("AUTO_SEED_DB"):
            apply_seed_sql(db_config)
            if settings.get("ADMIN_EMAIL") and settings.get("ADMIN_PASSWORD"):
                ensure_admin_user(db_config, email=settings["ADMIN_EMAIL"], password=settings["ADMIN_PASSWORD"])
            logger.info("Demo seed ready")

    container = build_container(db_config=db_config, backend=backend, clock=clock)
    app.extensions["hr_records.container"] = container
    _LIVE_CONTAINERS[id(container)] = container

    admin_email, admin_password = settings.get("ADMIN_EMAIL"), settings.get("ADMIN_PASSWORD")
    if backend == "memory" and admin_email and admin_password and not container.users_repo.get_by_email(admin_email):
        container.auth_service.register(email=admin_email, password=admin_password, name="Administrator", role=Role.ADMIN)

    init_jwt(app, container.users_repo)
    register_error_handlers(app)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return {"status": "ok", "message": "HR records API is running"}

    register_users(app, container)
    register_departments(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_dashboard(app, container)

    return app
