"""Tests for settings"""
from smm_planner.config import Settings


def test_postgres_url_uses_psycopg_driver():
    settings = Settings(DATABASE_URL="postgresql://u:p@db:5432/smm")
    assert settings.get_sqlalchemy_url() == "postgresql+psycopg://u:p@db:5432/smm"
    assert settings.get_psycopg_dsn() == "postgresql://u:p@db:5432/smm"


def test_other_urls_untouched():
    settings = Settings(DATABASE_URL="sqlite:///./smm.db")
    assert settings.get_sqlalchemy_url() == "sqlite:///./smm.db"


def test_calendar_defaults():
    settings = Settings()
    assert settings.ICS_PRODID == "-//Social Media Task Manager//EN"
    assert settings.ICS_UID_DOMAIN == "socialmedia-taskmanager.com"
    assert settings.DEMO_USERNAME == "demo-user"
