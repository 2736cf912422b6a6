"""Pytest fixtures: configs, in-memory store, sample users."""

from __future__ import annotations

from pathlib import Path

import pytest

from user_registry.config.models import AppConfig, FormConfig
from user_registry.domain.record import StoredUser, UserData
from user_registry.infrastructure.user_store import InMemoryUserStore


@pytest.fixture
def app_config() -> AppConfig:
    """Default config without the post-submit delay."""
    return AppConfig(form=FormConfig(reset_delay_seconds=0.0))


@pytest.fixture
def valid_user() -> UserData:
    return UserData(
        first_name="Ana María",
        last_name="Zamora",
        mother_last_name="López",
        birth_date="1990-05-17",
        curp="ZALA900517MDFMPN09",
        phone="5512345678",
        email="ana@example.com",
        education="Universidad",
    )


@pytest.fixture
def stored_users() -> list[StoredUser]:
    return [
        StoredUser(
            id="u1",
            first_name="Ana",
            last_name="Zamora",
            mother_last_name="López",
            birth_date="1990-05-17",
            curp="ZALA900517MDFMPN09",
            phone="5512345678",
            email="ana@example.com",
            education="Universidad",
        ),
        StoredUser(
            id="u2",
            first_name="Luis",
            last_name="Alvarez",
            mother_last_name="Pérez",
            birth_date="1985-01-02",
            curp="AAPL850102HDFLRS01",
            phone="5587654321",
            email="luis@example.com",
            education="Posgrado",
        ),
    ]


@pytest.fixture
def memory_store(stored_users: list[StoredUser]) -> InMemoryUserStore:
    return InMemoryUserStore(stored_users)


@pytest.fixture
def configs_dir() -> Path:
    """Path to the configs directory shipped with the repo."""
    return Path(__file__).resolve().parent.parent / "configs"
