"""
Pytest configuration and fixtures for the SMS ingestion pipeline tests

This module provides shared fixtures for unit, integration, and E2E tests.
"""
import os
from datetime import datetime, timezone
from typing import Generator
from xml.sax.saxutils import quoteattr

import pytest

from momo_pipeline.core.models import RawMessage


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that exercise several components together"
    )
    config.addinivalue_line(
        "markers", "postgres: Tests that require a Docker PostgreSQL container"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that run the CLI"
    )


# =======================
# MESSAGE FIXTURES
# =======================

INCOMING_BODY = (
    "You have received 2000 RWF from Jane Smith (*********013) on your mobile money "
    "account at 2024-05-10 16:30:51. Message from sender: . Your new balance:2000 RWF. "
    "Financial Transaction Id: 76662021700."
)

PAYMENT_BODY = (
    "TxId: 73214484437. Your payment of 1,000 RWF to Jane Smith 12845 has been completed "
    "at 2024-05-10 16:31:39. Your new balance: 1,000 RWF. Fee was 0 RWF."
)

TRANSFER_BODY = (
    "*165*S*10000 RWF transferred to Samuel Carter (250791666666) from 36521838 at "
    "2024-05-11 20:34:47 . Fee was: 100 RWF. New balance: 28300 RWF."
)

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant ingestion time."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_message():
    """Factory for RawMessages built the way the archive readers build them."""
    def _make(body: str | None = INCOMING_BODY, **attributes) -> RawMessage:
        attrs = {"address": "M-Money", "type": "1", **attributes}
        if body is not None:
            attrs["body"] = body
        return RawMessage.from_attributes(attrs)
    return _make


@pytest.fixture
def write_xml_archive(tmp_path):
    """Write an XML archive of <sms> elements and return its path."""
    def _write(messages: list[dict], name: str = "archive.xml") -> str:
        lines = ["<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>", "<smses>"]
        for attrs in messages:
            rendered = " ".join(f"{key}={quoteattr(str(value))}" for key, value in attrs.items())
            lines.append(f"  <sms {rendered} />")
        lines.append("</smses>")
        path = tmp_path / name
        path.write_text("\n".join(lines), encoding="utf-8")
        return str(path)
    return _write


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture(scope="session")
def test_data_dir() -> str:
    """
    Get path to test data fixtures directory

    Returns:
        Path to tests/fixtures directory
    """
    return os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture(scope="session")
def sample_archive(test_data_dir) -> str:
    """Path to the sample SMS backup (12 messages)."""
    return os.path.join(test_data_dir, "sample_sms.xml")


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container():
    """
    Start PostgreSQL container for store integration tests

    Yields:
        PostgresContainer instance
    """
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_momo",
        password="test_password",
        dbname="test_momo",
    ) as postgres:
        yield postgres


@pytest.fixture
def db_pool(postgres_container) -> Generator:
    """
    Open a connection pool against the container with an empty transactions table

    Yields:
        Open DatabaseConnectionPool
    """
    from momo_pipeline.warehouse import DatabaseConnectionPool, SchemaManager

    pool = DatabaseConnectionPool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        database="test_momo",
        user="test_momo",
        password="test_password",
        max_size=10,
    )
    pool.open()

    schema = SchemaManager(pool)
    schema.ensure_schema()
    schema.truncate()

    yield pool

    pool.close()
