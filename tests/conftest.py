import os

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from database import NoSQLAdapter
from portfolio_api.config.settings import Settings
from portfolio_api.main import create_app
from tests.consts import TEST_BUCKET_NAME
from tests.fixtures.blob_stores import RecordingBlobStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        deployment_mode="local-dev",
        mongo_uri=None,
        db_path=str(tmp_path / "test_portfolio.db"),
        storage_dir=str(tmp_path / "storage"),
        public_base_url="http://testserver",
        log_level="DEBUG",
    )


@pytest.fixture
def store(settings) -> NoSQLAdapter:
    adapter = NoSQLAdapter(settings.db_path)
    adapter.init_collections()
    return adapter


@pytest.fixture
def blob_store() -> RecordingBlobStore:
    return RecordingBlobStore()


@pytest.fixture
def client(settings, store, blob_store):
    app = create_app(settings=settings, store=store, blob_store=blob_store)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture
def mocked_aws(aws_credentials):
    with mock_aws():
        s3_client = boto3.client("s3", region_name=os.environ["AWS_DEFAULT_REGION"])
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
        yield
