from unittest.mock import patch, MagicMock
import pytest
from pydantic import ValidationError

from logforward.factory import provider_factory
from logforward.base import CloudProviderBlueprint
from logforward.base.client_cache import client_cache


@pytest.fixture(autouse=True)
def _fresh_cache():
    client_cache.clear()
    yield
    client_cache.clear()


class TestProviderFactory:
    @patch("logforward.aws.provider.boto3")
    def test_aws(self, mock_boto):
        mock_boto.client.return_value = MagicMock()
        result = provider_factory(
            "aws",
            {
                "aws_access_key_id": "k",
                "aws_secret_access_key": "s",
                "region_name": "us-east-1",
            },
            {"service": "orders", "stage": "prod", "stack_name": "orders-prod"},
        )
        assert isinstance(result, CloudProviderBlueprint)
        assert result.service_identifier() == "orders"
        assert result.stage_identifier() == "prod"
        assert result.stack_identifier() == "orders-prod"

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported cloud provider"):
            provider_factory("gcp", {}, {"service": "orders"})

    @patch("logforward.aws.provider.boto3")
    def test_invalid_config(self, mock_boto):
        with pytest.raises(ValidationError):
            provider_factory("aws", {"bogus": 1}, {"service": "orders"})
        mock_boto.client.assert_not_called()

    @patch("logforward.aws.provider.boto3")
    def test_invalid_deployment(self, mock_boto, monkeypatch):
        monkeypatch.delenv("LOGFORWARD_SERVICE", raising=False)
        with pytest.raises(ValidationError):
            provider_factory("aws", {}, {"stage": "dev"})
        mock_boto.client.assert_not_called()
