"""Tests for the logforward CLI."""

from unittest.mock import patch, MagicMock
import json
import pytest
from botocore.exceptions import ClientError, NoRegionError

from logforward.cli import main
from logforward.base.client_cache import client_cache

FORWARDER_ARN = "arn:aws:lambda:us-east-1:123456789012:function:forwarder"


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "error"}}, "op")


@pytest.fixture
def clients():
    client_cache.clear()
    with patch("logforward.aws.provider.boto3") as mock_boto:
        lambda_client, logs_client = MagicMock(), MagicMock()
        logs_client.get_paginator.return_value.paginate.return_value = [
            {"subscriptionFilters": []}
        ]
        mock_boto.client.side_effect = lambda service, **kw: {
            "lambda": lambda_client,
            "logs": logs_client,
        }[service]
        yield lambda_client, logs_client
    client_cache.clear()


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "compiled.json"
    path.write_text(json.dumps({
        "Resources": {
            "FuncLogGroup": {
                "Type": "AWS::Logs::LogGroup",
                "Properties": {"LogGroupName": "/aws/lambda/my-service-dev-func"},
            },
        },
    }))
    return path


def _args(template_file, *extra):
    return [
        "--template", str(template_file),
        "--forwarder-arn", FORWARDER_ARN,
        "--service", "my-service",
        "--config", '{"region_name": "us-east-1"}',
        *extra,
    ]


class TestCLI:
    def test_writes_updated_template(self, clients, template_file, tmp_path):
        out = tmp_path / "out.json"
        main(_args(template_file, "--output", str(out)))
        resources = json.loads(out.read_text())["Resources"]
        assert resources["FuncLogGroupSubscription"]["Properties"]["DestinationArn"] == FORWARDER_ARN

    def test_prints_to_stdout(self, clients, template_file, capsys):
        main(_args(template_file, "--max-workers", "2"))
        captured = capsys.readouterr()
        assert "FuncLogGroupSubscription" in json.loads(captured.out)["Resources"]

    def test_quota_warning_on_stderr(self, clients, template_file, capsys):
        _, logs_client = clients
        logs_client.get_paginator.return_value.paginate.return_value = [
            {"subscriptionFilters": [{"filterName": "a"}, {"filterName": "b"}]}
        ]
        main(_args(template_file))
        captured = capsys.readouterr()
        assert "Warning: Could not subscribe" in captured.err
        assert "FuncLogGroupSubscription" not in json.loads(captured.out)["Resources"]

    def test_expression_forwarder(self, clients, template_file, capsys):
        lambda_client, _ = clients
        main([
            "--template", str(template_file),
            "--forwarder-arn", '{"Fn::ImportValue": "forwarder-arn"}',
            "--service", "my-service",
        ])
        captured = capsys.readouterr()
        sub = json.loads(captured.out)["Resources"]["FuncLogGroupSubscription"]
        assert sub["Properties"]["DestinationArn"] == {"Fn::ImportValue": "forwarder-arn"}
        lambda_client.get_function.assert_not_called()

    def test_missing_forwarder_exits(self, clients, template_file, tmp_path, capsys):
        lambda_client, _ = clients
        lambda_client.get_function.side_effect = _client_error("ResourceNotFoundException")
        out = tmp_path / "out.json"
        with pytest.raises(SystemExit) as excinfo:
            main(_args(template_file, "--output", str(out)))
        assert excinfo.value.code == 1
        assert "Could not perform GetFunction" in capsys.readouterr().err
        assert not out.exists()

    def test_invalid_config_json(self, template_file):
        with pytest.raises(SystemExit) as excinfo:
            main([
                "--template", str(template_file),
                "--forwarder-arn", FORWARDER_ARN,
                "--config", "{not json",
            ])
        assert excinfo.value.code == 1

    def test_missing_template(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([
                "--template", str(tmp_path / "nope.json"),
                "--forwarder-arn", FORWARDER_ARN,
            ])
        assert excinfo.value.code == 1

    def test_invalid_max_workers(self, clients, template_file):
        with pytest.raises(SystemExit) as excinfo:
            main(_args(template_file, "--max-workers", "0"))
        assert excinfo.value.code == 1

    def test_boto_error_exits(self, template_file, capsys):
        client_cache.clear()
        with patch("logforward.aws.provider.boto3") as mock_boto:
            mock_boto.client.side_effect = NoRegionError()
            with pytest.raises(SystemExit) as excinfo:
                main([
                    "--template", str(template_file),
                    "--forwarder-arn", FORWARDER_ARN,
                    "--service", "my-service",
                ])
        client_cache.clear()
        assert excinfo.value.code == 1
        assert "Error: You must specify a region" in capsys.readouterr().err
