"""
Pytest configuration and shared fixtures for the registration service.

This module provides the moto-backed AWS resources, Lambda events and context
used across unit and integration tests.
"""

import json
import os
from typing import Any, Dict
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

ORDERS_TABLE = "test-orders-table"
USERS_TABLE = "test-users-table"


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "test",
        "AWS_SECRET_ACCESS_KEY": "test",
        "ORDERS_TABLE_NAME": ORDERS_TABLE,
        "USERS_TABLE_NAME": USERS_TABLE,
        "user_pool_id": "us-east-1_testpool",
        "POWERTOOLS_SERVICE_NAME": "test-user-registration",
        "POWERTOOLS_METRICS_NAMESPACE": "TestUserRegistration",
        "LOG_LEVEL": "DEBUG",
        "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    })


@pytest.fixture
def aws():
    """Activate moto for every AWS service touched by the test."""
    with mock_aws():
        yield


def _create_record_table(table_name: str):
    dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
    table = dynamodb.create_table(
        TableName=table_name,
        KeySchema=[{"AttributeName": "email", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "email", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    table.wait_until_exists()
    return table


# DynamoDB fixtures
@pytest.fixture
def orders_table(aws):
    """Create a mock orders table keyed by email."""
    return _create_record_table(ORDERS_TABLE)


@pytest.fixture
def users_table(aws):
    """Create a mock users table keyed by email."""
    return _create_record_table(USERS_TABLE)


# Cognito fixtures
@pytest.fixture
def cognito_client(aws):
    return boto3.client("cognito-idp", region_name="us-east-1")


@pytest.fixture
def user_pool_id(cognito_client) -> str:
    """Create a mock Cognito user pool and return its id."""
    response = cognito_client.create_user_pool(PoolName="test-user-pool")
    return response["UserPool"]["Id"]


@pytest.fixture
def orders_service(orders_table):
    """Record service over the moto orders table."""
    from registration.handlers.models.env_vars import OrdersEnvVars
    from registration.handlers.utils.dependencies import build_orders_service

    return build_orders_service(OrdersEnvVars(ORDERS_TABLE_NAME=ORDERS_TABLE))


@pytest.fixture
def users_service(users_table):
    """Record service over the moto users table."""
    from registration.handlers.models.env_vars import UsersEnvVars
    from registration.handlers.utils.dependencies import build_users_service

    return build_users_service(UsersEnvVars(USERS_TABLE_NAME=USERS_TABLE))


@pytest.fixture
def registration_service(user_pool_id):
    """Sign-up service over the moto user pool."""
    from registration.handlers.models.env_vars import SignUpEnvVars
    from registration.handlers.utils.dependencies import build_registration_service

    return build_registration_service(SignUpEnvVars(user_pool_id=user_pool_id))


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop the cached process-wide services between tests."""
    from registration.handlers.utils import dependencies

    getters = (dependencies.get_orders_service, dependencies.get_users_service, dependencies.get_registration_service)
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()


# Event fixtures
@pytest.fixture
def post_confirmation_event() -> Dict[str, Any]:
    """Create a sample Cognito post confirmation trigger event."""
    return {
        "version": "1",
        "region": "us-east-1",
        "userPoolId": "us-east-1_testpool",
        "userName": "jane.smith@example.com",
        "callerContext": {
            "awsSdkVersion": "aws-sdk-unknown-unknown",
            "clientId": "test-client-id",
        },
        "triggerSource": "PostConfirmation_ConfirmSignUp",
        "request": {
            "userAttributes": {
                "sub": "6f1d2c4e-0000-4000-8000-000000000000",
                "cognito:user_status": "CONFIRMED",
                "email_verified": "true",
                "name": "Jane Smith",
                "email": "jane.smith@example.com",
            }
        },
        "response": {},
    }


def make_api_gateway_event(
    path: str = "/orders",
    http_method: str = "GET",
    path_parameters: Dict[str, str] = None,
    body: Any = None,
) -> Dict[str, Any]:
    """Build an API Gateway REST proxy event."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "resource": path,
        "path": path,
        "httpMethod": http_method,
        "headers": {
            "Content-Type": "application/json",
            "User-Agent": "test-agent/1.0",
        },
        "multiValueHeaders": {},
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": path_parameters,
        "stageVariables": None,
        "requestContext": {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "stage": "test",
            "httpMethod": http_method,
            "path": path,
            "identity": {"sourceIp": "127.0.0.1"},
        },
        "body": body,
        "isBase64Encoded": False,
    }


@pytest.fixture
def api_gateway_event():
    """Factory fixture for API Gateway REST proxy events."""
    return make_api_gateway_event


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = 512
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


# Error simulation fixtures
@pytest.fixture
def client_error():
    """Factory for botocore ClientError instances."""
    from botocore.exceptions import ClientError

    def create_error(error_code: str, message: str = "Test error", operation_name: str = "TestOperation"):
        return ClientError(
            error_response={
                "Error": {
                    "Code": error_code,
                    "Message": message,
                }
            },
            operation_name=operation_name,
        )

    return create_error


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
