"""Tests for the AWS Lambda entry point."""

from mangum import Mangum

from zeromarket import lambda_handler
from zeromarket.main import app


def test_handler_wraps_the_app():
    assert isinstance(lambda_handler.handler, Mangum)
    assert lambda_handler.handler.app is app
