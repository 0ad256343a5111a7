import aws_cdk as cdk
import pytest
from aws_cdk.assertions import Template

from network_config import NetworkConfig
from network_stack import NetworkStack

# Concrete account/region: the CDK falls back to dummy1a, dummy1b, dummy1c
TEST_ENV = cdk.Environment(account="123456789012", region="us-east-1")


@pytest.fixture
def make_stack():
    def _make_stack(zone_count=1, zones=None, env=TEST_ENV):
        app = cdk.App()
        config = NetworkConfig(zone_count=zone_count, zones=zones or [])
        return NetworkStack(app, "TestNetwork", config=config, env=env)
    return _make_stack


@pytest.fixture
def two_zone_stack(make_stack):
    return make_stack(zone_count=2)


@pytest.fixture
def two_zone_template(two_zone_stack):
    return Template.from_stack(two_zone_stack)
