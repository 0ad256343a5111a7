#!/usr/bin/env python3
import os

import aws_cdk as cdk
from network_config import NetworkConfig
from network_stack import NetworkStack


def build_app(context: dict | None = None) -> cdk.App:
    app = cdk.App(context=context)

    # Context wins; otherwise use the account/region the CDK CLI resolved
    env = cdk.Environment(
        account=app.node.try_get_context("account") or os.getenv("CDK_DEFAULT_ACCOUNT"),
        region=app.node.try_get_context("region") or os.getenv("CDK_DEFAULT_REGION") or "us-east-1"
    )

    NetworkStack(
        app, "TieredVpcNetworkStack",
        config=NetworkConfig.from_context(app.node),
        env=env
    )
    return app


if __name__ == "__main__":
    build_app().synth()
