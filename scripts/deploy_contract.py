"""
Smart Contract Deployment Script
Deploys the configured contract (KYCVerification by default) and
prints its address
"""

import asyncio
import sys

from loguru import logger

from blockchain import ArtifactStore, Deployer, DeployerWallet, DeployError, DeployResult
from utils import DeploySettings, connect, setup_logging
from utils.provider import describe_endpoint


def build_deployer(settings: DeploySettings) -> Deployer:
    """Wire the deployer from settings. Makes no network calls."""
    w3 = connect(settings.rpc_url, settings.request_timeout)
    logger.debug(f"Network: {describe_endpoint(w3)}")

    return Deployer(
        w3,
        ArtifactStore(settings.artifacts_dir),
        DeployerWallet.from_private_key(settings.private_key),
        receipt_timeout=settings.receipt_timeout,
        poll_latency=settings.poll_latency
    )


async def deploy_contract(settings: DeploySettings) -> DeployResult:
    """Deploy the configured blueprint once"""
    deployer = build_deployer(settings)
    return await deployer.deploy(settings.blueprint)


def main() -> int:
    """
    Run one deployment

    Returns:
        Process exit code: 0 on success, 1 on any error
    """
    try:
        settings = DeploySettings.load()
        setup_logging(settings.log_level, settings.log_file)
        result = asyncio.run(deploy_contract(settings))
    except DeployError as e:
        logger.error(f"Error during deployment: {e}")
        return 1

    if not result.ok:
        logger.error(f"Error during deployment ({result.error.stage}): {result.error}")
        return 1

    print(f"{result.handle.blueprint_name} deployed to: {result.address}")
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
