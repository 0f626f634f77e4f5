"""
System Check Script
Verifies settings, network, signer and artifact before deploying
"""

import sys
from typing import Callable, List, Tuple

from web3 import Web3
from loguru import logger

from blockchain import ArtifactStore, DeployerWallet, DeployError
from utils import DeploySettings, connect, setup_logging
from utils.provider import describe_endpoint


def check_artifact(settings: DeploySettings, w3: Web3) -> bool:
    """Check the configured blueprint resolves"""
    logger.info("Checking contract artifact...")

    store = ArtifactStore(settings.artifacts_dir)
    try:
        blueprint = store.resolve(settings.blueprint)
    except DeployError as e:
        logger.error(f"  ✗ {e}")
        available = store.available()
        if available:
            logger.info(f"  Available: {', '.join(available)}")
        return False

    logger.success(f"  ✓ {blueprint.name} ({blueprint.source_name or blueprint.artifact_path})")
    return True


def check_rpc_connection(settings: DeploySettings, w3: Web3) -> bool:
    """Check the RPC endpoint answers"""
    logger.info("Checking RPC connection...")

    if not w3.is_connected():
        logger.error(f"  ✗ {describe_endpoint(w3)}: Connection failed")
        return False

    logger.success(f"  ✓ {describe_endpoint(w3)}: Connected (Chain: {w3.eth.chain_id}, Block: {w3.eth.block_number})")
    return True


def check_signer_balance(settings: DeploySettings, w3: Web3) -> bool:
    """Check a signer is available and funded"""
    logger.info("Checking deployer account...")

    wallet = DeployerWallet.from_private_key(settings.private_key)
    address = wallet.address(w3)
    balance = wallet.get_balance(w3, address)

    mode = "local key" if wallet.is_local else "node account"
    logger.info(f"  Deployer: {address} ({mode})")
    logger.info(f"  Balance: {balance:.4f}")

    if balance <= 0:
        logger.error("  ✗ Deployer has no funds")
        return False

    logger.success("  ✓ Deployer funded")
    return True


CHECKS: List[Tuple[str, Callable[[DeploySettings, Web3], bool]]] = [
    ("Contract Artifact", check_artifact),
    ("RPC Connection", check_rpc_connection),
    ("Deployer Account", check_signer_balance),
]


def run_checks(settings: DeploySettings, w3: Web3) -> List[Tuple[str, bool]]:
    """Run every check, recording failures instead of stopping"""
    results = []

    for name, check_func in CHECKS:
        try:
            result = check_func(settings, w3)
        except Exception as e:
            logger.error(f"Error in {name}: {e}")
            result = False
        results.append((name, result))

        # Account checks need a live endpoint
        if name == "RPC Connection" and not result:
            results.extend((skipped, False) for skipped, _ in CHECKS[len(results):])
            break

    return results


def main() -> int:
    """Run all system checks"""
    try:
        settings = DeploySettings.load()
        setup_logging(settings.log_level, settings.log_file)
    except DeployError as e:
        logger.error(f"Invalid settings: {e}")
        return 1

    logger.info("=" * 70)
    logger.info("Deployment System Check")
    logger.info("=" * 70)

    results = run_checks(settings, connect(settings.rpc_url, settings.request_timeout))

    logger.info("")
    passed = sum(1 for _, result in results if result)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info(f"Total: {passed}/{len(results)} checks passed")

    if passed == len(results):
        logger.success("✅ Ready to deploy: python -m scripts.deploy_contract")
        return 0

    logger.error("❌ Not ready - fix issues above")
    return 1


if __name__ == "__main__":
    sys.exit(main())
