"""
Shared fixtures: artifact directories and a mocked Web3 client
"""

import json
import sys
from unittest.mock import MagicMock

import pytest
from web3 import Web3
from loguru import logger

from blockchain import ArtifactStore, DeployerWallet

NODE_ACCOUNT = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
DEPLOYED_ADDRESS = '0x5fbdb2315678afecb367f032d93f642f64180aa3'
TX_HASH = bytes.fromhex('ab' * 32)

KYC_ABI = [
    {
        "inputs": [{"name": "user", "type": "address"}],
        "name": "isVerified",
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    }
]


def write_artifact(artifacts_dir, name, source=None, **overrides):
    """Write a Hardhat-style artifact and return its path"""
    source = source or f"{name}.sol"
    contract_dir = artifacts_dir / 'contracts' / source
    contract_dir.mkdir(parents=True, exist_ok=True)

    artifact = {
        "_format": "hh-sol-artifact-1",
        "contractName": name,
        "sourceName": f"contracts/{source}",
        "abi": KYC_ABI,
        "bytecode": "0x6080604052",
        "deployedBytecode": "0x6080",
    }
    artifact.update(overrides)

    path = contract_dir / f"{name}.json"
    path.write_text(json.dumps(artifact))
    # Hardhat writes a debug file next to every artifact
    (contract_dir / f"{name}.dbg.json").write_text(json.dumps({"_format": "hh-sol-dbg-1"}))
    return path


@pytest.fixture(autouse=True)
def reset_logger():
    """Scripts reconfigure loguru; always log to whatever stderr is current"""
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG")


@pytest.fixture
def artifacts_dir(tmp_path):
    """Artifacts directory containing KYCVerification"""
    root = tmp_path / 'artifacts'
    write_artifact(root, 'KYCVerification')
    return root


@pytest.fixture
def artifact_store(artifacts_dir):
    return ArtifactStore(str(artifacts_dir))


@pytest.fixture
def factory():
    """Contract factory whose constructor submits TX_HASH"""
    factory = MagicMock()
    factory.constructor.return_value.transact.return_value = TX_HASH
    return factory


@pytest.fixture
def w3(factory):
    """Mock Web3 connected to a node with one funded, unlocked account"""
    w3 = MagicMock()
    w3.is_connected.return_value = True
    w3.from_wei.side_effect = Web3.from_wei
    w3.eth.accounts = [NODE_ACCOUNT]
    w3.eth.get_balance.return_value = 10 ** 18
    w3.eth.contract.return_value = factory
    w3.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': DEPLOYED_ADDRESS,
        'blockNumber': 1,
        'gasUsed': 215000,
        'transactionHash': TX_HASH,
    }
    return w3


@pytest.fixture
def node_wallet():
    return DeployerWallet()
