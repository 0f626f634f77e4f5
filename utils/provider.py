"""
Provider Connection
Builds the Web3 client for the configured RPC endpoint
"""

from web3 import Web3
from loguru import logger

from blockchain.errors import DeployError


def connect(rpc_url: str, request_timeout: float = 30) -> Web3:
    """
    Create a Web3 client. No network I/O happens here.

    Args:
        rpc_url: HTTP JSON-RPC endpoint
        request_timeout: Per-request timeout in seconds

    Returns:
        Web3 instance
    """
    if not rpc_url:
        raise DeployError("DEPLOY_RPC_URL must be set", stage='submit')

    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': request_timeout}))


def ensure_connected(w3: Web3):
    """
    Check the endpoint answers

    Raises:
        DeployError: if the network is unreachable
    """
    if not w3.is_connected():
        raise DeployError("Failed to connect to network", stage='submit')

    logger.debug("Connected to network")


def describe_endpoint(w3: Web3) -> str:
    """Endpoint URI for log lines, without credentials in the path"""
    uri = str(getattr(w3.provider, 'endpoint_uri', None) or w3.provider)
    # Hosted RPC URLs carry the API key as the last path segment
    if uri.count('/') > 3:
        uri = uri.rsplit('/', 1)[0] + '/***'
    return uri
