"""Token collaborators."""

from .erc20 import ERC20Token, MockToken, StableToken, WETH

__all__ = ["ERC20Token", "MockToken", "StableToken", "WETH"]
