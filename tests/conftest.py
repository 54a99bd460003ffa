"""
Shared fixtures for the fei_pcv test suite.

Every test gets a fresh Chain with a Core whose roles mirror a small
deployment: a governor, a guardian, a PCV controller and a minter, plus
two plain users.
"""

import pytest

from fei_pcv.base.chain import Chain
from fei_pcv.base.config import PSMConfig
from fei_pcv.base.core import Core
from fei_pcv.oracle.oracle import MockOracle
from fei_pcv.sentinel.sentinel import PCVSentinel
from fei_pcv.stabilizer.pcv_deposit import PCVDeposit
from fei_pcv.stabilizer.psm import PegStabilityModule
from fei_pcv.tokens.erc20 import MockToken, StableToken
from fei_pcv.types import SCALE


GENESIS_TIMESTAMP = 1_700_000_000

MINT_FEE_BASIS_POINTS = 30
REDEEM_FEE_BASIS_POINTS = 30
RESERVES_THRESHOLD = 10_000_000 * SCALE
FEI_LIMIT_PER_SECOND = 10_000 * SCALE
BUFFER_CAP = 10_000_000 * SCALE
MINT_AMOUNT = 1_000 * SCALE
BP_GRANULARITY = 10_000


@pytest.fixture
def chain() -> Chain:
    return Chain(timestamp=GENESIS_TIMESTAMP)


@pytest.fixture
def governor(chain: Chain) -> str:
    return chain.new_address("governor")


@pytest.fixture
def guardian(chain: Chain) -> str:
    return chain.new_address("guardian")


@pytest.fixture
def pcv_controller(chain: Chain) -> str:
    return chain.new_address("pcv-controller")


@pytest.fixture
def minter(chain: Chain) -> str:
    return chain.new_address("minter")


@pytest.fixture
def user(chain: Chain) -> str:
    return chain.new_address("user")


@pytest.fixture
def user2(chain: Chain) -> str:
    return chain.new_address("user2")


@pytest.fixture
def core(chain: Chain, governor: str, guardian: str, pcv_controller: str, minter: str) -> Core:
    core = Core(chain, governor)
    core.grant_guardian(guardian, sender=governor)
    core.grant_pcv_controller(pcv_controller, sender=governor)
    core.grant_minter(minter, sender=governor)
    return core


@pytest.fixture
def fei(chain: Chain, core: Core) -> StableToken:
    return StableToken(chain, core)


@pytest.fixture
def asset(chain: Chain) -> MockToken:
    return MockToken(chain, "Dai Stablecoin", "DAI")


@pytest.fixture
def oracle(chain: Chain) -> MockOracle:
    return MockOracle(chain, 1)


@pytest.fixture
def pcv_deposit(chain: Chain, core: Core, asset: MockToken) -> PCVDeposit:
    return PCVDeposit(chain, core, asset)


@pytest.fixture
def psm_config() -> PSMConfig:
    return PSMConfig(
        mint_fee_basis_points=MINT_FEE_BASIS_POINTS,
        redeem_fee_basis_points=REDEEM_FEE_BASIS_POINTS,
        reserves_threshold=RESERVES_THRESHOLD,
        rate_limit_per_second=FEI_LIMIT_PER_SECOND,
        buffer_cap=BUFFER_CAP,
        decimals_normalizer=0,
        do_invert=False,
    )


@pytest.fixture
def psm(
    chain: Chain,
    core: Core,
    governor: str,
    fei: StableToken,
    asset: MockToken,
    oracle: MockOracle,
    pcv_deposit: PCVDeposit,
    psm_config: PSMConfig,
) -> PegStabilityModule:
    psm = PegStabilityModule(chain, core, fei, asset, oracle, pcv_deposit, psm_config)
    core.grant_minter(psm.address, sender=governor)
    return psm


@pytest.fixture
def sentinel(chain: Chain, core: Core, governor: str) -> PCVSentinel:
    sentinel = PCVSentinel(chain, core)
    core.grant_guardian(sentinel.address, sender=governor)
    return sentinel
