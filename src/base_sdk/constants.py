"""Constants and static address tables for the Base network."""

from enum import Enum

from .types import (
    NetworkConfig,
    OperationKind,
    ProtocolCategory,
    ProtocolDescriptor,
    TokenDescriptor,
)

BASE_MAINNET_CHAIN_ID = 8453
BASE_SEPOLIA_CHAIN_ID = 84532

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
# OP-stack placeholder token address the L2StandardBridge treats as native ETH
LEGACY_ETH_ADDRESS = "0xDeadDeAddeAddEAddeadDEaDDEAdDeaDDeAD0000"
MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

UNISWAP_V3_FEE_TIERS = (100, 500, 3000, 10000)
DEFAULT_BRIDGE_MIN_GAS_LIMIT = 200_000


class ContractFunction(str, Enum):
    """Solidity signatures of the contract entry points the SDK calls."""

    # ERC-20 / Comet reads
    BALANCE_OF = "balanceOf(address)"
    SYMBOL = "symbol()"
    NAME = "name()"
    DECIMALS = "decimals()"
    APPROVE = "approve(address,uint256)"
    ALLOWANCE = "allowance(address,address)"
    # Uniswap V3
    GET_POOL = "getPool(address,address,uint24)"
    POOL_LIQUIDITY = "liquidity()"
    POOL_SLOT0 = "slot0()"
    EXACT_INPUT_SINGLE = (
        "exactInputSingle((address,address,uint24,address,uint256,uint256,uint160))"
    )
    ROUTER_MULTICALL = "multicall(uint256,bytes[])"
    MINT_POSITION = (
        "mint((address,address,uint24,int24,int24,uint256,uint256,uint256,uint256,address,uint256))"
    )
    DECREASE_LIQUIDITY = "decreaseLiquidity((uint256,uint128,uint256,uint256,uint256))"
    # Aerodrome
    AERODROME_SWAP = (
        "swapExactTokensForTokens(uint256,uint256,(address,address,bool,address)[],address,uint256)"
    )
    # Compound V3
    COMET_BASE_TOKEN = "baseToken()"
    COMET_BORROW_BALANCE_OF = "borrowBalanceOf(address)"
    COMET_SUPPLY = "supply(address,uint256)"
    COMET_WITHDRAW = "withdraw(address,uint256)"
    # Staking rewards pools
    STAKE = "stake(uint256)"
    GET_REWARD = "getReward()"
    # OP-stack L2StandardBridge
    BRIDGE_WITHDRAW = "withdraw(address,uint256,uint32,bytes)"


UNISWAP_V3 = "Uniswap V3"
UNISWAP_V3_POSITIONS = "Uniswap V3 Positions"
UNISWAP_V3_FACTORY = "Uniswap V3 Factory"
AERODROME = "Aerodrome"
AERODROME_FACTORY = "Aerodrome Factory"
COMPOUND_V3 = "Compound V3"
MOONWELL = "Moonwell"
BASE_BRIDGE = "Base Bridge"

_SWAP = frozenset({OperationKind.SWAP_EXACT_IN})
_LIQUIDITY = frozenset({OperationKind.ADD_LIQUIDITY, OperationKind.REMOVE_LIQUIDITY})
_LENDING = frozenset({OperationKind.SUPPLY, OperationKind.BORROW})
_BRIDGE = frozenset({OperationKind.BRIDGE})

BASE_MAINNET = NetworkConfig(
    chain_id=BASE_MAINNET_CHAIN_ID,
    name="Base",
    rpc_url="https://mainnet.base.org",
    explorer_url="https://basescan.org",
    multicall_address=MULTICALL3_ADDRESS,
)

BASE_SEPOLIA = NetworkConfig(
    chain_id=BASE_SEPOLIA_CHAIN_ID,
    name="Base Sepolia",
    rpc_url="https://sepolia.base.org",
    explorer_url="https://sepolia.basescan.org",
    multicall_address=MULTICALL3_ADDRESS,
)

BASE_MAINNET_PROTOCOLS = (
    ProtocolDescriptor(
        name=UNISWAP_V3,
        address="0x2626664c2603336E57B271c5C0b26F421741e481",
        category=ProtocolCategory.EXCHANGE,
        operations=_SWAP,
        version="3.0.0",
        tvl="500000000",
        apy=12.5,
    ),
    ProtocolDescriptor(
        name=UNISWAP_V3_POSITIONS,
        address="0x03a520b32C04BF3bEEf7BEb72E919cf822Ed34f1",
        category=ProtocolCategory.EXCHANGE,
        operations=_LIQUIDITY,
        version="3.0.0",
    ),
    ProtocolDescriptor(
        name=UNISWAP_V3_FACTORY,
        address="0x33128a8fC17869897dcE68Ed026d694621f6FDfD",
        category=ProtocolCategory.EXCHANGE,
        version="3.0.0",
    ),
    ProtocolDescriptor(
        name=AERODROME,
        address="0xcF77a3Ba9A5CA399B7c97c74d54e5b1Beb874E43",
        category=ProtocolCategory.EXCHANGE,
        operations=_SWAP,
        version="1.0.0",
        tvl="200000000",
        apy=15.8,
    ),
    ProtocolDescriptor(
        name=AERODROME_FACTORY,
        address="0x420DD381b31aEf6683db6B902084cB0FFECe40Da",
        category=ProtocolCategory.EXCHANGE,
        version="1.0.0",
    ),
    ProtocolDescriptor(
        name=COMPOUND_V3,
        address="0x9c4ec768c28520B50860ea7a15bd7213a9fF58bf",
        category=ProtocolCategory.LENDING,
        operations=_LENDING,
        version="3.0.0",
        tvl="300000000",
        apy=8.2,
    ),
    ProtocolDescriptor(
        name=MOONWELL,
        address="0x628ff693426583D9a7FB391E54366292F509D457",
        category=ProtocolCategory.LENDING,
        version="2.0.0",
        tvl="150000000",
        apy=9.5,
    ),
    ProtocolDescriptor(
        name=BASE_BRIDGE,
        address="0x4200000000000000000000000000000000000010",
        category=ProtocolCategory.BRIDGE,
        operations=_BRIDGE,
    ),
)

BASE_SEPOLIA_PROTOCOLS = (
    ProtocolDescriptor(
        name=UNISWAP_V3,
        address="0x94cC0AaC535CCDB3C01d6787D6413C739ae12bc4",
        category=ProtocolCategory.EXCHANGE,
        operations=_SWAP,
        version="3.0.0",
    ),
    ProtocolDescriptor(
        name=UNISWAP_V3_POSITIONS,
        address="0x27F971cb582BF9E50F397e4d29a5C7A34f11faA2",
        category=ProtocolCategory.EXCHANGE,
        operations=_LIQUIDITY,
        version="3.0.0",
    ),
    ProtocolDescriptor(
        name=UNISWAP_V3_FACTORY,
        address="0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24",
        category=ProtocolCategory.EXCHANGE,
        version="3.0.0",
    ),
    ProtocolDescriptor(
        name=BASE_BRIDGE,
        address="0x4200000000000000000000000000000000000010",
        category=ProtocolCategory.BRIDGE,
        operations=_BRIDGE,
    ),
)

BASE_MAINNET_TOKENS = (
    TokenDescriptor(
        address=ZERO_ADDRESS,
        symbol="ETH",
        name="Ethereum",
        decimals=18,
        coingecko_id="ethereum",
    ),
    TokenDescriptor(
        address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        symbol="USDC",
        name="USD Coin",
        decimals=6,
        coingecko_id="usd-coin",
    ),
    TokenDescriptor(
        address="0x4200000000000000000000000000000000000006",
        symbol="WETH",
        name="Wrapped Ethereum",
        decimals=18,
        coingecko_id="weth",
    ),
    TokenDescriptor(
        address="0x50c5725949A6F0c72E6C4a641F24049A917DB0Cb",
        symbol="DAI",
        name="Dai Stablecoin",
        decimals=18,
        coingecko_id="dai",
    ),
    TokenDescriptor(
        address="0x2Ae3F1Ec7F1F5012CFEab0185bfc7aa3cf0DEc22",
        symbol="cbETH",
        name="Coinbase Wrapped Staked ETH",
        decimals=18,
        coingecko_id="coinbase-wrapped-staked-eth",
    ),
)

BASE_SEPOLIA_TOKENS = (
    TokenDescriptor(
        address=ZERO_ADDRESS,
        symbol="ETH",
        name="Ethereum",
        decimals=18,
        coingecko_id="ethereum",
    ),
    TokenDescriptor(
        address="0x036CbD53842c5426634e7929541eC2318f3dCF7e",
        symbol="USDC",
        name="USD Coin",
        decimals=6,
        coingecko_id="usd-coin",
    ),
    TokenDescriptor(
        address="0x4200000000000000000000000000000000000006",
        symbol="WETH",
        name="Wrapped Ethereum",
        decimals=18,
        coingecko_id="weth",
    ),
)
