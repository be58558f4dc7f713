"""Request builders, one class per node namespace."""

from nimiq_rpc.modules.blockchain import BlockchainClient
from nimiq_rpc.modules.blockchain_streams import BlockchainStream
from nimiq_rpc.modules.consensus import ConsensusClient, TxLog
from nimiq_rpc.modules.mempool import MempoolClient
from nimiq_rpc.modules.network import NetworkClient
from nimiq_rpc.modules.policy import PolicyClient
from nimiq_rpc.modules.serde_helpers import SerdeHelper
from nimiq_rpc.modules.validator import ValidatorClient
from nimiq_rpc.modules.wallet import WalletClient
from nimiq_rpc.modules.zkp_component import ZkpComponentClient

__all__ = [
    "BlockchainClient",
    "BlockchainStream",
    "ConsensusClient",
    "MempoolClient",
    "NetworkClient",
    "PolicyClient",
    "SerdeHelper",
    "TxLog",
    "ValidatorClient",
    "WalletClient",
    "ZkpComponentClient",
]
