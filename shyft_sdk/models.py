"""
Data models for the Shyft SDK.

Transaction records are produced only by deserializing API responses. They
are frozen, and unknown keys are ignored so that new upstream fields do not
break older clients.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Response(_Record, Generic[T]):
    """Envelope wrapping every API response"""
    success: bool
    message: str
    result: T


class ProtocolInfo(_Record):
    """Program a transaction or action belongs to"""
    address: str
    name: str


class Action(_Record):
    """
    One action inside a parsed transaction.

    ``info`` stays an untyped JSON value because the set of action types is
    larger than the typed views below; use typed_info() for the known ones.
    """
    info: Any = None
    source_protocol: ProtocolInfo
    action_type: str = Field(..., alias="type")
    parent_protocol: Optional[str] = None
    ix_index: Optional[int] = None

    def typed_info(self) -> Optional["_Record"]:
        """
        Parse ``info`` into the model registered for this action type.

        Returns:
            The typed view, or None if the action type has no registered model

        Raises:
            pydantic.ValidationError: If ``info`` does not match the registered model
        """
        model = ACTION_INFO_MODELS.get(self.action_type)
        if model is None:
            return None
        return model.model_validate(self.info)


class ParsedTransactionDetails(_Record):
    """A parsed Solana transaction as returned by the transaction endpoints"""
    timestamp: str
    fee: float
    fee_payer: str
    signers: List[str]
    signatures: List[str]
    protocol: ProtocolInfo
    transaction_type: str = Field(..., alias="type")
    status: str
    actions: List[Action] = Field(default_factory=list)
    raw: Optional[Any] = None
    events: Optional[List[Any]] = None


# Typed views over Action.info

class CreatePool(_Record):
    pool_creator: str
    liquidity_pool_address: str
    token_mint_one: str
    token_mint_two: str
    token_vault_one: str
    token_vault_two: str


class TokenCreate(_Record):
    token_address: str


class TokenMint(_Record):
    token_address: str
    amount: float
    amount_raw: int
    receiver_address: str


class TokenTransfer(_Record):
    amount: float
    amount_raw: int
    receiver: str
    sender: str
    receiver_associated_account: Optional[str] = None
    token_address: str


class SolTransfer(_Record):
    sender: str
    receiver: str
    amount: float
    amount_raw: float


class TokenInfo(_Record):
    token_address: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    image_uri: Optional[str] = None
    amount: float
    amount_raw: int


class TokensSwapped(_Record):
    token_in: TokenInfo = Field(..., alias="in")
    token_out: TokenInfo = Field(..., alias="out")


class Swap(_Record):
    swapper: str
    tokens_swapped: TokensSwapped
    swaps: List[Any] = Field(default_factory=list)
    slippage_in_percent: Optional[float] = None
    quoted_out_amount: Optional[float] = None
    slippage_paid: Optional[float] = None


ACTION_INFO_MODELS: Dict[str, Type[_Record]] = {
    "CREATE_POOL": CreatePool,
    "SOL_TRANSFER": SolTransfer,
    "TOKEN_CREATE": TokenCreate,
    "TOKEN_MINT": TokenMint,
    "TOKEN_TRANSFER": TokenTransfer,
    "SWAP": Swap,
}


class HistoryOptions(BaseModel):
    """Optional query parameters for GET /transaction/history"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    tx_num: Optional[int] = Field(None, ge=1)
    before_tx_signature: Optional[str] = None
    until_tx_signature: Optional[str] = None
    enable_raw: Optional[bool] = None
    enable_events: Optional[bool] = None


class ParseSelectedOptions(BaseModel):
    """Optional body flags for POST /transaction/parse_selected"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_raw: bool = False
    enable_events: bool = False
