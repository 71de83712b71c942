"""Pydantic models for Etherscan-family API responses."""

from pydantic import BaseModel


class ExplorerEnvelope(BaseModel):
    status: str = "0"
    message: str = ""
    result: list[dict] | dict | str | None = None

    model_config = {"extra": "ignore"}

    @property
    def first_result(self) -> dict | None:
        if self.status != "1" or not self.result:
            return None
        if isinstance(self.result, list):
            return self.result[0] if self.result and isinstance(self.result[0], dict) else None
        if isinstance(self.result, dict):
            return self.result
        return None


class ExplorerTokenInfo(BaseModel):
    """``module=token&action=tokeninfo`` result row."""

    tokenName: str | None = None
    name: str | None = None
    symbol: str | None = None
    divisor: str | None = None
    decimals: str | None = None
    totalSupply: str | None = None
    contractCreator: str | None = None

    model_config = {"extra": "ignore", "coerce_numbers_to_str": True}


class ExplorerSourceCode(BaseModel):
    """``module=contract&action=getsourcecode`` result row."""

    SourceCode: str | None = None
    ContractName: str | None = None
    CompilerVersion: str | None = None
    OptimizationUsed: str | None = None
    LicenseType: str | None = None

    model_config = {"extra": "ignore", "coerce_numbers_to_str": True}


class TokenMetadata(BaseModel):
    """Explorer-sourced token metadata, already normalized."""

    name: str
    symbol: str
    decimals: int
    total_supply: str
    contract_creator: str | None = None
    verified: bool = True
