"""Pydantic models describing the Odoo JSON-RPC envelope."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OdooBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RpcErrorData(OdooBaseModel):
    name: str | None = None
    message: str | None = None


class RpcError(OdooBaseModel):
    code: int | None = None
    message: str = "Odoo error"
    data: RpcErrorData | None = None

    @property
    def detail(self) -> str:
        if self.data is not None and self.data.message:
            return f"{self.message}: {self.data.message}"
        return self.message


class RpcResponse(OdooBaseModel):
    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: object = None
    error: RpcError | None = None
