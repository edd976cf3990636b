"""Public interface for the Odoo adapter."""

from __future__ import annotations

from .client import ODOO_MODELS, OdooAPIError, OdooGateway
from .schema import RpcError, RpcResponse

__all__ = ["ODOO_MODELS", "OdooAPIError", "OdooGateway", "RpcError", "RpcResponse"]
