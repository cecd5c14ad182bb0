"""
A module for managing translator configuration.

Classes:
- TranslatorConfig: Options controlling how strictly wire payloads are read.
"""

from pydantic import BaseModel, ConfigDict


class TranslatorConfig(BaseModel):
    """Options controlling how strictly wire payloads are interpreted."""

    model_config = ConfigDict(frozen=True)

    reject_mixed_fee_fields: bool = False
    """
    Raise `InconsistentTransactionShape` for transactions that carry both
    `gasPrice` and fee-market fields. Many nodes report the effective gas
    price next to `maxFeePerGas` for mined fee-market transactions, so by
    default the fee-market fields win and `gasPrice` is ignored.
    """


DEFAULT_CONFIG = TranslatorConfig()
