"""
RAMA-KANDRA - Liquidity Reserve

Constant-product reserve pairing native currency with one ledger token.
Its spot ratio is what the lending pool reads as an implied price, and its
swaps are what move that ratio.
"""

from shared import (
    Address,
    Chain,
    Contract,
    EmptyReserve,
    FungibleLedger,
    InvalidAmount,
    TransferFailed,
    get_config,
    non_reentrant,
    transaction,
)


class ExternalReserve(Contract):
    """
    Native/token liquidity reserve with a proportional swap fee.

    Balances are whatever the reserve actually holds: native currency on
    the chain and tokens on the ledger.
    """

    storage_fields = ("liquidity", "total_liquidity")
    agent_name = "RAMA-KANDRA-LIQUIDITY"

    def __init__(
        self,
        chain: Chain,
        token: FungibleLedger,
        fee_numerator: int | None = None,
        fee_denominator: int | None = None,
    ):
        super().__init__(chain)
        config = get_config().reserve
        self.token = token
        self.fee_numerator = fee_numerator if fee_numerator is not None else config.fee_numerator
        self.fee_denominator = (
            fee_denominator if fee_denominator is not None else config.fee_denominator
        )

        # Liquidity shares
        self.liquidity: dict[Address, int] = {}
        self.total_liquidity = 0

        self.logger.info(
            "Liquidity reserve initialized",
            token=token.symbol,
            fee_bps=10000 - (self.fee_numerator * 10000) // self.fee_denominator,
        )

    @property
    def reference_balance(self) -> int:
        """Native currency held by the reserve."""
        return self.balance

    @property
    def asset_balance(self) -> int:
        """Tokens held by the reserve."""
        return self.token.balance_of(self.address)

    def spot_price(self, scale: int = 10**18) -> int:
        """Native currency per whole token at the current ratio, scaled."""
        asset = self.asset_balance
        if asset == 0:
            raise EmptyReserve("reserve holds no tokens")
        return self.reference_balance * scale // asset

    def get_input_price(
        self,
        input_amount: int,
        input_reserve: int,
        output_reserve: int,
    ) -> int:
        """Output amount for an exact input, after the fee."""
        if input_reserve <= 0 or output_reserve <= 0:
            raise EmptyReserve("reserve side is empty")
        input_with_fee = input_amount * self.fee_numerator
        numerator = input_with_fee * output_reserve
        denominator = input_reserve * self.fee_denominator + input_with_fee
        return numerator // denominator

    @transaction
    def add_liquidity(self, token_amount: int, *, sender: Address, value: int) -> int:
        """Deposit native currency and tokens, returning minted shares."""
        if value <= 0 or token_amount <= 0:
            raise InvalidAmount("liquidity needs both native value and tokens")

        reference_before = self.reference_balance
        if self.total_liquidity == 0:
            tokens_in = token_amount
            minted = value
        else:
            tokens_in = value * self.asset_balance // reference_before + 1
            if tokens_in > token_amount:
                raise InvalidAmount(f"needs {tokens_in} tokens, offered {token_amount}")
            minted = value * self.total_liquidity // reference_before

        self._collect(sender, value)
        if not self.token.transfer_from(sender, self.address, tokens_in, sender=self.address):
            raise TransferFailed(f"could not pull {tokens_in} tokens from {sender}")

        self.liquidity[sender] = self.liquidity.get(sender, 0) + minted
        self.total_liquidity += minted

        self.logger.info("Liquidity added", provider=sender, value=value, tokens=tokens_in)
        return minted

    @transaction
    @non_reentrant
    def native_to_token_swap(
        self,
        min_tokens: int,
        *,
        sender: Address,
        value: int,
        recipient: Address | None = None,
    ) -> int:
        """Sell attached native currency for tokens."""
        if value <= 0:
            raise InvalidAmount("no native value attached")
        tokens_bought = self.get_input_price(value, self.reference_balance, self.asset_balance)
        if tokens_bought == 0 or tokens_bought < min_tokens:
            raise InvalidAmount(f"would receive {tokens_bought}, minimum {min_tokens}")

        self._collect(sender, value)
        if not self.token.transfer(recipient or sender, tokens_bought, sender=self.address):
            raise TransferFailed(f"could not pay out {tokens_bought} tokens")

        self.logger.debug("Native sold", trader=sender, value=value, tokens=tokens_bought)
        return tokens_bought

    @transaction
    @non_reentrant
    def token_to_native_swap(
        self,
        tokens_sold: int,
        min_native: int,
        *,
        sender: Address,
        recipient: Address | None = None,
    ) -> int:
        """Sell approved tokens for native currency."""
        if tokens_sold <= 0:
            raise InvalidAmount("no tokens offered")
        native_bought = self.get_input_price(
            tokens_sold, self.asset_balance, self.reference_balance
        )
        if native_bought == 0 or native_bought < min_native:
            raise InvalidAmount(f"would receive {native_bought}, minimum {min_native}")

        if not self.token.transfer_from(sender, self.address, tokens_sold, sender=self.address):
            raise TransferFailed(f"could not pull {tokens_sold} tokens from {sender}")
        self.chain.send(self.address, recipient or sender, native_bought)

        self.logger.debug("Tokens sold", trader=sender, tokens=tokens_sold, native=native_bought)
        return native_bought

    def get_stats(self) -> dict:
        """Get reserve statistics."""
        return {
            "reference_balance": self.reference_balance,
            "asset_balance": self.asset_balance,
            "total_liquidity": self.total_liquidity,
            "providers": len(self.liquidity),
        }
