"""
investsim - Instrument price simulation and portfolio accounting

Daily price models for stocks, ETFs, bonds and T-bills, a rolling price
history for charts, and a share ledger that tracks realized and unrealized
gain for end-of-game scoring.

Usage:
    from decimal import Decimal
    import numpy as np
    from investsim import (
        InvestmentSystem, Instrument, InstrumentTerms, Wallet,
        Category, RiskTier,
    )

    rng = np.random.default_rng(7)
    acme = Instrument(InstrumentTerms("ACME", "Acme Corp", Category.STOCK,
                                      RiskTier.MEDIUM, 0.10, 100.0), rng=rng)
    tbill = Instrument(InstrumentTerms("TBL", "T-Bill", Category.TBILL,
                                       RiskTier.LOW, 0.03, 50.0))

    system = InvestmentSystem(Wallet(Decimal("10000")), [acme, tbill])
    system.start_game()

    position = system.buy_shares(acme, 5)
    for _ in range(30):
        system.advance_day()
    record = system.sell_all_shares(position)
"""

# Core types
from .core import (
    RiskTier,
    Category,
    TradeResult,
    FixedReturn,
    VariableReturn,
    ReturnModel,
    return_model_for,
    InvestmentError,
    InstrumentNotRegistered,
    to_decimal,
    TICKS_PER_YEAR,
    HISTORY_CAP,
    ABSOLUTE_FLOOR_FRACTION,
    DEFAULT_CLAMP_BANDS,
    DEFAULT_DAILY_VOLATILITY,
)

# Compound interest math
from .compound import (
    future_value,
    years_to_double,
    total_interest_earned,
    compounding_advantage,
    ticks_to_years,
    explain_compound_interest,
)

# Price model
from .pricing import (
    PriceModelConfig,
    DEFAULT_PRICE_MODEL,
    daily_rate,
    expected_price,
    fixed_return_price,
    clamp_price,
    step_price,
    project_prices,
)

# Instruments
from .instruments import (
    InstrumentTerms,
    Instrument,
    terms_from_mapping,
)

# History
from .history import (
    HistoryStore,
    simulate_history,
    history_seed,
)

# Positions and sells
from .positions import (
    Position,
    SellTransactionRecord,
    PortfolioLedger,
    realized_gain,
    realized_return,
)

# Cash
from .account import (
    CashAccount,
    Wallet,
)

# Orchestration
from .tracker import PortfolioHistoryTracker
from .system import InvestmentSystem


__all__ = [
    # Core
    'RiskTier', 'Category', 'TradeResult',
    'FixedReturn', 'VariableReturn', 'ReturnModel', 'return_model_for',
    'InvestmentError', 'InstrumentNotRegistered', 'to_decimal',
    'TICKS_PER_YEAR', 'HISTORY_CAP', 'ABSOLUTE_FLOOR_FRACTION',
    'DEFAULT_CLAMP_BANDS', 'DEFAULT_DAILY_VOLATILITY',
    # Compound
    'future_value', 'years_to_double', 'total_interest_earned',
    'compounding_advantage', 'ticks_to_years', 'explain_compound_interest',
    # Pricing
    'PriceModelConfig', 'DEFAULT_PRICE_MODEL', 'daily_rate', 'expected_price',
    'fixed_return_price', 'clamp_price', 'step_price', 'project_prices',
    # Instruments
    'InstrumentTerms', 'Instrument', 'terms_from_mapping',
    # History
    'HistoryStore', 'simulate_history', 'history_seed',
    # Positions
    'Position', 'SellTransactionRecord', 'PortfolioLedger',
    'realized_gain', 'realized_return',
    # Cash
    'CashAccount', 'Wallet',
    # Orchestration
    'PortfolioHistoryTracker', 'InvestmentSystem',
]

__version__ = '0.1.0'
