from __future__ import annotations

from dataclasses import replace

from option_engine.types import PricingParameters


def default_cases(base: PricingParameters) -> list[tuple[str, PricingParameters]]:
    """Curated regimes for MC-vs-analytic comparisons."""
    return [
        ("ATM base", base),
        ("ITM (S=120)", replace(base, spot=120.0)),
        ("OTM (S=80)", replace(base, spot=80.0)),
        ("Deep ITM (S=150)", replace(base, spot=150.0)),
        ("Deep OTM (S=50)", replace(base, spot=50.0)),
        ("Short T (1w)", replace(base, maturity=1.0 / 52.0)),
        ("Long T (5y)", replace(base, maturity=5.0)),
        ("Low vol (5%)", replace(base, volatility=0.05)),
        ("High vol (80%)", replace(base, volatility=0.80)),
        ("High rate (10%)", replace(base, rate=0.10)),
        ("Dividend (q=2%)", replace(base, dividend_yield=0.02)),
    ]


__all__ = ["default_cases"]
