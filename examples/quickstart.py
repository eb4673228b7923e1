from __future__ import annotations


def main() -> None:
    from option_engine import (
        OptionType,
        PricingParameters,
        SimulationParameters,
        price_analytic,
        price_by_simulation,
    )

    p = PricingParameters(
        spot=100.0,
        strike=100.0,
        maturity=1.0,
        rate=0.05,
        volatility=0.20,
        dividend_yield=0.0,
        kind=OptionType.CALL,
    )

    bs = price_analytic(p)
    print("BS:", bs.price)
    print("Greeks:", bs.greeks.as_dict())

    mc = price_by_simulation(
        SimulationParameters(pricing=p, n_paths=100_000, n_steps=252, seed=42)
    )
    lo, hi = mc.confidence_interval
    print(f"MC: {mc.price:.4f} (SE={mc.standard_error:.4f}, 95% CI=[{lo:.4f}, {hi:.4f}])")


if __name__ == "__main__":
    main()
